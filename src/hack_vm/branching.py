from __future__ import annotations
from typing import List

from .ast import BranchKind
from .segments import POP_D

def label(name: str) -> List[str]:
    return [f"({name})"]

def goto(name: str) -> List[str]:
    return [f"@{name}", "0;JMP"]

def if_goto(name: str) -> List[str]:
    """Desapila y salta si el valor es distinto de cero (0 es el único falso)."""
    return POP_D + [f"@{name}", "D;JNE"]

_GENERATORS = {
    BranchKind.LABEL: label,
    BranchKind.GOTO: goto,
    BranchKind.IF_GOTO: if_goto,
}

def generate(kind: BranchKind, name: str) -> List[str]:
    return _GENERATORS[kind](name)
