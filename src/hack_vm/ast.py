'''
dataclases del IR de la VM (StackMove, Operator, Branch, Subroutine)
y de los nodos de ensamblador Hack (AInstruction, CInstruction, LabelDecl)
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Union

# ---- Etiquetas de las variantes (el mapeo texto -> etiqueta vive en parser.py) ----

class Direction(Enum):
    PUSH = "push"
    POP = "pop"

class Segment(Enum):
    ARGUMENT = "argument"
    LOCAL = "local"
    THIS = "this"
    THAT = "that"
    CONSTANT = "constant"
    STATIC = "static"
    TEMP = "temp"
    POINTER = "pointer"

class OpKind(Enum):
    ADD = "add"
    SUB = "sub"
    NEG = "neg"
    EQ = "eq"
    GT = "gt"
    LT = "lt"
    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def arity(self) -> int:
        return 1 if self in (OpKind.NEG, OpKind.NOT) else 2

    @property
    def is_comparison(self) -> bool:
        return self in (OpKind.EQ, OpKind.GT, OpKind.LT)

class BranchKind(Enum):
    LABEL = "label"
    GOTO = "goto"
    IF_GOTO = "if-goto"

class SubKind(Enum):
    FUNCTION = "function"
    CALL = "call"
    RETURN = "return"

# ---- Instrucciones de la VM ----

@dataclass(frozen=True)
class StackMove:
    """push/pop de un segmento con índice no negativo."""
    direction: Direction
    segment: Segment
    index: int
    line: int = 0

@dataclass(frozen=True)
class Operator:
    """Operación de pila sin operandos; la aridad la da el tipo."""
    kind: OpKind
    line: int = 0

@dataclass(frozen=True)
class Branch:
    kind: BranchKind
    name: str
    line: int = 0

@dataclass(frozen=True)
class Subroutine:
    """function f nLocals | call f nArgs | return (sin nombre ni cuenta)."""
    kind: SubKind
    name: Optional[str] = None
    count: Optional[int] = None
    line: int = 0

VMInstruction = Union[StackMove, Operator, Branch, Subroutine]

# ---- Nodos de ensamblador Hack ----

@dataclass(frozen=True)
class AInstruction:
    """@valor o @símbolo. Exactamente uno de value/symbol está presente."""
    value: Optional[int] = None
    symbol: Optional[str] = None
    line: int = 0

@dataclass(frozen=True)
class CInstruction:
    """dest=comp;jump. dest es un conjunto: 'MD' y 'DM' son el mismo destino."""
    dest: FrozenSet[str]
    comp: str
    jump: Optional[str] = None
    line: int = 0

@dataclass(frozen=True)
class LabelDecl:
    """Declaración '(nombre)'; no ocupa dirección de ROM."""
    name: str
    line: int = 0

AsmNode = Union[AInstruction, CInstruction, LabelDecl]
