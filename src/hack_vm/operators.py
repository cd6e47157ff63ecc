'''
operadores de pila: binarios, unarios y comparaciones
'''

from __future__ import annotations
from typing import Dict, List

from .ast import OpKind
from .context import CodeGenContext
from .segments import POP_D

# left OP right, con right en D y left en M
BINARY_COMP: Dict[OpKind, str] = {
    OpKind.ADD: "D+M",
    OpKind.SUB: "M-D",
    OpKind.AND: "D&M",
    OpKind.OR:  "D|M",
}

UNARY_COMP: Dict[OpKind, str] = {
    OpKind.NEG: "-M",
    OpKind.NOT: "!M",
}

# salto que se toma cuando left - right cumple la relación
COMPARE_JUMP: Dict[OpKind, str] = {
    OpKind.EQ: "JEQ",
    OpKind.GT: "JGT",
    OpKind.LT: "JLT",
}

TRUE_LABEL = "TRUE"
END_LABEL = "END"

# A = dirección de la cima (sin mover SP)
_TOP = ["@SP", "A=M-1"]

def binary(kind: OpKind) -> List[str]:
    return POP_D + _TOP + [f"M={BINARY_COMP[kind]}"]

def unary(kind: OpKind) -> List[str]:
    return _TOP + [f"M={UNARY_COMP[kind]}"]

def comparison(kind: OpKind, n: int) -> List[str]:
    """Deja -1 (verdadero) o 0 (falso) en lugar de los dos operandos."""
    true_l, end_l = f"{TRUE_LABEL}.{n}", f"{END_LABEL}.{n}"
    return (POP_D + _TOP + ["D=M-D", f"@{true_l}", f"D;{COMPARE_JUMP[kind]}"]
            + _TOP + ["M=0", f"@{end_l}", "0;JMP"]
            + [f"({true_l})"] + _TOP + ["M=-1"]
            + [f"({end_l})"])

def generate(kind: OpKind, ctx: CodeGenContext) -> List[str]:
    if kind.is_comparison:
        return comparison(kind, ctx.next_comparison())
    if kind.arity == 1:
        return unary(kind)
    return binary(kind)
