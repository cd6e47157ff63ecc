'''
protocolo de llamada: call, function y return sobre la pila global

Marco que deja `call` encima de los argumentos (direcciones crecientes):

    ARG -> arg 0 .. arg n-1 | retorno | LCL | ARG | THIS | THAT | <- LCL del llamado
'''

from __future__ import annotations
from typing import List

from .segments import PUSH_D, POP_D

RETURN_LABEL = "RETURN"
# 4 punteros guardados + dirección de retorno
FRAME_SIZE = 5
# orden en que `call` guarda los punteros del llamador
SAVED_POINTERS = ("LCL", "ARG", "THIS", "THAT")

FRAME_SCRATCH = "R13"
RETURN_SCRATCH = "R14"

def return_label(n: int) -> str:
    return f"{RETURN_LABEL}.{n}"

def call(name: str, n_args: int, ret_id: int) -> List[str]:
    ret = return_label(ret_id)
    out = [f"@{ret}", "D=A"] + PUSH_D
    for cell in SAVED_POINTERS:
        out += [f"@{cell}", "D=M"] + PUSH_D
    # ARG = SP - 5 - nArgs
    out += ["@SP", "D=M", f"@{FRAME_SIZE + n_args}", "D=D-A", "@ARG", "M=D"]
    # LCL = SP
    out += ["@SP", "D=M", "@LCL", "M=D"]
    out += [f"@{name}", "0;JMP", f"({ret})"]
    return out

def function(name: str, n_locals: int) -> List[str]:
    """Declara la entrada y pone a cero las nLocals variables locales."""
    out = [f"({name})"]
    for _ in range(n_locals):
        out += ["D=0"] + PUSH_D
    return out

def _restore(cell: str) -> List[str]:
    # cell = *(--frame)
    return [f"@{FRAME_SCRATCH}", "AM=M-1", "D=M", f"@{cell}", "M=D"]

def ret() -> List[str]:
    out = ["@LCL", "D=M", f"@{FRAME_SCRATCH}", "M=D"]
    # la dirección de retorno se lee antes de pisar arg 0: con 0 argumentos son la misma celda
    out += [f"@{FRAME_SIZE}", "A=D-A", "D=M", f"@{RETURN_SCRATCH}", "M=D"]
    out += POP_D + ["@ARG", "A=M", "M=D"]
    out += ["@ARG", "D=M+1", "@SP", "M=D"]
    # LCL va último: es la base de los demás desplazamientos
    for cell in reversed(SAVED_POINTERS):
        out += _restore(cell)
    out += [f"@{RETURN_SCRATCH}", "A=M", "0;JMP"]
    return out
