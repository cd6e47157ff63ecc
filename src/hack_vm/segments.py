'''
resolución de segmentos: modos de direccionamiento y fragmentos push/pop
'''

from __future__ import annotations
from typing import Dict, List

from .ast import Segment

# Segmentos con puntero base en memoria: dirección = *base + índice
BASE_POINTERS: Dict[Segment, str] = {
    Segment.LOCAL: "LCL",
    Segment.ARGUMENT: "ARG",
    Segment.THIS: "THIS",
    Segment.THAT: "THAT",
}

# pointer 0/1 selecciona directamente la celda THIS/THAT
POINTER_CELLS = ("THIS", "THAT")

TEMP_BASE = 5
# Registro auxiliar para la dirección destino de un pop
ADDR_SCRATCH = "R13"

# *SP = D; SP++
PUSH_D: List[str] = ["@SP", "A=M", "M=D", "@SP", "M=M+1"]
# SP--; D = *SP
POP_D: List[str] = ["@SP", "AM=M-1", "D=M"]

def static_symbol(namespace: str, index: int) -> str:
    """Símbolo de la variable estática: '<namespace>.<index>'."""
    return f"{namespace}.{index}"

def direct_address(segment: Segment, index: int, *, namespace: str, temp_base: int = TEMP_BASE) -> str:
    """Operando de '@' para los segmentos de dirección fija (static, temp, pointer)."""
    if segment is Segment.STATIC:
        return static_symbol(namespace, index)
    if segment is Segment.TEMP:
        return str(temp_base + index)
    if segment is Segment.POINTER:
        if index not in (0, 1):
            raise ValueError(f"índice de pointer inválido: {index}")
        return POINTER_CELLS[index]
    raise ValueError(f"{segment.value} no tiene dirección fija")

def push(segment: Segment, index: int, *, namespace: str, temp_base: int = TEMP_BASE) -> List[str]:
    """Carga el valor de segment[index] en D y lo apila."""
    if segment is Segment.CONSTANT:
        load = [f"@{index}", "D=A"]
    elif segment in BASE_POINTERS:
        load = [f"@{BASE_POINTERS[segment]}", "D=M", f"@{index}", "A=D+A", "D=M"]
    else:
        load = [f"@{direct_address(segment, index, namespace=namespace, temp_base=temp_base)}", "D=M"]
    return load + PUSH_D

def pop(segment: Segment, index: int, *, namespace: str, temp_base: int = TEMP_BASE) -> List[str]:
    """Desapila en segment[index].

    Con puntero base la dirección se calcula y se guarda en R13 antes de
    tocar SP; desapilar deja el valor en D y reutiliza A.
    """
    if segment is Segment.CONSTANT:
        raise ValueError("pop constant no está permitido")
    if segment in BASE_POINTERS:
        return ([f"@{BASE_POINTERS[segment]}", "D=M", f"@{index}", "D=D+A", f"@{ADDR_SCRATCH}", "M=D"]
                + POP_D
                + [f"@{ADDR_SCRATCH}", "A=M", "M=D"])
    addr = direct_address(segment, index, namespace=namespace, temp_base=temp_base)
    return POP_D + [f"@{addr}", "M=D"]
