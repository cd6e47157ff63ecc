'''
tabla formal Hack (campos comp/dest/jump y símbolos predefinidos)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional

@dataclass(frozen=True)
class CompSpec:
    """Especificación de una expresión de la ALU Hack.

    - expr: forma canónica (p.ej. 'D+M')
    - a: bit 'a' (0 = opera con A, 1 = opera con M)
    - bits: campo c1..c6 de 6 bits
    - aliases: escrituras conmutativas aceptadas (p.ej. 'M+D')
    """
    expr: str
    a: int
    bits: int
    aliases: Optional[List[str]] = None

    @property
    def field(self) -> int:
        """Campo a+c1..c6 de 7 bits."""
        return (self.a << 6) | self.bits

# Prefijo de las instrucciones C
C_PREFIX = 0b111
A_MAX = (1 << 15) - 1

# Conjunto de expresiones ALU
COMP: Dict[str, CompSpec] = {}

def _add(expr: str, a: int, bits: int, aliases: Iterable[str] = ()):
    spec = CompSpec(expr, a, bits, list(aliases))
    COMP[expr] = spec
    for al in spec.aliases:
        COMP[al] = spec

# Constantes
_add("0",   0, 0b101010)
_add("1",   0, 0b111111)
_add("-1",  0, 0b111010)
# Registros y negaciones
_add("D",   0, 0b001100)
_add("A",   0, 0b110000)
_add("M",   1, 0b110000)
_add("!D",  0, 0b001101)
_add("!A",  0, 0b110001)
_add("!M",  1, 0b110001)
_add("-D",  0, 0b001111)
_add("-A",  0, 0b110011)
_add("-M",  1, 0b110011)
# Incrementos / decrementos
_add("D+1", 0, 0b011111, ["1+D"])
_add("A+1", 0, 0b110111, ["1+A"])
_add("M+1", 1, 0b110111, ["1+M"])
_add("D-1", 0, 0b001110)
_add("A-1", 0, 0b110010)
_add("M-1", 1, 0b110010)
# Binarias D/A
_add("D+A", 0, 0b000010, ["A+D"])
_add("D-A", 0, 0b010011)
_add("A-D", 0, 0b000111)
_add("D&A", 0, 0b000000, ["A&D"])
_add("D|A", 0, 0b010101, ["A|D"])
# Binarias D/M
_add("D+M", 1, 0b000010, ["M+D"])
_add("D-M", 1, 0b010011)
_add("M-D", 1, 0b000111)
_add("D&M", 1, 0b000000, ["M&D"])
_add("D|M", 1, 0b010101, ["M|D"])

# Bits de destino d1 d2 d3
DEST_BITS: Dict[str, int] = {"A": 0b100, "D": 0b010, "M": 0b001}

JUMP: Dict[str, int] = {
    "JGT": 0b001,
    "JEQ": 0b010,
    "JGE": 0b011,
    "JLT": 0b100,
    "JNE": 0b101,
    "JLE": 0b110,
    "JMP": 0b111,
}

PREDEFINED: Dict[str, int] = {
    **{f"R{i}": i for i in range(16)},
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    "SCREEN": 16384,
    "KBD": 24576,
}

def comp(expr: str) -> CompSpec:
    """Devuelve la especificación de una expresión ALU (acepta alias conmutativos)."""
    if expr not in COMP:
        raise KeyError(f"Expresión ALU desconocida: {expr}")
    return COMP[expr]

def parse_dest(text: str) -> FrozenSet[str]:
    """Convierte 'AMD', 'DM', ... en un conjunto de registros; el orden no importa."""
    regs = frozenset(text)
    if len(regs) != len(text) or not regs <= DEST_BITS.keys():
        raise ValueError(f"Destino inválido: {text}")
    return regs

def dest_field(dest: FrozenSet[str]) -> int:
    out = 0
    for r in dest:
        out |= DEST_BITS[r]
    return out

def jump_field(jump: Optional[str]) -> int:
    if not jump:
        return 0
    if jump not in JUMP:
        raise KeyError(f"Salto desconocido: {jump}")
    return JUMP[jump]
