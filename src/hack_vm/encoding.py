# src/hack_vm/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .ast import AInstruction, CInstruction, LabelDecl, AsmNode
from .isa import comp as isa_comp, dest_field, jump_field, C_PREFIX, A_MAX
from .utils import u16
from .diagnostics import Diagnostic, error

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: int     # u16
    index: int    # dirección de ROM de esta instrucción
    line: int

@dataclass(frozen=True)
class EncodeResult:
    words: List[Encoded]
    diagnostics: List[Diagnostic]

# ---------------- Helpers de empaquetado de bits ----------------

def pack_a(value: int) -> int:
    return u16(value & A_MAX)

def pack_c(comp7: int, dest: int, jump: int) -> int:
    return u16((C_PREFIX & 0x7) << 13 |
               (comp7 & 0x7F) << 6 |
               (dest & 0x7) << 3 |
               (jump & 0x7))

# ---------------- Codificador principal ----------------

def encode(nodes: Sequence[AsmNode], symtab: Dict[str, int], *, filename: str | None = None) -> EncodeResult:
    diags: List[Diagnostic] = []
    words: List[Encoded] = []
    pc = 0

    for n in nodes:
        if isinstance(n, LabelDecl):
            # no ocupa ROM; ya fue registrada en first_pass
            continue

        if isinstance(n, AInstruction):
            if n.symbol is not None:
                addr = symtab.get(n.symbol)
                if addr is None:
                    diags.append(error(f"Símbolo no resuelto: {n.symbol}", kind="simbolo_no_resuelto",
                                       line=n.line, file=filename))
                    addr = 0
            else:
                addr = n.value
            word = pack_a(addr)
        elif isinstance(n, CInstruction):
            spec = isa_comp(n.comp)
            word = pack_c(spec.field, dest_field(n.dest), jump_field(n.jump))
        else:
            raise TypeError(f"nodo desconocido: {n!r}")

        words.append(Encoded(word=word, index=pc, line=n.line))
        pc += 1

    return EncodeResult(words=words, diagnostics=diags)
