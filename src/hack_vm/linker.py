# src/hack_vm/linker.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .ast import AInstruction, CInstruction, LabelDecl, AsmNode
from .isa import PREDEFINED
from .diagnostics import Diagnostic, error

# ---------- Resultado del enlazado ----------

@dataclass(frozen=True)
class LinkResult:
    symtab: Dict[str, int]        # predefinidos + etiquetas + variables
    labels: Dict[str, int]        # etiqueta -> índice de instrucción en ROM
    variables: Dict[str, int]     # variable -> dirección de RAM
    rom_size: int
    diagnostics: List[Diagnostic]

VARIABLE_BASE = 16

# ---------- Pasada 1 (etiquetas) ----------

def first_pass(nodes: Sequence[AsmNode], *, filename: str | None = None):
    """Liga cada '(etiqueta)' al índice de la siguiente instrucción.
    Devuelve (labels, rom_size, diagnostics)."""
    labels: Dict[str, int] = {}
    diags: List[Diagnostic] = []
    pc = 0
    for n in nodes:
        if isinstance(n, LabelDecl):
            if n.name in PREDEFINED:
                diags.append(error(f"La etiqueta redefine un símbolo predefinido: {n.name}",
                                   kind="etiqueta_duplicada", line=n.line, file=filename))
            elif n.name in labels:
                diags.append(error(f"Etiqueta redefinida: {n.name}", kind="etiqueta_duplicada",
                                   line=n.line, file=filename))
            else:
                labels[n.name] = pc
            continue
        # instrucciones A y C ocupan una palabra de ROM
        pc += 1
    return labels, pc, diags

# ---------- Pasada 2 (variables) ----------

def _jump_targets(nodes: Sequence[AsmNode]) -> List[AInstruction]:
    """Instrucciones A seguidas inmediatamente de una C que salta."""
    out: List[AInstruction] = []
    prev = None
    for n in nodes:
        if isinstance(n, LabelDecl):
            continue
        if isinstance(n, CInstruction) and n.jump and isinstance(prev, AInstruction) and prev.symbol:
            out.append(prev)
        prev = n
    return out

def link(
    nodes: Sequence[AsmNode],
    *,
    variable_base: int = VARIABLE_BASE,
    filename: str | None = None,
) -> LinkResult:
    labels, rom_size, diags = first_pass(nodes, filename=filename)

    known = set(PREDEFINED) | set(labels)
    for a in _jump_targets(nodes):
        if a.symbol not in known:
            diags.append(error(f"Etiqueta no definida: {a.symbol}", kind="simbolo_no_resuelto",
                               line=a.line, file=filename, hint="destino de salto sin '(etiqueta)'"))
            # se reporta una vez por símbolo
            known.add(a.symbol)

    variables: Dict[str, int] = {}
    next_addr = variable_base
    for n in nodes:
        if isinstance(n, AInstruction) and n.symbol is not None:
            name = n.symbol
            if name in PREDEFINED or name in labels or name in variables:
                continue
            variables[name] = next_addr
            next_addr += 1

    symtab = {**PREDEFINED, **labels, **variables}
    return LinkResult(symtab=symtab, labels=labels, variables=variables,
                      rom_size=rom_size, diagnostics=diags)
