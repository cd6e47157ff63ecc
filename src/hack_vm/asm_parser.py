# src/hack_vm/asm_parser.py
from __future__ import annotations
import re
from typing import List, Tuple, Optional

from .lexer import iter_lines, is_symbol, split_label_decl, split_c_instruction
from .ast import AInstruction, CInstruction, LabelDecl, AsmNode
from .isa import comp as isa_comp, parse_dest, JUMP
from .utils import is_unsigned_nbit
from .diagnostics import error, Diagnostic

DEC_IMM_RE = re.compile(r"^\d+$")

def _parse_a(operand: str, lineno: int, filename: Optional[str], diags: List[Diagnostic]) -> Optional[AInstruction]:
    t = operand.strip()
    if DEC_IMM_RE.match(t):
        v = int(t, 10)
        if not is_unsigned_nbit(v, 15):
            diags.append(error(f"Inmediato fuera de rango (0..32767): {v}", kind="operando_invalido",
                               line=lineno, file=filename))
            return None
        return AInstruction(value=v, line=lineno)
    if is_symbol(t):
        return AInstruction(symbol=t, line=lineno)
    diags.append(error(f"Operando de '@' inválido: '{operand}'", kind="operando_invalido",
                       line=lineno, file=filename))
    return None

def _parse_c(core: str, lineno: int, filename: Optional[str], diags: List[Diagnostic]) -> Optional[CInstruction]:
    dest_s, comp_s, jump_s = split_c_instruction(core)
    ok = True
    try:
        dest = parse_dest(dest_s)
    except ValueError:
        diags.append(error(f"Destino inválido: '{dest_s}'", kind="linea_malformada", line=lineno, file=filename,
                           hint="combinación de A, D y M sin repetir"))
        ok = False
    try:
        spec = isa_comp(comp_s)
    except KeyError:
        diags.append(error(f"Expresión ALU desconocida: '{comp_s}'", kind="linea_malformada",
                           line=lineno, file=filename))
        ok = False
    if jump_s and jump_s not in JUMP:
        diags.append(error(f"Salto desconocido: '{jump_s}'", kind="linea_malformada", line=lineno, file=filename))
        ok = False
    if not ok:
        return None
    # comp se guarda en forma canónica (alias conmutativos resueltos)
    return CInstruction(dest=dest, comp=spec.expr, jump=jump_s or None, line=lineno)

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[AsmNode], List[Diagnostic]]:
    """
    Devuelve (nodes, diagnostics) donde nodes es una lista de:
      - AInstruction(value | symbol, line)
      - CInstruction(dest, comp, jump, line)
      - LabelDecl(name, line)

    Reglas:
      - Comentarios: '//' hasta fin de línea.
      - '@x' es instrucción A; '(x)' declara etiqueta; el resto es dest=comp;jump.
      - Se recogen todos los errores de la unidad, no sólo el primero.
    """
    nodes: List[AsmNode] = []
    diags: List[Diagnostic] = []

    for lineno, core in iter_lines(text):
        if core.startswith("@"):
            node = _parse_a(core[1:], lineno, filename, diags)
            if node is not None:
                nodes.append(node)
            continue

        if core.startswith("("):
            name = split_label_decl(core)
            if name is None or not is_symbol(name):
                diags.append(error(f"Declaración de etiqueta inválida: '{core}'", kind="linea_malformada",
                                   line=lineno, file=filename))
                continue
            nodes.append(LabelDecl(name=name, line=lineno))
            continue

        node = _parse_c(core, lineno, filename, diags)
        if node is not None:
            nodes.append(node)

    return nodes, diags
