# src/hack_vm/parser.py
from __future__ import annotations
import re
from typing import Dict, List, Optional, Tuple

from .lexer import iter_lines, split_words
from .ast import (
    Direction, Segment, OpKind, BranchKind, SubKind,
    StackMove, Operator, Branch, Subroutine, VMInstruction,
)
from .diagnostics import Diagnostic, error
from .utils import is_unsigned_nbit

DEC_RE    = re.compile(r"^\d+$")
VM_SYM_RE = re.compile(r"^[A-Za-z_.:$][A-Za-z0-9_.:$]*$")
# sufijo reservado a las etiquetas generadas (TRUE.n, END.n, RETURN.n) y a los estáticos (<ns>.n)
RESERVED_RE = re.compile(r"\.\d+$")

# Único lugar donde se mapea texto -> etiqueta
_DIRECTIONS: Dict[str, Direction] = {d.value: d for d in Direction}
_SEGMENTS:   Dict[str, Segment]   = {s.value: s for s in Segment}
_OPERATORS:  Dict[str, OpKind]    = {o.value: o for o in OpKind}
_BRANCHES:   Dict[str, BranchKind] = {b.value: b for b in BranchKind}
_SUBS:       Dict[str, SubKind]   = {s.value: s for s in SubKind}

TEMP_SIZE = 8

class _LineError(Exception):
    """Uso interno: corta la clasificación de una línea con su diagnóstico."""
    def __init__(self, diag: Diagnostic):
        super().__init__(diag.message)
        self.diag = diag

def _err(message: str, *, kind, lineno: int, filename: Optional[str], hint: Optional[str] = None):
    return _LineError(error(message, kind=kind, line=lineno, file=filename, hint=hint))

def _parse_count(tok: str, what: str, lineno: int, filename: Optional[str]) -> int:
    if not DEC_RE.match(tok):
        raise _err(f"{what} no numérico: '{tok}'", kind="operando_invalido", lineno=lineno, filename=filename,
                    hint="se esperaba un entero no negativo")
    return int(tok, 10)

def _parse_name(tok: str, lineno: int, filename: Optional[str]) -> str:
    if not VM_SYM_RE.match(tok):
        raise _err(f"Símbolo inválido: '{tok}'", kind="operando_invalido", lineno=lineno, filename=filename,
                    hint="letras, dígitos, '_', '.', ':' o '$'; no puede empezar por dígito")
    if RESERVED_RE.search(tok):
        raise _err(f"Nombre reservado: '{tok}'", kind="operando_invalido", lineno=lineno, filename=filename,
                    hint="'.<dígitos>' al final está reservado a etiquetas generadas y estáticos")
    return tok

def _check_segment_index(direction: Direction, segment: Segment, index: int,
                         lineno: int, filename: Optional[str]) -> None:
    if segment is Segment.CONSTANT:
        if direction is Direction.POP:
            raise _err("pop constant no está permitido", kind="operando_invalido", lineno=lineno, filename=filename,
                        hint="'constant' es un segmento sólo de lectura")
        if not is_unsigned_nbit(index, 15):
            raise _err(f"Constante fuera de rango (0..32767): {index}", kind="operando_invalido",
                        lineno=lineno, filename=filename)
    elif not is_unsigned_nbit(index, 15):
        raise _err(f"Índice fuera de rango (0..32767): {index}", kind="operando_invalido",
                    lineno=lineno, filename=filename)
    elif segment is Segment.POINTER and index not in (0, 1):
        raise _err(f"Índice de pointer inválido: {index}", kind="operando_invalido", lineno=lineno,
                    filename=filename, hint="pointer sólo admite 0 (this) o 1 (that)")
    elif segment is Segment.TEMP and index >= TEMP_SIZE:
        raise _err(f"Índice de temp fuera de rango (0..{TEMP_SIZE - 1}): {index}", kind="operando_invalido",
                    lineno=lineno, filename=filename)

def classify(core: str, *, lineno: int = 0, filename: Optional[str] = None) -> VMInstruction:
    """Clasifica una línea ya normalizada.

    Lanza _LineError con el diagnóstico si la línea no es válida; `parse`
    lo convierte en un Diagnostic y corta la unidad.
    """
    words = split_words(core)
    head, args = words[0], words[1:]

    if head in _DIRECTIONS:
        if len(args) != 2:
            raise _err(f"{head} espera segmento e índice", kind="linea_malformada", lineno=lineno, filename=filename)
        seg_tok, idx_tok = args
        segment = _SEGMENTS.get(seg_tok)
        if segment is None:
            raise _err(f"Segmento desconocido: '{seg_tok}'", kind="linea_malformada", lineno=lineno, filename=filename,
                        hint="argument, local, this, that, constant, static, temp o pointer")
        direction = _DIRECTIONS[head]
        index = _parse_count(idx_tok, "Índice", lineno, filename)
        _check_segment_index(direction, segment, index, lineno, filename)
        return StackMove(direction, segment, index, line=lineno)

    if head in _OPERATORS:
        if args:
            raise _err(f"{head} no lleva operandos", kind="linea_malformada", lineno=lineno, filename=filename)
        return Operator(_OPERATORS[head], line=lineno)

    if head in _BRANCHES:
        if len(args) != 1:
            raise _err(f"{head} espera un nombre de etiqueta", kind="linea_malformada", lineno=lineno, filename=filename)
        return Branch(_BRANCHES[head], _parse_name(args[0], lineno, filename), line=lineno)

    if head in _SUBS:
        kind = _SUBS[head]
        if kind is SubKind.RETURN:
            if args:
                raise _err("return no lleva operandos", kind="linea_malformada", lineno=lineno, filename=filename)
            return Subroutine(kind, line=lineno)
        what = "nLocals" if kind is SubKind.FUNCTION else "nArgs"
        if len(args) != 2:
            raise _err(f"{head} espera nombre y {what}", kind="linea_malformada", lineno=lineno, filename=filename)
        name = _parse_name(args[0], lineno, filename)
        count = _parse_count(args[1], what, lineno, filename)
        return Subroutine(kind, name, count, line=lineno)

    raise _err(f"Operación desconocida: '{head}'", kind="linea_malformada", lineno=lineno, filename=filename)

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[VMInstruction], List[Diagnostic]]:
    """
    Devuelve (instructions, diagnostics) para una unidad de compilación.

    Reglas:
      - Comentarios: '//' hasta fin de línea; líneas vacías se ignoran.
      - Una operación por línea, operandos separados por espacios.
      - Al primer error se detiene: diagnostics tendrá un único error y
        la lista de instrucciones queda vacía (todo o nada).
    """
    instructions: List[VMInstruction] = []
    for lineno, core in iter_lines(text):
        try:
            instructions.append(classify(core, lineno=lineno, filename=filename))
        except _LineError as ex:
            return [], [ex.diag]
    return instructions, []
