# src/hack_vm/codegen.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .ast import (
    Direction, BranchKind, SubKind,
    StackMove, Operator, Branch, Subroutine, VMInstruction,
)
from .context import CodeGenContext
from .diagnostics import Diagnostic, error, warning
from . import segments, operators, branching, calls

# ---------------- Resultado de la generación ----------------

@dataclass(frozen=True)
class CodegenResult:
    lines: List[str]
    diagnostics: List[Diagnostic]

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)

# ---------------- Helpers ----------------

def render(ins: VMInstruction) -> str:
    """Forma textual de VM de una instrucción (para anotar la salida)."""
    if isinstance(ins, StackMove):
        return f"{ins.direction.value} {ins.segment.value} {ins.index}"
    if isinstance(ins, Operator):
        return ins.kind.value
    if isinstance(ins, Branch):
        return f"{ins.kind.value} {ins.name}"
    if ins.kind is SubKind.RETURN:
        return "return"
    return f"{ins.kind.value} {ins.name} {ins.count}"

def _stack_move(ins: StackMove, ctx: CodeGenContext) -> List[str]:
    gen = segments.push if ins.direction is Direction.PUSH else segments.pop
    return gen(ins.segment, ins.index, namespace=ctx.namespace, temp_base=ctx.temp_base)

def _subroutine(ins: Subroutine, ctx: CodeGenContext) -> List[str]:
    if ins.kind is SubKind.FUNCTION:
        return calls.function(ins.name, ins.count)
    if ins.kind is SubKind.CALL:
        return calls.call(ins.name, ins.count, ctx.next_call())
    return calls.ret()

def _declared_name(ins: VMInstruction) -> Optional[str]:
    if isinstance(ins, Branch) and ins.kind is BranchKind.LABEL:
        return ins.name
    if isinstance(ins, Subroutine) and ins.kind is SubKind.FUNCTION:
        return ins.name
    return None

# ---------------- Generador principal ----------------

def translate_instruction(ins: VMInstruction, ctx: CodeGenContext) -> List[str]:
    """Fragmento de ensamblador de una instrucción; avanza los contadores de ctx."""
    if isinstance(ins, StackMove):
        return _stack_move(ins, ctx)
    if isinstance(ins, Operator):
        return operators.generate(ins.kind, ctx)
    if isinstance(ins, Branch):
        return branching.generate(ins.kind, ins.name)
    if isinstance(ins, Subroutine):
        return _subroutine(ins, ctx)
    raise TypeError(f"instrucción desconocida: {ins!r}")

def generate(
    instructions: Iterable[VMInstruction],
    *,
    namespace: str,
    filename: Optional[str] = None,
    annotate: bool = False,
    ctx: Optional[CodeGenContext] = None,
) -> CodegenResult:
    """Traduce una unidad completa, en orden y sin optimizar.

    Si aparece un error (etiqueta duplicada) se devuelve sin líneas: la
    salida es todo o nada.
    """
    if ctx is None:
        ctx = CodeGenContext(namespace=namespace)
    lines: List[str] = []
    jumps: List[Branch] = []

    for ins in instructions:
        if isinstance(ins, Branch) and ins.kind is not BranchKind.LABEL:
            jumps.append(ins)
        name = _declared_name(ins)
        if name is not None:
            first = ctx.labels.get(name)
            if not ctx.declare(name, ins.line):
                d = error(f"Etiqueta redefinida: {name}", kind="etiqueta_duplicada",
                          line=ins.line, file=filename,
                          hint=f"declarada antes en la línea {first}")
                return CodegenResult(lines=[], diagnostics=[d])
        if annotate:
            lines.append(f"// {render(ins)}")
        lines.extend(translate_instruction(ins, ctx))

    # el ensamblador decide; aquí sólo se avisa
    diags: List[Diagnostic] = []
    for b in jumps:
        if b.name not in ctx.labels:
            diags.append(warning(f"Salto a etiqueta no declarada en la unidad: {b.name}",
                                 line=b.line, file=filename))
    return CodegenResult(lines=lines, diagnostics=diags)
