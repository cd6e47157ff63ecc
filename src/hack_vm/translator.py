from __future__ import annotations
import argparse, sys
from pathlib import Path
from typing import List, Optional, Tuple

from .parser import parse
from .codegen import generate, CodegenResult
from .diagnostics import Diagnostic, error, has_errors
from .lexer import is_symbol
from .writers import write_text

VM_SUFFIX = ".vm"
ASM_SUFFIX = ".asm"
DEFAULT_NAMESPACE = "Main"

def namespace_for(filename: str | None) -> str:
    """Token de espacio de nombres de la unidad: el nombre del archivo sin extensión."""
    if not filename:
        return DEFAULT_NAMESPACE
    return Path(filename).stem

def check_namespace(ns: str, filename: str | None = None) -> Optional[Diagnostic]:
    """Error si '<ns>.<i>' no sería un símbolo válido del ensamblador."""
    if is_symbol(ns):
        return None
    return error(f"Espacio de nombres inválido: '{ns}'", kind="operando_invalido", file=filename,
                 hint="el nombre del archivo debe empezar por letra, '_', '.', '$' o ':' y no llevar espacios")

def translate_text(text: str, *, filename: str | None = None, namespace: str | None = None,
                   annotate: bool = False) -> Tuple[list, List[Diagnostic], CodegenResult]:
    """Clasifica y genera el ensamblador de UNA unidad de compilación.
    Devuelve (instrucciones, diagnostics_totales, codegen_result)."""
    ns = namespace or namespace_for(filename)
    bad_ns = check_namespace(ns, filename)
    if bad_ns is not None:
        return [], [bad_ns], CodegenResult(lines=[], diagnostics=[])
    instructions, diags_parse = parse(text, filename=filename)
    if has_errors(diags_parse):
        return instructions, list(diags_parse), CodegenResult(lines=[], diagnostics=[])
    res = generate(instructions, namespace=ns, filename=filename, annotate=annotate)
    return instructions, list(diags_parse) + list(res.diagnostics), res

def output_path(source: str, out: Optional[str] = None) -> Path:
    if out:
        return Path(out)
    return Path(source).with_suffix(ASM_SUFFIX)

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Hack VM translator (.vm -> .asm)")
    ap.add_argument("source", help="archivo .vm de entrada")
    ap.add_argument("-o", "--output", help="archivo .asm de salida (por defecto, junto al .vm)")
    ap.add_argument("--annotate", action="store_true",
                    help="antepone cada fragmento con la instrucción VM como comentario")
    args = ap.parse_args(argv)

    if Path(args.source).suffix != VM_SUFFIX:
        print(f"ERROR: {args.source}: se esperaba extensión {VM_SUFFIX}", file=sys.stderr)
        return 2

    bad_ns = check_namespace(namespace_for(args.source), args.source)
    if bad_ns is not None:
        print(bad_ns, file=sys.stderr)
        return 2

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    instructions, diags, res = translate_text(text, filename=args.source, annotate=args.annotate)

    for d in diags:
        print(d, file=sys.stderr)
    if has_errors(diags):
        return 1

    out = output_path(args.source, args.output)
    try:
        write_text(res.lines, out)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(instructions)} instrucciones VM → {out}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
