from __future__ import annotations
import argparse, sys
from pathlib import Path
from typing import Tuple

from .asm_parser import parse
from .linker import link, VARIABLE_BASE
from .encoding import encode
from .writers import write_bin
from .diagnostics import has_errors

ASM_SUFFIX = ".asm"
HACK_SUFFIX = ".hack"

def assemble_text(text: str, *, filename: str | None = None,
                  variable_base: int = VARIABLE_BASE) -> Tuple[list, list, object, object]:
    """Parsea, hace PASADA 1 (etiquetas) y PASADA 2 (variables) y codifica.
    Devuelve (nodes, diagnostics_totales, link_result, enc_result)."""
    nodes, diags_parse = parse(text, filename=filename)
    lnk = link(nodes, variable_base=variable_base, filename=filename)
    enc = encode(nodes, lnk.symtab, filename=filename)
    diags = list(diags_parse) + list(lnk.diagnostics) + list(enc.diagnostics)
    return nodes, diags, lnk, enc

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Hack two-pass assembler (.asm -> .hack)")
    ap.add_argument("source", help="archivo .asm de entrada")
    ap.add_argument("-o", "--output", help="archivo .hack de salida (por defecto, junto al .asm)")
    ap.add_argument("--variable-base", type=int, default=VARIABLE_BASE,
                    help="primera dirección de RAM para variables (por defecto 16)")
    args = ap.parse_args(argv)

    if Path(args.source).suffix != ASM_SUFFIX:
        print(f"ERROR: {args.source}: se esperaba extensión {ASM_SUFFIX}", file=sys.stderr)
        return 2

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    nodes, diags, lnk, enc = assemble_text(text, filename=args.source, variable_base=args.variable_base)

    for d in diags:
        # imprimimos todo; si hay error, devolvemos código 1
        print(d, file=sys.stderr)
    if has_errors(diags):
        return 1

    out = Path(args.output) if args.output else Path(args.source).with_suffix(HACK_SUFFIX)
    try:
        write_bin(enc.words, out)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(enc.words)} instrucciones → {out}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
