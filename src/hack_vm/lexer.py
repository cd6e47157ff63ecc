from __future__ import annotations
import re
from typing import List, Optional, Tuple

COMMENT_MARKER = "//"

def strip_comment(line: str) -> str:
    """Remove the suffix starting at the first '//' and surrounding whitespace."""
    idx = line.find(COMMENT_MARKER)
    if idx >= 0:
        line = line[:idx]
    return line.strip()

def normalize_line(line: str) -> Optional[str]:
    """Return the instruction text of a raw line, or None for blank/comment-only lines."""
    core = strip_comment(line)
    if not core:
        return None
    return core

def iter_lines(text: str):
    """Yield (lineno, normalized_text) for every line that carries an instruction."""
    for lineno, raw in enumerate(text.splitlines(), start=1):
        core = normalize_line(raw)
        if core is not None:
            yield lineno, core

def split_words(line: str) -> List[str]:
    # VM operands are whitespace separated
    return line.split()

# ---- Hack assembly ----

SYMBOL_RE = re.compile(r"^[A-Za-z_.$:][A-Za-z0-9_.$:]*$")
LABEL_DECL_RE = re.compile(r"^\((?P<name>[^()]*)\)$")

def is_symbol(token: str) -> bool:
    return bool(SYMBOL_RE.match(token))

def split_label_decl(line: str) -> Optional[str]:
    """Return the name inside '(name)', or None when the line is not a label declaration."""
    m = LABEL_DECL_RE.match(line)
    if not m:
        return None
    return m.group("name").strip()

def split_c_instruction(line: str) -> Tuple[str, str, str]:
    """Split 'dest=comp;jump' into its three fields; missing fields come back as ''."""
    s = "".join(line.split())
    dest = ""
    jump = ""
    if "=" in s:
        dest, s = s.split("=", 1)
    if ";" in s:
        s, jump = s.split(";", 1)
    return dest, s, jump
