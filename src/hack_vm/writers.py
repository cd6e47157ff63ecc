from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Union
from .utils import to_bin16
from .encoding import Encoded

PathLike = Union[str, Path]

def to_bin_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_bin16(w.word) for w in words]

def write_text(lines: Iterable[str], path: PathLike) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

def write_bin(words: Iterable[Encoded], path: PathLike) -> None:
    write_text(to_bin_lines(words), path)
