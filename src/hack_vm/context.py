# src/hack_vm/context.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from .segments import TEMP_BASE

@dataclass
class CodeGenContext:
    """Estado de traducción de UNA unidad de compilación.

    Los contadores sólo crecen y nunca se reinician dentro de la unidad; cada
    valor servido se usa una sola vez para fabricar etiquetas únicas. Dos
    unidades nunca comparten contexto.
    """
    namespace: str
    temp_base: int = TEMP_BASE
    comparisons: int = 0
    calls: int = 0
    # etiqueta declarada -> línea fuente donde se declaró
    labels: Dict[str, int] = field(default_factory=dict)

    def next_comparison(self) -> int:
        n = self.comparisons
        self.comparisons += 1
        return n

    def next_call(self) -> int:
        n = self.calls
        self.calls += 1
        return n

    def declare(self, name: str, line: int) -> bool:
        """Registra una etiqueta; False si ya estaba declarada en la unidad."""
        if name in self.labels:
            return False
        self.labels[name] = line
        return True
