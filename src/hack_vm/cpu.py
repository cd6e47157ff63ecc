'''
emulador de la CPU Hack: ejecuta palabras de 16 bits contra una RAM de 32K
'''

from __future__ import annotations
from typing import Iterable, List, Optional

from .utils import u16, sign_extend, split_bits

RAM_SIZE = 1 << 15

def alu(x: int, y: int, c: int) -> int:
    """ALU Hack: c = zx nx zy ny f no (6 bits)."""
    zx, nx, zy, ny, f, no = split_bits(c, ((5, 5), (4, 4), (3, 3), (2, 2), (1, 1), (0, 0)))
    if zx:
        x = 0
    if nx:
        x = ~x
    if zy:
        y = 0
    if ny:
        y = ~y
    out = (x + y) if f else (x & y)
    if no:
        out = ~out
    return u16(out)

def _jumps(out: int, jump: int) -> bool:
    v = sign_extend(out)
    return bool((jump & 0b100 and v < 0) or
                (jump & 0b010 and v == 0) or
                (jump & 0b001 and v > 0))

class HackCPU:
    """CPU Hack con registros A, D, PC y memoria de datos separada de la ROM.

    `halted` se activa al salir de la ROM o al detectar el bucle de parada
    '@n / 0;JMP' que salta a sí mismo.
    """

    def __init__(self, rom: Iterable[int], *, ram: Optional[List[int]] = None):
        self.rom: List[int] = [u16(w) for w in rom]
        self.ram: List[int] = ram if ram is not None else [0] * RAM_SIZE
        self.a = 0
        self.d = 0
        self.pc = 0
        self.steps = 0
        self.halted = False

    @classmethod
    def from_lines(cls, lines: Iterable[str], **kwargs) -> "HackCPU":
        """Construye la CPU a partir de líneas '0'/'1' de un archivo .hack."""
        return cls((int(s, 2) for s in lines if s.strip()), **kwargs)

    def peek(self, addr: int, *, signed: bool = True) -> int:
        v = self.ram[addr]
        return sign_extend(v) if signed else v

    def poke(self, addr: int, value: int) -> None:
        self.ram[addr] = u16(value)

    def step(self) -> None:
        if self.pc >= len(self.rom):
            self.halted = True
            return
        word = self.rom[self.pc]
        pc = self.pc
        self.steps += 1

        if not word & 0x8000:
            self.a = word
            self.pc += 1
            return

        a_bit, c, dest, jump = split_bits(word, ((12, 12), (11, 6), (5, 3), (2, 0)))
        addr = self.a & (RAM_SIZE - 1)
        y = self.ram[addr] if a_bit else self.a
        out = alu(self.d, y, c)

        # M usa la dirección anterior a la escritura de A; el salto también
        target = self.a
        if dest & 0b001:
            self.ram[addr] = out
        if dest & 0b100:
            self.a = out
        if dest & 0b010:
            self.d = out

        if jump and _jumps(out, jump):
            if target == pc - 1 and pc > 0 and self.rom[pc - 1] == target:
                self.halted = True
            self.pc = target
        else:
            self.pc += 1

    def run(self, max_steps: int = 100_000) -> int:
        """Ejecuta hasta parar o agotar max_steps; devuelve los pasos ejecutados."""
        start = self.steps
        while not self.halted and self.steps - start < max_steps:
            self.step()
        return self.steps - start
