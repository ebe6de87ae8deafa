#!/usr/bin/env python3

"""
Register File

Holds the sixteen 8-bit V registers, the 16-bit index register (I), the
program counter (PC) and the call stack.

Vf is an ordinary register that programs can read and write, but it is also
the flag output of several instructions.  ADD Vx, Vy (8xy4), SUB (8xy5), SHR
(8xy6), SUBN (8xy7), SHL (8xyE) and DRW (Dxyn) all overwrite Vf as a side
effect, and always after their result has been written.  If Vx is Vf itself,
the flag therefore wins.

The index register is kept as an unsigned 16-bit value.  Nothing here limits
it to the 4K address space; an out-of-range I is only caught when something
tries to read or write memory through it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_REGISTERS, STACK_SIZE, PROGRAM_START, INSTRUCTION_SIZE, MEM_SIZE
from .stack import Stack


class RegisterFile:
    def __init__(self, stack=None):
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Mutable in place, so other components can hold a reference
        self.stack = Stack(STACK_SIZE) if stack is None else stack
        self._i = 0
        self.pc = PROGRAM_START

    def reset(self):
        self.v[:] = bytes(NUM_REGISTERS)
        self.stack.clear()
        self._i = 0
        self.pc = PROGRAM_START

    def read_register(self, reg_num):
        return self.v[reg_num]

    def write_register(self, reg_num, value):
        self.v[reg_num] = value & 0xFF

    @property
    def i(self):
        return self._i

    @i.setter
    def i(self, value):
        self._i = value & 0xFFFF

    def advance_pc(self):
        # Runaway programs restart from the program area rather than faulting at the top of RAM
        pc = self.pc + INSTRUCTION_SIZE
        self.pc = PROGRAM_START if pc >= MEM_SIZE else pc

    def call(self, target):
        self.stack.push(self.pc)
        self.pc = target

    def return_(self):
        self.pc = self.stack.pop()
