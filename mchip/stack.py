#!/usr/bin/env python3

"""
Stack Emulator

The call stack lives outside system RAM, as there is no specified location
for it and no stack pointer register visible to the running program.

It is held as a fixed run of 16-bit slots.  The stack pointer starts at the
top slot and moves down on every push, up on every pop, so 16 nested calls
fill it completely.  Going past either end is reported rather than silently
wrapping into unrelated state.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.size = size
        self.items = [0] * size
        self.sp = size - 1

    def push(self, item):
        if self.sp < 0:
            raise StackError("Stack overflow")

        self.items[self.sp] = item & 0xFFFF
        self.sp -= 1

    def pop(self):
        if self.sp >= self.size - 1:
            raise StackError("Stack underflow")

        self.sp += 1
        return self.items[self.sp]

    def clear(self):
        for slot in range(self.size):
            self.items[slot] = 0

        self.sp = self.size - 1

    def get_items(self):
        # For debugging.  Innermost return address last.
        return self.items[self.sp + 1:][::-1]
