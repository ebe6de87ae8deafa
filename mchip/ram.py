#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, with
every access checked against the size of the bank.  A plain RAM bank is also
used by the Framebuffer as video memory.

Memory is the 4K main system RAM.  The hexadecimal font sits at the very
bottom, and programs are loaded at 0x200.  Anything a ROM does to the font
area is allowed, as the original interpreter never protected it either.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import MEM_SIZE, PROGRAM_START, PROGRAM_CAPACITY, FONT_LOCATION, SYSTEM_FONT

logger = logging.getLogger(__name__)


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location)
        self.check_overflow(location + size - 1)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)

        if not block_size:
            return

        block_top = location + block_size
        self.check_overflow(location)
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise RAMError("Memory access out of range: 0x{:04x}".format(location))

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)

        self.mem[offset:block_top] = bytes(size)

    def clear(self):
        self.mem[:] = bytes(self.mem_size)


class Memory(RAM):
    def __init__(self):
        super().__init__(MEM_SIZE)
        self.reset()

    def reset(self):
        self.clear()
        self.write_block(FONT_LOCATION, SYSTEM_FONT)

    def load(self, rom):
        # Oversized ROMs are cut down to fit rather than rejected
        rom_size = len(rom)

        if rom_size > PROGRAM_CAPACITY:
            logger.debug("ROM is %d bytes, only the first %d will be loaded", rom_size, PROGRAM_CAPACITY)
            rom = rom[:PROGRAM_CAPACITY]

        self.write_block(PROGRAM_START, rom)
        return len(rom)
