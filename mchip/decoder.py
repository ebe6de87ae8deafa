#!/usr/bin/env python3

"""
Opcode Decoder

Every opcode is 16 bits.  The top nibble picks a category, and each category
has a single fixed mask which reduces the opcode to the bits that identify
the instruction:

    * 0x0           - exact match (0xFFFF)
    * 0x8           - category and final nibble (0xF00F)
    * 0xE, 0xF      - category and final byte (0xF0FF)
    * All others    - category only (0xF000).  The final nibble of 5xyn and
                      9xyn is ignored.

The masked opcode is then looked up in a table built from the Instruction
enumeration, so the full instruction set can be listed (and checked against
the CPU's handlers) without executing anything.  Anything left over decodes
as Instruction.UNKNOWN.

Operand fields are always in the same position, whichever instruction uses
them:
    n    = nibble
    kk   = byte
    nnn  = address
    x/y  = register (0-15)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import Enum

CATEGORY_MASKS = (
    0xFFFF, 0xF000, 0xF000, 0xF000, 0xF000, 0xF000, 0xF000, 0xF000,
    0xF00F, 0xF000, 0xF000, 0xF000, 0xF000, 0xF000, 0xF0FF, 0xF0FF
)


class Instruction(Enum):
    # Member values are (masked opcode, mnemonic template)
    CLS = (0x00E0, "CLS")
    RET = (0x00EE, "RET")
    JP = (0x1000, "JP 0x{addr:03x}")
    CALL = (0x2000, "CALL 0x{addr:03x}")
    SE_BYTE = (0x3000, "SE V{vx:01x}, 0x{byte:02x}")
    SNE_BYTE = (0x4000, "SNE V{vx:01x}, 0x{byte:02x}")
    SE_REG = (0x5000, "SE V{vx:01x}, V{vy:01x}")
    LD_BYTE = (0x6000, "LD V{vx:01x}, 0x{byte:02x}")
    ADD_BYTE = (0x7000, "ADD V{vx:01x}, 0x{byte:02x}")
    LD_REG = (0x8000, "LD V{vx:01x}, V{vy:01x}")
    OR = (0x8001, "OR V{vx:01x}, V{vy:01x}")
    AND = (0x8002, "AND V{vx:01x}, V{vy:01x}")
    XOR = (0x8003, "XOR V{vx:01x}, V{vy:01x}")
    ADD_REG = (0x8004, "ADD V{vx:01x}, V{vy:01x}")
    SUB = (0x8005, "SUB V{vx:01x}, V{vy:01x}")
    SHR = (0x8006, "SHR V{vx:01x}")
    SUBN = (0x8007, "SUBN V{vx:01x}, V{vy:01x}")
    SHL = (0x800E, "SHL V{vx:01x}")
    SNE_REG = (0x9000, "SNE V{vx:01x}, V{vy:01x}")
    LD_I = (0xA000, "LD I, 0x{addr:03x}")
    JP_V0 = (0xB000, "JP V0, 0x{addr:03x}")
    RND = (0xC000, "RND V{vx:01x}, 0x{byte:02x}")
    DRW = (0xD000, "DRW V{vx:01x}, V{vy:01x}, 0x{nibble:01x}")
    SKP = (0xE09E, "SKP V{vx:01x}")
    SKNP = (0xE0A1, "SKNP V{vx:01x}")
    LD_VX_DT = (0xF007, "LD V{vx:01x}, DT")
    LD_VX_K = (0xF00A, "LD V{vx:01x}, K")
    LD_DT_VX = (0xF015, "LD DT, V{vx:01x}")
    LD_ST_VX = (0xF018, "LD ST, V{vx:01x}")
    ADD_I = (0xF01E, "ADD I, V{vx:01x}")
    LD_F = (0xF029, "LD F, V{vx:01x}")
    LD_B = (0xF033, "LD B, V{vx:01x}")
    LD_MEM_VX = (0xF055, "LD [I], V{vx:01x}")
    LD_VX_MEM = (0xF065, "LD V{vx:01x}, [I]")
    UNKNOWN = (None, "???")

    @property
    def pattern(self):
        return self.value[0]

    @property
    def template(self):
        return self.value[1]


INSTRUCTIONS = {instruction.pattern: instruction for instruction in Instruction if instruction.pattern is not None}

Decoded = namedtuple("Decoded", ["instruction", "opcode", "vx", "vy", "addr", "byte", "nibble"])


def decode(opcode):
    masked_opcode = opcode & CATEGORY_MASKS[(opcode & 0xF000) >> 12]

    return Decoded(
        INSTRUCTIONS.get(masked_opcode, Instruction.UNKNOWN),
        opcode,
        (opcode & 0xF00) >> 8,
        (opcode & 0xF0) >> 4,
        opcode & 0xFFF,
        opcode & 0xFF,
        opcode & 0xF
    )


def mnemonic(decoded):
    return decoded.instruction.template.format(**decoded._asdict())
