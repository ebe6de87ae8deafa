#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.decoder import Instruction, INSTRUCTIONS, decode, mnemonic


class TestDecoder(unittest.TestCase):
    def test_decoder_fields(self):
        decoded = decode(0xD12F)
        self.assertEqual(Instruction.DRW, decoded.instruction)
        self.assertEqual(0xD12F, decoded.opcode)
        self.assertEqual(0x1, decoded.vx)
        self.assertEqual(0x2, decoded.vy)
        self.assertEqual(0x12F, decoded.addr)
        self.assertEqual(0x2F, decoded.byte)
        self.assertEqual(0xF, decoded.nibble)

    def test_decoder_categories(self):
        for opcode, instruction in (
            (0x00E0, Instruction.CLS), (0x00EE, Instruction.RET), (0x1ABC, Instruction.JP),
            (0x2ABC, Instruction.CALL), (0x3A12, Instruction.SE_BYTE), (0x4A12, Instruction.SNE_BYTE),
            (0x5AB0, Instruction.SE_REG), (0x5AB1, Instruction.SE_REG), (0x6A12, Instruction.LD_BYTE),
            (0x7A12, Instruction.ADD_BYTE),
            (0x8AB0, Instruction.LD_REG), (0x8AB1, Instruction.OR), (0x8AB2, Instruction.AND),
            (0x8AB3, Instruction.XOR), (0x8AB4, Instruction.ADD_REG), (0x8AB5, Instruction.SUB),
            (0x8AB6, Instruction.SHR), (0x8AB7, Instruction.SUBN), (0x8ABE, Instruction.SHL),
            (0x9AB0, Instruction.SNE_REG), (0x9ABF, Instruction.SNE_REG), (0xAABC, Instruction.LD_I),
            (0xBABC, Instruction.JP_V0),
            (0xCA12, Instruction.RND), (0xDAB5, Instruction.DRW), (0xEA9E, Instruction.SKP),
            (0xEAA1, Instruction.SKNP), (0xFA07, Instruction.LD_VX_DT), (0xFA0A, Instruction.LD_VX_K),
            (0xFA15, Instruction.LD_DT_VX), (0xFA18, Instruction.LD_ST_VX), (0xFA1E, Instruction.ADD_I),
            (0xFA29, Instruction.LD_F), (0xFA33, Instruction.LD_B), (0xFA55, Instruction.LD_MEM_VX),
            (0xFA65, Instruction.LD_VX_MEM)
        ):
            self.assertEqual(instruction, decode(opcode).instruction, hex(opcode))

    def test_decoder_unknown(self):
        for opcode in 0x0000, 0x0123, 0x00E1, 0x8008, 0x800F, 0xE09F, 0xE0A2, 0xF100, 0xFFFF:
            self.assertEqual(Instruction.UNKNOWN, decode(opcode).instruction, hex(opcode))

    def test_decoder_table_complete(self):
        # Every instruction other than UNKNOWN decodes from its own pattern
        self.assertEqual(len(Instruction) - 1, len(INSTRUCTIONS))

        for instruction in Instruction:
            if instruction is not Instruction.UNKNOWN:
                self.assertEqual(instruction, decode(instruction.pattern).instruction)

    def test_decoder_mnemonic(self):
        self.assertEqual("CLS", mnemonic(decode(0x00E0)))
        self.assertEqual("JP 0x2a0", mnemonic(decode(0x12A0)))
        self.assertEqual("SE V3, 0x0f", mnemonic(decode(0x330F)))
        self.assertEqual("DRW V1, V2, 0x5", mnemonic(decode(0xD125)))
        self.assertEqual("LD [I], Va", mnemonic(decode(0xFA55)))
        self.assertEqual("???", mnemonic(decode(0xFFFF)))
