#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to step() runs exactly one fetch-decode-execute cycle, and tick() runs one 60Hz
timer update.  The CPU never schedules itself: an external clock decides how
often each is called, so the core is entirely driven by its caller.

While LD Vx, K (Fx0A) is waiting for a key, step() does nothing at all, so the
caller can keep stepping at its normal rate until a key press arrives through
key_down().

Memory and stack faults end emulation with a CPUError, including a dump of
the machine state.  Opcodes which aren't part of the instruction set are only
logged, and execution carries on from the next instruction.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from random import randint
from .constants import (
    APP_INTRO, DEFAULT_KEYMAP, FLAG_REGISTER, FONT_LOCATION, FONT_CHAR_SIZE, SPRITE_WIDTH, VID_WIDTH, VID_HEIGHT
)
from .decoder import Instruction, decode, mnemonic
from .keypad import Keypad
from .ram import RAMError
from .stack import StackError
from .timers import Timers

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
DISPLAY_METHODS = ("toggle_pixel", "clear", "render")
AUDIO_METHODS = ("start_tone", "stop_tone", "is_playing")

logger = logging.getLogger(__name__)


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, ram, registers, framebuffer, audio, debugger, keymap=DEFAULT_KEYMAP):
        self._check_adapter("display", framebuffer, DISPLAY_METHODS)
        self._check_adapter("audio", audio, AUDIO_METHODS)

        self.ram = ram
        self.registers = registers
        self.framebuffer = framebuffer
        self.audio = audio
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()
        self.timers = Timers(audio)
        self.keypad = Keypad(registers, keymap)

        # Define instruction pointers for every decodable instruction
        self.instructions = {
            Instruction.CLS: self._00E0,
            Instruction.RET: self._00EE,
            Instruction.JP: self._1nnn,
            Instruction.CALL: self._2nnn,
            Instruction.SE_BYTE: self._3xkk,
            Instruction.SNE_BYTE: self._4xkk,
            Instruction.SE_REG: self._5xy0,
            Instruction.LD_BYTE: self._6xkk,
            Instruction.ADD_BYTE: self._7xkk,
            Instruction.LD_REG: self._8xy0,
            Instruction.OR: self._8xy1,
            Instruction.AND: self._8xy2,
            Instruction.XOR: self._8xy3,
            Instruction.ADD_REG: self._8xy4,
            Instruction.SUB: self._8xy5,
            Instruction.SHR: self._8xy6,
            Instruction.SUBN: self._8xy7,
            Instruction.SHL: self._8xyE,
            Instruction.SNE_REG: self._9xy0,
            Instruction.LD_I: self._Annn,
            Instruction.JP_V0: self._Bnnn,
            Instruction.RND: self._Cxkk,
            Instruction.DRW: self._Dxyn,
            Instruction.SKP: self._Ex9E,
            Instruction.SKNP: self._ExA1,
            Instruction.LD_VX_DT: self._Fx07,
            Instruction.LD_VX_K: self._Fx0A,
            Instruction.LD_DT_VX: self._Fx15,
            Instruction.LD_ST_VX: self._Fx18,
            Instruction.ADD_I: self._Fx1E,
            Instruction.LD_F: self._Fx29,
            Instruction.LD_B: self._Fx33,
            Instruction.LD_MEM_VX: self._Fx55,
            Instruction.LD_VX_MEM: self._Fx65
        }

        # Current opcode, and where it was fetched from
        self.opcode = 0
        self.debug_pc = 0

        self.reset()

    @staticmethod
    def _check_adapter(name, adapter, methods):
        if adapter is None:
            raise CPUError("No {} adapter configured".format(name))

        for method in methods:
            if not callable(getattr(adapter, method, None)):
                raise CPUError("The {} adapter does not provide '{}'".format(name, method))

    def reset(self):
        # Must not be called while a step or tick is in progress
        self.ram.reset()
        self.registers.reset()
        self.timers.reset()
        self.keypad.reset()
        self.framebuffer.clear()
        self.framebuffer.render()
        self.opcode = 0
        self.debug_pc = 0

    def load_rom(self, rom):
        self.reset()
        loaded = self.ram.load(rom)
        logger.info("Loaded %d byte ROM (%d bytes supplied)", loaded, len(rom))
        return loaded

    def step(self):
        # Returns False if no instruction ran, because a keypress is still awaited
        if self.keypad.awaiting_key:
            return False

        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.registers.pc

        try:
            self.opcode = self.fetch()
        except RAMError as err:
            self._halt(err)

        self.registers.advance_pc()  # Program counter updates after fetch, but before execute
        self.decode_exec()
        return True

    def tick(self):
        self.timers.tick()

    def key_down(self, code):
        return self.keypad.key_down(code)

    def key_up(self, code):
        return self.keypad.key_up(code)

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.registers.pc, 2), CPU_ENDIAN, signed=False)

    def decode_exec(self):
        decoded = decode(self.opcode)

        if self.live_debug:
            self.debug(mnemonic(decoded))

        instruction = self.instructions.get(decoded.instruction)

        if instruction is None:
            self._opcode_unsupported()
            return

        try:
            instruction()
        except (RAMError, StackError) as err:
            self._halt(err)

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication (ever so slight slowdown).  Don't reference these more than necessary as they are
    # recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    @property
    def v(self):
        return self.registers.v

    def _opcode_unsupported(self):
        logger.warning("Ignoring unrecognised opcode 0x%04x at address 0x%03x", self.opcode, self.debug_pc)

    def _halt(self, err):
        raise CPUError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\n{} (opcode 0x{:04x} at address 0x{:03x})."
            ).format(
                APP_INTRO, self.debugger.debug(self, mnemonic(decode(self.opcode)), verbose=True), err, self.opcode,
                self.debug_pc
            )
        ) from err

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _skip(self):
        self.registers.advance_pc()

    def _00E0(self):  # CLS
        self.framebuffer.clear()
        self.framebuffer.render()

    def _00EE(self):  # RET
        self.registers.return_()

    def _1nnn(self):  # JP addr
        self.registers.pc = self.addr

    def _2nnn(self):  # CALL addr
        self.registers.call(self.addr)

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.vx] == self.byte:
            self._skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.vx] != self.byte:
            self._skip()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.vx] == self.v[self.vy]:
            self._skip()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        # Wraps around with no carry flag
        self.v[vx] = (self.v[vx] + self.byte) & 0xFF

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.vx] ^= self.v[self.vy]

    def _8xy4(self):  # ADD Vx, Vy
        val = self.v[self.vx] + self.v[self.vy]
        self.v[self.vx] = val & 0xFF
        self.v[FLAG_REGISTER] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes Vf is specified in the
        # parameters
        self.v[FLAG_REGISTER] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx
        val = self.v[self.vx]
        self.v[self.vx] = val >> 1
        self.v[FLAG_REGISTER] = val & 1  # The bit shifted out

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx
        val = self.v[self.vx]
        self.v[self.vx] = (val << 1) & 0xFF
        self.v[FLAG_REGISTER] = val >> 7  # The bit shifted out

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.vx] != self.v[self.vy]:
            self._skip()

    def _Annn(self):  # LD I, addr
        self.registers.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # Not masked.  A target past the end of RAM halts on the next fetch.
        self.registers.pc = self.v[0x0] + self.addr

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        height = self.nibble

        # Both the sprite's start and any pixels falling off the right or bottom edges wrap around
        vx_pos = self.v[self.vx] % VID_WIDTH
        vy_pos = self.v[self.vy] % VID_HEIGHT
        collided = False
        i = self.registers.i

        for y in range(height):
            spr_data = self.ram.read(i + y)
            scr_y = (y + vy_pos) % VID_HEIGHT

            for x in range(SPRITE_WIDTH):
                if spr_data & (0x80 >> x):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    if self.framebuffer.toggle_pixel((x + vx_pos) % VID_WIDTH, scr_y):
                        collided = True

        self.v[FLAG_REGISTER] = int(collided)
        self.framebuffer.render()

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_pressed(self.v[self.vx]):
            self._skip()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_pressed(self.v[self.vx]):
            self._skip()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.vx] = self.timers.dt

    def _Fx0A(self):  # LD Vx, K
        # The program counter has already moved on, so once a key press fills Vx, execution simply continues
        self.keypad.await_key(self.vx)

    def _Fx15(self):  # LD DT, Vx
        self.timers.set_delay(self.v[self.vx])

    def _Fx18(self):  # LD ST, Vx
        self.timers.set_sound(self.v[self.vx])

    def _Fx1E(self):  # ADD I, Vx
        self.registers.i = self.registers.i + self.v[self.vx]

    def _Fx29(self):  # LD F, Vx
        self.registers.i = FONT_LOCATION + FONT_CHAR_SIZE * self.v[self.vx]

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.vx]
        i = self.registers.i
        self.ram.check_overflow(i + 2)  # All three digits fit, or nothing is written
        self.ram.write(i, val // 100)            # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)  # Middle digit
        self.ram.write(i + 2, val % 10)          # Least-significant digit

    def _Fx55(self):  # LD [I], Vx
        i = self.registers.i

        # Ensure with +1 that the final register is copied.  I is left unchanged.
        self.ram.check_overflow(i + self.vx)

        for reg in range(self.vx + 1):
            self.ram.write(i + reg, self.v[reg])

    def _Fx65(self):  # LD Vx, [I]
        i = self.registers.i

        for reg in range(self.vx + 1):
            self.v[reg] = self.ram.read(i + reg)
