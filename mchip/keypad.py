#!/usr/bin/env python3

"""
Keypad Emulator

Tracks which of the 16 logical keys (0x0 - 0xF) are held down.  Input plugins
report physical keys by name (e.g. "q" or "4"), and these are translated
through a fixed keymap.  Names that are not in the keymap are ignored.

LD Vx, K (Fx0A) needs the CPU to stop until a key is pressed.  Rather than
blocking, the keypad holds an 'awaiting key' latch along with the register to
fill.  The CPU checks the latch before each step, and the next key press
writes its logical value into the register and releases the latch.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import DEFAULT_KEYMAP

logger = logging.getLogger(__name__)


class KeypadError(Exception):
    pass


def parse_keymap(keymap):
    # Keymaps list the physical key names for logical keys 0-F, separated by commas
    keymap_dict = {}
    keymap_split = keymap.split(",")

    if len(keymap_split) != 0x10:
        raise KeypadError("Incorrect number of keys defined -- 16 required.  Use commas to split key names")

    for key_num, key_defined in enumerate(keymap_split):
        key_name = key_defined.strip().lower()

        if not key_name:
            raise KeypadError("Empty key name defined for key 0x{:01x}".format(key_num))

        if key_name in keymap_dict:
            raise KeypadError("Duplicate keys defined")

        keymap_dict[key_name] = key_num

    return keymap_dict


class Keypad:
    def __init__(self, registers, keymap=DEFAULT_KEYMAP):
        self.registers = registers
        self.keymap_dict = parse_keymap(keymap)
        self.pressed = set()
        self.awaiting_register = None

    def reset(self):
        self.pressed.clear()
        self.awaiting_register = None

    def _map(self, code):
        if code is None:
            return None

        return self.keymap_dict.get(str(code).lower())

    def key_down(self, code):
        key = self._map(code)

        if key is None:
            return None

        self.pressed.add(key)

        if self.awaiting_register is not None:
            self.registers.write_register(self.awaiting_register, key)
            logger.debug("Key 0x%01x released wait on V%01x", key, self.awaiting_register)
            self.awaiting_register = None

        return key

    def key_up(self, code):
        key = self._map(code)

        if key is not None:
            self.pressed.discard(key)

        return key

    def is_pressed(self, key):
        return key in self.pressed

    def await_key(self, reg_num):
        self.awaiting_register = reg_num

    @property
    def awaiting_key(self):
        return self.awaiting_register is not None
