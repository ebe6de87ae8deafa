#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.constants import DEFAULT_KEYMAP
from mchip.keypad import Keypad, KeypadError, parse_keymap
from mchip.registers import RegisterFile


class TestKeypad(unittest.TestCase):
    def setUp(self):
        self.registers = RegisterFile()
        self.keypad = Keypad(self.registers)

    def test_keypad_default_layout(self):
        keymap_dict = parse_keymap(DEFAULT_KEYMAP)
        self.assertEqual(0x1, keymap_dict["1"])
        self.assertEqual(0xC, keymap_dict["4"])
        self.assertEqual(0x7, keymap_dict["a"])
        self.assertEqual(0x0, keymap_dict["x"])
        self.assertEqual(0xF, keymap_dict["v"])

    def test_keypad_bad_keymaps(self):
        self.assertRaises(KeypadError, parse_keymap, "1,2,3")
        self.assertRaises(KeypadError, parse_keymap, ",".join(["a"] * 16))
        self.assertRaises(KeypadError, parse_keymap, ",".join(["k{}".format(i) for i in range(15)] + [" "]))

    def test_keypad_custom_keymap(self):
        keypad = Keypad(self.registers, ",".join("K{}".format(i) for i in range(16)))
        self.assertEqual(0xB, keypad.key_down("k11"))
        self.assertTrue(keypad.is_pressed(0xB))

    def test_keypad_down_up(self):
        self.assertEqual(0x5, self.keypad.key_down("w"))
        self.assertTrue(self.keypad.is_pressed(0x5))
        self.assertFalse(self.keypad.is_pressed(0x6))
        self.keypad.key_up("w")
        self.assertFalse(self.keypad.is_pressed(0x5))

    def test_keypad_key_zero(self):
        self.keypad.key_down("x")
        self.assertTrue(self.keypad.is_pressed(0x0))
        self.keypad.key_up("x")
        self.assertFalse(self.keypad.is_pressed(0x0))

    def test_keypad_unmapped_ignored(self):
        self.assertIsNone(self.keypad.key_down("escape"))
        self.assertIsNone(self.keypad.key_up("escape"))
        self.assertIsNone(self.keypad.key_down(None))
        self.assertEqual(set(), self.keypad.pressed)

    def test_keypad_await_key(self):
        self.keypad.await_key(0x3)
        self.assertTrue(self.keypad.awaiting_key)
        self.keypad.key_down("escape")  # Unmapped keys don't count
        self.assertTrue(self.keypad.awaiting_key)
        self.keypad.key_down("a")
        self.assertFalse(self.keypad.awaiting_key)
        self.assertEqual(0x7, self.registers.read_register(0x3))

    def test_keypad_await_key_into_v0(self):
        self.registers.write_register(0x0, 0xFF)
        self.keypad.await_key(0x0)
        self.keypad.key_down("x")
        self.assertFalse(self.keypad.awaiting_key)
        self.assertEqual(0x0, self.registers.read_register(0x0))

    def test_keypad_reset(self):
        self.keypad.key_down("q")
        self.keypad.await_key(0x1)
        self.keypad.reset()
        self.assertFalse(self.keypad.awaiting_key)
        self.assertFalse(self.keypad.is_pressed(0x4))
