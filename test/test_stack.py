#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.stack import Stack, StackError


class TestStack(unittest.TestCase):
    def setUp(self):
        self.stack = Stack(3)

    def _populate_stack(self):
        self.stack.push(0x0)
        self.stack.push(0x1)
        self.stack.push(0xFFF)

    def test_stack_push_pop(self):
        self._populate_stack()
        self.assertEqual(0xFFF, self.stack.pop())
        self.assertEqual(0x1, self.stack.pop())
        self.assertEqual(0x0, self.stack.pop())

    def test_stack_pointer_moves_down(self):
        self.assertEqual(2, self.stack.sp)
        self.stack.push(0x200)
        self.assertEqual(1, self.stack.sp)
        self.assertEqual(0x200, self.stack.items[2])
        self.stack.pop()
        self.assertEqual(2, self.stack.sp)

    def test_stack_overflow(self):
        self._populate_stack()
        self.assertRaises(StackError, self.stack.push, 0x1)

    def test_stack_underflow(self):
        self.assertRaises(StackError, self.stack.pop)
        self._populate_stack()

        for _ in range(3):
            self.stack.pop()

        self.assertRaises(StackError, self.stack.pop)

    def test_stack_get_items(self):
        self.assertEqual([], self.stack.get_items())
        self.stack.push(0x202)
        self.stack.push(0x304)
        self.assertEqual([0x202, 0x304], self.stack.get_items())

    def test_stack_clear(self):
        self._populate_stack()
        self.stack.clear()
        self.assertEqual([], self.stack.get_items())
        self.assertEqual([0, 0, 0], self.stack.items)
        self.assertRaises(StackError, self.stack.pop)

    def test_stack_get_items_full(self):
        self._populate_stack()
        self.assertEqual(-1, self.stack.sp)
        self.assertEqual([0x0, 0x1, 0xFFF], self.stack.get_items())
