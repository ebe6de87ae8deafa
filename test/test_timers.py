#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from unittest import mock
from mchip.audio.a_null import Audio
from mchip.timers import Timers


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.audio = Audio()
        self.timers = Timers(self.audio)

    def test_timers_delay_countdown(self):
        self.timers.set_delay(2)
        self.timers.tick()
        self.assertEqual(1, self.timers.dt)
        self.timers.tick()
        self.assertEqual(0, self.timers.dt)
        self.timers.tick()
        self.assertEqual(0, self.timers.dt)

    def test_timers_sound_starts_tone(self):
        self.timers.set_sound(3)
        self.assertTrue(self.audio.is_playing())
        self.timers.tick()
        self.assertEqual(2, self.timers.ds)
        self.assertTrue(self.audio.is_playing())

    def test_timers_sound_zero_stops_tone(self):
        self.timers.set_sound(5)
        self.timers.set_sound(0)
        self.assertFalse(self.audio.is_playing())

    def test_timers_sound_stop_once(self):
        self.timers.set_sound(1)

        with mock.patch.object(self.audio, "stop_tone", wraps=self.audio.stop_tone) as stop_tone:
            self.timers.tick()
            self.assertEqual(0, self.timers.ds)
            self.assertFalse(self.audio.is_playing())

            for _ in range(3):
                self.timers.tick()

            self.assertEqual(1, stop_tone.call_count)

    def test_timers_stray_tone_stopped(self):
        # A tone left running with an empty sound timer is stopped on the next tick
        self.audio.start_tone()
        self.timers.tick()
        self.assertFalse(self.audio.is_playing())

    def test_timers_independent(self):
        self.timers.set_delay(1)
        self.timers.set_sound(3)
        self.timers.tick()
        self.assertEqual(0, self.timers.dt)
        self.assertEqual(2, self.timers.ds)

    def test_timers_reset(self):
        self.timers.set_delay(9)
        self.timers.set_sound(9)
        self.timers.reset()
        self.assertEqual(0, self.timers.dt)
        self.assertEqual(0, self.timers.ds)
        self.assertFalse(self.audio.is_playing())
