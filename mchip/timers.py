#!/usr/bin/env python3

"""
Timer Emulator

The delay and sound timers count down at 60Hz while they are above zero.
Both are driven by tick(), which must be called by an external 60Hz clock,
never from the instruction loop, so timer speed stays tied to wall-clock time
however fast the CPU is stepped.

The buzzer sounds for as long as the sound timer is above zero.  The audio
device is told to start when the timer is loaded, and to stop on the tick
which empties it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self, audio):
        self.audio = audio
        self.dt = 0  # Delay timer (byte)
        self.ds = 0  # Sound timer (byte)

    def reset(self):
        self.dt = 0
        self.ds = 0

        if self.audio.is_playing():
            self.audio.stop_tone()

    def tick(self):
        if self.dt > 0:
            self.dt -= 1

        if self.ds > 0:
            self.ds -= 1

            if self.ds == 0:
                # Sound timer just reached zero.  Stop the audio.
                self.audio.stop_tone()
        elif self.audio.is_playing():
            self.audio.stop_tone()

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        ds = value & 0xFF

        # Allow the program to start the buzzer, or immediately stop it before the sound timer hits zero
        if ds > 0:
            self.audio.start_tone()
        else:
            self.audio.stop_tone()

        self.ds = ds
