#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the emulated buzzer through PyGame / SDL.

The original hardware only has a buzzer with an 'on' or 'off' status, so a
single cycle of a square wave is generated once at start-up, and then looped
for as long as the tone is active.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self, tone_frequency=TONE_FREQUENCY):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # One full square wave period, high for the first half.  8-bit unsigned samples centre on 0x80.
        period = max(2, int(PLAYBACK_FREQUENCY / tone_frequency))
        half_period = period // 2
        self.buffer = b"\xFF" * half_period + b"\x00" * (period - half_period)

        self.sound = pygame.mixer.Sound(buffer=self.buffer)
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def start_tone(self):
        # If the tone is already playing, it won't be restarted
        if not self.playing:
            self.sound.play(-1)

        super().start_tone()

    def stop_tone(self):
        if self.playing:
            self.sound.stop()

        super().stop_tone()

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
