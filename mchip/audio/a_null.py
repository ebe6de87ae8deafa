#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.  The tone state is still tracked, so the rest of the system
behaves identically whether or not anything is audible.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def __init__(self):
        # The tone should be off (not playing sounds) by default
        self.playing = False

    def start_tone(self):
        # Called when the sound timer is set above zero.  Repeated calls must not restart the tone
        self.playing = True

    def stop_tone(self):
        self.playing = False

    def is_playing(self):
        return self.playing

    def shutdown(self):
        self.playing = False
