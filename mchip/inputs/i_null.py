#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins don't keep any key state of their own.  They pass each physical
key press and release (by key name) to the CPU, whose keypad does the mapping.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Inputs:
    def __init__(self, renderer):
        self.renderer = renderer

    def process_messages(self, cpu):  # pylint: disable=unused-argument
        return False  # Don't exit the program

    def shutdown(self):
        pass
