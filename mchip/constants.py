#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "MonoChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEM_SIZE = 0x1000
PROGRAM_START = 0x200
PROGRAM_CAPACITY = 3232  # 0x200 - 0xEA0, leaving the top of RAM as on the original interpreter
FONT_LOCATION = 0x000
FONT_CHAR_SIZE = 5

# Register file
NUM_REGISTERS = 0x10
FLAG_REGISTER = 0xF
STACK_SIZE = 16
INSTRUCTION_SIZE = 2

# Display
VID_WIDTH = 64
VID_HEIGHT = 32
SPRITE_WIDTH = 8

# Clocks
DEFAULT_CLOCK_SPEED = 500  # Instructions per second
TIMER_FREQ = 60.0          # 60Hz emulated system timer refresh
DISPLAY_FREQ = 60.0        # 60Hz host display refresh and input polling

# Default physical key names for logical keys 0-F.  This is the COSMAC VIP keypad laid over the left of a QWERTY
# keyboard:
#
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
DEFAULT_KEYMAP = "x,1,2,3,q,w,e,a,s,d,z,c,4,r,f,v"

# Built-in hexadecimal font, 16 characters of 5 rows, most-significant bit on the left
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
