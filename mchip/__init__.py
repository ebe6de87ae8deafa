#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
import sys
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_KEYMAP
from .clock import Clock
from .cpu import CPU
from .debugger import Debugger
from .framebuffer import Framebuffer
from .hostio import Loader
from .ram import Memory
from .registers import RegisterFile

LOG_FORMAT = "[%(levelname)s]:  %(message)s"

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def setup_logging(log_level=None, debug=False):
    if debug:
        level = logging.DEBUG
    elif log_level is None:
        level = logging.INFO
    else:
        level = getattr(logging, log_level.upper(), None)

        if not isinstance(level, int):
            raise StartupError("Unknown log level '{}'".format(log_level))

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)


def select_plugins(opt_renderer, mute_audio):
    # Returns the Inputs, Renderer and Audio classes.  If necessary, try PyGame first, then fall back to null.
    auto_select_renderer = opt_renderer is None

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if not auto_select_renderer:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )

            logger.warning("PyGame does not appear to be installed, running without a display")
            opt_renderer = "null"
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Inputs, Renderer, Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

        return Inputs, Renderer, Audio

    raise StartupError("Unknown renderer '{}'".format(opt_renderer))


def main(args):
    setup_logging(args["log_level"], args["debug"])
    logger.info("".join((APP_INTRO, APP_COPYRIGHT)))
    Inputs, Renderer, Audio = select_plugins(args["renderer"], args["mute"])

    # Read the ROM before bringing up any windows, so a bad filename fails fast
    rom = Loader().load_binary(args["filename"])

    # Set up a new rendering system, and attach a framebuffer to it
    renderer = Renderer(scale=args["scale"])
    framebuffer = Framebuffer(renderer)

    # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
    inputs = Inputs(renderer)
    audio = Audio()

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    keymap = DEFAULT_KEYMAP if args["keymap"] is None else args["keymap"]

    try:
        # Create a new CPU, plug it into the rest of the system, and load the program
        cpu = CPU(Memory(), RegisterFile(), framebuffer, audio, debugger, keymap=keymap)
        cpu.load_rom(rom)
        Clock(cpu, framebuffer, inputs, clock_speed=args["clock_speed"]).run()
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
