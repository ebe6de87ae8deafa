#!/usr/bin/env python3

"""
System Clock

Drives the CPU from the outside.  Three independent schedules share one loop:

    * Instructions - cpu.step() at the configured clock speed
    * Timers       - cpu.tick() at 60Hz, regardless of clock speed
    * Display      - input polling and a display refresh at 60Hz

All three are based on real time.  If the host falls behind, missed steps and
ticks are caught up in a burst, up to a limit.  Anything further behind than
that is dropped, so a long stall (e.g. dragging the window) doesn't cause the
emulation to race afterwards.

Everything runs on a single thread, so step(), tick() and reset() can never
overlap.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from time import perf_counter, sleep
from .constants import DEFAULT_CLOCK_SPEED, TIMER_FREQ, DISPLAY_FREQ

TIMER_INTERVAL = 1.0 / TIMER_FREQ
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
MAX_CATCH_UP = 0.25  # Seconds of missed work to replay before giving up and resynchronising
IDLE_SLEEP = 0.001

logger = logging.getLogger(__name__)


class Clock:
    def __init__(self, cpu, framebuffer, inputs, clock_speed=None):
        self.cpu = cpu
        self.framebuffer = framebuffer
        self.inputs = inputs

        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        # User can specify 0 for uncapped, which runs one instruction per pass
        self.core_interval = None if clock_speed <= 0 else 1.0 / clock_speed
        self.next_step_time = None
        self.next_tick_time = None
        self.next_display_update_time = None

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = None

    def start(self, this_time):
        self.next_step_time = this_time
        self.next_tick_time = this_time + TIMER_INTERVAL
        self.next_display_update_time = this_time
        self.next_perf_report_time = this_time + 1.0

    def run(self):
        self.start(perf_counter())

        while self.poll(perf_counter()):
            if self.core_interval is not None:
                # Give the time back to the host if there is nothing due yet
                wait_time = min(self.next_step_time, self.next_tick_time, self.next_display_update_time)
                wait_time -= perf_counter()

                if wait_time > IDLE_SLEEP:
                    sleep(IDLE_SLEEP)

        logger.info("Quit requested")

    def poll(self, this_time):
        # Runs whatever is due at the given time.  Returns False if the program should quit.
        if self.next_step_time is None:
            self.start(this_time)

        # Performance counters
        if this_time >= self.next_perf_report_time:
            self.next_perf_report_time = this_time + 1.0
            # Reporting the performance should be done before a refresh, as refreshing will likely show the report
            self.framebuffer.report_perf(self.perf_counter_fps, self.perf_counter_ops)
            self.perf_counter_ops = 0
            self.perf_counter_fps = 0

        # Prevent unnecessary display rendering in excess of host frame rate
        if this_time >= self.next_display_update_time:
            if self.inputs.process_messages(self.cpu):  # Process inputs at 60Hz too, to avoid slowdown
                return False

            self.next_display_update_time = this_time + DISPLAY_INTERVAL
            self.framebuffer.refresh_display()
            self.perf_counter_fps += 1

        # Timers are tied to real time, not to the number of instructions run
        self.next_tick_time = self._resync(self.next_tick_time, this_time)

        while this_time >= self.next_tick_time:
            self.cpu.tick()
            self.next_tick_time += TIMER_INTERVAL

        if self.core_interval is None:
            self._step()
        else:
            self.next_step_time = self._resync(self.next_step_time, this_time)

            while this_time >= self.next_step_time:
                self._step()
                self.next_step_time += self.core_interval

        return True

    def _resync(self, next_time, this_time):
        if this_time - next_time > MAX_CATCH_UP:
            logger.debug("Clock fell %.3fs behind, resynchronising", this_time - next_time)
            return this_time

        return next_time

    def _step(self):
        if self.cpu.step():
            self.perf_counter_ops += 1
