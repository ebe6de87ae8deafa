#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are usually only drawn to the actual display (the
host rendering system) at 60Hz.  PyGame can lower speed substantially when
calling some methods thousands of times a second, so the CPU only ever talks
to this.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen one pixel at a time using an XOR method, and
any pixel which was set but became unset by the XOR is reported back as a
collision.

After a sprite has been drawn, render() is called.  This only flags the
display as changed, and the next scheduled refresh_display() hands the whole
frame to the renderer.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME, VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer():
    def __init__(self, renderer, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        if renderer is None:
            raise FramebufferError("A renderer is required")

        self.renderer = renderer
        self.vram = RAM()
        self.content_changed = False
        self.report_perf()
        self.resize_vid(vid_width, vid_height)

    def resize_vid(self, vid_width, vid_height):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = self.vid_width * self.vid_height
        self.vram.resize(self.vid_size)
        self.renderer.set_resolution(vid_width, vid_height)  # Update screen resolution
        self.content_changed = True

    def clear(self):
        self.vram.clear()

        for y in range(self.vid_height):
            for x in range(self.vid_width):
                self.renderer.set_pixel(x, y, 0)

        self.content_changed = True

    def toggle_pixel(self, x, y):
        # Returns True if the pixel was switched off, i.e. a collision
        x %= self.vid_width
        y %= self.vid_height
        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        collision = (pixel != 0)
        new_pixel = pixel ^ 0xFF
        self.vram.write(vram_loc, new_pixel)
        self.renderer.set_pixel(x, y, int(new_pixel != 0))

        return collision

    def get_pixel(self, x, y):
        return self.vram.read(y * self.vid_width + x) != 0

    def render(self):
        # Request a repaint on the next display refresh
        self.content_changed = True

    def refresh_display(self):
        self.renderer.refresh_display(self.content_changed)
        self.content_changed = False

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
