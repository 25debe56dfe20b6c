#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and the host renderer reads a snapshot of
them, usually at 60Hz.  The framebuffer knows nothing about the renderer: it
is owned by the CPU, and the only way out is a copy.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method against a single
monochrome plane, stored one byte per pixel (0 or 1) in row-major order.

Collisions (where any pixel was set, but was unset by an XOR), are reported
back to the caller.  Pixels are never wrapped or clipped here, that
decision belongs to the sprite drawing routine.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class Framebuffer():
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.plane = RAM(self.vid_size)

    def clear(self):
        self.plane.clear()

    def xor_pixel(self, x, y):
        # Returns True if a set pixel was switched off.  Callers clip to the screen first.
        vram_loc = x + y * self.vid_width
        pixel = self.plane.read(vram_loc)
        self.plane.write(vram_loc, pixel ^ 1)

        return pixel != 0

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def snapshot(self):
        return tuple(pixel != 0 for pixel in self.plane.mem)
