#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the CPU's screen snapshot onto an SDL window surface via PyGame.  The
surface is allocated at the emulated resolution, and then the contents are
stretched (using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

DEFAULT_PALETTE = (0x000000, 0xFFFFFF)  # Background, foreground


class Renderer(RendererBase):
    def __init__(self, scale=None, palette=None, **kwargs):
        if scale is None:
            scale = 15  # Default pixel scale if not supplied

        super().__init__(scale, palette)
        colour_map = parse_palette(palette)

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes((i >> 16, (i >> 8) & 0xFF, i & 0xFF)) for i in colour_map]
        self.rgb_buffer = memoryview(bytearray(self.width * self.height * 3))  # 24-bit

        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (self.width * scale, self.height * scale)
        self.display_surface = pygame.display.set_mode(self.scaled_size)

    def draw_screen(self, screen):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_buffer = self.rgb_buffer
        rgb_off, rgb_on = self.rgb_map

        for location, pixel in enumerate(screen):
            rgb_location = location * 3
            rgb_buffer[rgb_location:rgb_location + 3] = rgb_on if pixel else rgb_off

        # Blit the bytearray straight to the surface, rather than drawing rectangles per pixel
        render_surface = pygame.image.frombuffer(rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()
        super().draw_screen(screen)

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()


def parse_palette(palette):
    # Override one or both of the colours with a user-defined palette, if necessary
    colour_map = list(DEFAULT_PALETTE)

    if palette is None:
        return colour_map

    palette_split = palette.split(",")

    if len(palette_split) > len(colour_map):
        raise RendererError("Too many palette colours defined.")

    for colour_num, colour in enumerate(palette_split):
        if len(colour) != 6:
            raise RendererError("Palette colours must all be 6 hex digits long.")

        try:
            colour_map[colour_num] = int(colour, 16)
        except ValueError:
            raise RendererError("Invalid palette colour defined.") from None

    return colour_map
