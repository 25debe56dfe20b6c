#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or want to run headless.  Without a renderer, performance data
will also not be shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import VID_WIDTH, VID_HEIGHT


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, palette=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.width = VID_WIDTH
        self.height = VID_HEIGHT
        self.frames_drawn = 0

    def draw_screen(self, screen):  # pylint: disable=unused-argument
        # Screen is a row-major sequence of booleans, one per pixel
        self.frames_drawn += 1

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
