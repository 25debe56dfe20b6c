#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the emulated buzzer within PyGame / SDL.

Emulated sounds are very basic.  There is simply a buzzer with an 'on' or 'off'
status, so a square wave is built once on startup and looped while the buzzer
is on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_TONE = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self, tone=DEFAULT_TONE):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()
        self.sound = pygame.mixer.Sound(buffer=square_wave(tone))
        self.sound.set_volume(DEFAULT_VOLUME)

    def enable_buzzer(self, enabled):
        # Enable or disable the buzzer, i.e. play or stop buffer playback.  If there is already a sound sample being
        # played from the buffer, it won't be restarted.

        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        elif self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()


def square_wave(tone):
    # One full cycle of unsigned 8-bit samples, high for the first half
    period = max(2, int(PLAYBACK_FREQUENCY / tone))
    half = period // 2
    return bytes([0xFF] * half + [0x00] * (period - half))
