#!/usr/bin/env python3

"""
Host Frame Pump

Drives the CPU from the outside.  Each frame, inputs are processed, a fixed
number of instructions are executed, the timers are ticked once, and the screen
is drawn.  Frames are paced at 60Hz, which is also the timer rate.

The CPU has no idea how quickly it is being run.  If it halts with an error,
the error is simply passed up to whoever started the host.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DISPLAY_FREQ, TICKS_PER_FRAME

DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ


class Host:
    def __init__(self, cpu, renderer, inputs, audio, ticks_per_frame=None):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.ticks_per_frame = TICKS_PER_FRAME if ticks_per_frame is None else ticks_per_frame

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run_frame(self):
        # Returns True if the user asked to quit
        cpu = self.cpu

        if self.inputs.process_messages(cpu):
            return True

        for _ in range(self.ticks_per_frame):
            cpu.advance()

        cpu.advance_timers()

        # Follow the sound timer every frame, which also catches a program zeroing it early
        self.audio.enable_buzzer(cpu.st > 0)

        self.renderer.draw_screen(cpu.read_screen())
        self.perf_counter_ops += self.ticks_per_frame
        self.perf_counter_fps += 1
        return False

    def run(self):
        next_frame_time = perf_counter()

        while True:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if this_time < next_frame_time:
                continue

            next_frame_time += DISPLAY_INTERVAL

            if next_frame_time < this_time:
                # If the host falls behind, skip ahead rather than trying to catch up
                next_frame_time = this_time + DISPLAY_INTERVAL

            if self.run_frame():
                return

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
