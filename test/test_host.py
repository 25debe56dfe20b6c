#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from crisp8.audio.a_null import Audio
from crisp8.constants import DEFAULT_KEYMAP
from crisp8.cpu import CPU
from crisp8.errors import UnknownOpcodeError
from crisp8.host import Host
from crisp8.inputs.i_null import Inputs
from crisp8.renderers.r_null import Renderer


class QuittingInputs(Inputs):
    def process_messages(self, cpu):
        return True


class TestHost(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()
        self.audio = Audio()
        self.cpu = CPU(audio=self.audio)
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.host = Host(self.cpu, self.renderer, inputs, self.audio, ticks_per_frame=3)

    def test_host_run_frame(self):
        # Three ADDs, then spin on a jump to self
        self.cpu.load(b"\x70\x01\x70\x01\x70\x01\x12\x06")
        self.cpu.dt = 5
        self.assertFalse(self.host.run_frame())
        self.assertEqual(0x3, self.cpu.v[0x0])
        self.assertEqual(0x206, self.cpu.pc)
        self.assertEqual(4, self.cpu.dt)
        self.assertEqual(1, self.renderer.frames_drawn)
        self.assertEqual(3, self.host.perf_counter_ops)

    def test_host_buzzer(self):
        self.cpu.load(b"\x12\x00")
        self.cpu.st = 2
        self.host.run_frame()
        self.assertTrue(self.audio.buzzer_enabled)
        self.host.run_frame()
        self.assertFalse(self.audio.buzzer_enabled)

    def test_host_quit(self):
        host = Host(self.cpu, self.renderer, QuittingInputs(DEFAULT_KEYMAP, self.renderer), self.audio)
        self.assertTrue(host.run_frame())
        host.run()  # Returns straight away
        self.assertEqual(0x200, self.cpu.pc)

    def test_host_propagates_cpu_errors(self):
        self.cpu.load(b"\xFF\xFF")
        self.assertRaises(UnknownOpcodeError, self.host.run_frame)

    def test_host_buzzer_stops_when_sound_timer_zeroed(self):
        # ST = 0x10, then ST = 0 before it runs down, then spin
        self.cpu.load(b"\x60\x10\xF0\x18\x61\x00\xF1\x18\x12\x08")
        self.host.run_frame()
        self.assertTrue(self.audio.buzzer_enabled)
        self.host.run_frame()
        self.assertEqual(0, self.cpu.st)
        self.assertFalse(self.audio.buzzer_enabled)
