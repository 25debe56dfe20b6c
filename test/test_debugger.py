#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from crisp8.cpu import CPU
from crisp8.debugger import Debugger


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.cpu = CPU(debugger=self.debugger)

    def test_debugger_live(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())

    def test_debugger_debug(self):
        self.cpu.v[0xF] = 0xAB
        self.cpu.v[0x0] = 0x01
        self.cpu.i = 0x123
        self.cpu.opcode = 0xA123
        debug_str = self.debugger.debug(self.cpu, "LD I, 0x123")
        self.assertTrue(debug_str.startswith("V: 0xab" + "00" * 14 + "01 I: 0x0123"))
        self.assertIn("PC: 0x200 OP: 0xa123 IN: LD I, 0x123", debug_str)
        self.assertNotIn("Stack", debug_str)

    def test_debugger_debug_verbose(self):
        self.assertIn("Stack: (Empty)", self.debugger.debug(self.cpu, "???", verbose=True))
        self.cpu.stack.push(0x202)
        self.cpu.stack.push(0x30A)
        debug_str = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertIn("SP: 2", debug_str)
        self.assertIn("Stack: 0x202 0x30a", debug_str)
