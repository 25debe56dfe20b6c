#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from crisp8.hostio import Loader, LoaderError


class TestLoader(unittest.TestCase):
    def setUp(self):
        self.loader = Loader()
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def _write_rom(self, data):
        filename = os.path.join(self.tmp_dir.name, "test.ch8")

        with open(filename, "wb") as f:
            f.write(data)

        return filename

    def test_loader_load_file_present(self):
        filename = self._write_rom(b"\xA2\x50\x00\xE0")
        self.assertEqual(b"\xA2\x50\x00\xE0", self.loader.load_binary(filename))
        self.assertEqual(b"\xA2\x50\x00\xE0", self.loader.load_rom(filename))

    def test_loader_load_rom_largest(self):
        filename = self._write_rom(bytes(0xE00))
        self.assertEqual(0xE00, len(self.loader.load_rom(filename)))

    def test_loader_load_rom_too_large(self):
        filename = self._write_rom(bytes(0xE01))
        self.assertRaises(LoaderError, self.loader.load_rom, filename)

    def test_loader_load_file_missing(self):
        self.assertRaises(FileNotFoundError, self.loader.load_binary, "NoFile.ch8")
