#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries for later loading into the CPU.  The CPU itself
never touches the filesystem.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MAX_ROM_SIZE


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_rom(self, filename):
        data = self.load_binary(filename)

        if len(data) > MAX_ROM_SIZE:
            raise LoaderError(
                "ROM is {} bytes, but only {} bytes fit in memory from 0x200".format(len(data), MAX_ROM_SIZE)
            )

        return data
