#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes.  The size
is fixed on creation, and every access is checked against it.  There is no
memory protection: anything inside the bank, including the system font, can be
overwritten by the running program.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .errors import OutOfBoundsError


class RAMError(OutOfBoundsError):
    pass


class RAM:
    def __init__(self, mem_size):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location + size - 1)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise RAMError("Memory access at 0x{:04x} is out of bounds".format(location))

    def clear(self):
        # Slice assignment keeps the same underlying buffer, so views held elsewhere stay valid
        self.mem[:] = bytes(self.mem_size)
