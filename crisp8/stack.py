#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  The stack only ever holds return
addresses for subroutine calls, so it lives in a fixed number of slots on the
host, with a stack pointer (SP) marking the next free slot.

The SP is not exposed to the running program.  It is kept explicitly rather
than relying on a growing list, so that the capacity is fixed up front and
stale slots are simply overwritten by later calls.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .errors import OutOfBoundsError


class StackError(OutOfBoundsError):
    pass


class Stack:
    def __init__(self, size):
        self.items = [0] * size
        self.size = size
        self.sp = 0

    def push(self, item):
        if self.sp >= self.size:
            raise StackError("Stack overflow")

        self.items[self.sp] = item
        self.sp += 1

    def pop(self):
        if self.sp <= 0:
            raise StackError("Stack underflow")

        self.sp -= 1
        return self.items[self.sp]

    def clear(self):
        self.items[:] = [0] * self.size
        self.sp = 0

    def get_items(self):
        # For debugging.  Only the live frames, oldest first
        return self.items[:self.sp]
