#!/usr/bin/env python3

"""
Emulation Errors

Both kinds are fatal.  Once raised out of the CPU, emulation cannot continue
without a reset.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Crisp8Error(Exception):
    pass


class UnknownOpcodeError(Crisp8Error):
    pass


class OutOfBoundsError(Crisp8Error):
    pass
