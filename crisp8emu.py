#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from crisp8 import main
from crisp8.constants import DEFAULT_KEYMAP, CPU_QUIRKS


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-t", "--ticks_per_frame", type=int,
        help="set the number of instructions executed per 60Hz frame (default 10)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering, input, and audio systems (pygame by default)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the size of each emulated pixel in the PyGame window (default 15)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1], default=0,
        help="mute the emulated audio.  0 = unmuted (default), 1 = muted"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes for keys 0-F.  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--palette",
        help="redefine the background and foreground colours in comma-separated hex, e.g. 000000,FFFFFF"
    )

    for sys_quirk in CPU_QUIRKS:
        parser.add_argument(
            "--{}_quirks".format(sys_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(sys_quirk.replace("_", " "))
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output of every instruction executed.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def cli():
    args = vars(parse_args())
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    main(args)


if __name__ == "__main__":
    cli()
