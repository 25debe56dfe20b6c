#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS
from .cpu import CPU
from .debugger import Debugger
from .host import Host
from .hostio import Loader


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    opt_renderer = args["renderer"] or "pygame"

    # flake8: noqa: F401
    if opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            raise StartupError(
                "PyGame does not appear to be installed.  Use the null renderer to run headless."
            )
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if args["mute"]:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio
    elif opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio
    else:
        raise StartupError("Unknown renderer '{}'".format(opt_renderer))

    # Read ROM binary before bringing up any host windows
    rom = Loader().load_rom(args["filename"])

    renderer = Renderer(scale=args["scale"], palette=args["palette"])
    inputs = Inputs(args["keymap"], renderer)
    audio = Audio()

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    # Create a new CPU, plug in the audio collaborator, and load the ROM at the default address
    cpu = CPU(audio=audio, debugger=debugger, **quirk_settings)
    cpu.load(rom)
    host = Host(cpu, renderer, inputs, audio, ticks_per_frame=args["ticks_per_frame"])

    try:
        host.run()
    finally:
        # The host has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
