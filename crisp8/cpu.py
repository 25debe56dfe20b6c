#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The CPU
owns the whole machine state: RAM, registers, call stack, timers, key states
and the framebuffer.  Nothing outside reaches into that state between calls.
The host only feeds in key changes and timer ticks, and reads back a copy of
the screen.

The CPU never decides how fast it runs.  Each call to 'advance' executes
exactly one instruction and returns, and each call to 'advance_timers' counts
both timers down by one.  The host decides how often to call each.

Waiting for a keypress (Fx0A) does not block.  The program counter is wound
back instead, so the same instruction is fetched again on the next call until
a key is down.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .audio.a_null import Audio
from .constants import (
    APP_INTRO, RAM_SIZE, NUM_REGS, STACK_SIZE, NUM_KEYS, FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_LOC, SYSTEM_FONT
)
from .debugger import Debugger
from .errors import UnknownOpcodeError, OutOfBoundsError
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
INDEX_LIMIT = 0x1000  # Fx1E flags an index at or beyond the end of RAM


class CPU:
    def __init__(self, audio=None, debugger=None, jump_quirks=None, index_overflow_quirks=None):
        self.audio = Audio() if audio is None else audio
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()

        """
        Quirks
        ------

        - Jump quirks           : Disabled.  Bnnn always adds V0.  If enabled, Bxnn adds Vx, as on Super-CHIP.
        - Index overflow quirks : Enabled.  Fx1E sets Vf if the index passes the end of RAM.
        """

        self.jump_quirks = False if jump_quirks is None else jump_quirks
        self.index_overflow_quirks = True if index_overflow_quirks is None else index_overflow_quirks

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        # Allocate fixed-size machine state.  Everything is (re)initialised by reset.
        self.ram = RAM(RAM_SIZE)
        self.stack = Stack(STACK_SIZE)
        self.framebuffer = Framebuffer()
        self.v = memoryview(bytearray(NUM_REGS))  # Mutable, so register updates are fast
        self.keys = [False] * NUM_KEYS
        self.reset()

    def reset(self):
        self.ram.clear()
        self.ram.write_block(FONT_LOC, SYSTEM_FONT)
        self.stack.clear()
        self.framebuffer.clear()
        self.v[:] = bytes(NUM_REGS)
        self.keys[:] = [False] * NUM_KEYS

        self.i = 0   # Index register
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

        # Program counter, plus the current opcode and its address for debugging
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC
        self.opcode = 0

    def load(self, binary):
        # RAM checks the top of the block before writing, so an oversized binary leaves memory untouched
        self.ram.write_block(PROGRAM_LOC, binary)

    def set_key(self, key, down):
        if not 0 <= key < NUM_KEYS:
            raise OutOfBoundsError("Key 0x{:x} is out of range".format(key))

        self.keys[key] = bool(down)

    def read_screen(self):
        return self.framebuffer.snapshot()

    def advance(self):
        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        self.decode_exec()

    def advance_timers(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

            if self.st == 0:
                # Sound timer just reached zero.  Stop the audio.
                self.audio.enable_buzzer(False)

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def decode_exec(self):
        self._call_masked_instruction((0xF000 & self.opcode) >> 12)

    def inc_pc(self):
        self.pc = (self.pc + 2) & 0xFFFF

    def dec_pc(self):
        # Only used to re-run instructions (i.e. keypress wait).
        self.pc = (self.pc - 2) & 0xFFFF

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication.  Don't reference these more than necessary as they are recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        raise UnknownOpcodeError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction."
            ).format(
                APP_INTRO, self.debugger.debug(self, "???", verbose=True), self.opcode, self.debug_pc
            )
        ) from None

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _key_down(self, key):
        # Vx can hold any byte, but there are only 16 keys
        if key >= NUM_KEYS:
            raise OutOfBoundsError("Key 0x{:02x} at address 0x{:03x} is out of range".format(key, self.debug_pc))

        return self.keys[key]

    def _0nnn(self):
        opcode = self.opcode

        if opcode == 0x0000:  # NOP
            # Matched here, since 0x0000 would otherwise look up this very method again
            if self.live_debug:
                self.debug("NOP")

            return

        if opcode < 0x10:
            # Opcodes 0x0 - 0xF are used internally for indexing the first nibble
            self._opcode_unsupported()

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        if self.live_debug:
            self.debug("CLS")

        self.framebuffer.clear()

    def _00EE(self):  # RET
        if self.live_debug:
            self.debug("RET")

        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        if self.live_debug:
            self.debug("JP 0x{:03x}".format(self.addr))

        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        if self.live_debug:
            self.debug("CALL 0x{:03x}".format(self.addr))

        self.stack.push(self.pc)
        self.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.live_debug:
            self.debug("SE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] == self.byte:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.live_debug:
            self.debug("SNE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] != self.byte:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        if self.live_debug:
            self.debug("SE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] == self.v[self.vy]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        if self.live_debug:
            self.debug("LD V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        byte = self.byte

        if self.live_debug:
            self.debug("ADD V{:01x}, 0x{:02x}".format(vx, byte))

        # No carry flag for this one
        byte += self.v[vx]
        self.v[vx] = byte & 0xFF

    def _8xy0(self):  # LD Vx, Vy
        if self.live_debug:
            self.debug("LD V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        if self.live_debug:
            self.debug("OR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        if self.live_debug:
            self.debug("AND V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        if self.live_debug:
            self.debug("XOR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] ^= self.v[self.vy]

    # Where an instruction sets both Vx and Vf, Vf is always written last, so the flag wins when x is 0xF

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("ADD V{:01x}, V{:01x}".format(vx, vy))

        val = self.v[vx] + self.v[vy]
        self.v[vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        self.v[0xF] = int(val >= 0)  # Vf is set when NOT borrowing

    def _8xy5(self):  # SUB Vx, Vy
        if self.live_debug:
            self.debug("SUB V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx
        if self.live_debug:
            self.debug("SHR V{:01x}".format(self.vx))

        # Vy is ignored, the shift is done in place
        val = self.v[self.vx]
        self.v[self.vx] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        if self.live_debug:
            self.debug("SUBN V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx
        if self.live_debug:
            self.debug("SHL V{:01x}".format(self.vx))

        val = self.v[self.vx]
        self.v[self.vx] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.live_debug:
            self.debug("SNE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] != self.v[self.vy]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        if self.live_debug:
            self.debug("LD I, 0x{:03x}".format(self.addr))

        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # With jump quirks, the high nibble of the address doubles as the register, as on Super-CHIP
        vr = self.vx if self.jump_quirks else 0

        if self.live_debug:
            self.debug("JP V{:01x}, 0x{:03x}".format(vr, self.addr))

        # Not masked.  A target beyond the end of RAM fails on the next fetch.
        self.pc = self.v[vr] + self.addr

    def _Cxkk(self):  # RND Vx, byte
        if self.live_debug:
            self.debug("RND V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Main sprite drawing routine.  Sprites are always 8 pixels wide, and 'nibble' rows high.

        height = self.nibble

        if self.live_debug:
            self.debug("DRW V{:01x}, V{:01x}, 0x{:01x}".format(self.vx, self.vy, height))

        # The sprite's start always wraps, but anything hanging off the bottom or right is clipped
        vid_width, vid_height = self.framebuffer.get_vid_size()
        vx_pos = self.v[self.vx] % vid_width
        vy_pos = self.v[self.vy] % vid_height
        collided = False

        # Rows off the bottom are never drawn, so never read.  The visible rows are fetched (and bounds checked) up
        # front, leaving the screen and Vf untouched if the sprite runs off the end of RAM.
        visible_rows = min(height, vid_height - vy_pos)
        sprite = self.ram.read_block(self.i, visible_rows) if visible_rows else b""
        self.v[0xF] = 0

        for y, spr_data in enumerate(sprite):
            scr_y = y + vy_pos

            for x in range(8):
                scr_x = x + vx_pos

                if scr_x >= vid_width:
                    # Clip the rest of this row, but carry on with the next one
                    break

                if spr_data & (0x80 >> x) and self.framebuffer.xor_pixel(scr_x, scr_y):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    collided = True

        if collided:
            self.v[0xF] = 1

    def _Ex9E(self):  # SKP Vx
        if self.live_debug:
            self.debug("SKP V{:01x}".format(self.vx))

        if self._key_down(self.v[self.vx]):
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if self.live_debug:
            self.debug("SKNP V{:01x}".format(self.vx))

        if not self._key_down(self.v[self.vx]):
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        if self.live_debug:
            self.debug("LD V{:01x}, DT".format(self.vx))

        self.v[self.vx] = self.dt

    def _Fx0A(self):  # LD Vx, K
        if self.live_debug:
            self.debug("LD V{:01x}, K".format(self.vx))

        # This opcode waits for a keypress, but since the timers still need to count down and the screen still needs
        # drawing, we'll return control to the host and simply decrement the incremented program counter.

        for key, down in enumerate(self.keys):
            if down:
                # Lowest key wins if several are held
                self.v[self.vx] = key
                return

        # We need to come back here on the next instruction, because no key is pressed.
        self.dec_pc()

    def _Fx15(self):  # LD DT, Vx
        if self.live_debug:
            self.debug("LD DT, V{:01x}".format(self.vx))

        self.dt = self.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        if self.live_debug:
            self.debug("LD ST, V{:01x}".format(self.vx))

        # Starting the buzzer is left to the host, which can see the sound timer
        self.st = self.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        if self.live_debug:
            self.debug("ADD I, V{:01x}".format(self.vx))

        val = self.i + self.v[self.vx]
        self.i = val & 0xFFFF

        if self.index_overflow_quirks:
            self.v[0xF] = int(val >= INDEX_LIMIT)

    def _Fx29(self):  # LD F, Vx
        if self.live_debug:
            self.debug("LD F, V{:01x}".format(self.vx))

        # Only the low nibble selects a glyph
        self.i = FONT_LOC + (self.v[self.vx] & 0xF) * FONT_GLYPH_SIZE

    def _Fx33(self):  # LD B, Vx
        if self.live_debug:
            self.debug("LD B, V{:01x}".format(self.vx))

        val = self.v[self.vx]
        # Hundreds, tens, units.  Written as one block so nothing is stored if the last digit would overflow RAM
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _Fx55(self):  # LD [I], Vx
        if self.live_debug:
            self.debug("LD [I], V{:01x}".format(self.vx))

        # Ensure with +1s that the final register is copied.  I is left alone afterwards.
        self.ram.write_block(self.i, self.v[:self.vx + 1])

    def _Fx65(self):  # LD Vx, [I]
        if self.live_debug:
            self.debug("LD V{:01x}, [I]".format(self.vx))

        vx = self.vx
        self.v[:vx + 1] = self.ram.read_block(self.i, vx + 1)
