"""CHIP-8 virtual machine package."""

from chipvm.state import MachineState, StackState, create_state
from chipvm.emulator import execute, fetch, step, load_program, load_rom, tick_timers, key_down, key_up
from chipvm.decode import Instruction, InvalidOpcode, decode
from chipvm.cursor import Cursor, Stay, Next, Skip, Jump, advance
from chipvm.errors import (
    Chip8Error, DecodeFailure, StackError, StackOverflow, StackUnderflow, KeyIndexError, AddressError
)
from chipvm.constants import *
from chipvm.interpreter import Interpreter
from chipvm.logging import ConsoleLogger
from chipvm.rendering import chip8_display_to_rgb, create_color_scheme, batch_render, display_to_text

__all__ = [
    "MachineState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_program",
    "load_rom",
    "tick_timers",
    "key_down",
    "key_up",
    "Instruction",
    "InvalidOpcode",
    "decode",
    "Cursor",
    "Stay",
    "Next",
    "Skip",
    "Jump",
    "advance",
    "Chip8Error",
    "DecodeFailure",
    "StackError",
    "StackOverflow",
    "StackUnderflow",
    "KeyIndexError",
    "AddressError",
    "Interpreter",
    "ConsoleLogger",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "batch_render",
    "display_to_text",
]
