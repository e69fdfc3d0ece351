"""CHIP-8 interpreter package."""

from chipax.state import EmulatorState, StackState, create_state
from chipax.emulator import (
    TickOutput, execute, fetch, load_program, load_rom, tick, run_ticks
)
from chipax.decode import DecodedInstruction, decode
from chipax.constants import *
from chipax.errors import (
    Chip8Error, ProgramTooLarge, MachineFault, StackOverflow, StackUnderflow, OutOfBoundsFetch
)
from chipax.interpreter import Interpreter
from chipax.keypad import KEY_LAYOUT, keypad_snapshot
from chipax.rendering import chip8_display_to_rgb, create_color_scheme, batch_render, save_video

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "TickOutput",
    "fetch",
    "execute",
    "tick",
    "run_ticks",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "Interpreter",
    "Chip8Error",
    "ProgramTooLarge",
    "MachineFault",
    "StackOverflow",
    "StackUnderflow",
    "OutOfBoundsFetch",
    "KEY_LAYOUT",
    "keypad_snapshot",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "batch_render",
    "save_video",
]
