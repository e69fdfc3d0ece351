"""CHIP-8 machine constants."""

# Memory map
# 0x000-0x04F - built-in font (0-F)
# 0x000-0x1FF - reserved interpreter area
# 0x200-0xFFF - program ROM and work RAM
MEMORY_SIZE = 4096
PROGRAM_START = 0x200
PROGRAM_END = 0xFFF
MAX_PROGRAM_SIZE = PROGRAM_END - PROGRAM_START

FONT_START = 0x000
FONT_CHAR_SIZE = 5
FONT_DATA = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
]

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
NUM_KEYS = 16
STACK_SIZE = 16
ADDRESS_MASK = 0xFFFF
INSTRUCTION_WIDTH = 2

# Fault codes stored in EmulatorState.fault
NO_FAULT = 0
FAULT_STACK_OVERFLOW = 1
FAULT_STACK_UNDERFLOW = 2
FAULT_OUT_OF_BOUNDS_FETCH = 3
