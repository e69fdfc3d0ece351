"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipax import create_state, load_program, Interpreter
from chipax.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def quiet_logger():
    """Logger that only reports errors."""
    return ConsoleLogger("Test", log_level="CRITICAL", use_colors=False)


@pytest.fixture
def interpreter(quiet_logger):
    """Provide a fresh interpreter for each test."""
    return Interpreter(logger=quiet_logger)


def assemble(*instructions):
    """Helper to turn 16-bit instruction words into big-endian program bytes."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


def state_with_program(*instructions):
    """Helper to get a fresh state with instructions loaded at 0x200."""
    return load_program(create_state(), assemble(*instructions))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


NO_KEYS = [False] * 16


def keys_down(*indices):
    """Helper to build a keypad snapshot with the given keys pressed."""
    return [i in indices for i in range(16)]
