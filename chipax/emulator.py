"""Main CHIP-8 emulator execution engine."""

import jax
import jax.lax
import jax.numpy as jnp
from flax.struct import dataclass

from chipax.state import EmulatorState
from chipax.decode import decode
from chipax.errors import ProgramTooLarge
from chipax.constants import (
    PROGRAM_START, MAX_PROGRAM_SIZE, MEMORY_SIZE, INSTRUCTION_WIDTH,
    NO_FAULT, FAULT_OUT_OF_BOUNDS_FETCH
)
from chipax.logging import FrameProgress
from chipax.instructions.system import execute_system_instruction
from chipax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chipax.instructions.alu import execute_alu_operation
from chipax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipax.instructions.display import execute_display
from chipax.instructions.misc import execute_misc_instruction


@dataclass
class TickOutput:
    """What the host sees after one tick.

    Attributes:
        display_changed: True when 00E0 or DXYN ran during the tick
        beep_requested: True on the tick the sound timer reached zero
        display: Frame buffer of shape (64, 32), indexed [x, y]
    """
    display_changed: jnp.ndarray
    beep_requested: jnp.ndarray
    display: jnp.ndarray


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)

    return jax.lax.switch(
        decoded_instruction.opcode,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_skip_if_equal_register,
            execute_set,
            execute_add,
            execute_alu_operation,
            execute_skip_if_not_equal_register,
            execute_set_index,
            execute_jump_with_offset,
            execute_random,
            execute_display,
            execute_skip_if_key,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory."""
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + INSTRUCTION_WIDTH), instruction


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy program bytes into CHIP-8 memory starting at 0x200.

    Raises:
        ProgramTooLarge: If the program does not fit below 0xFFF
    """
    if len(program) > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(len(program), MAX_PROGRAM_SIZE)
    program_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(program_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)


def update_timers(state: EmulatorState) -> tuple[EmulatorState, jnp.ndarray]:
    """Count both timers down by one, stopping at zero.

    Returns the new state and whether the sound timer just ran out.
    """
    beep = state.sound_timer == 1
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    ), beep


def service_key_wait(state: EmulatorState) -> EmulatorState:
    """Latch the lowest pressed key into the FX0A target register, if any."""
    pressed = jnp.any(state.keypad)
    key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
    new_V = jnp.where(pressed, state.V.at[state.key_register].set(key), state.V)
    return state.replace(V=new_V, waiting_for_key=state.waiting_for_key & ~pressed)


def _fetch_execute(state: EmulatorState) -> EmulatorState:
    fetched, instruction = fetch(state)
    executed = execute(fetched, instruction)
    # A faulting instruction leaves everything as it was, pc included
    return jax.lax.cond(
        executed.fault == NO_FAULT,
        lambda states: states[0],
        lambda states: states[1].replace(fault=states[0].fault),
        (executed, state)
    )


def run_cycle(state: EmulatorState) -> EmulatorState:
    """One fetch-execute cycle, faulting if pc cannot hold a full instruction."""
    out_of_bounds = state.pc > MEMORY_SIZE - INSTRUCTION_WIDTH
    return jax.lax.cond(
        out_of_bounds,
        lambda s: s.replace(fault=jnp.astype(FAULT_OUT_OF_BOUNDS_FETCH, jnp.uint8)),
        _fetch_execute,
        state
    )


def _advance(state: EmulatorState, keypad: jnp.ndarray) -> tuple[EmulatorState, TickOutput]:
    state = state.replace(keypad=keypad, display_changed=jnp.zeros((), dtype=jnp.bool_))
    state, beep = update_timers(state)
    state = jax.lax.cond(state.waiting_for_key, service_key_wait, run_cycle, state)
    return state, TickOutput(
        display_changed=state.display_changed,
        beep_requested=beep,
        display=state.display,
    )


def _halted(state: EmulatorState, keypad: jnp.ndarray) -> tuple[EmulatorState, TickOutput]:
    return state, TickOutput(
        display_changed=jnp.zeros((), dtype=jnp.bool_),
        beep_requested=jnp.zeros((), dtype=jnp.bool_),
        display=state.display,
    )


def tick(state: EmulatorState, keypad: jnp.ndarray) -> tuple[EmulatorState, TickOutput]:
    """Advance the machine by one frame.

    Timers count down first. Then either one instruction runs or, while an
    FX0A wait is pending, the keypad is scanned instead. A halted machine
    (nonzero ``fault``) is returned unchanged.

    Args:
        state: Current emulator state
        keypad: 16 booleans, True for every key held down this frame

    Returns:
        Tuple of the next state and the TickOutput for this frame
    """
    keypad = jnp.asarray(keypad, dtype=jnp.bool_)
    return jax.lax.cond(state.fault != NO_FAULT, _halted, _advance, state, keypad)


def run_ticks(state: EmulatorState, keypads: jnp.ndarray, progress: bool = False) -> tuple[EmulatorState, TickOutput]:
    """Run one tick per row of ``keypads`` (shape (T, 16)) with ``jax.lax.scan``.

    Returns the final state and the stacked TickOutput of every tick.
    """
    keypads = jnp.asarray(keypads, dtype=jnp.bool_)
    num_ticks = keypads.shape[0]

    report = FrameProgress(num_ticks) if progress else None

    def step(state, x):
        frame, keypad = x
        if report is not None:
            report(frame)
        return tick(state, keypad)

    return jax.lax.scan(step, state, (jnp.arange(num_ticks), keypads))
