"""CHIP-8 system instructions (0x0xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.constants import FAULT_STACK_UNDERFLOW
from chipax.stack import pop, is_empty


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """No operation."""
    return state


def make_fault(code: int):
    """Factory for rules that halt the machine with a fault code."""
    def fault(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        return state.replace(fault=jnp.astype(code, jnp.uint8))
    return fault


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(
        display=jnp.zeros_like(state.display),
        display_changed=jnp.ones((), dtype=jnp.bool_)
    )


def _return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    return jax.lax.cond(
        is_empty(state.stack),
        make_fault(FAULT_STACK_UNDERFLOW),
        _return,
        state, instruction
    )


def execute_machine_routine(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0NNN - Machine code routine, run as a plain jump to NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions."""
    return jax.lax.cond(
        0x00E0 == instruction.raw,
        execute_clear_screen,
        lambda state, instruction: jax.lax.cond(
            0x00EE == instruction.raw,
            execute_return,
            execute_machine_routine,
            state, instruction
        ),
        state, instruction
    )
