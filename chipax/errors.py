"""Typed failures raised by the CHIP-8 interpreter."""

from chipax.constants import (
    NO_FAULT, FAULT_STACK_OVERFLOW, FAULT_STACK_UNDERFLOW, FAULT_OUT_OF_BOUNDS_FETCH
)


class Chip8Error(Exception):
    """Base class for all interpreter failures."""


class ProgramTooLarge(Chip8Error, ValueError):
    """Program does not fit in the 0x200-0xFFF program area."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Program is {size} bytes, at most {limit} bytes fit in program memory")
        self.size = size
        self.limit = limit


class MachineFault(Chip8Error):
    """Fatal condition hit while executing; the machine is halted.

    Attributes:
        address: Program counter of the instruction that faulted
        code: Fault code as stored in ``EmulatorState.fault``
    """
    code = NO_FAULT
    description = "machine fault"

    def __init__(self, address: int):
        super().__init__(f"{self.description} at 0x{address:03X}")
        self.address = address


class StackOverflow(MachineFault):
    code = FAULT_STACK_OVERFLOW
    description = "stack overflow on CALL"


class StackUnderflow(MachineFault):
    code = FAULT_STACK_UNDERFLOW
    description = "stack underflow on RET"


class OutOfBoundsFetch(MachineFault):
    code = FAULT_OUT_OF_BOUNDS_FETCH
    description = "instruction fetch past end of memory"


FAULTS = {cls.code: cls for cls in (StackOverflow, StackUnderflow, OutOfBoundsFetch)}


def fault_error(code: int, address: int) -> MachineFault:
    """Build the exception matching a nonzero fault code."""
    if code not in FAULTS:
        raise ValueError(f"Unknown fault code {code}")
    return FAULTS[code](address)
