"""Host-facing CHIP-8 interpreter."""

from typing import Optional, Sequence

import jax
import jax.numpy as jnp

from chipax.constants import NUM_KEYS, NO_FAULT, PROGRAM_START
from chipax.emulator import TickOutput, load_program, load_rom, tick, run_ticks
from chipax.errors import fault_error
from chipax.logging import ConsoleLogger
from chipax.state import EmulatorState, create_state


class Interpreter:
    """One CHIP-8 machine owned by the host.

    Wraps the pure ``tick`` / ``run_ticks`` functions, keeps the current
    EmulatorState and turns fault codes into typed exceptions. Separate
    instances never share state.
    """

    def __init__(
        self,
        seed: int = 0,
        logger: Optional[ConsoleLogger] = None,
        jit: bool = True,
    ):
        """Create an interpreter with a freshly initialized machine.

        Args:
            seed: Seed for the PRNG key driving CXNN
            logger: Logger for load and fault messages (default: Chipax console logger)
            jit: Compile tick and run with jax.jit
        """
        self.seed = seed
        self.logger = logger or ConsoleLogger("Chipax")
        self._tick = jax.jit(tick) if jit else tick
        self._run = jax.jit(run_ticks, static_argnames="progress") if jit else run_ticks
        self.state: EmulatorState = self.initialize()

    def initialize(self) -> EmulatorState:
        """Reset to a blank machine: font loaded, pc = 0x200, everything else zero."""
        self.state = create_state(jax.random.PRNGKey(self.seed))
        self.logger.debug(f"Machine initialized (seed={self.seed})")
        return self.state

    def load(self, program: bytes) -> None:
        """Copy a program into memory at 0x200.

        Raises:
            ProgramTooLarge: If the program exceeds the program area; the
                machine is left untouched
        """
        self.state = load_program(self.state, program)
        self.logger.info(f"Loaded {len(program)} bytes at 0x{PROGRAM_START:03X}")

    def load_rom(self, filename: str) -> None:
        """Read a cartridge file and load it at 0x200."""
        self.state = load_rom(self.state, filename)
        self.logger.info(f"Loaded ROM: {filename}")

    @property
    def halted(self) -> bool:
        return int(self.state.fault) != NO_FAULT

    def tick(self, keypad: Sequence[bool]) -> TickOutput:
        """Advance one frame with the given 16-key snapshot.

        Raises:
            StackOverflow, StackUnderflow, OutOfBoundsFetch: If the machine
                halted, now or on an earlier tick
        """
        keypad = jnp.asarray(keypad, dtype=jnp.bool_)
        if keypad.shape != (NUM_KEYS,):
            raise ValueError(f"Expected keypad shape ({NUM_KEYS},), got {keypad.shape}")
        self.state, output = self._tick(self.state, keypad)
        self._raise_for_fault()
        return output

    def run(self, keypads: Sequence[Sequence[bool]], progress: bool = False) -> TickOutput:
        """Run one tick per keypad snapshot in a single compiled scan.

        Returns the stacked TickOutput of every frame. Raises like ``tick``
        once the whole run has finished if the machine halted along the way.
        """
        keypads = jnp.asarray(keypads, dtype=jnp.bool_)
        if keypads.ndim != 2 or keypads.shape[1] != NUM_KEYS:
            raise ValueError(f"Expected keypads shape (T, {NUM_KEYS}), got {keypads.shape}")
        self.state, outputs = self._run(self.state, keypads, progress=progress)
        self._raise_for_fault()
        return outputs

    def _raise_for_fault(self) -> None:
        code = int(self.state.fault)
        if code == NO_FAULT:
            return
        error = fault_error(code, int(self.state.pc))
        self.logger.error(f"Machine halted: {error}")
        raise error
