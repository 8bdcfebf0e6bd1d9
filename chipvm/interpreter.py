"""Stateful CHIP-8 interpreter for hosts.

The engine functions in :mod:`chipvm.emulator` are pure: each takes a
state and returns a new one. :class:`Interpreter` owns the current state
and exposes the host surface: loading, stepping, key events, timer ticks
and read-only views of memory, display and registers.

Typical host loop::

    vm = Interpreter()
    vm.load_rom("PONG")
    while running:
        vm.run(10)
        vm.tick_timers()
        frame = vm.display
"""

from typing import Optional

import jax
import jax.numpy as jnp

from chipvm.state import MachineState, create_state
from chipvm.constants import MAX_PROGRAM_SIZE
from chipvm.errors import Chip8Error
from chipvm.logging import ConsoleLogger
from chipvm.rendering import display_to_text
from chipvm import emulator


class Interpreter:
    """Owns one machine state and steps it on request.

    Not thread safe; calls must be serialised by the host.
    """

    def __init__(
        self,
        rng: Optional[jax.random.PRNGKey] = None,
        seed: int = 0,
        log_level: str = "WARNING",
        logger: Optional[ConsoleLogger] = None,
    ):
        """
        Args:
            rng: PRNG key feeding the random instruction. Built from ``seed`` if None.
            seed: Seed used when ``rng`` is not given.
            log_level: Level for the default console logger.
            logger: Logger to use instead of the default one.
        """
        self._rng = rng if rng is not None else jax.random.PRNGKey(seed)
        self.logger = logger or ConsoleLogger(name="chipvm", log_level=log_level)
        self._program = b""
        self._state = create_state(self._rng)
        self.instruction_count = 0

    def reset(self):
        """Restore the power-on state and reload the last program."""
        self._state = emulator.load_program(create_state(self._rng), self._program)
        self.instruction_count = 0
        self.logger.info("Reset")

    def load(self, program: bytes):
        """Load a program image at 0x200."""
        program = bytes(program)
        if len(program) > MAX_PROGRAM_SIZE:
            self.logger.warning(
                f"Program is {len(program)} bytes, truncating to {MAX_PROGRAM_SIZE}"
            )
        self._program = program[:MAX_PROGRAM_SIZE]
        self._state = emulator.load_program(self._state, self._program)
        self.logger.info(f"Loaded {len(self._program)} bytes")

    def load_rom(self, filename: str):
        """Load a ROM file at 0x200."""
        with open(filename, "rb") as f:
            self.load(f.read())
        self.logger.info(f"Loaded ROM {filename}")

    def step(self):
        """Execute exactly one instruction.

        Returns:
            The decoded instruction that was executed.

        Raises:
            Chip8Error: on an invalid opcode, a stack overflow/underflow or a
                program counter outside memory. The state is left as it was
                before the step.
        """
        pc = int(self._state.pc)
        try:
            state, instruction = emulator.step(self._state)
        except Chip8Error as e:
            self.logger.error(f"0x{pc:03X}: {e}")
            raise
        if self.logger.is_enabled_for("DEBUG"):
            self.logger.debug(f"0x{pc:03X}: {instruction}")
        self._state = state
        self.instruction_count += 1
        return instruction

    def run(self, n: int) -> int:
        """Execute ``n`` instructions, returning how many ran."""
        for _ in range(n):
            self.step()
        return n

    def tick_timers(self):
        """Decrement delay and sound timers, floored at zero."""
        self._state = emulator.tick_timers(self._state)

    def key_down(self, key: int):
        self._state = emulator.key_down(self._state, key)

    def key_up(self, key: int):
        self._state = emulator.key_up(self._state, key)

    @property
    def state(self) -> MachineState:
        return self._state

    @property
    def memory(self) -> jnp.ndarray:
        return self._state.memory

    @property
    def display(self) -> jnp.ndarray:
        return self._state.display

    @property
    def registers(self) -> jnp.ndarray:
        return self._state.V

    @property
    def keypad(self) -> jnp.ndarray:
        return self._state.keypad

    @property
    def address_register(self) -> int:
        return int(self._state.I)

    @property
    def program_counter(self) -> int:
        return int(self._state.pc)

    @property
    def stack_pointer(self) -> int:
        return int(self._state.stack.pointer)

    @property
    def delay_timer(self) -> int:
        return int(self._state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self._state.sound_timer)

    def __str__(self):
        return display_to_text(self._state.display)
