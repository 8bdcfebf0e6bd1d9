"""CHIP-8 machine state structures."""

import jax
import jax.numpy as jnp
from dataclasses import field

from flax.struct import dataclass, PyTreeNode

from chipvm.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_REGISTERS, NUM_KEYS,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
)


@dataclass(frozen=True)
class StackState:
    """Return address stack for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class MachineState(PyTreeNode):
    """Complete CHIP-8 machine state.

    Transitions never mutate a state in place, they return a new one via
    ``replace``. The display is addressed ``[row, col]`` with (0, 0) at the
    top-left corner.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))


def create_state(rng: jax.random.PRNGKey = None) -> MachineState:
    """Create initial machine state with the hexadecimal glyphs loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = MachineState(rng)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))
