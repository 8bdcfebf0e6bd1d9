"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import Draw
from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, MEMORY_SIZE, FLAG_REGISTER
from chipvm.cursor import Cursor, NEXT

# Bit weights for the eight sprite columns, most significant bit first
_COLUMN_SHIFTS = jnp.arange(7, -1, -1, dtype=jnp.uint8)


def sprite_bits(state: MachineState, height: int) -> jnp.ndarray:
    """Read ``height`` sprite rows at I as a (height, 8) boolean grid."""
    addresses = (jnp.astype(state.I, jnp.int32) + jnp.arange(height)) % MEMORY_SIZE
    rows = state.memory[addresses]
    return ((rows[:, None] >> _COLUMN_SHIFTS[None, :]) & 1).astype(jnp.bool_)


def execute_display(state: MachineState, instruction: Draw) -> tuple[MachineState, Cursor]:
    """DXYN - Draw sprite at (VX, VY) with height N.

    VF is cleared before the coordinates are read, so drawing at VF uses 0.
    Both coordinates wrap around the screen edges. VF is set when any lit
    pixel gets erased.
    """
    state = state.replace(V=state.V.at[FLAG_REGISTER].set(0))
    sprite = sprite_bits(state, instruction.n)

    rows = (jnp.astype(state.V[instruction.y], jnp.int32) + jnp.arange(instruction.n)) % SCREEN_HEIGHT
    cols = (jnp.astype(state.V[instruction.x], jnp.int32) + jnp.arange(8)) % SCREEN_WIDTH

    current = state.display[rows[:, None], cols[None, :]]
    collision = jnp.any(current & sprite)

    return state.replace(
        display=state.display.at[rows[:, None], cols[None, :]].set(current ^ sprite),
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    ), NEXT
