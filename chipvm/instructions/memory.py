"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import SetRegister, AddRegister, SetAddressRegister, RandomAnd
from chipvm.constants import ADDRESS_MASK
from chipvm.cursor import Cursor, NEXT


def execute_set(state: MachineState, instruction: SetRegister) -> tuple[MachineState, Cursor]:
    """6XKK - Set VX = KK."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.value)), NEXT


def execute_add(state: MachineState, instruction: AddRegister) -> tuple[MachineState, Cursor]:
    """7XKK - Add KK to VX, wrapping at 256. VF is untouched."""
    result = (int(state.V[instruction.x]) + instruction.value) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(result)), NEXT


def execute_set_index(state: MachineState, instruction: SetAddressRegister) -> tuple[MachineState, Cursor]:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.address & ADDRESS_MASK, jnp.uint16)), NEXT


def random_byte(rng: jax.random.PRNGKey) -> tuple[jax.random.PRNGKey, jnp.ndarray]:
    """Draw one uniform byte, returning the advanced key."""
    key, subkey = jax.random.split(rng)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return key, jnp.astype(value, jnp.uint8)


def execute_random(state: MachineState, instruction: RandomAnd) -> tuple[MachineState, Cursor]:
    """CXKK - Set VX = random byte & KK."""
    key, value = random_byte(state.rng)
    return state.replace(V=state.V.at[instruction.x].set(value & instruction.value), rng=key), NEXT
