"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import (
    ReadDelayTimer, BlockForKey, WriteDelayTimer, WriteSoundTimer, AddToAddressRegister,
    SetAddressToGlyph, StoreBCD, StoreRegisterBlock, LoadRegisterBlock,
)
from chipvm.constants import FONT_START, GLYPH_SIZE, MEMORY_SIZE, WORD_MASK
from chipvm.cursor import Cursor, NEXT, STAY


def _addresses(state: MachineState, count: int) -> jnp.ndarray:
    """Memory addresses I, I+1, ... wrapped to the memory size."""
    return (jnp.astype(state.I, jnp.int32) + jnp.arange(count)) % MEMORY_SIZE


def execute_get_delay_timer(state: MachineState, instruction: ReadDelayTimer) -> tuple[MachineState, Cursor]:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer)), NEXT


def execute_set_delay_timer(state: MachineState, instruction: WriteDelayTimer) -> tuple[MachineState, Cursor]:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x]), NEXT


def execute_set_sound_timer(state: MachineState, instruction: WriteSoundTimer) -> tuple[MachineState, Cursor]:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x]), NEXT


def execute_add_to_index(state: MachineState, instruction: AddToAddressRegister) -> tuple[MachineState, Cursor]:
    """FX1E - Add VX to I. Kept as 16 bits, VF untouched."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & WORD_MASK
    return state.replace(I=jnp.astype(new_i, jnp.uint16)), NEXT


def execute_wait_for_key(state: MachineState, instruction: BlockForKey) -> tuple[MachineState, Cursor]:
    """FX0A - Wait for key press.

    Stores the lowest pressed key; with no key down the program counter
    stays put and the instruction runs again on the next step.
    """
    if not bool(jnp.any(state.keypad)):
        return state, STAY
    pressed_key = jnp.argmax(state.keypad)
    return state.replace(V=state.V.at[instruction.x].set(jnp.astype(pressed_key, jnp.uint8))), NEXT


def execute_font_character(state: MachineState, instruction: SetAddressToGlyph) -> tuple[MachineState, Cursor]:
    """FX29 - Set I to location of glyph for digit VX."""
    font_address = FONT_START + int(state.V[instruction.x]) * GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16)), NEXT


def execute_bcd_conversion(state: MachineState, instruction: StoreBCD) -> tuple[MachineState, Cursor]:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    new_memory = state.memory.at[_addresses(state, 3)].set(digits)
    return state.replace(memory=new_memory), NEXT


def execute_store_registers(state: MachineState, instruction: StoreRegisterBlock) -> tuple[MachineState, Cursor]:
    """FX55 - Store V0 through VX in memory starting at I. I is unchanged."""
    count = instruction.x + 1
    new_memory = state.memory.at[_addresses(state, count)].set(state.V[:count])
    return state.replace(memory=new_memory), NEXT


def execute_load_registers(state: MachineState, instruction: LoadRegisterBlock) -> tuple[MachineState, Cursor]:
    """FX65 - Load V0 through VX from memory starting at I. I is unchanged."""
    count = instruction.x + 1
    new_V = state.V.at[:count].set(state.memory[_addresses(state, count)])
    return state.replace(V=new_V), NEXT
