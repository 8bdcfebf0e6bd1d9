"""Main CHIP-8 execution engine."""

import operator
from typing import Union

import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import (
    Instruction, decode, Clear, ReturnSubroutine, JumpTo, CallSubroutine, SkipEqual, SkipNotEqual,
    SkipRegisterEqual, SetRegister, AddRegister, CopyRegister, Or, And, Xor, AddWithCarry,
    SubWithBorrow, ShiftRight, ShiftLeft, SkipRegisterNotEqual, SetAddressRegister, JumpWithOffset,
    RandomAnd, Draw, SkipIfKeyDown, SkipIfKeyUp, ReadDelayTimer, BlockForKey, WriteDelayTimer,
    WriteSoundTimer, AddToAddressRegister, SetAddressToGlyph, StoreBCD, StoreRegisterBlock,
    LoadRegisterBlock, InvalidOpcode,
)
from chipvm.constants import PROGRAM_START, MEMORY_SIZE, MAX_PROGRAM_SIZE, NUM_KEYS
from chipvm.cursor import Cursor, advance
from chipvm.errors import AddressError, KeyIndexError
from chipvm.instructions.system import execute_clear_screen, execute_return, execute_invalid
from chipvm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_down, execute_skip_if_key_up
)
from chipvm.instructions.alu import (
    execute_binary_operation, execute_sub, execute_shift_right, execute_shift_left
)
from chipvm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipvm.instructions.display import execute_display
from chipvm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    Clear: execute_clear_screen,
    ReturnSubroutine: execute_return,
    JumpTo: execute_jump,
    CallSubroutine: execute_call,
    SkipEqual: execute_skip_if_equal_immediate,
    SkipNotEqual: execute_skip_if_not_equal_immediate,
    SkipRegisterEqual: execute_skip_if_equal_register,
    SetRegister: execute_set,
    AddRegister: execute_add,
    CopyRegister: execute_binary_operation,
    Or: execute_binary_operation,
    And: execute_binary_operation,
    Xor: execute_binary_operation,
    AddWithCarry: execute_binary_operation,
    SubWithBorrow: execute_sub,
    ShiftRight: execute_shift_right,
    ShiftLeft: execute_shift_left,
    SkipRegisterNotEqual: execute_skip_if_not_equal_register,
    SetAddressRegister: execute_set_index,
    JumpWithOffset: execute_jump_with_offset,
    RandomAnd: execute_random,
    Draw: execute_display,
    SkipIfKeyDown: execute_skip_if_key_down,
    SkipIfKeyUp: execute_skip_if_key_up,
    ReadDelayTimer: execute_get_delay_timer,
    BlockForKey: execute_wait_for_key,
    WriteDelayTimer: execute_set_delay_timer,
    WriteSoundTimer: execute_set_sound_timer,
    AddToAddressRegister: execute_add_to_index,
    SetAddressToGlyph: execute_font_character,
    StoreBCD: execute_bcd_conversion,
    StoreRegisterBlock: execute_store_registers,
    LoadRegisterBlock: execute_load_registers,
    InvalidOpcode: execute_invalid,
}

_INSTRUCTION_TYPES = tuple(HANDLERS)


def execute(state: MachineState, instruction: Union[Instruction, int]) -> tuple[MachineState, Cursor]:
    """Execute a single CHIP-8 instruction.

    Accepts a decoded instruction or a raw 16-bit word. The program counter
    is not touched; the returned cursor says how it should move.
    """
    if not isinstance(instruction, _INSTRUCTION_TYPES):
        instruction = decode(instruction)
    return HANDLERS[type(instruction)](state, instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: MachineState) -> int:
    """Fetch the instruction word at the program counter."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise AddressError(f"program counter 0x{pc:04X} is outside memory")
    return _pack_u16(state.memory[pc], state.memory[pc + 1])


def step(state: MachineState) -> tuple[MachineState, Instruction]:
    """Fetch, decode and execute one instruction, then move the program counter."""
    instruction = decode(fetch(state))
    state, cursor = execute(state, instruction)
    pc = advance(int(state.pc), cursor)
    return state.replace(pc=jnp.astype(pc, jnp.uint16)), instruction


def load_program(state: MachineState, program: bytes) -> MachineState:
    """Copy a program image to 0x200, zero-filling the rest of memory.

    Anything past the end of memory is dropped.
    """
    data = bytes(program)[:MAX_PROGRAM_SIZE]
    image = jnp.zeros(MAX_PROGRAM_SIZE, dtype=jnp.uint8)
    if data:
        image = image.at[:len(data)].set(jnp.array(list(data), dtype=jnp.uint8))
    return state.replace(memory=state.memory.at[PROGRAM_START:].set(image))


def load_rom(state: MachineState, filename: str) -> MachineState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)


def tick_timers(state: MachineState) -> MachineState:
    """Decrement both timers by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.astype(max(int(state.delay_timer) - 1, 0), jnp.uint8),
        sound_timer=jnp.astype(max(int(state.sound_timer) - 1, 0), jnp.uint8),
    )


def _check_key(key: int) -> int:
    try:
        key = operator.index(key)
    except TypeError:
        raise KeyIndexError(f"key index must be an integer, got {key!r}") from None
    if not 0 <= key < NUM_KEYS:
        raise KeyIndexError(f"key index must be in 0x0-0x{NUM_KEYS - 1:X}, got {key!r}")
    return key


def key_down(state: MachineState, key: int) -> MachineState:
    """Mark a key as pressed."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(True))


def key_up(state: MachineState, key: int) -> MachineState:
    """Mark a key as released."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(False))
