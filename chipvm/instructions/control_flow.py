"""CHIP-8 control flow instructions."""

from chipvm.state import MachineState
from chipvm.decode import (
    JumpTo, CallSubroutine, JumpWithOffset, SkipIfKeyDown, SkipIfKeyUp,
)
from chipvm.constants import ADDRESS_MASK, NUM_KEYS
from chipvm.cursor import Cursor, Jump, NEXT, SKIP
from chipvm.stack import push


def execute_jump(state: MachineState, instruction: JumpTo) -> tuple[MachineState, Cursor]:
    """1NNN - Jump to address NNN."""
    return state, Jump(address=instruction.address & ADDRESS_MASK)


def execute_call(state: MachineState, instruction: CallSubroutine) -> tuple[MachineState, Cursor]:
    """2NNN - Call subroutine at NNN, returning to the instruction after the call."""
    state = state.replace(stack=push(state.stack, int(state.pc) + 2))
    return state, Jump(address=instruction.address & ADDRESS_MASK)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: MachineState, instruction) -> tuple[MachineState, Cursor]:
        return state, SKIP if condition_fn(state, instruction) else NEXT
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.value
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.value
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def execute_jump_with_offset(state: MachineState, instruction: JumpWithOffset) -> tuple[MachineState, Cursor]:
    """BNNN - Jump to address NNN + V0, wrapped to 12 bits."""
    jump_address = (instruction.address + int(state.V[0])) & ADDRESS_MASK
    return state, Jump(address=jump_address)


def is_key_pressed(state: MachineState, key: int) -> bool:
    """Register-sourced key lookup, values past 0xF read as released."""
    return key < NUM_KEYS and bool(state.keypad[key])


execute_skip_if_key_down = make_skip_instruction(
    lambda state, inst: is_key_pressed(state, int(state.V[inst.x]))
)

execute_skip_if_key_up = make_skip_instruction(
    lambda state, inst: not is_key_pressed(state, int(state.V[inst.x]))
)
