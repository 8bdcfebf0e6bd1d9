"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import Clear, ReturnSubroutine, InvalidOpcode
from chipvm.cursor import Cursor, Jump, NEXT
from chipvm.errors import DecodeFailure
from chipvm.stack import pop


def execute_clear_screen(state: MachineState, instruction: Clear) -> tuple[MachineState, Cursor]:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display)), NEXT


def execute_return(state: MachineState, instruction: ReturnSubroutine) -> tuple[MachineState, Cursor]:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack), Jump(address=address)


def execute_invalid(state: MachineState, instruction: InvalidOpcode) -> tuple[MachineState, Cursor]:
    """Undefined word, including 0NNN machine code calls."""
    raise DecodeFailure(instruction.nibbles)
