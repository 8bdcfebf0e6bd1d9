"""CHIP-8 ALU operations (8xxx).

The ``alu_*`` functions are pure and work elementwise, so they accept
scalars or whole arrays of register values. They return ``(result, flag)``
where ``flag`` is ``None`` for operations that leave VF alone.
"""

import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import (
    CopyRegister, Or, And, Xor, AddWithCarry, SubWithBorrow, ShiftRight, ShiftLeft,
)
from chipvm.constants import FLAG_REGISTER
from chipvm.cursor import Cursor, NEXT


def _u8(value) -> jnp.ndarray:
    return jnp.astype(value, jnp.uint8)


def _widen(value) -> jnp.ndarray:
    return jnp.astype(value, jnp.int32)


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return _u8(vy), None


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return _u8(vx) | _u8(vy), None


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return _u8(vx) & _u8(vy), None


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return _u8(vx) ^ _u8(vy), None


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, VF = carry."""
    result = _widen(vx) + _widen(vy)
    carry = _u8(result > 0xFF)
    return _u8(result & 0xFF), carry


def alu_sub(minuend, subtrahend):
    """8XY5/8XY7 - Subtract, VF = 1 when the minuend is strictly greater."""
    not_borrow = _u8(_widen(minuend) > _widen(subtrahend))
    result = (_widen(minuend) - _widen(subtrahend)) & 0xFF
    return _u8(result), not_borrow


def alu_shift_right(vx, vy=None):
    """8XY6 - Shift right: VX >>= 1, VF = old bit 0."""
    shifted_bit = _u8(_widen(vx) & 1)
    result = _widen(vx) >> 1
    return _u8(result), shifted_bit


def alu_shift_left(vx, vy=None):
    """8XYE - Shift left: VX <<= 1, VF = old bit 7."""
    shifted_bit = _u8((_widen(vx) & 0x80) >> 7)
    result = (_widen(vx) << 1) & 0xFF
    return _u8(result), shifted_bit


def _write(state: MachineState, x: int, result, flag) -> MachineState:
    # Flag lands after the result, so VF as a destination ends up holding the flag
    new_V = state.V.at[x].set(result)
    if flag is not None:
        new_V = new_V.at[FLAG_REGISTER].set(flag)
    return state.replace(V=new_V)


def _write_flag_first(state: MachineState, x: int, operation, *sources) -> MachineState:
    """Write VF from the current registers, then compute the result from the updated ones.

    When VX or VY is VF the result is computed from the new flag value.
    """
    _, flag = operation(*(state.V[r] for r in sources))
    new_V = state.V.at[FLAG_REGISTER].set(flag)
    result, _ = operation(*(new_V[r] for r in sources))
    return state.replace(V=new_V.at[x].set(result))


_BINARY_OPS = {
    CopyRegister: alu_set,
    Or: alu_or,
    And: alu_and,
    Xor: alu_xor,
    AddWithCarry: alu_add,
}


def execute_binary_operation(state: MachineState, instruction) -> tuple[MachineState, Cursor]:
    """8XY0-8XY4 - Register to register operations."""
    operation = _BINARY_OPS[type(instruction)]
    result, flag = operation(state.V[instruction.x], state.V[instruction.y])
    return _write(state, instruction.x, result, flag), NEXT


def execute_sub(state: MachineState, instruction: SubWithBorrow) -> tuple[MachineState, Cursor]:
    """8XY5 - VX = VX - VY, 8XY7 - VX = VY - VX."""
    if instruction.reverse:
        sources = (instruction.y, instruction.x)
    else:
        sources = (instruction.x, instruction.y)
    return _write_flag_first(state, instruction.x, alu_sub, *sources), NEXT


def execute_shift_right(state: MachineState, instruction: ShiftRight) -> tuple[MachineState, Cursor]:
    """8XY6 - Shift VX right, VY is ignored."""
    return _write_flag_first(state, instruction.x, alu_shift_right, instruction.x), NEXT


def execute_shift_left(state: MachineState, instruction: ShiftLeft) -> tuple[MachineState, Cursor]:
    """8XYE - Shift VX left, VY is ignored."""
    return _write_flag_first(state, instruction.x, alu_shift_left, instruction.x), NEXT
