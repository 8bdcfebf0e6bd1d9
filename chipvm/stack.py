"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chipvm.constants import ADDRESS_MASK, STACK_SIZE
from chipvm.errors import StackOverflow, StackUnderflow
from chipvm.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack."""
    pointer = int(stack.pointer)
    if pointer >= STACK_SIZE:
        raise StackOverflow(f"subroutine nesting exceeds {STACK_SIZE} levels")
    masked_address = jnp.astype(address & ADDRESS_MASK, jnp.uint16)
    new_data = stack.data.at[pointer].set(masked_address)
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack."""
    pointer = int(stack.pointer)
    if pointer <= 0:
        raise StackUnderflow("return with an empty stack")
    new_pointer = pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
