"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax
import jax.numpy as jnp
from chipvm import create_state, execute, Interpreter, ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return create_state(jax.random.PRNGKey(0))


@pytest.fixture
def interpreter():
    """Provide an interpreter with a quiet logger."""
    return Interpreter(logger=ConsoleLogger(log_level="CRITICAL"))


def run(state, *words):
    """Execute words in order, ignoring cursors. Returns the final state."""
    for word in words:
        state, _ = execute(state, word)
    return state


def set_registers(state, **registers):
    """Set registers by name, e.g. ``set_registers(state, V0=1, VF=2)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
