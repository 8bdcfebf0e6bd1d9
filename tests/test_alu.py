"""Tests for ALU operations (8xxx)."""

import jax.numpy as jnp
import pytest
from chipvm import execute
from chipvm.cursor import Next
from chipvm.instructions.alu import alu_add, alu_sub, alu_shift_left, alu_shift_right
from conftest import run, set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state, cursor = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99
        assert cursor == Next()

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation, VF untouched."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F, VF=0x07)

        state = run(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF
        assert state.V[15] == 0x07

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xF1)

        state = run(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x0F)

        state = run(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0xF0


class TestArithmetic:
    """Test carry and borrow behaviour."""

    def test_add_no_carry(self, fresh_state):
        """8XY4 - Add without overflow."""
        state = set_registers(fresh_state, V1=10, V2=20, VF=1)
        state = run(state, 0x8124)
        assert state.V[1] == 30
        assert state.V[15] == 0

    def test_add_with_carry(self, fresh_state):
        """8XY4 - Add with overflow keeps the low 8 bits."""
        state = set_registers(fresh_state, V1=200, V2=100)
        state = run(state, 0x8124)
        assert state.V[1] == 44
        assert state.V[15] == 1

    def test_sub_no_borrow(self, fresh_state):
        """8XY5 - VX - VY with VX > VY sets VF."""
        state = set_registers(fresh_state, V1=50, V2=20)
        state = run(state, 0x8125)
        assert state.V[1] == 30
        assert state.V[15] == 1

    def test_sub_with_borrow(self, fresh_state):
        """8XY5 - VX - VY with VX < VY wraps and clears VF."""
        state = set_registers(fresh_state, V1=20, V2=50, VF=1)
        state = run(state, 0x8125)
        assert state.V[1] == 226
        assert state.V[15] == 0

    def test_sub_equal_operands_clears_flag(self, fresh_state):
        """8XY5 - Equal operands count as a borrow."""
        state = set_registers(fresh_state, V1=7, V2=7, VF=1)
        state = run(state, 0x8125)
        assert state.V[1] == 0
        assert state.V[15] == 0

    def test_reverse_sub(self, fresh_state):
        """8XY7 - VX = VY - VX."""
        state = set_registers(fresh_state, V1=20, V2=50)
        state = run(state, 0x8127)
        assert state.V[1] == 30
        assert state.V[2] == 50
        assert state.V[15] == 1

    def test_reverse_sub_with_borrow(self, fresh_state):
        """8XY7 - VY < VX wraps and clears VF."""
        state = set_registers(fresh_state, V1=50, V2=20)
        state = run(state, 0x8127)
        assert state.V[1] == 226
        assert state.V[15] == 0

    def test_flag_register_as_destination(self, fresh_state):
        """8FY4 - The flag overwrites the result when VX is VF."""
        state = set_registers(fresh_state, VF=200, V1=100)
        state = run(state, 0x8F14)
        assert state.V[15] == 1


class TestFlagOrdering:
    """8XY5, 8XY6, 8XY7 and 8XYE write VF before the result."""

    def test_sub_into_flag_register(self, fresh_state):
        """8FY5 - VF = 1 first, then VF = 1 - V1 wraps."""
        state = set_registers(fresh_state, VF=5, V1=3)
        state = run(state, 0x8F15)
        assert state.V[15] == 254

    def test_shift_right_into_flag_register(self, fresh_state):
        """8FY6 - VF = old bit 0 first, then VF >>= 1."""
        state = set_registers(fresh_state, VF=5)
        state = run(state, 0x8F16)
        assert state.V[15] == 0

    def test_reverse_sub_into_flag_register(self, fresh_state):
        """8FY7 - VF = 1 first, then VF = V1 - 1."""
        state = set_registers(fresh_state, VF=3, V1=10)
        state = run(state, 0x8F17)
        assert state.V[15] == 9

    def test_shift_left_into_flag_register(self, fresh_state):
        """8FYE - VF = old bit 7 first, then VF <<= 1."""
        state = set_registers(fresh_state, VF=0x81)
        state = run(state, 0x8F1E)
        assert state.V[15] == 2

    def test_sub_reads_updated_flag_as_source(self, fresh_state):
        """8XF5 - the subtrahend is the freshly written flag."""
        state = set_registers(fresh_state, V1=10, VF=3)
        state = run(state, 0x81F5)
        assert state.V[1] == 9
        assert state.V[15] == 1

    def test_add_keeps_result_then_flag(self, fresh_state):
        """8FY4 - the carry is written last."""
        state = set_registers(fresh_state, VF=0x10, V1=0x20)
        state = run(state, 0x8F14)
        assert state.V[15] == 0


class TestShifts:
    """Test shift operations."""

    def test_shift_right(self, fresh_state):
        """8XY6 - VF gets the old low bit, VY is ignored."""
        state = set_registers(fresh_state, V1=0b00000101, V2=0xFF)
        state = run(state, 0x8126)
        assert state.V[1] == 0b00000010
        assert state.V[15] == 1

    def test_shift_right_even(self, fresh_state):
        state = set_registers(fresh_state, V1=0b00000100, VF=1)
        state = run(state, 0x8106)
        assert state.V[1] == 0b00000010
        assert state.V[15] == 0

    def test_shift_left(self, fresh_state):
        """8XYE - VF gets the old high bit, result wraps."""
        state = set_registers(fresh_state, V1=0b10000001)
        state = run(state, 0x812E)
        assert state.V[1] == 0b00000010
        assert state.V[15] == 1

    def test_shift_left_no_overflow(self, fresh_state):
        state = set_registers(fresh_state, V1=0b01000000, VF=1)
        state = run(state, 0x810E)
        assert state.V[1] == 0b10000000
        assert state.V[15] == 0


class TestArithmeticLaws:
    """Check carry and borrow over every pair of register values."""

    @pytest.fixture
    def operands(self):
        vx, vy = jnp.meshgrid(jnp.arange(256), jnp.arange(256), indexing="ij")
        return vx, vy

    def test_carry_law(self, operands):
        vx, vy = operands
        result, carry = alu_add(vx, vy)
        assert jnp.array_equal(carry, (vx + vy > 255).astype(jnp.uint8))
        assert jnp.array_equal(result, ((vx + vy) % 256).astype(jnp.uint8))

    def test_borrow_law(self, operands):
        vx, vy = operands
        result, flag = alu_sub(vx, vy)
        assert jnp.array_equal(flag, (vx > vy).astype(jnp.uint8))
        assert jnp.array_equal(result, ((vx - vy) % 256).astype(jnp.uint8))

    def test_shift_laws(self):
        values = jnp.arange(256)
        right, low_bit = alu_shift_right(values)
        left, high_bit = alu_shift_left(values)
        assert jnp.array_equal(right, (values // 2).astype(jnp.uint8))
        assert jnp.array_equal(low_bit, (values % 2).astype(jnp.uint8))
        assert jnp.array_equal(left, ((values * 2) % 256).astype(jnp.uint8))
        assert jnp.array_equal(high_bit, (values >= 128).astype(jnp.uint8))
