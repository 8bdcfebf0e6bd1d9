"""Tests for miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chipvm import execute, key_down, key_up, tick_timers
from chipvm.constants import GLYPH_SIZE, FONT_START
from chipvm.cursor import NEXT, STAY
from conftest import run, set_registers


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state = run(fresh_state, 0x6030, 0xF015)  # V0 = 48, delay timer = V0
        assert state.delay_timer == 48

        state = run(state, 0x6120, 0xF118)  # V1 = 32, sound timer = V1
        assert state.sound_timer == 32

        state = run(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48

    def test_tick_timers_floors_at_zero(self, fresh_state):
        state = run(fresh_state, 0x6002, 0xF015, 0x6001, 0xF018)
        state = tick_timers(state)
        assert state.delay_timer == 1
        assert state.sound_timer == 0
        state = tick_timers(tick_timers(state))
        assert state.delay_timer == 0
        assert state.sound_timer == 0


class TestBCD:
    """Test BCD conversion."""

    def test_misc_bcd_conversion(self, fresh_state):
        """Test BCD conversion with 156."""
        state = run(fresh_state, 0x609C, 0xA300, 0xF033)

        assert state.memory[0x300] == 1  # Hundreds
        assert state.memory[0x301] == 5  # Tens
        assert state.memory[0x302] == 6  # Ones

    def test_bcd_edge_cases(self, fresh_state):
        state = run(fresh_state, 0x6000, 0xA400, 0xF033)
        assert state.memory[0x400:0x403].tolist() == [0, 0, 0]

        state = run(state, 0x60FF, 0xA500, 0xF033)
        assert state.memory[0x500:0x503].tolist() == [2, 5, 5]


class TestFont:
    """Test glyph addressing."""

    def test_misc_font_character(self, fresh_state):
        state = run(fresh_state, 0x600A, 0xF029)  # I = glyph for A
        assert state.I == FONT_START + 0xA * GLYPH_SIZE

    def test_glyphs_loaded_in_low_memory(self, fresh_state):
        assert fresh_state.memory[0:5].tolist() == [0xF0, 0x90, 0x90, 0x90, 0xF0]
        assert fresh_state.memory[75:80].tolist() == [0xF0, 0x80, 0xF0, 0x80, 0x80]
        assert jnp.sum(fresh_state.memory[80:]) == 0


class TestIndexArithmetic:
    """Test FX1E."""

    def test_add_to_index(self, fresh_state):
        state = run(fresh_state, 0xA300, 0x6110, 0xF11E)
        assert state.I == 0x310

    def test_add_to_index_not_masked_to_12_bits(self, fresh_state):
        """I keeps the full 16-bit sum and VF stays untouched."""
        state = set_registers(fresh_state, V1=0x10, VF=0x05)
        state = run(state, 0xAFFF, 0xF11E)
        assert state.I == 0x100F
        assert state.V[15] == 0x05

    def test_add_to_index_wraps_at_16_bits(self, fresh_state):
        state = set_registers(fresh_state.replace(I=jnp.uint16(0xFFFF)), V1=2)
        state = run(state, 0xF11E)
        assert state.I == 0x0001


class TestRegisterBlocks:
    """Test FX55 and FX65."""

    def test_store_registers(self, fresh_state):
        state = set_registers(fresh_state, V0=1, V1=2, V2=3, V3=4)
        state = run(state, 0xA250, 0xF255)
        assert state.memory[0x250:0x254].tolist() == [1, 2, 3, 0]
        assert state.I == 0x250

    def test_load_registers(self, fresh_state):
        state = fresh_state.replace(
            memory=fresh_state.memory.at[0x300:0x304].set(jnp.array([9, 8, 7, 6], dtype=jnp.uint8))
        )
        state = run(state, 0xA300, 0xF265)
        assert state.V[0:4].tolist() == [9, 8, 7, 0]
        assert state.I == 0x300

    def test_full_block_round_trip(self, fresh_state):
        values = {f"V{i:X}": i * 3 for i in range(16)}
        state = set_registers(fresh_state, **values)
        state = run(state, 0xA400, 0xFF55)
        cleared = state.replace(V=jnp.zeros_like(state.V))
        restored = run(cleared, 0xFF65)
        assert jnp.array_equal(restored.V, state.V)

    def test_block_wraps_memory(self, fresh_state):
        state = set_registers(fresh_state, V0=0xAA, V1=0xBB)
        state = run(state, 0xAFFF, 0xF155)
        assert state.memory[0xFFF] == 0xAA
        assert state.memory[0x000] == 0xBB


class TestWaitForKey:
    """Test FX0A."""

    def test_wait_without_key_stays(self, fresh_state):
        state, cursor = execute(fresh_state, 0xF30A)
        assert cursor == STAY
        assert state.V[3] == 0

    def test_wait_with_key(self, fresh_state):
        state = key_down(fresh_state, 7)
        state, cursor = execute(state, 0xF30A)
        assert cursor == NEXT
        assert state.V[3] == 7

    def test_wait_takes_lowest_key(self, fresh_state):
        state = key_down(key_down(fresh_state, 0xC), 0x5)
        state, _ = execute(state, 0xF30A)
        assert state.V[3] == 0x5

    def test_released_key_no_longer_counts(self, fresh_state):
        state = key_up(key_down(fresh_state, 0x4), 0x4)
        _, cursor = execute(state, 0xF30A)
        assert cursor == STAY
