"""CHIP-8 instruction decoding.

Every 16-bit word decodes to exactly one instruction class. Operands are
extracted up front so handlers never touch the raw word:

    x, y     register indices (second and third nibble)
    value    8-bit immediate (low byte)
    address  12-bit address (low three nibbles)
    n        4-bit sprite height (last nibble)
"""

from typing import Union

from chex import dataclass


def _dataclass(cls):
    return dataclass(frozen=True, mappable_dataclass=False)(cls)


@_dataclass
class Clear:
    """00E0 - Clear the display."""

    def __str__(self):
        return "Clear"


@_dataclass
class ReturnSubroutine:
    """00EE - Return from a subroutine."""

    def __str__(self):
        return "ReturnSubroutine"


@_dataclass
class JumpTo:
    """1NNN - Jump to address NNN."""
    address: int

    def __str__(self):
        return f"JumpTo(0x{self.address:03X})"


@_dataclass
class CallSubroutine:
    """2NNN - Call subroutine at NNN."""
    address: int

    def __str__(self):
        return f"CallSubroutine(0x{self.address:03X})"


@_dataclass
class SkipEqual:
    """3XKK - Skip next instruction if VX == KK."""
    x: int
    value: int

    def __str__(self):
        return f"SkipEqual(V{self.x:X}, 0x{self.value:02X})"


@_dataclass
class SkipNotEqual:
    """4XKK - Skip next instruction if VX != KK."""
    x: int
    value: int

    def __str__(self):
        return f"SkipNotEqual(V{self.x:X}, 0x{self.value:02X})"


@_dataclass
class SkipRegisterEqual:
    """5XY0 - Skip next instruction if VX == VY."""
    x: int
    y: int

    def __str__(self):
        return f"SkipRegisterEqual(V{self.x:X}, V{self.y:X})"


@_dataclass
class SetRegister:
    """6XKK - Set VX = KK."""
    x: int
    value: int

    def __str__(self):
        return f"SetRegister(V{self.x:X}, 0x{self.value:02X})"


@_dataclass
class AddRegister:
    """7XKK - Set VX = VX + KK, no carry."""
    x: int
    value: int

    def __str__(self):
        return f"AddRegister(V{self.x:X}, 0x{self.value:02X})"


@_dataclass
class CopyRegister:
    """8XY0 - Set VX = VY."""
    x: int
    y: int

    def __str__(self):
        return f"CopyRegister(V{self.x:X}, V{self.y:X})"


@_dataclass
class Or:
    """8XY1 - Set VX = VX | VY."""
    x: int
    y: int

    def __str__(self):
        return f"Or(V{self.x:X}, V{self.y:X})"


@_dataclass
class And:
    """8XY2 - Set VX = VX & VY."""
    x: int
    y: int

    def __str__(self):
        return f"And(V{self.x:X}, V{self.y:X})"


@_dataclass
class Xor:
    """8XY3 - Set VX = VX ^ VY."""
    x: int
    y: int

    def __str__(self):
        return f"Xor(V{self.x:X}, V{self.y:X})"


@_dataclass
class AddWithCarry:
    """8XY4 - Set VX = VX + VY, VF = carry."""
    x: int
    y: int

    def __str__(self):
        return f"AddWithCarry(V{self.x:X}, V{self.y:X})"


@_dataclass
class SubWithBorrow:
    """8XY5 - VX = VX - VY, 8XY7 - VX = VY - VX. VF = NOT borrow."""
    x: int
    y: int
    reverse: bool = False

    def __str__(self):
        if self.reverse:
            return f"SubWithBorrow(V{self.x:X} = V{self.y:X} - V{self.x:X})"
        return f"SubWithBorrow(V{self.x:X} = V{self.x:X} - V{self.y:X})"


@_dataclass
class ShiftRight:
    """8XY6 - Set VX = VX >> 1, VF = shifted out bit."""
    x: int

    def __str__(self):
        return f"ShiftRight(V{self.x:X})"


@_dataclass
class ShiftLeft:
    """8XYE - Set VX = VX << 1, VF = shifted out bit."""
    x: int

    def __str__(self):
        return f"ShiftLeft(V{self.x:X})"


@_dataclass
class SkipRegisterNotEqual:
    """9XY0 - Skip next instruction if VX != VY."""
    x: int
    y: int

    def __str__(self):
        return f"SkipRegisterNotEqual(V{self.x:X}, V{self.y:X})"


@_dataclass
class SetAddressRegister:
    """ANNN - Set I = NNN."""
    address: int

    def __str__(self):
        return f"SetAddressRegister(0x{self.address:03X})"


@_dataclass
class JumpWithOffset:
    """BNNN - Jump to address NNN + V0."""
    address: int

    def __str__(self):
        return f"JumpWithOffset(0x{self.address:03X} + V0)"


@_dataclass
class RandomAnd:
    """CXKK - Set VX = random byte & KK."""
    x: int
    value: int

    def __str__(self):
        return f"RandomAnd(V{self.x:X}, 0x{self.value:02X})"


@_dataclass
class Draw:
    """DXYN - Draw N-row sprite from I at (VX, VY), VF = collision."""
    x: int
    y: int
    n: int

    def __str__(self):
        return f"Draw(V{self.x:X}, V{self.y:X}, {self.n})"


@_dataclass
class SkipIfKeyDown:
    """EX9E - Skip next instruction if key VX is pressed."""
    x: int

    def __str__(self):
        return f"SkipIfKeyDown(V{self.x:X})"


@_dataclass
class SkipIfKeyUp:
    """EXA1 - Skip next instruction if key VX is not pressed."""
    x: int

    def __str__(self):
        return f"SkipIfKeyUp(V{self.x:X})"


@_dataclass
class ReadDelayTimer:
    """FX07 - Set VX = delay timer."""
    x: int

    def __str__(self):
        return f"ReadDelayTimer(V{self.x:X})"


@_dataclass
class BlockForKey:
    """FX0A - Wait for a key press, store the key in VX."""
    x: int

    def __str__(self):
        return f"BlockForKey(V{self.x:X})"


@_dataclass
class WriteDelayTimer:
    """FX15 - Set delay timer = VX."""
    x: int

    def __str__(self):
        return f"WriteDelayTimer(V{self.x:X})"


@_dataclass
class WriteSoundTimer:
    """FX18 - Set sound timer = VX."""
    x: int

    def __str__(self):
        return f"WriteSoundTimer(V{self.x:X})"


@_dataclass
class AddToAddressRegister:
    """FX1E - Set I = I + VX."""
    x: int

    def __str__(self):
        return f"AddToAddressRegister(V{self.x:X})"


@_dataclass
class SetAddressToGlyph:
    """FX29 - Set I = location of the glyph for digit VX."""
    x: int

    def __str__(self):
        return f"SetAddressToGlyph(V{self.x:X})"


@_dataclass
class StoreBCD:
    """FX33 - Store BCD of VX at I, I+1, I+2."""
    x: int

    def __str__(self):
        return f"StoreBCD(V{self.x:X})"


@_dataclass
class StoreRegisterBlock:
    """FX55 - Store V0..VX in memory starting at I."""
    x: int

    def __str__(self):
        return f"StoreRegisterBlock(V0..V{self.x:X})"


@_dataclass
class LoadRegisterBlock:
    """FX65 - Load V0..VX from memory starting at I."""
    x: int

    def __str__(self):
        return f"LoadRegisterBlock(V0..V{self.x:X})"


@_dataclass
class InvalidOpcode:
    """Any word with no defined operation, including 0NNN native calls."""
    n0: int
    n1: int
    n2: int
    n3: int

    @property
    def nibbles(self) -> tuple[int, int, int, int]:
        return self.n0, self.n1, self.n2, self.n3

    @property
    def word(self) -> int:
        return (self.n0 << 12) | (self.n1 << 8) | (self.n2 << 4) | self.n3

    def __str__(self):
        return f"InvalidOpcode(0x{self.word:04X})"


Instruction = Union[
    Clear, ReturnSubroutine, JumpTo, CallSubroutine, SkipEqual, SkipNotEqual,
    SkipRegisterEqual, SetRegister, AddRegister, CopyRegister, Or, And, Xor,
    AddWithCarry, SubWithBorrow, ShiftRight, ShiftLeft, SkipRegisterNotEqual,
    SetAddressRegister, JumpWithOffset, RandomAnd, Draw, SkipIfKeyDown,
    SkipIfKeyUp, ReadDelayTimer, BlockForKey, WriteDelayTimer, WriteSoundTimer,
    AddToAddressRegister, SetAddressToGlyph, StoreBCD, StoreRegisterBlock,
    LoadRegisterBlock, InvalidOpcode,
]


def address(n1: int, n2: int, n3: int) -> int:
    """12-bit address from the three low nibbles."""
    return ((n1 << 8) | (n2 << 4) | n3) & 0xFFF


def immediate(n2: int, n3: int) -> int:
    """8-bit immediate from the two low nibbles."""
    return ((n2 << 4) | n3) & 0xFF


def nibbles(word: int) -> tuple[int, int, int, int]:
    """Split a word into four nibbles, most significant first."""
    return (word & 0xF000) >> 12, (word & 0x0F00) >> 8, (word & 0x00F0) >> 4, word & 0x000F


# 8XYN family, keyed on N
_ALU_OPS = {
    0x0: lambda x, y: CopyRegister(x=x, y=y),
    0x1: lambda x, y: Or(x=x, y=y),
    0x2: lambda x, y: And(x=x, y=y),
    0x3: lambda x, y: Xor(x=x, y=y),
    0x4: lambda x, y: AddWithCarry(x=x, y=y),
    0x5: lambda x, y: SubWithBorrow(x=x, y=y, reverse=False),
    0x6: lambda x, y: ShiftRight(x=x),
    0x7: lambda x, y: SubWithBorrow(x=x, y=y, reverse=True),
    0xE: lambda x, y: ShiftLeft(x=x),
}

# FXKK family, keyed on KK
_MISC_OPS = {
    0x07: ReadDelayTimer,
    0x0A: BlockForKey,
    0x15: WriteDelayTimer,
    0x18: WriteSoundTimer,
    0x1E: AddToAddressRegister,
    0x29: SetAddressToGlyph,
    0x33: StoreBCD,
    0x55: StoreRegisterBlock,
    0x65: LoadRegisterBlock,
}


def decode(word: int) -> Instruction:
    """Decode a 16-bit instruction word. Never fails."""
    word = int(word) & 0xFFFF
    n0, n1, n2, n3 = nibbles(word)

    if n0 == 0x0:
        if word == 0x00E0:
            return Clear()
        if word == 0x00EE:
            return ReturnSubroutine()
    elif n0 == 0x1:
        return JumpTo(address=address(n1, n2, n3))
    elif n0 == 0x2:
        return CallSubroutine(address=address(n1, n2, n3))
    elif n0 == 0x3:
        return SkipEqual(x=n1, value=immediate(n2, n3))
    elif n0 == 0x4:
        return SkipNotEqual(x=n1, value=immediate(n2, n3))
    elif n0 == 0x5:
        if n3 == 0x0:
            return SkipRegisterEqual(x=n1, y=n2)
    elif n0 == 0x6:
        return SetRegister(x=n1, value=immediate(n2, n3))
    elif n0 == 0x7:
        return AddRegister(x=n1, value=immediate(n2, n3))
    elif n0 == 0x8:
        if n3 in _ALU_OPS:
            return _ALU_OPS[n3](n1, n2)
    elif n0 == 0x9:
        if n3 == 0x0:
            return SkipRegisterNotEqual(x=n1, y=n2)
    elif n0 == 0xA:
        return SetAddressRegister(address=address(n1, n2, n3))
    elif n0 == 0xB:
        return JumpWithOffset(address=address(n1, n2, n3))
    elif n0 == 0xC:
        return RandomAnd(x=n1, value=immediate(n2, n3))
    elif n0 == 0xD:
        return Draw(x=n1, y=n2, n=n3)
    elif n0 == 0xE:
        kk = immediate(n2, n3)
        if kk == 0x9E:
            return SkipIfKeyDown(x=n1)
        if kk == 0xA1:
            return SkipIfKeyUp(x=n1)
    elif n0 == 0xF:
        kk = immediate(n2, n3)
        if kk in _MISC_OPS:
            return _MISC_OPS[kk](x=n1)

    return InvalidOpcode(n0=n0, n1=n1, n2=n2, n3=n3)
