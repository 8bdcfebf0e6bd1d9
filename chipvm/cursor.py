"""Program counter directives returned by instruction handlers."""

from typing import Union

from chex import dataclass

from chipvm.constants import ADDRESS_MASK, WORD_MASK


@dataclass(frozen=True, mappable_dataclass=False)
class Stay:
    """Leave the program counter where it is."""

    def __str__(self):
        return "Stay"


@dataclass(frozen=True, mappable_dataclass=False)
class Next:
    """Advance to the next instruction."""

    def __str__(self):
        return "Next"


@dataclass(frozen=True, mappable_dataclass=False)
class Skip:
    """Skip over the next instruction."""

    def __str__(self):
        return "Skip"


@dataclass(frozen=True, mappable_dataclass=False)
class Jump:
    """Continue at an absolute address."""
    address: int

    def __str__(self):
        return f"Jump(0x{int(self.address):03X})"


Cursor = Union[Stay, Next, Skip, Jump]

STAY = Stay()
NEXT = Next()
SKIP = Skip()


def advance(pc: int, cursor: Cursor) -> int:
    """Apply a cursor to a program counter value."""
    if isinstance(cursor, Next):
        return (pc + 2) & WORD_MASK
    if isinstance(cursor, Skip):
        return (pc + 4) & WORD_MASK
    if isinstance(cursor, Jump):
        return int(cursor.address) & ADDRESS_MASK
    if isinstance(cursor, Stay):
        return pc
    raise TypeError(f"Not a cursor: {cursor!r}")
