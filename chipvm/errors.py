"""CHIP-8 interpreter errors."""


class Chip8Error(Exception):
    """Base error for interpreter failures."""


class DecodeFailure(Chip8Error):
    """Raised when an instruction word has no defined operation."""

    def __init__(self, nibbles: tuple[int, int, int, int]):
        self.nibbles = tuple(int(n) for n in nibbles)
        word = (self.nibbles[0] << 12) | (self.nibbles[1] << 8) | (self.nibbles[2] << 4) | self.nibbles[3]
        super().__init__(
            "invalid instruction ({:x}, {:x}, {:x}, {:x}) = 0x{:04X}".format(*self.nibbles, word)
        )


class StackError(Chip8Error):
    """Base error for subroutine stack misuse."""


class StackOverflow(StackError):
    """Raised when calling a subroutine with a full stack."""


class StackUnderflow(StackError):
    """Raised when returning from a subroutine with an empty stack."""


class KeyIndexError(Chip8Error, ValueError):
    """Raised when a key event names a key outside 0x0-0xF."""


class AddressError(Chip8Error, IndexError):
    """Raised when the program counter cannot address a full instruction word."""
