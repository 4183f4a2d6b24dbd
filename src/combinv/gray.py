from enum import Enum
from typing import Iterator

from ._interface import ConfigurationError, Mask
from ._utils.conversions import gray
from ._utils.intmath import binomial, count_bits


class Direction(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


class FixedWeightGrayGenerator:
    """
    Gray code sequence over ``size`` bits restricted to values with exactly
    ``pick`` bits set.

    Consecutive distinct values differ in two bits: one item of the
    combination is replaced by another. After the last value the sequence is
    replayed in reverse, then forward again, forever. Each change of
    direction is a stall: ``advance()`` flips the direction and leaves the
    value unchanged, so one period is ``2 * length()`` advances.

    For size=4, pick=3 one period reads:

        0111 1101 1110 1011 | 1011 1110 1101 0111 | 0111 1101 ...
    """

    def __init__(self, size: int, pick: int):
        if size < 1:
            raise ConfigurationError(f"size must be >= 1, got {size}")
        if not 1 <= pick <= size:
            raise ConfigurationError(f"pick must be in [1, {size}], got {pick}")

        self._size = size
        self._pick = pick
        self._direction = Direction.FORWARD
        self._cursor = 0
        self._length = binomial(size, pick)

        # cursor 0 has no bits set; step onto the first legal value
        self.advance()

    def advance(self) -> None:
        """Move to the next value; a direction flip keeps the current one."""
        cursor = self._cursor
        if self._direction is Direction.REVERSE:
            while True:
                cursor -= 1
                if cursor == 0:
                    self._direction = Direction.FORWARD
                    break
                if count_bits(gray(cursor)) == self._pick:
                    self._cursor = cursor
                    break
        else:
            end = 1 << self._size
            while True:
                cursor += 1
                if cursor == end:
                    self._direction = Direction.REVERSE
                    break
                if count_bits(gray(cursor)) == self._pick:
                    self._cursor = cursor
                    break

    def value(self) -> Mask:
        """The current combination."""
        return gray(self._cursor)

    def length(self) -> int:
        """Number of distinct combinations, C(size, pick)."""
        return self._length

    @property
    def size(self) -> int:
        return self._size

    @property
    def pick(self) -> int:
        return self._pick

    @property
    def direction(self) -> Direction:
        return self._direction

    def __iter__(self) -> Iterator[Mask]:
        while True:
            yield self.value()
            self.advance()

    def __repr__(self) -> str:
        return (
            f"FixedWeightGrayGenerator(size={self._size}, pick={self._pick}, "
            f"value={self.value():0{self._size}b}, direction={self._direction.value})"
        )
