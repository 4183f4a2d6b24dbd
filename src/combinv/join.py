from typing import Iterator

from ._interface import Config, ConfigurationError, Mask
from .gray import FixedWeightGrayGenerator


class CombinationJoiner:
    """
    Joins two Gray code combination generators over disjoint parts of one
    universe so that only one item is replaced from one selection to the next.

    The small generator owns the high bits, the large one the low bits. The
    large generator advances on every call; the small one advances once per
    large pass, which is exactly the call on which the large generator stalls
    at a turning point. When both stall together the repeated selection is
    skipped.
    """

    def __init__(
        self,
        small_size: int = 4,
        small_pick: int = 3,
        large_size: int = 7,
        large_pick: int = 4,
    ):
        self._small = FixedWeightGrayGenerator(small_size, small_pick)
        self._large = FixedWeightGrayGenerator(large_size, large_pick)

        if self._small.length() * self._large.length() == 1:
            raise ConfigurationError(
                f"only one combination of {self.pick} in {self.size}; nothing to walk"
            )

        self._count = 0
        self._last: Mask | None = None

    @classmethod
    def from_config(cls, config: Config) -> "CombinationJoiner":
        return cls(
            config.small_size, config.small_pick, config.large_size, config.large_pick
        )

    def _step(self) -> Mask:
        mask = self._small.value() << self._large.size | self._large.value()
        self._count += 1
        if self._count % self._large.length() == 0:
            self._small.advance()
        self._large.advance()
        return mask

    def __next__(self) -> Mask:
        mask = self._step()
        while mask == self._last:
            mask = self._step()
        self._last = mask
        return mask

    def __iter__(self) -> Iterator[Mask]:
        return self

    def length(self) -> int:
        """Number of distinct combinations reachable by the walk."""
        return self._small.length() * self._large.length()

    @property
    def size(self) -> int:
        return self._small.size + self._large.size

    @property
    def pick(self) -> int:
        return self._small.pick + self._large.pick

    @property
    def small(self) -> FixedWeightGrayGenerator:
        return self._small

    @property
    def large(self) -> FixedWeightGrayGenerator:
        return self._large
