from typing import Callable, NamedTuple

import numpy as np
from numpy.typing import NDArray

from ._utils.intmath import binomial


Matrix = NDArray[np.float64]  # dense, square
Vector = NDArray[np.float64]
IndexArray = NDArray[np.intp]

Mask = int  # bit i set <=> item i selected

Variant = Callable[[], bool]  # one benchmark invocation, returns success flag


class ConfigurationError(ValueError):
    """Invalid sizes or picks, rejected at construction."""


class Config(NamedTuple):
    small_size: int = 4
    small_pick: int = 3
    large_size: int = 7
    large_pick: int = 4

    @property
    def size(self) -> int:
        return self.small_size + self.large_size

    @property
    def pick(self) -> int:
        return self.small_pick + self.large_pick

    @property
    def combinations(self) -> int:
        # one full pass of the small generator over every large pass
        return binomial(self.small_size, self.small_pick) * binomial(
            self.large_size, self.large_pick
        )


DEFAULT_CONFIG = Config()


class Swap(NamedTuple):
    removed: int  # global index leaving the selection
    added: int  # global index entering it
    slot: int  # local index both occupy


class Step(NamedTuple):
    mask: Mask
    removed: int
    added: int
    slot: int
    finite: bool
