import numpy as np

from ._interface import DEFAULT_CONFIG, Config, ConfigurationError, Mask, Matrix, Step
from ._utils.conversions import mask_to_str
from .index_map import IndexMap
from .join import CombinationJoiner
from .sherman_morrison import all_finite, col_map, replace_row_and_column, row_map


class IncrementalInverseDriver:
    """
    Walks the combinations of a universe matrix and keeps the inverse of the
    current combination matrix up to date.

    Only the first combination is inverted directly. Every later combination
    differs from its predecessor by one item, i.e. one row and one column of
    the combination matrix, and its inverse is obtained with two
    Sherman-Morrison updates.

    Numerical breakdown is not raised: ``succeeded`` turns False as soon as an
    inverse with non-finite entries shows up and stays False.
    """

    def __init__(
        self,
        universe: Matrix,
        joiner: CombinationJoiner | None = None,
        verbose: bool = False,
    ):
        universe = np.asarray(universe, dtype=np.float64)
        if universe.ndim != 2 or universe.shape[0] != universe.shape[1]:
            raise ConfigurationError(
                f"universe must be a square matrix, got shape {universe.shape}"
            )
        if joiner is None:
            joiner = CombinationJoiner()
        if universe.shape[0] != joiner.size:
            raise ConfigurationError(
                f"universe has {universe.shape[0]} items, joiner walks {joiner.size}"
            )

        self.universe = universe
        self.joiner = joiner
        self.verbose = verbose

        self._selected: Mask | None = None
        self._index_map: IndexMap | None = None
        self._combination: Matrix | None = None
        self._inverse: Matrix | None = None
        self._succeeded = True
        self._steps = 0

    def start(self) -> bool:
        """Select the first combination and invert its matrix directly."""
        self._selected = next(self.joiner)
        self._index_map = IndexMap(self.joiner.size, self._selected)
        l2g = self._index_map.local_to_global
        self._combination = self.universe[np.ix_(l2g, l2g)].copy()

        try:
            self._inverse = np.linalg.inv(self._combination)
        except np.linalg.LinAlgError:
            self._inverse = np.full_like(self._combination, np.nan)

        self._succeeded = all_finite(self._inverse)
        self._steps = 0

        if self.verbose:
            print(
                f"[Driver] start selected={mask_to_str(self._selected, self.joiner.size)}"
                f" finite={self._succeeded}"
            )
        return self._succeeded

    def step(self) -> Step:
        """Move to the next combination and update the inverse incrementally."""
        assert self._index_map is not None, "start() must be called before step()"

        selected_next = next(self.joiner)
        removed, added, slot = self._index_map.swap_between(self._selected, selected_next)

        l2g = self._index_map.local_to_global
        new_row = row_map(self.universe, added, l2g)
        new_col = col_map(self.universe, added, l2g)

        self._inverse = replace_row_and_column(
            self._combination, self._inverse, slot, new_row, new_col
        )
        finite = all_finite(self._inverse)
        self._succeeded = self._succeeded and finite
        self._selected = selected_next
        self._steps += 1

        if self.verbose:
            print(
                f"[Driver] step {self._steps}: "
                f"selected={mask_to_str(selected_next, self.joiner.size)} "
                f"-{removed} +{added} slot={slot} finite={finite}"
            )
        return Step(selected_next, removed, added, slot, finite)

    def run(self, iterations: int) -> bool:
        """Invert ``iterations`` consecutive combinations; True if all stayed finite."""
        if iterations < 1:
            raise ConfigurationError(f"iterations must be >= 1, got {iterations}")
        self.start()
        for _ in range(iterations - 1):
            self.step()
        return self._succeeded

    def direct_inverse(self) -> Matrix:
        """Inverse of the current combination computed from scratch."""
        l2g = self._index_map.local_to_global
        return np.linalg.inv(self.universe[np.ix_(l2g, l2g)])

    def max_error(self) -> float:
        """Largest absolute deviation of the cached inverse from direct_inverse()."""
        return float(np.max(np.abs(self._inverse - self.direct_inverse())))

    @property
    def selected(self) -> Mask | None:
        return self._selected

    @property
    def index_map(self) -> IndexMap | None:
        return self._index_map

    @property
    def combination(self) -> Matrix | None:
        return self._combination

    @property
    def inverse(self) -> Matrix | None:
        return self._inverse

    @property
    def succeeded(self) -> bool:
        return self._succeeded

    @property
    def steps(self) -> int:
        return self._steps


def random_universe(
    size: int, rng: np.random.Generator | None = None
) -> Matrix:
    """Dense size x size matrix with entries uniform in [-1, 1)."""
    if rng is None:
        rng = np.random.default_rng()
    return rng.uniform(-1.0, 1.0, (size, size))


def sherman_random(
    config: Config = DEFAULT_CONFIG, rng: np.random.Generator | None = None
) -> bool:
    """
    Inverse of every combination of a random universe: one direct inversion,
    then Sherman-Morrison updates.
    """
    universe = random_universe(config.size, rng)
    driver = IncrementalInverseDriver(universe, CombinationJoiner.from_config(config))
    return driver.run(config.combinations)
