import multiprocessing as mp

import numpy as np

from ._interface import DEFAULT_CONFIG, Config, ConfigurationError
from .sherman_morrison import all_finite


def _invert_random(size: int, count: int, rng: np.random.Generator) -> bool:
    """Directly invert ``count`` fresh random size x size matrices."""
    success = True
    for _ in range(count):
        matrix = rng.uniform(-1.0, 1.0, (size, size))
        try:
            inverse = np.linalg.inv(matrix)
        except np.linalg.LinAlgError:
            success = False
            continue
        success = success and all_finite(inverse)
    return success


def direct_random(
    config: Config = DEFAULT_CONFIG, rng: np.random.Generator | None = None
) -> bool:
    """
    Naive single process approach: invert one matrix per combination, from
    scratch, with no reuse between combinations.
    """
    if rng is None:
        rng = np.random.default_rng()
    return _invert_random(config.pick, config.combinations, rng)


def _direct_chunk(args: tuple[int, int, np.random.SeedSequence]) -> bool:
    size, count, seed = args
    return _invert_random(size, count, np.random.default_rng(seed))


def split_passes(total: int, parts: int) -> list[int]:
    """Split ``total`` iterations into at most ``parts`` non-empty contiguous chunks."""
    base, remainder = divmod(total, parts)
    chunks = [base + (1 if i < remainder else 0) for i in range(parts)]
    return [c for c in chunks if c > 0]


class ParallelDirect:
    """
    The direct approach spread over worker processes. Combinations are
    independent, so each worker inverts its own chunk and the per-worker
    success flags are reduced with logical AND.

    The pool is created once and reused across calls:

        with ParallelDirect(config) as variant:
            ok = variant()
    """

    def __init__(
        self,
        config: Config = DEFAULT_CONFIG,
        processes: int | None = None,
        seed: int | None = None,
    ):
        if processes is None:
            processes = min(mp.cpu_count() or 1, config.combinations)
        if processes < 1:
            raise ConfigurationError(f"processes must be >= 1, got {processes}")

        self.config = config
        self.processes = processes
        self._chunks = split_passes(config.combinations, processes)
        self._seeds = np.random.SeedSequence(seed)

        ctx = mp.get_context("spawn")
        self._pool = ctx.Pool(processes=len(self._chunks))

    def __call__(self) -> bool:
        seeds = self._seeds.spawn(len(self._chunks))
        jobs = [
            (self.config.pick, count, seed) for count, seed in zip(self._chunks, seeds)
        ]
        return all(self._pool.map(_direct_chunk, jobs))

    def close(self) -> None:
        self._pool.terminate()
        self._pool.join()

    def __enter__(self) -> "ParallelDirect":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
