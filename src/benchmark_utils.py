import time
from typing import Iterable, NamedTuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from tqdm import tqdm

from combinv._interface import DEFAULT_CONFIG, Config, ConfigurationError, Variant
from combinv.join import CombinationJoiner
from combinv.sherman import IncrementalInverseDriver, random_universe


class Benchmark(NamedTuple):
    name: str
    func: Variant


class Timing(NamedTuple):
    seconds: float
    completed: int  # invocations that ran, including a failing last one
    succeeded: bool


def time_func(func: Variant, iterations: int, progress: bool = True) -> Timing:
    """
    Time up to ``iterations`` calls of ``func``, stopping at the first call
    that reports failure.
    """
    if iterations < 1:
        raise ConfigurationError(f"iterations must be >= 1, got {iterations}")

    completed = 0
    succeeded = True
    desc = getattr(func, "__name__", type(func).__name__)
    with tqdm(total=iterations, desc=desc, disable=not progress, leave=False) as pbar:
        start = time.perf_counter()
        for _ in range(iterations):
            completed += 1
            if not func():
                succeeded = False
                break
            pbar.update(1)
        end = time.perf_counter()

    return Timing(end - start, completed, succeeded)


def run_benchmarks(
    benchmarks: Iterable[Benchmark], iterations: int, progress: bool = True
) -> pd.DataFrame:
    """Time every benchmark and print one line per entry."""
    rows = []
    for benchmark in benchmarks:
        timing = time_func(benchmark.func, iterations, progress)
        line = f"{benchmark.name:<30}{timing.seconds:.5f}s"
        if not timing.succeeded:
            line += f"  FAILED after {timing.completed} calls"
        print(line)
        rows.append(
            {
                "name": benchmark.name,
                "seconds": timing.seconds,
                "completed": timing.completed,
                "succeeded": timing.succeeded,
                "per_call": timing.seconds / timing.completed,
            }
        )

    return pd.DataFrame(
        rows, columns=["name", "seconds", "completed", "succeeded", "per_call"]
    )


def verify_incremental(
    config: Config = DEFAULT_CONFIG,
    steps: int | None = None,
    rng: np.random.Generator | None = None,
    universe: np.ndarray | None = None,
) -> pd.Series:
    """
    Walk ``steps`` combinations and compare the incrementally updated inverse
    with a direct inversion at every one of them.

    Returns the max absolute error per combination, indexed by step number.
    """
    if steps is None:
        steps = config.combinations
    if universe is None:
        universe = random_universe(config.size, rng)

    driver = IncrementalInverseDriver(universe, CombinationJoiner.from_config(config))
    driver.start()
    errors = [driver.max_error()]
    for _ in range(steps - 1):
        driver.step()
        errors.append(driver.max_error())

    return pd.Series(errors, name="max_error", dtype=float).rename_axis("step")


def timings_figure(df: pd.DataFrame) -> go.Figure:
    fig = go.Figure()

    colors = ["steelblue" if ok else "firebrick" for ok in df["succeeded"]]
    fig.add_trace(
        go.Bar(
            x=df["name"],
            y=df["seconds"],
            name="elapsed",
            marker_color=colors,
            text=[f"{s:.3f}s" for s in df["seconds"]],
            textposition="outside",
        )
    )

    fig.update_layout(
        title="Combination inverse benchmarks",
        xaxis_title="approach",
        yaxis_title="wall-clock seconds",
        template="plotly_white",
    )
    return fig


def render_timings(df: pd.DataFrame) -> None:
    if df is None or df.empty:
        print("Nothing to plot.")
        return

    timings_figure(df).show()
