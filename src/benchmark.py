from benchmark_utils import Benchmark, render_timings, run_benchmarks
from combinv._interface import DEFAULT_CONFIG
from combinv.direct import ParallelDirect, direct_random
from combinv.sherman import sherman_random

ITERATIONS = 10000


def main() -> None:
    with ParallelDirect(DEFAULT_CONFIG) as direct_random_parallel:
        benchmarks = [
            Benchmark("direct_random", direct_random),
            Benchmark("direct_random_parallel", direct_random_parallel),
            Benchmark("sherman_random", sherman_random),
        ]
        df = run_benchmarks(benchmarks, ITERATIONS)

    render_timings(df)


# Possible improvements:
#
# * Split the Sherman-Morrison walk across processes, each starting from its
#   own direct inversion so no worker depends on another.
#
# * The combination matrix splits into 4x4 and 3x3 diagonal blocks with closed
#   form inverses; one block is unchanged between neighbouring combinations.

if __name__ == "__main__":
    main()
