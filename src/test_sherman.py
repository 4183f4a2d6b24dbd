import numpy as np
import pytest

from combinv._interface import Config, ConfigurationError
from combinv.join import CombinationJoiner
from combinv.sherman import IncrementalInverseDriver, random_universe, sherman_random


def dominant_universe(size, seed=3):
    # principal submatrices of a diagonally dominant matrix are well conditioned
    rng = np.random.default_rng(seed)
    return random_universe(size, rng) + size * np.eye(size)


def test_tracks_direct_inverse_at_every_step():
    driver = IncrementalInverseDriver(dominant_universe(11))
    driver.start()
    assert driver.max_error() < 1e-8

    for _ in range(300):
        driver.step()
        assert driver.max_error() < 1e-8
        assert driver.index_map.is_consistent()

    assert driver.succeeded
    assert driver.steps == 300


def test_combination_matrix_follows_selection():
    universe = dominant_universe(11)
    driver = IncrementalInverseDriver(universe)
    driver.start()
    for _ in range(50):
        driver.step()

    l2g = driver.index_map.local_to_global
    np.testing.assert_array_equal(driver.combination, universe[np.ix_(l2g, l2g)])
    assert driver.index_map.mask() == driver.selected


def test_first_step_swaps_one_item():
    driver = IncrementalInverseDriver(dominant_universe(11))
    driver.start()
    first = driver.selected

    step = driver.step()
    index_map = driver.index_map

    assert step.removed != step.added
    assert step.finite
    assert first >> step.removed & 1 and not first >> step.added & 1
    assert step.mask == driver.selected
    assert index_map.local_to_global[index_map.global_to_local[step.added]] == step.added
    assert index_map.global_to_local[step.removed] == -1
    assert index_map.global_to_local[step.added] == step.slot


def test_run_other_split():
    config = Config(3, 2, 5, 3)
    joiner = CombinationJoiner.from_config(config)
    driver = IncrementalInverseDriver(dominant_universe(config.size), joiner)

    assert driver.run(3 * config.combinations)
    assert driver.steps == 3 * config.combinations - 1
    assert driver.max_error() < 1e-8


def test_singular_step_is_flagged_not_raised():
    scout = IncrementalInverseDriver(np.eye(11))
    scout.start()
    added = scout.step().added

    # swapping in an item with an all-zero row and column makes the matrix singular
    universe = np.eye(11)
    universe[added, added] = 0.0
    driver = IncrementalInverseDriver(universe)

    assert driver.start()
    step = driver.step()
    assert not step.finite
    assert not driver.succeeded

    for _ in range(5):
        driver.step()
    assert not driver.succeeded


def test_singular_start_is_flagged():
    driver = IncrementalInverseDriver(np.zeros((11, 11)))
    assert not driver.run(4)
    assert np.isnan(driver.inverse).all()


def test_rejects_mismatched_universe():
    with pytest.raises(ConfigurationError):
        IncrementalInverseDriver(np.eye(10))
    with pytest.raises(ConfigurationError):
        IncrementalInverseDriver(np.ones((11, 7)))
    with pytest.raises(ConfigurationError):
        IncrementalInverseDriver(np.eye(11)).run(0)


def test_verbose_trace(capsys):
    driver = IncrementalInverseDriver(dominant_universe(11), verbose=True)
    driver.run(3)

    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("[Driver] start selected=")
    assert out[1].startswith("[Driver] step 1: ")
    assert len(out) == 3


def test_sherman_random_returns_flag():
    assert isinstance(sherman_random(rng=np.random.default_rng(0)), bool)
