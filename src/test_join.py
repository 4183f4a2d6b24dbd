from itertools import islice

import pytest

from combinv._interface import DEFAULT_CONFIG, Config, ConfigurationError
from combinv._utils.intmath import count_bits
from combinv.join import CombinationJoiner


def test_default_shape():
    joiner = CombinationJoiner()
    assert joiner.size == 11
    assert joiner.pick == 7
    assert joiner.length() == 140
    assert joiner.small.length() == 4
    assert joiner.large.length() == 35


def test_every_output_is_a_single_swap_away():
    masks = list(islice(CombinationJoiner(), 1000))

    assert all(count_bits(m) == 7 for m in masks)
    assert all(m < 1 << 11 for m in masks)
    for a, b in zip(masks, masks[1:]):
        assert count_bits(a ^ b) == 2


def test_first_pass_visits_every_combination():
    joiner = CombinationJoiner()
    masks = list(islice(joiner, joiner.length()))
    assert len(set(masks)) == joiner.length()


def test_small_generator_advances_once_per_large_pass():
    masks = list(islice(CombinationJoiner(), 140))
    high = [m >> 7 for m in masks]
    low = [m & 0x7F for m in masks]

    changes = [i for i in range(1, len(high)) if high[i] != high[i - 1]]
    assert changes == [35, 70, 105]

    # the large generator runs a full pass, then replays it backwards
    assert len(set(low[:35])) == 35
    assert low[35:70] == low[:35][::-1]


@pytest.mark.parametrize(
    "shape", [(4, 2, 3, 3), (2, 2, 5, 2), (3, 1, 5, 3), (5, 2, 6, 3)]
)
def test_other_splits_keep_single_swaps(shape):
    joiner = CombinationJoiner(*shape)
    masks = list(islice(joiner, 4 * joiner.length()))

    assert all(count_bits(m) == joiner.pick for m in masks)
    for a, b in zip(masks, masks[1:]):
        assert count_bits(a ^ b) == 2


def test_from_config():
    joiner = CombinationJoiner.from_config(Config(3, 2, 5, 2))
    assert joiner.size == 8
    assert joiner.pick == 4
    assert joiner.length() == Config(3, 2, 5, 2).combinations == 30
    assert DEFAULT_CONFIG.combinations == 140


def test_single_combination_universe_rejected():
    with pytest.raises(ConfigurationError):
        CombinationJoiner(2, 2, 3, 3)


def test_invalid_sub_generator_rejected():
    with pytest.raises(ConfigurationError):
        CombinationJoiner(4, 0, 7, 4)
