import pytest

from apps.movies.services.roulette import pick_index, spin


def test_pick_index_empty_list_raises():
    with pytest.raises(ValueError):
        pick_index([])


def test_same_seed_same_pick():
    candidates = list('abcdefgh')
    first = pick_index(candidates, seed=42)
    for _ in range(10):
        assert pick_index(candidates, seed=42) == first


def test_pick_stays_in_range():
    candidates = list('abc')
    for seed in range(50):
        assert 0 <= pick_index(candidates, seed=seed) < 3


def test_excluded_index_is_never_picked():
    candidates = list('abcd')
    for seed in range(200):
        assert pick_index(candidates, seed=seed, exclude=2) != 2


def test_exclude_with_two_candidates_returns_the_other():
    for seed in range(20):
        assert pick_index(['x', 'y'], seed=seed, exclude=0) == 1


def test_exclude_ignored_for_single_candidate():
    assert pick_index(['only'], seed=1, exclude=0) == 0


def test_exclude_out_of_range_is_ignored():
    candidates = list('abc')
    assert pick_index(candidates, seed=7, exclude=10) == pick_index(candidates, seed=7)


def test_spin_returns_item():
    items = ['Alien', 'Heat', 'Ran']
    assert spin(items, seed=3) == items[pick_index(items, seed=3)]
