"""
Random pick over a candidate list.
"""
import random


def pick_index(candidates, seed=None, exclude=None):
    """
    Choose an index into *candidates* uniformly at random.

    The choice depends only on the candidates and *seed*: the same pair
    always yields the same index. When *exclude* is given and there is more
    than one candidate, that index is never returned.

    Raises
    ------
    ValueError
        If *candidates* is empty.
    """
    count = len(candidates)
    if count == 0:
        raise ValueError('Cannot pick from an empty list.')

    rng = random.Random(seed)
    if exclude is None or count == 1 or not 0 <= exclude < count:
        return rng.randrange(count)

    index = rng.randrange(count - 1)
    return index + 1 if index >= exclude else index


def spin(items, seed=None, exclude=None):
    """Return the item picked by :func:`pick_index`."""
    return items[pick_index(items, seed=seed, exclude=exclude)]
