"""Unbiased shuffle used for shuffled play orders."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def shuffle_tracks(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a new list holding a uniformly random permutation of ``items``.

    Fisher-Yates: walk from the last index down to 1 and swap each element
    with a uniformly chosen element at an index in ``0..i``. The input is
    never mutated.

    Args:
        items: Sequence to permute.
        rng: Optional random source, for reproducible orders in tests.

    Returns:
        A new list with the same elements in shuffled order.
    """
    randint = rng.randint if rng is not None else random.randint
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
