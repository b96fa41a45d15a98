"""Dataset helpers: normalisation and paired shuffling."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")
U = TypeVar("U")


def normalize(rows: Iterable[Sequence[float]]) -> list[list[float]]:
    """Return the rows as floats divided by their global maximum.

    If no value exceeds zero the rows are returned as floats unchanged.
    """
    data = [[float(value) for value in row] for row in rows]
    max_value = max((value for row in data for value in row), default=0.0)
    if max_value <= 0:
        return data
    return [[value / max_value for value in row] for row in data]


def shuffle_training_data(
    images: list[T], labels: list[U], rng: random.Random | None = None
) -> None:
    """Shuffle images and labels in place with the same permutation."""
    if len(images) != len(labels):
        raise ValueError("images and labels differ in length")
    rng = rng if rng is not None else random.Random()
    order = list(range(len(images)))
    rng.shuffle(order)
    images[:] = [images[k] for k in order]
    labels[:] = [labels[k] for k in order]