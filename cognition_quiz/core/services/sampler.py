"""Random sampling of questions from a topic pool."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

from cognition_quiz.core.errors import InsufficientPoolError

T = TypeVar("T")


class QuestionSampler:
    """Draws fixed-size, uniformly ordered subsets from a pool."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def set_seed(self, seed: int | None) -> None:
        self._rng.seed(seed)

    def sample(self, pool: Sequence[T], n: int) -> tuple[T, ...]:
        """Return ``n`` distinct pool elements in random order.

        The pool itself is left untouched. ``random.Random.sample`` selects
        without replacement and every ordering of the result is equally likely.
        """
        if n < 0:
            raise ValueError("Sample size must not be negative.")
        if len(pool) < n:
            raise InsufficientPoolError(len(pool), n)
        return tuple(self._rng.sample(list(pool), n))


def sample(pool: Sequence[T], n: int, rng: random.Random | None = None) -> tuple[T, ...]:
    return QuestionSampler(rng).sample(pool, n)
