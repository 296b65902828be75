from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")

TOP_N = 20


def assign_ranks(
    scored: Sequence[tuple[T, float]], top_n: int = TOP_N
) -> list[tuple[T, float, int | None]]:
    """Sort (item, score) pairs by descending score and attach dense ranks.

    The first `top_n` get ranks 1..top_n, the rest get None. The sort is
    stable, so equal scores keep their input order.
    """
    ordered = sorted(scored, key=lambda pair: -pair[1])
    return [
        (item, score, i + 1 if i < top_n else None)
        for i, (item, score) in enumerate(ordered)
    ]
