"""
Random sampling for dream discovery.

PostgREST cannot order by random(), so the random-dream queries page through
the whole eligible candidate pool and draw from it here. The draw is a uniform
sample without replacement: every eligible row has the same chance of being
picked and no row is excluded for being old. The price is transferring every
eligible row on each call.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def sample_rows(
    rows: Sequence[T],
    count: int,
    rng: Optional[random.Random] = None,
) -> List[T]:
    """
    Draw up to `count` distinct rows uniformly at random.

    Args:
        rows: Candidate pool.
        count: Maximum number of rows to return.
        rng: Random source; the module-level generator when omitted.

    Returns:
        min(count, len(rows)) rows in random order.
    """
    if count <= 0 or not rows:
        return []
    rng = rng or random
    return rng.sample(list(rows), min(count, len(rows)))
