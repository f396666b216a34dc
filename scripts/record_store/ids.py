"""Collision-free record id allocation."""

from __future__ import annotations

import random
from typing import Callable, Iterable

from .record import U32_MAX

# Log a warning every N consecutive collisions.
RETRY_LOG_INTERVAL = 1000


def generate_id(
    existing_ids: Iterable[int],
    rng: random.Random | None = None,
    log: Callable[[str], None] | None = None,
) -> int:
    """Return a uniformly drawn u32 that is not in ``existing_ids``.

    Rejection sampling over the full 0..2**32-1 range. There is no retry
    bound; a collection large enough to make collisions common is logged
    every ``RETRY_LOG_INTERVAL`` attempts to ``log`` when one is given.
    """
    taken = existing_ids if isinstance(existing_ids, (set, frozenset)) else set(existing_ids)
    if len(taken) > U32_MAX:
        raise ValueError("id space exhausted")
    rng = rng or random.SystemRandom()

    attempts = 0
    while True:
        candidate = rng.randint(0, U32_MAX)
        if candidate not in taken:
            return candidate
        attempts += 1
        if log is not None and attempts % RETRY_LOG_INTERVAL == 0:
            log(f"WARNING: id generation collided {attempts} times ({len(taken)} ids in use)")
