from __future__ import annotations

import time
from typing import Callable


def await_condition(
    predicate: Callable[[], bool],
    timeout: float,
    poll_interval: float = 0.05,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll ``predicate`` until it is truthy or ``timeout`` seconds have passed.

    The predicate is evaluated at least once. Sleeps never extend past the
    deadline, so ``timeout`` is an upper bound on the time spent waiting
    (plus the cost of the last predicate call).
    """
    deadline = clock() + max(0.0, timeout)
    while True:
        if predicate():
            return True
        now = clock()
        if now >= deadline:
            return False
        sleep(min(poll_interval, deadline - now))
