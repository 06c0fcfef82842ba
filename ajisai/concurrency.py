"""Fan-out of independent tasks joined at a single barrier."""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Callable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fan_out(
    tasks: Sequence[Callable[[], T]],
    *,
    cancel_on_error: bool = False,
    max_workers: Optional[int] = None,
) -> list[T]:
    """Run ``tasks`` concurrently and return their results in task order.

    Every task returns its own value; nothing is accumulated into shared
    state. After all tasks settle, the first exception (in completion order)
    is re-raised. By default a failure does not stop sibling tasks. With
    ``cancel_on_error`` the tasks still waiting in the queue are cancelled;
    tasks already running always finish.
    """
    if not tasks:
        return []

    first_error: Optional[BaseException] = None
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures: list[Future[T]] = [executor.submit(task) for task in tasks]
        pending: set[Future[T]] = set(futures)
        while pending:
            done, pending = wait(pending, return_when=FIRST_EXCEPTION)
            for future in done:
                if future.cancelled():
                    continue
                error = future.exception()
                if error is None or first_error is not None:
                    continue
                first_error = error
                if cancel_on_error:
                    cancelled = sum(1 for item in pending if item.cancel())
                    logger.debug("cancelled %d queued task(s) after failure", cancelled)

    if first_error is not None:
        raise first_error
    return [future.result() for future in futures]
