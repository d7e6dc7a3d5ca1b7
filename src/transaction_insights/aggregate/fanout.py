"""Run independent read tasks concurrently and wait for all of them.

Each task is a zero-argument callable (usually a closure over a collection
and a filter). Tasks are wrapped with `dask.delayed` and computed together
on the threaded scheduler; the first exception raised by any task
propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from dask import compute, delayed  # type: ignore[attr-defined]

log = logging.getLogger(__name__)


def fan_out(*tasks: Callable[[], Any]) -> tuple[Any, ...]:
    """Execute `tasks` concurrently and return their results in order."""
    if not tasks:
        return ()
    log.debug("Fanning out %d read tasks", len(tasks))
    jobs = [delayed(task, pure=False)() for task in tasks]
    return tuple(compute(*jobs, scheduler="threads"))
