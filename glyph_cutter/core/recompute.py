"""Background recomputation with last-request-wins delivery.

Each submit() starts a new generation and runs the computation on a worker
thread. Computations are never interrupted; when one finishes after a newer
request was submitted its result is dropped instead of delivered. Requests
are immutable snapshots and every computation allocates its own buffers, so
only the generation counter and delivery are locked.
The pool size defaults to GLYPH_TOOL_WORKERS.

Example:
    with Recomputer(compute, on_result=show) as rc:
        rc.submit(Request(raster, rules))
        rc.submit(Request(raster, edited_rules))  # the first result is discarded
"""

from __future__ import annotations

import concurrent.futures
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from glyph_cutter.core.env import load_settings
from glyph_cutter.core.pipeline import compute as compute_request


@dataclass(frozen=True)
class Outcome:
    generation: int
    result: Any
    current: bool


class Recomputer:
    def __init__(
        self,
        compute: Callable[[Any], Any] = compute_request,
        on_result: Callable[[Any], None] | None = None,
        max_workers: int | None = None,
    ):
        if max_workers is None:
            max_workers = load_settings().workers
        self._compute = compute
        self._on_result = on_result
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)
        self._lock = threading.Lock()
        self._deliver_lock = threading.Lock()
        self._generation = 0
        self._latest: Any = None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def latest(self) -> Any:
        """Most recent result that was still current when it finished."""
        with self._lock:
            return self._latest

    def submit(self, request: Any) -> concurrent.futures.Future:
        with self._lock:
            self._generation += 1
            generation = self._generation
        return self._executor.submit(self._run, generation, request)

    def _run(self, generation: int, request: Any) -> Outcome:
        result = self._compute(request)
        # Check and callback together so a stale result can never be
        # delivered after a newer one.
        with self._deliver_lock:
            with self._lock:
                current = generation == self._generation
                if current:
                    self._latest = result
            if current and self._on_result is not None:
                self._on_result(result)
        return Outcome(generation=generation, result=result, current=current)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> Recomputer:
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
