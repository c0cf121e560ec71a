from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")

log = logging.getLogger(__name__)


@dataclass
class ThreadStats:
    start_ts: float
    tasks_submitted: int = 0
    tasks_completed: int = 0
    tasks_failed: int = 0

    @property
    def uptime_sec(self) -> float:
        return time.time() - self.start_ts

    @property
    def in_flight(self) -> int:
        return max(0, self.tasks_submitted - (self.tasks_completed + self.tasks_failed))


class ThreadManager(Generic[T, R]):
    """
    Bounded thread pool for file-reading work such as batch probing.

    - submit(fn, *args, **kwargs) -> Future
    - map(fn, iterable) -> List[R] in input order
    - at most ``max_queue`` tasks outstanding at once (backpressure on submit)
    - stats() snapshot, context manager support

    Probing is dominated by reading whole files into memory, so threads are
    enough; parsers share no state.
    """

    def __init__(
        self,
        name: str = "probe",
        max_workers: Optional[int] = None,
        max_queue: Optional[int] = None,
        log_exceptions: bool = True,
    ) -> None:
        if max_workers is None:
            n = os.cpu_count() or 4
            max_workers = max(2, min(8, n))

        self._name = name
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)
        self._stats = ThreadStats(start_ts=time.time())
        self._log_exceptions = log_exceptions
        self._slots = threading.Semaphore(max_queue) if max_queue and max_queue > 0 else None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """Shut down the executor. Safe to call multiple times."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)

    def __enter__(self) -> "ThreadManager[T, R]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True, cancel_futures=exc_type is not None)

    def stats(self) -> ThreadStats:
        """Return a *snapshot* of current stats."""
        with self._lock:
            return ThreadStats(
                start_ts=self._stats.start_ts,
                tasks_submitted=self._stats.tasks_submitted,
                tasks_completed=self._stats.tasks_completed,
                tasks_failed=self._stats.tasks_failed,
            )

    def submit(self, fn: Callable[..., R], /, *args, **kwargs) -> Future[R]:
        if self._closed:
            raise RuntimeError(f"{self._name}: submit() after shutdown")

        if self._slots is not None:
            self._slots.acquire()

        def _run(*a, **kw) -> R:
            try:
                return fn(*a, **kw)
            finally:
                if self._slots is not None:
                    self._slots.release()

        with self._lock:
            self._stats.tasks_submitted += 1
        fut: Future[R] = self._executor.submit(_run, *args, **kwargs)
        fut.add_done_callback(self._on_done)
        return fut

    def _on_done(self, fut: Future) -> None:
        exc = fut.exception() if not fut.cancelled() else None
        with self._lock:
            if exc is None and not fut.cancelled():
                self._stats.tasks_completed += 1
            else:
                self._stats.tasks_failed += 1
        if exc is not None and self._log_exceptions:
            log.error("%s task failed: %s", self._name, exc)

    def map(self, fn: Callable[[T], R], iterable: Iterable[T]) -> List[R]:
        """Run ``fn`` over every item; results come back in input order, the first failure re-raises."""
        futures = [self.submit(fn, item) for item in iterable]
        return [f.result() for f in futures]
