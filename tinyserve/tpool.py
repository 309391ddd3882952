"""A small task queue drained by a background worker thread."""

from __future__ import annotations

import threading
import traceback
from collections import deque
from typing import Callable, Deque

__all__ = ["CLIENTS_MAX_CAPACITY", "ThreadPool"]

CLIENTS_MAX_CAPACITY = 25

Task = Callable[[], None]


class ThreadPool:
    """Runs queued callables in submission order on a worker thread.

    ``worker_capacity`` is recorded for callers that bound how much work they
    hand over; the queue itself is drained by a single worker.
    """

    def __init__(self, worker_capacity: int = CLIENTS_MAX_CAPACITY) -> None:
        self.worker_capacity = worker_capacity
        self._tasks: Deque[Task] = deque()
        self._condition = threading.Condition()
        self._stopping = False
        self._workers = [threading.Thread(target=self._work, daemon=True)]
        for worker in self._workers:
            worker.start()

    def _work(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._tasks or self._stopping)
                if self._stopping and not self._tasks:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception:
                traceback.print_exc()

    def add_task(self, task: Task) -> None:
        """Queue ``task`` to be run by the worker."""
        with self._condition:
            if self._stopping:
                raise RuntimeError("cannot add tasks to a pool that is shut down")
            self._tasks.append(task)
        with self._condition:
            self._condition.notify()

    def active_tasks_count(self) -> int:
        """Return the number of tasks waiting in the queue."""
        with self._condition:
            return len(self._tasks)

    def shutdown(self) -> None:
        """Stop accepting tasks, run what is queued and join the worker."""
        with self._condition:
            self._stopping = True
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()