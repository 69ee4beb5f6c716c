"""Single-threaded popup scheduler."""
from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class SchedulerClosed(RuntimeError):
    """Raised when work is posted to a scheduler that is not running."""


class ScheduledTask:
    __slots__ = ("callback", "due", "cancelled")

    def __init__(self, callback: Callable[[], Any], due: float) -> None:
        self.callback = callback
        self.due = due
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"<ScheduledTask {name} due={self.due:.3f} cancelled={self.cancelled}>"


class SerialScheduler:
    """Runs posted callbacks one at a time on a dedicated daemon thread.

    Immediate posts run in FIFO order; delayed posts run once their due time
    has passed, interleaved with immediate work by due time. A callback that
    raises is logged and the loop carries on.
    """

    def __init__(self, name: str = "popup-scheduler") -> None:
        self._name = name
        self._cond = threading.Condition()
        self._queue: list[tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()
        self._thread: Optional[threading.Thread] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._cond:
            if self._running:
                return
            self._running = True
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        with self._cond:
            self._running = False
            self._queue.clear()
            self._cond.notify_all()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def in_scheduler_thread(self) -> bool:
        return self._thread is not None and threading.current_thread() is self._thread

    def post(self, callback: Callable[[], Any]) -> ScheduledTask:
        return self.post_delayed(callback, 0.0)

    def post_delayed(self, callback: Callable[[], Any], delay: float) -> ScheduledTask:
        task = ScheduledTask(callback, time.monotonic() + max(0.0, delay))
        with self._cond:
            if not self._running:
                raise SchedulerClosed(f"{self._name} is not running")
            heapq.heappush(self._queue, (task.due, next(self._counter), task))
            self._cond.notify()
        return task

    def call(self, callback: Callable[[], Any], timeout: Optional[float] = None) -> Any:
        """Run ``callback`` on the scheduler thread and return its result."""
        if self.in_scheduler_thread():
            return callback()

        done = threading.Event()
        outcome: dict[str, Any] = {}

        def run() -> None:
            try:
                outcome["result"] = callback()
            except BaseException as exc:
                outcome["error"] = exc
            finally:
                done.set()

        self.post(run)
        if not done.wait(timeout):
            raise TimeoutError(f"{self._name} did not run the call within {timeout}s")
        if "error" in outcome:
            raise outcome["error"]
        return outcome.get("result")

    def _next_task(self) -> Optional[ScheduledTask]:
        with self._cond:
            while self._running:
                if not self._queue:
                    self._cond.wait()
                    continue
                due, _, task = self._queue[0]
                if task.cancelled:
                    heapq.heappop(self._queue)
                    continue
                remaining = due - time.monotonic()
                if remaining <= 0:
                    heapq.heappop(self._queue)
                    return task
                self._cond.wait(remaining)
            return None

    def _run(self) -> None:
        logger.debug("%s started", self._name)
        while True:
            task = self._next_task()
            if task is None:
                break
            try:
                task.callback()
            except Exception:
                logger.exception("Scheduled task %r failed", task)
        logger.debug("%s stopped", self._name)


__all__ = ["SchedulerClosed", "ScheduledTask", "SerialScheduler"]
