from __future__ import annotations

from typing import Callable, List, Optional


class ScheduledTask:
    def __init__(self, due_ms: float, seq: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self.callback: Optional[Callable[[], None]] = callback
        self.cancelled = False
        self.done = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> None:
        if self.pending:
            self.cancelled = True
            self.callback = None


class Scheduler:
    """Runs callbacks after a delay. Hosts decide how time passes."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """Scheduler driven by a virtual clock.

    Nothing runs until the owner calls `advance()` (a game loop passing its
    frame time, a test, an environment step) or `run_pending()`. Due tasks run
    in due-time order, and tasks due at the same time run in the order they
    were scheduled.
    """

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._tasks: List[ScheduledTask] = []
        self._seq = 0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        task = ScheduledTask(self.now_ms + delay_ms, self._seq, callback)
        self._seq += 1
        self._tasks.append(task)
        return task

    def pending_count(self) -> int:
        return sum(1 for task in self._tasks if task.pending)

    def advance(self, ms: float) -> int:
        """Move the clock forward by `ms` and run whatever became due."""
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        target = self.now_ms + ms
        ran = 0
        while True:
            task = self._next_due(target)
            if task is None:
                break
            # Callbacks may schedule more work; keep the clock at the task's time
            self.now_ms = max(self.now_ms, task.due_ms)
            self._run(task)
            ran += 1
        self.now_ms = target
        self._tasks = [task for task in self._tasks if task.pending]
        return ran

    def run_pending(self) -> int:
        """Run every pending task now, jumping the clock as needed."""
        ran = 0
        while True:
            pending = [task for task in self._tasks if task.pending]
            if not pending:
                break
            latest = max(task.due_ms for task in pending)
            ran += self.advance(max(0.0, latest - self.now_ms))
        return ran

    def _next_due(self, limit_ms: float) -> Optional[ScheduledTask]:
        due = [task for task in self._tasks if task.pending and task.due_ms <= limit_ms]
        if not due:
            return None
        return min(due, key=lambda task: (task.due_ms, task.seq))

    @staticmethod
    def _run(task: ScheduledTask) -> None:
        callback = task.callback
        task.done = True
        task.callback = None
        if callback is not None:
            callback()
