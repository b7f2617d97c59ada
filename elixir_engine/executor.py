"""A prioritised worker pool for tasks, wait groups and named threads."""

from __future__ import annotations

import itertools
import os
import queue
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

from .logs import core_logger


class ExecutorNotInitializedError(RuntimeError):
    """Raised when an executor is used before it has been initialized."""


class TaskPriority(IntEnum):
    """Scheduling priority; lower values run first."""

    HIGH = 0
    NORMAL = 1


@dataclass(frozen=True)
class Task:
    """A function called as ``function(executor, arg)`` on a worker thread."""

    function: Callable[[Executor, Any], Any]
    arg: Any = None


@dataclass(frozen=True)
class ExecutorOptions:
    """Configuration of an executor.

    ``thread_pool_size`` of 0 means one worker per hardware thread.
    """

    fiber_pool_size: int = 400
    thread_pool_size: int = 0


class Thread:
    """A named operating-system thread started by :meth:`Executor.create_thread`."""

    def __init__(self, name: str, thread: threading.Thread) -> None:
        self._name = name
        self._thread = thread
        self.result: Any = None

    @property
    def name(self) -> str:
        return self._name


class WaitGroup:
    """Counts outstanding tasks and lets callers block until all are done."""

    def __init__(self, executor: Executor) -> None:
        if not executor.is_initialized:
            raise ExecutorNotInitializedError("Executor was not initialized!")
        self._executor = executor
        self._count = 0
        self._condition = threading.Condition()

    def _add(self, count: int) -> None:
        with self._condition:
            self._count += count

    def _done(self) -> None:
        with self._condition:
            self._count -= 1
            if self._count <= 0:
                self._count = 0
                self._condition.notify_all()

    def wait(self, pin_to_current_thread: bool = False) -> None:
        """Block until every task added with this group has finished.

        ``pin_to_current_thread`` is accepted for interface compatibility;
        waiting always happens on the calling thread.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._count == 0)


_STOP_PRIORITY = max(TaskPriority) + 1


class Executor:
    """Runs tasks on a pool of worker threads, higher priority first."""

    _stack_size_lock = threading.Lock()

    def __init__(self) -> None:
        self._initialized = False
        self._options = ExecutorOptions()
        self._queue: queue.PriorityQueue[tuple[int, int, Task | None, WaitGroup | None]] = (
            queue.PriorityQueue()
        )
        self._sequence = itertools.count()
        self._workers: list[threading.Thread] = []

    def init(self, options: ExecutorOptions | None = None) -> bool:
        """Start the worker threads; returns False if already running."""
        if self._initialized:
            return False
        self._options = options or ExecutorOptions()
        count = self._options.thread_pool_size or os.cpu_count() or 1
        self._workers = [
            threading.Thread(target=self._work, name=f"ExecutorWorker-{i}", daemon=True)
            for i in range(count)
        ]
        for worker in self._workers:
            worker.start()
        self._initialized = True
        return True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise ExecutorNotInitializedError("Executor was not initialized!")

    def add_task(
        self,
        task: Task,
        priority: TaskPriority = TaskPriority.NORMAL,
        wait_group: WaitGroup | None = None,
    ) -> None:
        """Queue ``task``; ``wait_group`` is counted down when it finishes."""
        self.add_tasks([task], priority, wait_group)

    def add_tasks(
        self,
        tasks: list[Task],
        priority: TaskPriority = TaskPriority.NORMAL,
        wait_group: WaitGroup | None = None,
    ) -> None:
        """Queue every task in ``tasks`` under one priority and wait group."""
        self._require_initialized()
        tasks = list(tasks)
        if wait_group is not None:
            wait_group._add(len(tasks))
        for task in tasks:
            self._queue.put((int(priority), next(self._sequence), task, wait_group))

    def _work(self) -> None:
        while True:
            _, _, task, wait_group = self._queue.get()
            if task is None:
                return
            try:
                task.function(self, task.arg)
            except Exception:
                core_logger().exception("Task raised an exception")
            finally:
                if wait_group is not None:
                    wait_group._done()

    def shutdown(self) -> None:
        """Finish queued tasks and stop the worker threads."""
        if not self._initialized:
            return
        for _ in self._workers:
            self._queue.put((_STOP_PRIORITY, next(self._sequence), None, None))
        for worker in self._workers:
            worker.join()
        self._workers = []
        self._initialized = False

    def __enter__(self) -> Executor:
        if not self._initialized:
            self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    @staticmethod
    def create_thread(
        stack_size: int,
        routine: Callable[[Any], Any],
        args: Any,
        name: str,
        core_affinity: int | None = None,
    ) -> Thread:
        """Start ``routine(args)`` on a new named thread."""
        handle: Thread

        def run() -> None:
            if core_affinity is not None and hasattr(os, "sched_setaffinity"):
                os.sched_setaffinity(0, {core_affinity})
            handle.result = routine(args)

        with Executor._stack_size_lock:
            previous = threading.stack_size(stack_size)
            try:
                native = threading.Thread(target=run, name=name)
                handle = Thread(name, native)
                native.start()
            finally:
                threading.stack_size(previous)
        return handle

    @staticmethod
    def join_thread(thread: Thread) -> bool:
        """Wait for ``thread`` to finish; returns whether it could be joined."""
        native = thread._thread
        if native is threading.current_thread() or native.ident is None:
            return False
        native.join()
        return not native.is_alive()