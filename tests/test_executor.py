import threading

import pytest

from elixir_engine.executor import (
    Executor,
    ExecutorNotInitializedError,
    ExecutorOptions,
    Task,
    TaskPriority,
    WaitGroup,
)


def test_default_options():
    options = ExecutorOptions()
    assert options.fiber_pool_size == 400
    assert options.thread_pool_size == 0


def test_init_once():
    executor = Executor()
    assert executor.is_initialized is False
    assert executor.init(ExecutorOptions(thread_pool_size=2)) is True
    assert executor.is_initialized is True
    assert executor.init() is False
    executor.shutdown()
    assert executor.is_initialized is False


def test_add_task_before_init_raises():
    executor = Executor()
    with pytest.raises(ExecutorNotInitializedError):
        executor.add_task(Task(lambda ex, arg: None))


def test_wait_group_before_init_raises():
    with pytest.raises(ExecutorNotInitializedError):
        WaitGroup(Executor())


def test_task_receives_executor_and_arg():
    seen = []
    with Executor() as executor:
        wg = WaitGroup(executor)
        executor.add_task(Task(lambda ex, arg: seen.append((ex, arg)), "Logic"), TaskPriority.NORMAL, wg)
        wg.wait()
        assert seen == [(executor, "Logic")]


def test_add_tasks_all_complete():
    results = []
    lock = threading.Lock()

    def work(ex, arg):
        with lock:
            results.append(arg)

    with Executor() as executor:
        wg = WaitGroup(executor)
        executor.add_tasks([Task(work, i) for i in range(20)], TaskPriority.NORMAL, wg)
        wg.wait()
    assert sorted(results) == list(range(20))


def test_high_priority_runs_first():
    order = []
    gate = threading.Event()
    executor = Executor()
    executor.init(ExecutorOptions(thread_pool_size=1))
    try:
        wg = WaitGroup(executor)
        executor.add_task(Task(lambda ex, arg: gate.wait()), TaskPriority.NORMAL, wg)
        executor.add_task(Task(lambda ex, arg: order.append(arg), "normal"), TaskPriority.NORMAL, wg)
        executor.add_task(Task(lambda ex, arg: order.append(arg), "high"), TaskPriority.HIGH, wg)
        gate.set()
        wg.wait()
    finally:
        executor.shutdown()
    assert order == ["high", "normal"]


def test_failing_task_still_releases_wait_group():
    ran = []

    def fail(ex, arg):
        raise ValueError("boom")

    with Executor() as executor:
        wg = WaitGroup(executor)
        executor.add_tasks([Task(fail), Task(lambda ex, arg: ran.append(True))], TaskPriority.NORMAL, wg)
        wg.wait()
    assert ran == [True]


def test_create_and_join_thread():
    seen = []

    def routine(args):
        seen.append((threading.current_thread().name, args))
        return args * 2

    thread = Executor.create_thread(1048576, routine, 21, "RenderThread")
    assert thread.name == "RenderThread"
    assert Executor.join_thread(thread) is True
    assert seen == [("RenderThread", 21)]
    assert thread.result == 42


def test_shutdown_drains_queued_tasks():
    done = []
    executor = Executor()
    executor.init(ExecutorOptions(thread_pool_size=1))
    executor.add_tasks([Task(lambda ex, arg: done.append(arg), i) for i in range(5)])
    executor.shutdown()
    assert done == [0, 1, 2, 3, 4]