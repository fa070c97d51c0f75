"""Tests for unified_runner.execution.worker - ordered per-thread execution."""

import asyncio

import pytest

from unified_runner.execution.worker import WorkerThread, WorkerThreadError
from unified_runner.models import Operation


def _op(name: str) -> Operation:
    return Operation.model_validate({"name": name, "object": "collection0"})


class Recorder:
    """Executor stub that records operation names, optionally failing some."""

    def __init__(self, fail: set[str] | None = None, delay: float = 0.0):
        self.executed: list[str] = []
        self.fail = fail or set()
        self.delay = delay

    async def __call__(self, operation: Operation) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.executed.append(operation.name)
        if operation.name in self.fail:
            raise RuntimeError(f"{operation.name} exploded")


class TestWorkerThread:
    @pytest.mark.asyncio
    async def test_runs_operations_in_submission_order(self):
        recorder = Recorder(delay=0.001)
        worker = WorkerThread("thread0", recorder)
        worker.start()
        for name in ["insertOne", "find", "deleteOne"]:
            worker.submit(_op(name))
        await worker.wait_until_idle()
        assert recorder.executed == ["insertOne", "find", "deleteOne"]
        await worker.stop()

    @pytest.mark.asyncio
    async def test_stop_drains_queued_operations(self):
        recorder = Recorder()
        worker = WorkerThread("thread0", recorder)
        worker.start()
        worker.submit(_op("a"))
        worker.submit(_op("b"))
        await worker.stop()
        assert recorder.executed == ["a", "b"]
        assert worker.running is False

    @pytest.mark.asyncio
    async def test_failures_are_recorded_and_do_not_stop_worker(self):
        recorder = Recorder(fail={"bad"})
        worker = WorkerThread("thread0", recorder)
        worker.start()
        worker.submit(_op("bad"))
        worker.submit(_op("good"))
        await worker.stop()
        assert recorder.executed == ["bad", "good"]
        assert len(worker.failures) == 1
        operation, exc = worker.failures[0]
        assert operation.name == "bad"
        assert isinstance(exc, RuntimeError)

    @pytest.mark.asyncio
    async def test_raise_if_failed(self):
        worker = WorkerThread("thread0", Recorder(fail={"bad"}))
        worker.start()
        worker.submit(_op("bad"))
        await worker.stop()
        with pytest.raises(WorkerThreadError, match="thread 'thread0': operation 'bad'"):
            worker.raise_if_failed()

    @pytest.mark.asyncio
    async def test_raise_if_failed_noop_without_failures(self):
        worker = WorkerThread("thread0", Recorder())
        worker.start()
        worker.submit(_op("ok"))
        await worker.stop()
        worker.raise_if_failed()

    @pytest.mark.asyncio
    async def test_submit_requires_running_worker(self):
        worker = WorkerThread("thread0", Recorder())
        with pytest.raises(RuntimeError, match="not running"):
            worker.submit(_op("a"))

    @pytest.mark.asyncio
    async def test_start_twice_rejected(self):
        worker = WorkerThread("thread0", Recorder())
        worker.start()
        with pytest.raises(RuntimeError, match="already started"):
            worker.start()
        await worker.stop()

    @pytest.mark.asyncio
    async def test_second_stop_returns_immediately(self):
        worker = WorkerThread("thread0", Recorder())
        worker.start()
        await worker.stop()
        await asyncio.wait_for(worker.stop(), 1)
        assert worker.running is False

    @pytest.mark.asyncio
    async def test_stop_returns_when_worker_task_died(self):
        async def cancelled(operation: Operation) -> None:
            raise asyncio.CancelledError

        worker = WorkerThread("thread0", cancelled)
        worker.start()
        worker.submit(_op("a"))
        await asyncio.wait_for(worker.stop(), 1)
        assert worker.running is False
        await asyncio.wait_for(worker.stop(), 1)

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self):
        worker = WorkerThread("thread0", Recorder())
        await worker.stop()
        assert worker.running is False

    @pytest.mark.asyncio
    async def test_workers_run_independently(self):
        first = Recorder()
        second = Recorder()
        workers = [WorkerThread("thread0", first), WorkerThread("thread1", second)]
        for worker in workers:
            worker.start()
        workers[0].submit(_op("a"))
        workers[1].submit(_op("b"))
        await asyncio.gather(*(worker.stop() for worker in workers))
        assert first.executed == ["a"]
        assert second.executed == ["b"]
