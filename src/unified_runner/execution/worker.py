"""Worker "threads" for scenarios that run operations concurrently.

Each ``thread`` entity is backed by an asyncio task draining its own
queue. Operations submitted to one worker run in submission order;
operations on different workers interleave freely. A stop request is
an ordinary queue message carrying a one-shot future, so operations
queued before it finish first.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Union

from loguru import logger

from unified_runner.models.operation import Operation


class WorkerThreadError(Exception):
    """An operation executed on a worker thread raised."""


@dataclass(frozen=True)
class ExecuteOperation:
    operation: Operation


@dataclass(frozen=True)
class Stop:
    done: asyncio.Future[None]


ThreadMessage = Union[ExecuteOperation, Stop]


class WorkerThread:
    """Executes operations for one ``thread`` entity, strictly in order.

    Args:
        thread_id: Entity id of the thread.
        execute: Coroutine function that runs a single operation.
    """

    def __init__(
        self,
        thread_id: str,
        execute: Callable[[Operation], Awaitable[object]],
    ) -> None:
        self.thread_id = thread_id
        self._execute = execute
        self._queue: asyncio.Queue[ThreadMessage] = asyncio.Queue()
        self._task: asyncio.Task[None] | None = None
        self.failures: list[tuple[Operation, BaseException]] = []

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Spawn the consumer task. Must be called inside a running loop."""
        if self._task is not None:
            raise RuntimeError(f"worker thread {self.thread_id!r} already started")
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"worker-{self.thread_id}"
        )
        logger.debug("worker thread {} started", self.thread_id)

    def submit(self, operation: Operation) -> None:
        """Queue ``operation`` behind everything already submitted."""
        if not self.running:
            raise RuntimeError(f"worker thread {self.thread_id!r} is not running")
        self._queue.put_nowait(ExecuteOperation(operation))

    async def wait_until_idle(self) -> None:
        """Wait until every submitted operation has been processed."""
        await self._queue.join()

    async def stop(self) -> None:
        """Ask the worker to exit after draining its queue, and wait for it."""
        if self._task is None or self._task.done():
            return
        done: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._queue.put_nowait(Stop(done))
        # The consumer may exit before it reaches Stop.
        await asyncio.wait({done, self._task}, return_when=asyncio.FIRST_COMPLETED)
        if done.done():
            await self._task
        logger.debug("worker thread {} stopped", self.thread_id)

    def raise_if_failed(self) -> None:
        """Raise WorkerThreadError for the first failed operation, if any."""
        if self.failures:
            operation, exc = self.failures[0]
            raise WorkerThreadError(
                f"thread {self.thread_id!r}: operation {operation.name!r} "
                f"on {operation.object!r} failed: {exc}"
            ) from exc

    async def _run(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                if isinstance(message, Stop):
                    if not message.done.done():
                        message.done.set_result(None)
                    return
                try:
                    await self._execute(message.operation)
                except Exception as exc:
                    logger.warning(
                        "thread {}: operation {} failed: {}",
                        self.thread_id,
                        message.operation.name,
                        exc,
                    )
                    self.failures.append((message.operation, exc))
            finally:
                self._queue.task_done()
