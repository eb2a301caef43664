"""Bounded-concurrency dispatcher draining a priority queue.

Per task: queued -> running -> (succeeded | retrying -> running | failed).

- At most `concurrency` tasks are in flight; slots are refilled from the queue
  as soon as any in-flight task finishes.
- A failing task is retried after `base_delay_ms * 2**(attempt - 1)` ms, up to
  `max_retries` attempts in total.
- `DecodingError` and `ValidationError` are never retried: the task fails at once.
- A task that exhausts its retries aborts the whole run: the remaining
  in-flight tasks are cancelled and its `TaskError` is raised to the caller.

Tasks are started in pop order; results are collected in completion order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from govind.core.config import DispatcherConfig
from govind.core.errors import DecodingError, TaskError, ValidationError
from govind.core.interfaces import ITaskQueue, TaskRunner
from govind.scheduling.queue import EMPTY

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(kw_only=True)
class DispatchStats:
    """
    Counters for one dispatcher run.

    - started: tasks popped from the queue
    - succeeded: tasks whose runner eventually returned
    - retried: individual retry attempts (not tasks)
    - failed: tasks that exhausted their retries
    - max_in_flight: highest number of simultaneously running tasks observed
    """

    started: int = 0
    succeeded: int = 0
    retried: int = 0
    failed: int = 0
    max_in_flight: int = 0


@dataclass(slots=True)
class RunningTask(Generic[T, R]):
    """A task in flight: the queued item and the asyncio handle producing its result."""

    task: T
    handle: asyncio.Task[R]

    @property
    def done(self) -> bool:
        return self.handle.done()


class AsyncDispatcher(Generic[T, R]):
    """Run every task of `queue` through `task_runner` under `config` limits."""

    def __init__(
        self,
        queue: ITaskQueue[T],
        task_runner: TaskRunner[T, R],
        config: DispatcherConfig | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._queue = queue
        self._runner = task_runner
        self._config = config or DispatcherConfig()
        self._sleep = sleep
        self.stats = DispatchStats()

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    def backoff_ms(self, attempt: int) -> float:
        """Delay before retrying after failed attempt number `attempt` (1-based)."""
        return self._config.base_delay_ms * (2 ** (attempt - 1))

    async def run_with_retry(self, task: T) -> R:
        """Run one task, retrying failures with exponential backoff.

        Decoding and validation errors are not retried.
        """
        attempt = 1
        while True:
            try:
                return await self._runner(task)
            except (DecodingError, ValidationError) as e:
                # Malformed input fails the same way on every attempt.
                raise TaskError(task, attempt, e) from e
            except Exception as e:
                if attempt >= self._config.max_retries:
                    raise TaskError(task, attempt, e) from e
                delay = self.backoff_ms(attempt)
                log.warning(
                    "task %r failed (attempt %d/%d): %s; retrying in %.0fms",
                    task, attempt, self._config.max_retries, e, delay,
                )
                self.stats.retried += 1
                await self._sleep(delay / 1000)
                attempt += 1

    def _start(self, task: T) -> RunningTask[T, R]:
        self.stats.started += 1
        return RunningTask(task=task, handle=asyncio.create_task(self.run_with_retry(task)))

    def _fill(self, running: list[RunningTask[T, R]]) -> None:
        while len(running) < self._config.concurrency:
            task = self._queue.pop()
            if task is EMPTY:
                break
            running.append(self._start(task))
        self.stats.max_in_flight = max(self.stats.max_in_flight, len(running))

    @staticmethod
    async def _abort(running: list[RunningTask[T, R]]) -> None:
        for r in running:
            r.handle.cancel()
        await asyncio.gather(*(r.handle for r in running), return_exceptions=True)

    async def run(self) -> list[R]:
        """Drain the queue; return results in completion order.

        Raises the first `TaskError` observed; nothing is returned in that case.
        """
        running: list[RunningTask[T, R]] = []
        results: list[R] = []

        self._fill(running)
        while running:
            await asyncio.wait([r.handle for r in running], return_when=asyncio.FIRST_COMPLETED)

            still_running: list[RunningTask[T, R]] = []
            failure: BaseException | None = None
            for r in running:
                if not r.done:
                    still_running.append(r)
                    continue
                exc = r.handle.exception()
                if exc is None:
                    self.stats.succeeded += 1
                    results.append(r.handle.result())
                elif failure is None:
                    failure = exc
                else:
                    # A second terminal failure in the same wake-up; the first one wins.
                    self.stats.failed += 1
            running = still_running

            if failure is not None:
                self.stats.failed += 1
                log.error("aborting dispatch: %s", failure)
                await self._abort(running)
                raise failure

            self._fill(running)

        return results
