"""Recurring task scheduling.

The provider only hands a unit of work (``TaskInvocation``) to a
``TaskRunner``; how and when it runs is the runner's business. This module
provides the runner used by the service: one asyncio loop per task, waiting
``initial_delay`` and then running the task every ``frequency``, each run
bounded by ``timeout``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol

from shared.models import ProviderSchedule
from shared.observability import get_logger

logger = get_logger(__name__)

TaskFn = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class TaskInvocation:
    """A named unit of work."""

    id: str
    fn: TaskFn


class TaskRunner(Protocol):
    async def run(self, task: TaskInvocation) -> None:
        """Register the task; it is invoked on the runner's cadence."""
        ...


class TaskScheduler(Protocol):
    def create_scheduled_task_runner(self, schedule: ProviderSchedule) -> TaskRunner:
        ...


class ScheduledTaskRunner:
    """Runs every task it receives on one schedule."""

    def __init__(self, scheduler: AsyncioTaskScheduler, schedule: ProviderSchedule):
        self.scheduler = scheduler
        self.schedule = schedule

    async def run(self, task: TaskInvocation) -> None:
        self.scheduler.start(task, self.schedule)


class AsyncioTaskScheduler:
    """Schedules recurring tasks on the running event loop."""

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}

    @property
    def task_ids(self) -> list[str]:
        return [task_id for task_id, task in self._tasks.items() if not task.done()]

    def create_scheduled_task_runner(self, schedule: ProviderSchedule) -> ScheduledTaskRunner:
        return ScheduledTaskRunner(self, schedule)

    def start(self, task: TaskInvocation, schedule: ProviderSchedule) -> asyncio.Task:
        """Start the recurring loop of a task.

        Raises:
            ValueError: If a task with the same id is already running
        """
        existing = self._tasks.get(task.id)
        if existing is not None and not existing.done():
            raise ValueError(f"Task {task.id} is already scheduled")

        loop_task = asyncio.create_task(self._run_periodically(task, schedule), name=task.id)
        self._tasks[task.id] = loop_task
        logger.info(
            "Scheduled task",
            task_id=task.id,
            frequency_seconds=schedule.frequency.total_seconds(),
            timeout_seconds=schedule.timeout.total_seconds(),
        )
        return loop_task

    async def run_once(self, task: TaskInvocation, schedule: ProviderSchedule) -> Any:
        """Run a task once within the schedule's timeout.

        Timeouts and errors are logged and swallowed; returns the task's
        result, or None if it did not complete.
        """
        try:
            return await asyncio.wait_for(task.fn(), timeout=schedule.timeout.total_seconds())
        except asyncio.TimeoutError:
            logger.error(
                "Scheduled task timed out",
                task_id=task.id,
                timeout_seconds=schedule.timeout.total_seconds(),
            )
        except Exception as e:
            logger.error("Scheduled task failed", task_id=task.id, error=str(e))
        return None

    async def _run_periodically(self, task: TaskInvocation, schedule: ProviderSchedule) -> None:
        loop = asyncio.get_running_loop()
        try:
            if schedule.initial_delay:
                await asyncio.sleep(schedule.initial_delay.total_seconds())

            while True:
                started = loop.time()
                await self.run_once(task, schedule)
                elapsed = loop.time() - started
                await asyncio.sleep(max(0.0, schedule.frequency.total_seconds() - elapsed))

        except asyncio.CancelledError:
            logger.info("Scheduled task cancelled", task_id=task.id)
            raise

    async def shutdown(self) -> None:
        """Cancel every scheduled loop and wait for them to finish."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
