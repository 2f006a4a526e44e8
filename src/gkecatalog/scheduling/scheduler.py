"""Asyncio task scheduling for recurring provider jobs."""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, List, Optional
import structlog

from gkecatalog.config.provider_config import ScheduleDefinition
from gkecatalog.core.exceptions import TaskTimeoutException

logger = structlog.get_logger(__name__)

TaskFunction = Callable[[], Awaitable[None]]


class TaskRunner(ABC):
    """Runs a named task according to some policy."""

    @abstractmethod
    async def run(self, task_id: str, fn: TaskFunction) -> None:
        pass


class SchedulerService(ABC):
    """Hands out task runners bound to a schedule."""

    @abstractmethod
    def create_scheduled_task_runner(self, schedule: ScheduleDefinition) -> TaskRunner:
        pass


class ScheduledTaskRunner(TaskRunner):
    """Registers tasks as recurring jobs on a ``TaskScheduler``."""

    def __init__(self, scheduler: "TaskScheduler", schedule: ScheduleDefinition):
        self.scheduler = scheduler
        self.schedule = schedule

    async def run(self, task_id: str, fn: TaskFunction) -> None:
        self.scheduler.schedule_task(task_id, self.schedule, fn)


class OneShotTaskRunner(TaskRunner):
    """Invokes the task once, inline, bounded by an optional timeout.

    Errors propagate to the caller; a timeout is logged and raised as
    ``TaskTimeoutException``.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    async def run(self, task_id: str, fn: TaskFunction) -> None:
        logger.info("Running task once", task_id=task_id)
        try:
            await asyncio.wait_for(fn(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error("Task timed out", task_id=task_id, timeout_seconds=self.timeout)
            raise TaskTimeoutException(task_id, self.timeout)


class OneShotScheduler(SchedulerService):
    def create_scheduled_task_runner(self, schedule: ScheduleDefinition) -> TaskRunner:
        return OneShotTaskRunner(timeout=schedule.timeout.total_seconds())


class TaskScheduler(SchedulerService):
    """Runs each registered task as its own asyncio loop.

    A task never overlaps with itself: the next invocation starts only after
    the previous one finished or timed out. Failures are logged and the loop
    carries on with the next tick.
    """

    def __init__(self):
        self._tasks: Dict[str, asyncio.Task] = {}
        self.logger = logger.bind(scheduler="asyncio")

    def create_scheduled_task_runner(self, schedule: ScheduleDefinition) -> ScheduledTaskRunner:
        return ScheduledTaskRunner(self, schedule)

    @property
    def task_ids(self) -> List[str]:
        return list(self._tasks)

    def schedule_task(self, task_id: str, schedule: ScheduleDefinition, fn: TaskFunction) -> None:
        """Register ``fn`` as a recurring job. Must be called from a running loop."""
        if task_id in self._tasks:
            raise ValueError(f"Task {task_id} is already scheduled")

        self._tasks[task_id] = asyncio.create_task(
            self._run_loop(task_id, schedule, fn),
            name=task_id,
        )
        self.logger.info(
            "Scheduled task",
            task_id=task_id,
            frequency_seconds=schedule.frequency.total_seconds(),
            timeout_seconds=schedule.timeout.total_seconds(),
        )

    async def _run_loop(self, task_id: str, schedule: ScheduleDefinition, fn: TaskFunction) -> None:
        loop = asyncio.get_running_loop()
        if schedule.initial_delay:
            await asyncio.sleep(schedule.initial_delay.total_seconds())

        frequency = schedule.frequency.total_seconds()
        while True:
            started = loop.time()
            await self._invoke(task_id, fn, schedule.timeout.total_seconds())
            elapsed = loop.time() - started
            await asyncio.sleep(max(0.0, frequency - elapsed))

    async def _invoke(self, task_id: str, fn: TaskFunction, timeout: float) -> None:
        task_logger = self.logger.bind(task_id=task_id)
        task_logger.debug("Task starting")
        try:
            await asyncio.wait_for(fn(), timeout=timeout)
        except asyncio.TimeoutError:
            task_logger.error("Task timed out", timeout_seconds=timeout)
        except Exception as e:
            task_logger.error("Task failed", error=str(e), exc_info=True)
        else:
            task_logger.debug("Task completed")

    async def wait(self) -> None:
        """Block until every scheduled task has stopped."""
        if self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel all scheduled tasks and wait for them to finish."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        self.logger.info("Scheduler shut down", cancelled=len(tasks))
