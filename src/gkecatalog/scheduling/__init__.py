from .scheduler import (
    OneShotScheduler,
    OneShotTaskRunner,
    ScheduledTaskRunner,
    SchedulerService,
    TaskRunner,
    TaskScheduler,
)

__all__ = [
    "OneShotScheduler",
    "OneShotTaskRunner",
    "ScheduledTaskRunner",
    "SchedulerService",
    "TaskRunner",
    "TaskScheduler",
]
