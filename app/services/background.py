"""
Task executors for fire-and-forget side effects of request handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from fastapi import BackgroundTasks

logger = logging.getLogger(__name__)


class TaskExecutor(Protocol):
    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        ...


class FastAPIBackgroundTaskExecutor:
    """
    Runs tasks after the response has been sent.
    """

    def __init__(self, background_tasks: BackgroundTasks) -> None:
        self._background_tasks = background_tasks

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        self._background_tasks.add_task(_run_quietly, task, *args, **kwargs)


def _run_quietly(task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
    try:
        task(*args, **kwargs)
    except Exception as exc:
        logger.warning("Background task failed task=%s error=%s", getattr(task, "__name__", task), exc)
