"""
Conversion handling for the Image Converter GUI.

This module starts orchestrator attempts as asyncio tasks on the Qt event
loop and resets the form on request.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QMessageBox, QWidget

from core.error_handler import get_error_handler
from core.orchestrator import ConversionOrchestrator

TaskScheduler = Callable[[Coroutine[Any, Any, Any]], Any]


def schedule_on_running_loop(coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
    """Schedule a coroutine on the running asyncio loop (QtAsyncio in the app)."""
    return asyncio.get_running_loop().create_task(coro)


class ConversionHandler(QObject):
    """
    Handles conversion start and reset requests from the main window.

    At most one attempt task is tracked; the orchestrator itself ignores a
    Start while a request is in flight.
    """

    def __init__(
        self,
        orchestrator: ConversionOrchestrator,
        parent_widget: QWidget | None = None,
        scheduler: TaskScheduler = schedule_on_running_loop,
    ) -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._parent_widget = parent_widget
        self._scheduler = scheduler
        self._current_task: asyncio.Task | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def current_task(self) -> asyncio.Task | None:
        return self._current_task

    def is_running(self) -> bool:
        return self._orchestrator.state.is_busy

    def start_conversion(self) -> None:
        """Start one upload → convert attempt."""
        if self.is_running():
            self._logger.warning("Cannot start conversion: another conversion is already running")
            return

        coro = self._orchestrator.handle_convert()
        try:
            task = self._scheduler(coro)
        except RuntimeError as e:
            coro.close()
            self._logger.error(f"Unable to schedule conversion: {e}")
            self._show_error("Cannot Start Conversion", "The application event loop is not running.")
            return

        if isinstance(task, asyncio.Task):
            self._current_task = task
            task.add_done_callback(self._on_task_done)

    def reset(self) -> None:
        """Reset the form; an attempt still in flight is abandoned."""
        self._orchestrator.reset_form()

    def _on_task_done(self, task: asyncio.Task) -> None:
        if task is self._current_task:
            self._current_task = None
        if task.cancelled():
            self._logger.info("Conversion task cancelled")
            return
        exc = task.exception()
        if isinstance(exc, Exception):
            # The orchestrator recovers every expected failure; this is a bug
            get_error_handler().handle(exc, {"source": "conversion task"})

    def _show_error(self, title: str, message: str) -> None:
        if self._parent_widget is not None:
            QMessageBox.critical(self._parent_widget, title, message)
        self._logger.error(f"{title}: {message}")
