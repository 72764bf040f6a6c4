"""Terminal error handler and its subscription to process-wide fault channels."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from alfred_todoist.calls import CallContextResolver
from alfred_todoist.config import EnvironmentMetadata
from alfred_todoist.triage.errors import WorkflowError
from alfred_todoist.triage.presenter import ErrorPresenter
from alfred_todoist.triage.report import build_report

logger = logging.getLogger(__name__)

FaultHandler = Callable[[BaseException], None]


class ErrorFunnel:
    """Log and present one fault. Only top-level handlers call this."""

    def __init__(
        self,
        *,
        presenter: ErrorPresenter,
        environment: EnvironmentMetadata,
        resolver: CallContextResolver | None = None,
    ) -> None:
        self._presenter = presenter
        self._environment = environment
        self._resolver = resolver or CallContextResolver()

    @property
    def presenter(self) -> ErrorPresenter:
        return self._presenter

    def funnel(self, error: BaseException) -> None:
        """Route ``error`` to the problem or bug channel. Never raises."""

        try:
            self._log(error)
            if isinstance(error, WorkflowError) and error.is_safe:
                self._presenter.list_problem(error)
            else:
                self._presenter.list_bug(error)
        except Exception:
            logger.exception("Failed to present workflow error %r", error)

    def _log(self, error: BaseException) -> None:
        logger.error(
            "%s",
            build_report(error, environment=self._environment, resolver=self._resolver),
        )


class FaultChannel:
    """Single-shot subscription to one source of escaped faults."""

    name = "fault"

    def __init__(self) -> None:
        self._handler: FaultHandler | None = None
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def once(self, handler: FaultHandler) -> None:
        if self._handler is not None:
            raise RuntimeError(f"{self.name} channel already has a handler")
        self._handler = handler

    def deliver(self, error: BaseException) -> bool:
        """Hand ``error`` to the handler the first time only."""

        if self._handler is None or self._fired:
            return False
        self._fired = True
        self._handler(error)
        return True


class UncaughtExceptionChannel(FaultChannel):
    """Faults that escape the main thread, via ``sys.excepthook``."""

    name = "uncaught-exception"

    def __init__(self) -> None:
        super().__init__()
        self._previous_hook: Callable[..., Any] | None = None

    def attach(self) -> None:
        self._previous_hook = sys.excepthook
        sys.excepthook = self._excepthook

    def detach(self) -> None:
        if self._previous_hook is not None and sys.excepthook == self._excepthook:
            sys.excepthook = self._previous_hook
        self._previous_hook = None

    def _excepthook(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if self.deliver(exc):
            return
        previous = self._previous_hook or sys.__excepthook__
        previous(exc_type, exc, tb)


class UnhandledRejectionChannel(FaultChannel):
    """Exceptions nobody awaited, via the event loop exception handler."""

    name = "unhandled-rejection"

    def attach(self, loop: asyncio.AbstractEventLoop) -> None:
        loop.set_exception_handler(self._handle)

    def _handle(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        error = context.get("exception")
        if isinstance(error, BaseException) and self.deliver(error):
            return
        loop.default_exception_handler(context)


@dataclass(slots=True)
class FaultHandlers:
    funnel: ErrorFunnel
    uncaught: UncaughtExceptionChannel
    rejection: UnhandledRejectionChannel


_installed: FaultHandlers | None = None


def install_fault_handlers(funnel: ErrorFunnel) -> FaultHandlers:
    """Subscribe ``funnel`` to both fault channels, once per process.

    Later calls return the handlers installed by the first one.
    """

    global _installed  # noqa: PLW0603
    if _installed is not None:
        return _installed

    uncaught = UncaughtExceptionChannel()
    rejection = UnhandledRejectionChannel()
    uncaught.once(funnel.funnel)
    rejection.once(funnel.funnel)
    uncaught.attach()
    _installed = FaultHandlers(funnel=funnel, uncaught=uncaught, rejection=rejection)
    return _installed


def installed_fault_handlers() -> FaultHandlers | None:
    return _installed


def uninstall_fault_handlers() -> None:
    """Restore ``sys.excepthook``; used by test harnesses."""

    global _installed  # noqa: PLW0603
    if _installed is not None:
        _installed.uncaught.detach()
    _installed = None
