"""Dispatch encoded workflow calls to their async handlers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import click

from alfred_todoist.calls import Call, use_call
from alfred_todoist.triage.errors import WorkflowError
from alfred_todoist.triage.funnel import installed_fault_handlers
from alfred_todoist.triage.taxonomy import ErrorKind

logger = logging.getLogger(__name__)

CallHandler = Callable[[Call], Awaitable[None]]


class WorkflowDispatcher:
    """Registry of call names and the coroutine that serves each one."""

    def __init__(self) -> None:
        self._handlers: dict[str, CallHandler] = {}

    def register(self, name: str) -> Callable[[CallHandler], CallHandler]:
        def decorator(handler: CallHandler) -> CallHandler:
            self._handlers[name] = handler
            return handler

        return decorator

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    def dispatch(self, call: Call) -> None:
        """Record ``call`` as current and run its handler on a fresh event loop."""

        use_call(call)
        handler = self._handlers.get(call.name)
        if handler is None:
            raise WorkflowError(
                ErrorKind.INVALID_ARGUMENT,
                f"Unknown workflow call '{call.name}'.",
                title="Unknown workflow action",
                is_safe=True,
            )

        logger.debug("Dispatching %s", call.name)
        handlers = installed_fault_handlers()
        with asyncio.Runner() as runner:
            if handlers is not None:
                handlers.rejection.attach(runner.get_loop())
            runner.run(handler(call))


DISPATCHER = WorkflowDispatcher()


@DISPATCHER.register("openUrl")
async def open_url(call: Call) -> None:
    if not call.args.strip():
        raise WorkflowError(
            ErrorKind.INVALID_ARGUMENT,
            "openUrl needs a URL to open.",
            is_safe=True,
        )
    click.launch(call.args)
