"""The call currently executed by the workflow and its wire encoding."""

from __future__ import annotations

import json
from contextvars import ContextVar
from dataclasses import dataclass

from alfred_todoist.triage.errors import WorkflowError
from alfred_todoist.triage.taxonomy import ErrorKind


@dataclass(frozen=True, slots=True)
class Call:
    """One top-level workflow operation and its raw argument string."""

    name: str
    args: str = ""


class CallContextUnavailable(LookupError):
    """Raised when no managed workflow invocation is active."""


_CURRENT_CALL: ContextVar[Call | None] = ContextVar("alfred_todoist_current_call", default=None)


class CallContextResolver:
    """Reports which workflow call is executing.

    The call stays recorded for the rest of the invocation, including while a
    fault handler runs after the call failed.
    """

    def current_call(self) -> Call:
        call = _CURRENT_CALL.get()
        if call is None:
            raise CallContextUnavailable("No workflow call is active.")
        return call


def use_call(call: Call) -> None:
    _CURRENT_CALL.set(call)


def clear_call() -> None:
    _CURRENT_CALL.set(None)


def encode_call(call: Call) -> str:
    """Serialize a call for an item ``arg``; Alfred hands it back to ``alfred-todoist call``."""

    return json.dumps({"name": call.name, "args": call.args})


def decode_call(payload: str) -> Call:
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise WorkflowError(
            ErrorKind.PARSER_ERROR,
            f"Workflow call payload is not valid JSON: {payload!r}",
            error=exc,
        ) from exc
    if not isinstance(parsed, dict) or not isinstance(parsed.get("name"), str):
        raise WorkflowError(
            ErrorKind.PARSER_ERROR,
            f"Workflow call payload must be an object with a name: {payload!r}",
        )
    args = parsed.get("args", "")
    return Call(name=parsed["name"], args=args if isinstance(args, str) else json.dumps(args))
