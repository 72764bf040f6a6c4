"""Classified workflow errors and stack formatting shared by the triage layer."""

from __future__ import annotations

import sys
import sysconfig
import traceback
from collections.abc import Callable
from pathlib import Path

from alfred_todoist.triage.taxonomy import ErrorKind

DEFAULT_TITLE = "Oops, this is not supposed to happen"
STACK_TRACE_LIMIT = 50

_stack_limit = 10

_FrameFilter = Callable[[traceback.StackSummary], traceback.StackSummary]


def configure_stack_limit(limit: int = STACK_TRACE_LIMIT) -> None:
    """Widen the process-wide frame limit used when errors capture their stack.

    Set once during initialization; the limit only ever grows, so repeated
    calls are no-ops.
    """

    global _stack_limit  # noqa: PLW0603
    _stack_limit = max(_stack_limit, limit)


def stack_limit() -> int:
    return _stack_limit


class WorkflowError(Exception):
    """A fault classified at the point where an operation detected it.

    ``kind`` labels the cause, ``is_safe`` decides whether the end user sees the
    message directly or is routed to the bug-report path. When ``error`` is
    given it is chained as ``__cause__`` and its name is appended to ``name``.
    The stack is captured at the construction site, not at the place where the
    wrapped cause was raised.

    ``kind`` may be given as its string value; a string that names no
    :class:`ErrorKind` raises ``ValueError``. Passing an ``ErrorKind`` member
    never fails.
    """

    def __init__(
        self,
        kind: ErrorKind | str,
        description: str,
        *,
        is_safe: bool = False,
        title: str | None = None,
        error: BaseException | None = None,
    ) -> None:
        super().__init__(description)
        self.kind = ErrorKind(kind)
        self.description = description
        self.title = DEFAULT_TITLE if title is None else title
        self.is_safe = is_safe
        self.cause_name = error_name(error) if error is not None else None
        self.stack_summary = traceback.extract_stack(sys._getframe(1), limit=_stack_limit)
        if error is not None:
            self.__cause__ = error

    @property
    def name(self) -> str:
        if self.cause_name:
            return f"{self.kind.value} ({self.cause_name})"
        return self.kind.value

    @property
    def message(self) -> str:
        return self.description


def error_name(error: BaseException) -> str:
    if isinstance(error, WorkflowError):
        return error.name
    return type(error).__name__


def error_message(error: BaseException) -> str:
    if isinstance(error, WorkflowError):
        return error.message
    return str(error)


def error_headline(error: BaseException) -> str:
    """``"<name>: <message>"``, the first line of every formatted stack."""

    return f"{error_name(error)}: {error_message(error)}"


def format_stack(error: BaseException) -> str:
    """Headline, frames, then one ``Caused by:`` section per chained cause."""

    return _format_chain(error, lambda frames: frames)


def clean_stack(error: BaseException) -> str:
    """Like :func:`format_stack` without interpreter internals and with ``~`` for home."""

    return _format_chain(error, _clean_frames)


def _format_chain(error: BaseException, frame_filter: _FrameFilter) -> str:
    sections: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        frames = "".join(frame_filter(_frames_of(current)).format()).rstrip("\n")
        headline = error_headline(current)
        sections.append(f"{headline}\n{frames}" if frames else headline)
        current = current.__cause__
    return "\nCaused by: ".join(sections)


def _frames_of(error: BaseException) -> traceback.StackSummary:
    if isinstance(error, WorkflowError):
        return error.stack_summary
    if error.__traceback__ is None:
        return traceback.StackSummary()
    return traceback.extract_tb(error.__traceback__, limit=-_stack_limit)


def _clean_frames(frames: traceback.StackSummary) -> traceback.StackSummary:
    home = str(Path.home())
    cleaned: list[traceback.FrameSummary] = []
    for frame in frames:
        if _is_internal(frame.filename):
            continue
        filename = frame.filename
        if home and filename.startswith(home):
            filename = "~" + filename[len(home) :]
        cleaned.append(
            traceback.FrameSummary(filename, frame.lineno, frame.name, line=frame.line),
        )
    return traceback.StackSummary.from_list(cleaned)


def _is_internal(filename: str) -> bool:
    if filename.startswith("<"):
        return True
    paths = sysconfig.get_paths()
    stdlib = paths.get("stdlib")
    if stdlib and filename.startswith(stdlib):
        return not filename.startswith((paths.get("purelib", ""), paths.get("platlib", "")))
    return False
