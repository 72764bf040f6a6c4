from __future__ import annotations

from pathlib import Path

import allure
import pytest

from alfred_todoist.triage.errors import (
    DEFAULT_TITLE,
    WorkflowError,
    clean_stack,
    configure_stack_limit,
    error_headline,
    error_message,
    error_name,
    format_stack,
    stack_limit,
)
from alfred_todoist.triage.taxonomy import ERROR_LABELS, ErrorKind

pytestmark = [
    allure.epic("Fault Triage"),
    allure.feature("Classified Errors"),
]


def _raise_from(code: str, filename: str) -> BaseException:
    try:
        exec(compile(code, filename, "exec"), {})  # noqa: S102
    except Exception as exc:  # noqa: BLE001
        return exc
    raise AssertionError("code did not raise")


def test_taxonomy_labels_cover_every_kind() -> None:
    assert set(ERROR_LABELS) == set(ErrorKind)
    assert ErrorKind.INVALID_SETTING.label == "Invalid setting error"
    assert ErrorKind("TodoistAPIError") is ErrorKind.TODOIST_API_ERROR
    with pytest.raises(TypeError):
        ERROR_LABELS[ErrorKind.EXTERNAL] = "changed"  # type: ignore[index]


def test_workflow_error_defaults() -> None:
    error = WorkflowError("InvalidSetting", "API key missing")

    assert error.kind is ErrorKind.INVALID_SETTING
    assert error.name == "InvalidSetting"
    assert error.message == "API key missing"
    assert str(error) == "API key missing"
    assert error.title == DEFAULT_TITLE
    assert error.is_safe is False
    assert error.cause_name is None
    assert error.__cause__ is None


def test_workflow_error_wraps_cause_name_and_chain() -> None:
    cause = KeyError("token")
    error = WorkflowError(
        ErrorKind.TODOIST_API_ERROR,
        "Could not load tasks",
        is_safe=True,
        title="Todoist is unreachable",
        error=cause,
    )

    assert error.name == "TodoistAPIError (KeyError)"
    assert error.title == "Todoist is unreachable"
    assert error.is_safe is True
    assert error.__cause__ is cause


def test_workflow_error_cause_name_of_nested_workflow_error() -> None:
    inner = WorkflowError(ErrorKind.PARSER_ERROR, "bad date")
    outer = WorkflowError(ErrorKind.INVALID_ARGUMENT, "bad query", error=inner)

    assert outer.name == "InvalidArgument (ParserError)"


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        WorkflowError("NotAKind", "nope")


def test_stack_is_captured_at_construction_site() -> None:
    cause = _raise_from("raise RuntimeError('deep')", "<generated cause>")
    error = WorkflowError(ErrorKind.EXTERNAL, "wrapped", error=cause)

    assert error.stack_summary[-1].name == "test_stack_is_captured_at_construction_site"
    assert all(frame.filename != "<generated cause>" for frame in error.stack_summary)


def test_helpers_for_plain_exceptions() -> None:
    error = ValueError("boom")

    assert error_name(error) == "ValueError"
    assert error_message(error) == "boom"
    assert error_headline(error) == "ValueError: boom"
    assert format_stack(error) == "ValueError: boom"


def test_format_stack_starts_with_headline_and_lists_causes() -> None:
    cause = _raise_from("raise ValueError('inner problem')", "<generated>")
    error = WorkflowError(ErrorKind.INVALID_SETTING, "outer problem", error=cause)

    stack = format_stack(error)

    assert stack.split("\n", 1)[0] == "InvalidSetting (ValueError): outer problem"
    assert "\nCaused by: ValueError: inner problem" in stack
    assert '"<generated>"' in stack


def test_clean_stack_drops_internal_frames() -> None:
    error = _raise_from("raise ValueError('x')", "<frozen demo>")

    assert "<frozen demo>" in format_stack(error)
    assert "<frozen demo>" not in clean_stack(error)
    assert clean_stack(error).startswith("ValueError: x")


def test_clean_stack_shortens_home_directory() -> None:
    filename = str(Path.home() / "workflow" / "script.py")
    error = _raise_from("raise ValueError('x')", filename)

    assert filename in format_stack(error)
    assert "~/workflow/script.py" in clean_stack(error)
    assert filename not in clean_stack(error)


def test_configure_stack_limit_only_widens() -> None:
    start = stack_limit()
    configure_stack_limit(1)
    assert stack_limit() == start

    configure_stack_limit(50)
    configure_stack_limit(50)
    assert stack_limit() == max(start, 50)


def test_captured_stack_respects_limit() -> None:
    configure_stack_limit(50)

    def recurse(depth: int) -> WorkflowError:
        if depth == 0:
            return WorkflowError(ErrorKind.EXTERNAL, "deep")
        return recurse(depth - 1)

    error = recurse(80)

    assert len(error.stack_summary) == 50
