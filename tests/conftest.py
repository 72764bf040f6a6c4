"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest

from alfred_todoist.calls import Call, clear_call
from alfred_todoist.config import EnvironmentMetadata, Settings
from alfred_todoist.triage import errors as errors_module
from alfred_todoist.triage.funnel import uninstall_fault_handlers
from alfred_todoist.triage.presenter import ErrorPresenter
from tests.doubles import FakeResolver, RecordingList, RecordingNotifier


@pytest.fixture(autouse=True)
def _reset_process_state(monkeypatch):
    """Forget the current call, installed hooks, stack limit and root logging."""
    root = logging.getLogger()
    original_level = root.level
    original_handlers = root.handlers[:]
    monkeypatch.setattr(errors_module, "_stack_limit", errors_module.stack_limit())
    clear_call()
    yield
    clear_call()
    uninstall_fault_handlers()
    root.setLevel(original_level)
    root.handlers = original_handlers


@pytest.fixture()
def environment() -> EnvironmentMetadata:
    return EnvironmentMetadata(
        os_version="14.5",
        runtime_version="3.12.4",
        alfred_version="5.5",
        workflow_version="8.0.0",
        workflow_uid="user.workflow.todoist",
    )


@pytest.fixture()
def settings(environment) -> Settings:
    return Settings(environment=environment)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def item_list() -> RecordingList:
    return RecordingList()


@pytest.fixture()
def make_presenter(settings, notifier, item_list):
    def _make(call: Call | None) -> ErrorPresenter:
        return ErrorPresenter(
            settings=settings,
            resolver=FakeResolver(call),
            item_list=item_list,
            notifier=notifier,
        )

    return _make
