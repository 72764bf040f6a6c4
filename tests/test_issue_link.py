from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import allure

from alfred_todoist.calls import Call
from alfred_todoist.config import IssueTrackerSettings
from alfred_todoist.triage.errors import WorkflowError
from alfred_todoist.triage.issue_link import build_issue_body, build_issue_url
from alfred_todoist.triage.report import TOKEN_PLACEHOLDER, build_report
from alfred_todoist.triage.taxonomy import ErrorKind
from tests.doubles import FakeResolver

pytestmark = [
    allure.epic("Fault Triage"),
    allure.feature("Bug Report Link"),
]

TOKEN = "deadbeefdeadbeefdeadbeefdeadbeefdeadbeef"
SECTIONS = (
    "### Description",
    "### Steps to reproduce behavior",
    "### Expected behavior",
    "### Error logs",
)


def _query(url: str) -> dict[str, str]:
    parsed = parse_qs(urlsplit(url).query)
    return {key: values[0] for key, values in parsed.items()}


def test_issue_url_targets_repository(environment) -> None:
    url = build_issue_url(
        ValueError("boom"),
        tracker=IssueTrackerSettings(),
        environment=environment,
        resolver=FakeResolver(),
    )

    parts = urlsplit(url)
    assert parts.scheme == "https"
    assert parts.netloc == "github.com"
    assert parts.path == "/moranje/alfred-workflow-todoist/issues/new"
    assert set(_query(url)) == {"title", "body"}


def test_issue_title_is_first_stack_line(environment) -> None:
    error = WorkflowError(ErrorKind.INVALID_API_RESPONSE, "unexpected payload")

    url = build_issue_url(
        error,
        tracker=IssueTrackerSettings(),
        environment=environment,
        resolver=FakeResolver(),
    )

    assert _query(url)["title"] == "InvalidAPIResponse: unexpected payload"


def test_issue_body_sections_in_order_and_report_attached(environment) -> None:
    error = ValueError("boom & bust?")
    resolver = FakeResolver(Call("fetchTasks", "today"))

    url = build_issue_url(
        error,
        tracker=IssueTrackerSettings(),
        environment=environment,
        resolver=resolver,
    )
    body = _query(url)["body"]

    positions = [body.index(section) for section in SECTIONS]
    assert positions == sorted(positions)
    assert body.endswith(build_report(error, environment=environment, resolver=resolver))
    assert body == build_issue_body(error, environment=environment, resolver=resolver)


def test_issue_url_is_percent_encoded(environment) -> None:
    url = build_issue_url(
        ValueError("a b&c=d /tmp/x"),
        tracker=IssueTrackerSettings(),
        environment=environment,
        resolver=FakeResolver(),
    )

    query = urlsplit(url).query
    assert " " not in query
    assert "%20" in query
    assert "%26c%3Dd" in query
    assert "%2Ftmp%2Fx" in query
    assert "/" not in query
    assert "\n" not in url


def test_issue_url_is_pure(environment) -> None:
    error = WorkflowError(ErrorKind.EXTERNAL, "same")
    tracker = IssueTrackerSettings(user="someone", repo="fork")
    resolver = FakeResolver(Call("read", "x"))

    first = build_issue_url(error, tracker=tracker, environment=environment, resolver=resolver)
    second = build_issue_url(error, tracker=tracker, environment=environment, resolver=resolver)

    assert first == second
    assert first.startswith("https://github.com/someone/fork/issues/new?")


def test_issue_url_never_contains_tokens(environment) -> None:
    url = build_issue_url(
        ValueError(f"bad token {TOKEN}"),
        tracker=IssueTrackerSettings(),
        environment=environment,
        resolver=FakeResolver(),
    )

    query = _query(url)
    assert TOKEN not in url
    assert query["title"] == f"ValueError: bad token {TOKEN_PLACEHOLDER}"
    assert TOKEN_PLACEHOLDER in query["body"]
