"""Prefilled GitHub issue links for unrecoverable errors."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from alfred_todoist.calls import CallContextResolver
from alfred_todoist.config import EnvironmentMetadata, IssueTrackerSettings
from alfred_todoist.triage.errors import format_stack
from alfred_todoist.triage.report import build_report, redact_tokens


def build_issue_body(
    error: BaseException,
    *,
    environment: EnvironmentMetadata,
    resolver: CallContextResolver,
) -> str:
    return "\n".join(
        [
            "### Description",
            "",
            "<A clear and concise description of what the bug is.>",
            "",
            "### Steps to reproduce behavior",
            "",
            "<Please describe what you did here.>",
            "",
            "### Expected behavior",
            "",
            "<A clear and concise description of what you expected to happen.>",
            "",
            "### Error logs",
            "",
            build_report(error, environment=environment, resolver=resolver),
        ],
    )


def build_issue_url(
    error: BaseException,
    *,
    tracker: IssueTrackerSettings,
    environment: EnvironmentMetadata,
    resolver: CallContextResolver,
) -> str:
    """Build a new-issue URL with ``title`` and ``body`` query parameters.

    No network access; identical inputs give identical URLs.
    """

    title = redact_tokens(format_stack(error).split("\n", 1)[0])
    body = build_issue_body(error, environment=environment, resolver=resolver)
    query = urlencode({"title": title, "body": body}, quote_via=quote)
    return f"{tracker.new_issue_url}?{query}"
