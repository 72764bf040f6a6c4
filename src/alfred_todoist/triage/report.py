"""Fixed-format diagnostic report attached to logs and bug reports."""

from __future__ import annotations

import re

from alfred_todoist.calls import CallContextResolver, CallContextUnavailable
from alfred_todoist.config import EnvironmentMetadata
from alfred_todoist.triage.errors import WorkflowError, clean_stack, error_message, error_name

REPORT_BANNER = "ALFRED WORKFLOW TODOIST"
REPORT_SEPARATOR = "-" * 40
UNKNOWN_QUERY = "<unknown>"
TOKEN_PLACEHOLDER = "<token hidden>"

_TOKEN_PATTERN = re.compile(r"[0-9a-fA-F]{40}")


def redact_tokens(text: str) -> str:
    """Replace every 40-hex-character run (API token shape) with a placeholder."""

    return _TOKEN_PATTERN.sub(TOKEN_PLACEHOLDER, text)


def environment_lines(
    *,
    environment: EnvironmentMetadata,
    resolver: CallContextResolver,
) -> list[str]:
    try:
        query = resolver.current_call().args
    except CallContextUnavailable:
        query = UNKNOWN_QUERY
    return [
        f"os: macOS {environment.os_version}",
        f"query: {query}",
        f"python: {environment.runtime_version}",
        f"alfred: {environment.alfred_version}",
        f"workflow: {environment.workflow_version}",
        f"workflow-id: {environment.workflow_uid}",
    ]


def build_report(
    error: BaseException,
    *,
    environment: EnvironmentMetadata,
    resolver: CallContextResolver,
) -> str:
    """Render the redacted report for ``error``.

    Redaction runs once over the assembled text, so tokens in the message,
    the query, or the stack never leave this function.
    """

    title = error.title if isinstance(error, WorkflowError) else error_name(error)
    lines = [
        REPORT_BANNER,
        REPORT_SEPARATOR,
        f"title: {title}",
        f"description: {error_message(error)}",
        "",
        *environment_lines(environment=environment, resolver=resolver),
        "",
        f"Stack: {clean_stack(error)}",
    ]
    return redact_tokens("\n".join(lines))
