"""Runtime configuration and environment metadata for the workflow."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class EnvironmentMetadata:
    """Read-only snapshot of the host environment used in diagnostic reports."""

    os_version: str = UNKNOWN
    runtime_version: str = UNKNOWN
    alfred_version: str = UNKNOWN
    workflow_version: str = UNKNOWN
    workflow_uid: str = UNKNOWN

    @classmethod
    def from_env(cls) -> EnvironmentMetadata:
        """Collect metadata from the interpreter and the variables Alfred exports."""

        return cls(
            os_version=platform.mac_ver()[0] or platform.release() or UNKNOWN,
            runtime_version=platform.python_version(),
            alfred_version=os.getenv("alfred_version") or UNKNOWN,
            workflow_version=os.getenv("alfred_workflow_version") or UNKNOWN,
            workflow_uid=os.getenv("alfred_workflow_uid") or UNKNOWN,
        )


@dataclass(slots=True)
class IssueTrackerSettings:
    """Repository coordinate that receives bug reports."""

    host: str = "https://github.com"
    user: str = "moranje"
    repo: str = "alfred-workflow-todoist"

    @property
    def project_url(self) -> str:
        return f"{self.host}/{self.user}/{self.repo}"

    @property
    def new_issue_url(self) -> str:
        return f"{self.project_url}/issues/new"


@dataclass(slots=True)
class LoggingSettings:
    """Log sink settings."""

    level: str = "INFO"
    log_format: str = "text"
    log_path: Path | None = None


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    environment: EnvironmentMetadata = field(default_factory=EnvironmentMetadata)
    issue_tracker: IssueTrackerSettings = field(default_factory=IssueTrackerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    stack_limit: int = 50

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment with defaults suited to an Alfred run."""

        return cls(
            environment=EnvironmentMetadata.from_env(),
            issue_tracker=IssueTrackerSettings(
                user=os.getenv("ALFRED_TODOIST_ISSUE_USER", "moranje"),
                repo=os.getenv("ALFRED_TODOIST_ISSUE_REPO", "alfred-workflow-todoist"),
            ),
            logging=LoggingSettings(
                level=os.getenv("ALFRED_TODOIST_LOG_LEVEL", "INFO"),
                log_format=os.getenv("ALFRED_TODOIST_LOG_FORMAT", "text"),
                log_path=_resolve_log_path(),
            ),
            stack_limit=int(os.getenv("ALFRED_TODOIST_STACK_LIMIT", "50")),
        )

    def validate(self) -> None:
        """Raise configuration error if settings cannot drive the error funnel."""

        if self.stack_limit <= 0:
            raise ValueError("ALFRED_TODOIST_STACK_LIMIT must be > 0.")
        if not self.issue_tracker.user.strip():
            raise ValueError("ALFRED_TODOIST_ISSUE_USER must not be empty.")
        if not self.issue_tracker.repo.strip():
            raise ValueError("ALFRED_TODOIST_ISSUE_REPO must not be empty.")


def _resolve_log_path() -> Path | None:
    explicit = os.getenv("ALFRED_TODOIST_LOG_PATH")
    if explicit:
        return Path(explicit)
    data_dir = os.getenv("alfred_workflow_data")
    if data_dir:
        return Path(data_dir) / "workflow.log"
    return None
