"""macOS notifications raised when the workflow runs without a visible list."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_TITLE = "Alfred Workflow Todoist"
_NOTIFY_TIMEOUT_SECONDS = 10


@dataclass(frozen=True, slots=True)
class Notification:
    subtitle: str
    message: str
    url: str | None = None
    title: str = DEFAULT_NOTIFICATION_TITLE


class Notifier:
    """Dispatch notifications synchronously through a helper executable.

    ``terminal-notifier`` is preferred because it can open ``url`` on click;
    ``osascript`` is the fallback that ships with macOS.
    """

    def notify(self, notification: Notification) -> None:
        command = self.build_command(notification)
        if command is None:
            logger.warning(
                "No notification helper found in PATH, dropping notification: %s",
                notification.subtitle,
            )
            return
        try:
            completed = subprocess.run(  # noqa: S603
                command,
                capture_output=True,
                text=True,
                check=False,
                timeout=_NOTIFY_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.warning("Notification helper %s failed: %s", command[0], exc)
            return
        if completed.returncode != 0:
            logger.warning(
                "Notification helper %s exited with %s: %s",
                command[0],
                completed.returncode,
                completed.stderr.strip(),
            )

    def build_command(self, notification: Notification) -> list[str] | None:
        terminal_notifier = shutil.which("terminal-notifier")
        if terminal_notifier is not None:
            command = [
                terminal_notifier,
                "-title",
                notification.title,
                "-subtitle",
                notification.subtitle,
                "-message",
                notification.message,
            ]
            if notification.url:
                command.extend(["-open", notification.url])
            return command

        osascript = shutil.which("osascript")
        if osascript is not None:
            script = (
                f"display notification {_applescript_string(notification.message)} "
                f"with title {_applescript_string(notification.title)} "
                f"subtitle {_applescript_string(notification.subtitle)}"
            )
            return [osascript, "-e", script]
        return None


def _applescript_string(value: str) -> str:
    # JSON string escaping matches AppleScript for quotes and backslashes.
    return json.dumps(value, ensure_ascii=False)
