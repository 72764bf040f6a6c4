"""Show a fault either as a Script Filter item or as a notification."""

from __future__ import annotations

from alfred_todoist.calls import Call, CallContextResolver, CallContextUnavailable, encode_call
from alfred_todoist.config import Settings
from alfred_todoist.triage.errors import WorkflowError, error_headline
from alfred_todoist.triage.issue_link import build_issue_url
from alfred_todoist.workflow.items import Item, ItemText, ScriptFilterList
from alfred_todoist.workflow.notification import Notification, Notifier

USER_FACING_METHODS = frozenset({"parse", "read", "readSettings"})
OPEN_URL_CALL = "openUrl"
BUG_TITLE = "Oops, something is not right"
BUG_SUBTITLE = "Create a bug report"
BUG_NOTIFICATION_MESSAGE = "Click to create a bug report"


class ErrorPresenter:
    """Render an error on exactly one channel.

    Calls whose output Alfred reads as a list (``USER_FACING_METHODS``) get a
    single selectable item; background calls get a notification.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        resolver: CallContextResolver | None = None,
        item_list: ScriptFilterList | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._settings = settings
        self._resolver = resolver or CallContextResolver()
        self._item_list = item_list if item_list is not None else ScriptFilterList()
        self._notifier = notifier or Notifier()

    @property
    def settings(self) -> Settings:
        return self._settings

    def use_settings(self, settings: Settings) -> None:
        """Swap in settings loaded after the presenter was installed."""

        self._settings = settings

    def is_user_facing_method(self) -> bool:
        try:
            call = self._resolver.current_call()
        except CallContextUnavailable:
            # Unknown context: a list item is harder to miss than a notification.
            return True
        return call.name in USER_FACING_METHODS

    def list_problem(self, error: WorkflowError) -> None:
        """Present a safe error with its own title and message."""

        project_url = self._settings.issue_tracker.project_url
        if self.is_user_facing_method():
            self._item_list.clear().add_item(
                Item(
                    arg=encode_call(Call(OPEN_URL_CALL, project_url)),
                    title=error.title,
                    subtitle=error.message,
                    valid=True,
                    text=ItemText(copy=error_headline(error)),
                ),
            ).write()
            return

        self._notifier.notify(
            Notification(subtitle=error.title, message=error.message, url=project_url),
        )

    def list_bug(self, error: BaseException) -> None:
        """Point the user at a prefilled bug report for ``error``."""

        issue_url = build_issue_url(
            error,
            tracker=self._settings.issue_tracker,
            environment=self._settings.environment,
            resolver=self._resolver,
        )
        if self.is_user_facing_method():
            self._item_list.clear().add_item(
                Item(
                    arg=encode_call(Call(OPEN_URL_CALL, issue_url)),
                    title=BUG_TITLE,
                    subtitle=BUG_SUBTITLE,
                    valid=True,
                    quicklookurl=issue_url,
                ),
            ).write()
            return

        self._notifier.notify(
            Notification(subtitle=BUG_TITLE, message=BUG_NOTIFICATION_MESSAGE, url=issue_url),
        )
