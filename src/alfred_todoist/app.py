"""Process initialization: fault handlers, logging and stack limit."""

from __future__ import annotations

from alfred_todoist.calls import CallContextResolver
from alfred_todoist.config import EnvironmentMetadata, Settings
from alfred_todoist.logging_config import configure_logging
from alfred_todoist.triage.errors import configure_stack_limit
from alfred_todoist.triage.funnel import ErrorFunnel, install_fault_handlers
from alfred_todoist.triage.presenter import ErrorPresenter


def bootstrap(settings: Settings | None = None) -> ErrorFunnel:
    """Wire the error funnel into the process. Call once, before any work starts.

    The funnel is installed with default settings before the environment is
    read, so a setting that fails to parse or a log file that cannot be opened
    still reaches the user as a bug report.
    """

    resolver = CallContextResolver()
    presenter = ErrorPresenter(
        settings=settings or Settings(environment=EnvironmentMetadata.from_env()),
        resolver=resolver,
    )
    funnel = ErrorFunnel(
        presenter=presenter,
        environment=presenter.settings.environment,
        resolver=resolver,
    )
    handlers = install_fault_handlers(funnel)
    if handlers.funnel is not funnel:
        return handlers.funnel

    if settings is None:
        settings = Settings.from_env()
        presenter.use_settings(settings)
    configure_logging(settings.logging)
    configure_stack_limit(settings.stack_limit)
    settings.validate()
    return funnel
