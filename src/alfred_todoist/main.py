"""CLI entrypoint for the Alfred Todoist workflow."""

import rich_click as click

from alfred_todoist import __version__
from alfred_todoist.app import bootstrap
from alfred_todoist.calls import CallContextResolver, decode_call
from alfred_todoist.config import EnvironmentMetadata
from alfred_todoist.dispatch import DISPATCHER
from alfred_todoist.triage.report import environment_lines

click.rich_click.USE_MARKDOWN = True


@click.group()
@click.version_option(version=__version__, prog_name="alfred-todoist")
def alfred_todoist() -> None:
    """Alfred Todoist workflow CLI."""


@alfred_todoist.command("call")
@click.argument("payload")
def call(payload: str) -> None:
    """Run one encoded workflow call, as handed back by an Alfred item `arg`."""

    DISPATCHER.dispatch(decode_call(payload))


@alfred_todoist.command("diagnostics")
def diagnostics() -> None:
    """Print the environment block attached to bug reports."""

    _emit_lines(
        environment_lines(
            environment=EnvironmentMetadata.from_env(),
            resolver=CallContextResolver(),
        ),
    )


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


def main() -> None:
    """Console script: install the error funnel, then run the CLI."""

    bootstrap()
    alfred_todoist()


if __name__ == "__main__":  # pragma: no cover
    main()
