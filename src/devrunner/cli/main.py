"""Main CLI entry point for devrunner.

Defines the CLI group and registers all subcommands.

Commands:
    build    - Build the project (clean, compile, package)
    test     - Run all tests
    start    - Start the application
    stop     - Stop the application
    restart  - Restart the application
    status   - Show application status
    logs     - Show application logs
    clean    - Clean the project
    all      - Build, test, and start the application
    help     - Show this help message

Every command except help checks prerequisites first. While a command
runs, SIGINT/SIGTERM stop the managed application before devrunner exits.
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys
from pathlib import Path

import click

from devrunner import __version__
from devrunner.shutdown import stop_on_interrupt
from devrunner.utils.logging.logger_setup import configure_logging

from .commands.build import all_command, build, clean, test
from .commands.logs import logs
from .commands.process import restart, start, stop
from .commands.status import status
from .context import create_runtime, fail_on_error
from .styling import style_error, style_warning
from .workflows import check_prerequisites

# Commands that run without loading config or checking prerequisites
_NO_RUNTIME_COMMANDS = frozenset({"help"})


class DevRunnerGroup(click.Group):
    """Group that lists commands in workflow order and exits 1 on unknown commands."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            click.echo(style_error(e.format_message()), err=True)
            click.echo(err=True)
            click.echo(ctx.get_help(), err=True)
            ctx.exit(1)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        formatter.write(
            """
Examples:
  devrunner build
  devrunner start
  devrunner all

Configuration:
  Overrides are read from devrunner.json in the project root
  (e.g. {"port": 8989, "stop_timeout_seconds": 30}).
"""
        )


@click.group(
    cls=DevRunnerGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="DEVRUNNER_PROJECT_ROOT",
    default=None,
    help="Project root containing pom.xml (default: current directory)",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, project_root: Path | None) -> None:
    """devrunner: Local development script for the API gateway.

    Builds, runs, and monitors the application as a background process.
    """
    if version:
        click.echo(f"devrunner {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return
    if ctx.invoked_subcommand in _NO_RUNTIME_COMMANDS:
        return

    with fail_on_error():
        runtime = create_runtime(project_root or Path.cwd())
        check_prerequisites(runtime)

    # The event log is only created in a verified project root
    configure_logging(runtime.config)
    ctx.obj = runtime
    ctx.with_resource(
        stop_on_interrupt(
            runtime.manager,
            notify=lambda message: click.echo(style_warning(message), err=True),
        )
    )


@click.command("help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this help message."""
    parent = ctx.parent if ctx.parent is not None else ctx
    click.echo(parent.get_help())


# Register commands (listed in this order in help)
cli.add_command(build)
cli.add_command(test)
cli.add_command(start)
cli.add_command(stop)
cli.add_command(restart)
cli.add_command(status)
cli.add_command(logs)
cli.add_command(clean)
cli.add_command(all_command)
cli.add_command(help_command)


def main() -> None:
    """CLI entry point."""
    cli()
