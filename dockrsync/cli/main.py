"""
Main CLI entry point for dockrsync.
"""

# Standard library imports
import subprocess
from typing import List, Optional

# Third-party imports
import click
import typer
from typer.core import TyperCommand, TyperGroup

# Local imports
from dockrsync.cli.exec_args import parse_exec_args
from dockrsync.cli.setup_commands import setup_app
from dockrsync.core.transport import TransportInvocation
from dockrsync.errors import DockrsyncError, ToolNotFound
from dockrsync.runtime import Runtime
from dockrsync.utils.logging import configure_logging
from dockrsync.utils.paths import get_project_paths
from dockrsync.utils.rich_console import get_console, get_console_logger, print_error, print_table

console = get_console()
logger = get_console_logger()

HELP_OPTIONS = ("-h", "--help")
# Commands that run without a settings file.
NO_SETTINGS_COMMANDS = {"setup", "checkversion", "help"}

COMMAND_ROWS = [
    ["setup", "Write .dockrsync settings and exclude lists"],
    ["watch [service]", "Push every local change into the container"],
    ["push|sync [service]", "Copy the project into the container"],
    ["fetch [service]", "Copy the project from the container back to disk"],
    ["bash [service]", "Open a bash shell in the container"],
    ["exec [service] -- command...", "Run a command in the container"],
    ["forward [service] [args...]", "Forward ports (not implemented yet)"],
    ["checkversion", "Check for a newer version (not implemented yet)"],
    ["help", "Show this help"],
]


def print_main_help() -> None:
    console.print("dockrsync", style="bold cyan")
    console.print("Keep a local project in sync with a docker-compose container.\n")
    print_table(["Subcommand", "Description"], COMMAND_ROWS, title="Available dockrsync Subcommands")
    console.print("\nThe service defaults to DEFAULT_SERVICE from .dockrsync.")


class HelpOnErrorGroup(TyperGroup):
    """Routes unknown commands, usage errors and dockrsync errors to help and exit codes."""

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        if args:
            first = args[0]
            if first in HELP_OPTIONS:
                print_main_help()
                ctx.exit(0)
            if self.get_command(ctx, first) is None:
                console.print(f"Unknown option: {first}", markup=False, highlight=False)
                print_main_help()
                ctx.exit(0)
        return super().parse_args(ctx, args)

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except DockrsyncError as error:
            print_error(str(error))
            raise typer.Exit(1)
        except click.UsageError as error:
            print_error(error.format_message())
            print_main_help()
            raise typer.Exit(1)


class RawArgsCommand(TyperCommand):
    """Keeps the unparsed arguments, `--` included, in ``ctx.meta["raw_args"]``."""

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.meta["raw_args"] = list(args)
        return super().parse_args(ctx, args)


PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}

app = typer.Typer(
    cls=HelpOnErrorGroup,
    add_completion=False,
    help="dockrsync - keep a local project in sync with a docker-compose container.",
)

app.add_typer(setup_app, name="setup", help="Write .dockrsync settings and exclude lists")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """
    dockrsync - keep a local project in sync with a docker-compose container.
    """
    configure_logging()
    if ctx.invoked_subcommand is None:
        print_main_help()
        raise typer.Exit(0)
    if ctx.invoked_subcommand in NO_SETTINGS_COMMANDS:
        return
    ctx.obj = Runtime.load(get_project_paths())


def get_runtime(ctx: typer.Context) -> Runtime:
    return ctx.find_root().obj


def run_in_container(transport: TransportInvocation, *command: str) -> int:
    """Run a command through the transport, attached to this terminal."""
    argv = transport.argv(*command)
    try:
        return subprocess.run(argv, check=False).returncode
    except FileNotFoundError:
        raise ToolNotFound(argv[0])


SERVICE_ARGUMENT = typer.Argument(None, help="Compose service (defaults to DEFAULT_SERVICE)", show_default=False)


@app.command()
def watch(ctx: typer.Context, service: Optional[str] = SERVICE_ARGUMENT):
    """Watch the project and push every change into the container.

    Press Ctrl+C to stop watching.
    """
    runtime = get_runtime(ctx)
    runtime.resolver.check(service)
    runtime.watch_loop().run(service)


@app.command("sync", help="Alias of push.")
@app.command("push")
def push(ctx: typer.Context, service: Optional[str] = SERVICE_ARGUMENT):
    """Copy the project into the container."""
    runtime = get_runtime(ctx)
    runtime.resolver.check(service)
    runtime.synchronizer().push(service)
    logger.success("Push complete")


@app.command()
def fetch(ctx: typer.Context, service: Optional[str] = SERVICE_ARGUMENT):
    """Copy the project from the container back to disk."""
    runtime = get_runtime(ctx)
    runtime.resolver.check(service)
    runtime.synchronizer().fetch(service)
    logger.success("Fetch complete")


@app.command()
def bash(ctx: typer.Context, service: Optional[str] = SERVICE_ARGUMENT):
    """Open a bash shell in the container."""
    runtime = get_runtime(ctx)
    runtime.resolver.check(service)
    transport = runtime.container_transport(service, interactive=True)
    raise typer.Exit(run_in_container(transport, "bash"))


@app.command("exec", cls=RawArgsCommand, context_settings=PASSTHROUGH)
def exec_command(ctx: typer.Context):
    """Run a command in the container: exec [service] -- command..."""
    request = parse_exec_args(ctx.meta.get("raw_args", []))
    runtime = get_runtime(ctx)
    runtime.resolver.check(request.service)
    transport = runtime.container_transport(request.service, interactive=False)
    raise typer.Exit(run_in_container(transport, *request.command))


@app.command(context_settings=PASSTHROUGH)
def forward(ctx: typer.Context):
    """Forward ports from the container (not implemented yet)."""
    console.print("forward is not implemented yet", style="yellow")


@app.command()
def checkversion():
    """Check for a newer dockrsync (not implemented yet)."""
    console.print("checkversion is not implemented yet", style="yellow")


@app.command("help")
def help_command():
    """Show the list of subcommands."""
    print_main_help()


if __name__ == "__main__":
    app()
