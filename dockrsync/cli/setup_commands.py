"""Setup command: writes `.dockrsync` and the exclude lists."""

from collections.abc import Callable

import typer
from rich.prompt import Confirm, Prompt

from dockrsync.core.excludes import ExcludeFiles
from dockrsync.settings import Settings
from dockrsync.utils.paths import get_project_paths
from dockrsync.utils.rich_console import get_console, print_table

console = get_console()

__all__ = ["setup_app", "validate_port", "validate_remote_dir"]

setup_app = typer.Typer(help="Setup dockrsync: write project settings and exclude lists.")


def validate_port(value: str) -> str:
    """Validate an ANYBAR_PORT value; empty disables the status indicator."""
    value = value.strip()
    if not value:
        return ""
    if not value.isdigit() or not 0 < int(value) < 65536:
        raise ValueError(f"Invalid port: {value}")
    return value


def validate_remote_dir(value: str) -> str:
    """Validate REMOTE_DIR, which must be an absolute path inside the container."""
    value = value.strip()
    if not value.startswith("/"):
        raise ValueError(f"Remote directory must be absolute: {value}")
    return value


def ask(prompt: str, default: str = "", validator: Callable[[str], str] | None = None) -> str:
    """Prompt until the validator accepts the answer."""
    while True:
        value = Prompt.ask(prompt, default=default, show_default=bool(default))
        if validator is None:
            return value.strip()
        try:
            return validator(value)
        except ValueError as error:
            console.print(f"[red]{error}[/red]")


@setup_app.callback(invoke_without_command=True)
def setup_callback(ctx: typer.Context):
    """Interactive setup: default service, status indicator port and delete behavior."""
    if ctx.invoked_subcommand is not None:
        return
    paths = get_project_paths()

    if paths.settings_file.exists():
        if not Confirm.ask(f"{paths.settings_file} already exists. Overwrite?", default=False):
            raise typer.Exit(0)

    values = {
        "DEFAULT_SERVICE": ask("Default service (empty for none)"),
        "ANYBAR_PORT": ask("AnyBar port (empty to disable)", validator=validate_port),
        "REMOTE_DIR": ask("Project directory inside the container", default="/app", validator=validate_remote_dir),
    }
    delete = Confirm.ask(
        "Delete files in the destination that no longer exist in the source? This cannot be undone",
        default=False,
    )
    values["DELETE_FLAG"] = "--delete" if delete else ""

    settings = Settings.from_mapping(values)
    settings.write(paths.settings_file)

    excludes = ExcludeFiles(paths)
    print_table(
        ["File", "Purpose"],
        [
            [paths.settings_file.name, "Settings"],
            [excludes.general().name, "Excluded from every sync"],
            [excludes.fetch_only().name, "Excluded from fetch only"],
        ],
        title="Setup complete",
    )
