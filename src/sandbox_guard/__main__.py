"""sandbox-guard command line entry point.

Checks configuration documents and single values from the shell, for use in
pre-start hooks and CI.
"""

import json
from pathlib import Path

import typer

from sandbox_guard.config import GuardConfig
from sandbox_guard.loader import check_config_file
from sandbox_guard.utils.errors import ConfigLoadError
from sandbox_guard.utils.exec_safety import executable_rejection, path_rejection
from sandbox_guard.utils.lexical import RejectionReason, describe
from sandbox_guard.utils.logger import get_logger, setup_logger
from sandbox_guard.version import __version__

# Exit codes
EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_LOAD_ERROR = 2

app = typer.Typer(
    name="sandbox-guard",
    help="Validate sandbox executables, paths and docker settings",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sandbox-guard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Also write log records to this file (rotated at 10 MB)",
        dir_okay=False,
    ),
) -> None:
    """Configure logging for every command."""
    setup_logger(GuardConfig(), log_file=log_file)


def _report_value(reason: RejectionReason | None) -> None:
    if reason is None:
        typer.echo("accepted")
        raise typer.Exit(EXIT_OK)
    typer.echo(f"rejected: {reason.value} ({describe(reason)})")
    raise typer.Exit(EXIT_REJECTED)


@app.command("check")
def check(
    file: Path = typer.Argument(..., help="JSON or YAML configuration document"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Validate the docker sandbox settings of a configuration document."""
    logger = get_logger(__name__)
    try:
        result = check_config_file(file, GuardConfig())
    except ConfigLoadError as e:
        logger.error(str(e))
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(EXIT_LOAD_ERROR) from e

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif result.ok:
        typer.echo(f"{file}: ok")
    else:
        for issue in result.errors:
            typer.echo(f"{file}: {issue.path}: {issue.message}")

    raise typer.Exit(EXIT_OK if result.ok else EXIT_REJECTED)


# Values may start with "-"; "--" also ends option parsing
VALUE_COMMAND_SETTINGS = {"ignore_unknown_options": True}


@app.command("exec", context_settings=VALUE_COMMAND_SETTINGS)
def check_executable(
    value: str = typer.Argument(..., help="Executable path or bare command name"),
) -> None:
    """Classify one executable value.

    Values starting with "-" are accepted as-is; "sandbox-guard exec -- VALUE" also works.
    """
    _report_value(executable_rejection(value))


@app.command("path", context_settings=VALUE_COMMAND_SETTINGS)
def check_path(
    value: str = typer.Argument(..., help="Filesystem path"),
) -> None:
    """Classify one filesystem path value.

    A leading "-" is a valid path component; "sandbox-guard path -- VALUE" also works.
    """
    _report_value(path_rejection(value))


if __name__ == "__main__":
    app()
