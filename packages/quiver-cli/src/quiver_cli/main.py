from __future__ import annotations

import sys

import typer
from quiver_core import __version__, setup_logging

from quiver_cli.commands.skills import skills_app, skills_run

app = typer.Typer(
    name="quiver",
    help="Quiver — Agent Skills loader",
    no_args_is_help=True,
)

app.add_typer(
    skills_app,
    name="skills",
    help="Manage Agent Skills (agentskills.io)",
)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    setup_logging("DEBUG" if verbose else "WARNING", json_output=json_logs)


@app.command()
def version() -> None:
    """Show the Quiver version."""
    from rich.console import Console
    Console().print(f"quiver {__version__}")


def _handle_slash_command() -> bool:
    """Intercept slash-command invocation (``quiver /skill:name [args]``).

    Returns:
        *True* if a slash command was handled (caller should exit),
        *False* otherwise (normal Typer dispatch should proceed).
    """
    if len(sys.argv) < 2:
        return False

    first_arg = sys.argv[1]
    if not first_arg.startswith("/"):
        return False

    command = first_arg.lstrip("/")
    if not command:
        return False

    setup_logging("WARNING")
    try:
        skills_run(command, sys.argv[2:])
    except typer.Exit as exc:
        sys.exit(exc.exit_code)
    return True


def main() -> None:
    """Entry-point that supports both normal commands and /slash invocation."""
    if _handle_slash_command():
        return
    app()


if __name__ == "__main__":
    main()
