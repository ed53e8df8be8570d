"""termtop - command-line entry point."""

import logging
from pathlib import Path
from typing import Annotated

from rich.console import Console
import typer

from termtop.config import ConfigError, LoggingSettings, Settings, load_settings
from termtop.monitor import ProcessSource, ProcessTerminator
from termtop.session import Session

__version__ = "0.1.0"

app = typer.Typer(
    name="termtop",
    help="Terminal process monitor: list, rank, watch and kill processes.",
    no_args_is_help=False,
    add_completion=False,
)

err_console = Console(stderr=True)


def configure_logging(config: LoggingSettings) -> None:
    """Send termtop logs to the configured file, or nowhere when disabled.

    The terminal is the user interface, so logs never go to stdout or stderr.
    """
    root = logging.getLogger("termtop")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if not config.enabled:
        root.addHandler(logging.NullHandler())
        root.propagate = False
        return

    path = Path(config.file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(config.level)
    root.propagate = False


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"termtop version {__version__}")
        raise typer.Exit()


def build_session(settings: Settings) -> Session:
    """Wire the psutil-backed collaborators into a session."""
    return Session(ProcessSource(), ProcessTerminator(), settings=settings)


@app.command()
def run(
    interval: Annotated[
        float | None,
        typer.Option("--interval", "-i", help="Seconds between auto-refresh updates"),
    ] = None,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable coloured output"),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a YAML config file"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Enable file logging at this level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = False,
) -> None:
    """Start the interactive process monitor."""
    overrides: dict = {"interval": interval}
    if no_color:
        overrides["color"] = False
    if log_level is not None:
        overrides["logging"] = {"enabled": True, "level": log_level.upper()}

    try:
        settings = load_settings(config, overrides)
    except (ConfigError, FileNotFoundError) as e:
        err_console.print(str(e), style="bold red", markup=False, highlight=False)
        raise typer.Exit(code=2) from e

    configure_logging(settings.logging)
    session = build_session(settings)
    session.welcome()
    session.run()


def main() -> None:
    """Entry point for termtop application."""
    app()


if __name__ == "__main__":
    main()
