"""Interactive command loop and auto-refresh loop."""

from collections.abc import Callable, Sequence
from datetime import datetime
from enum import Enum
import logging
import re
import threading
from typing import TextIO

from rich.console import Console

from termtop.ansi import CLEAR_SCREEN
from termtop.config import Settings
from termtop.errors import MonitorError, ValidationError
from termtop.models import ProcessSample
from termtop.table import Palette, TableModel, TableRenderer
from termtop.views import BANNER, HELP, LEGEND, process_table, top_table

logger = logging.getLogger(__name__)

PROMPT = "\n[bold bright_green]termtop ⚡ > [/]"
DECIMAL_PATTERN = re.compile(r"[0-9]+")
CONFIRM_ANSWERS = ("y", "yes")

ProcessSourceFn = Callable[[], Sequence[ProcessSample]]
TerminatorFn = Callable[[str], None]
ReadLineFn = Callable[[str], str]


class SessionState(Enum):
    """States of the command loop."""

    AWAITING_COMMAND = "awaiting_command"
    EXITED = "exited"


class Session:
    """
    Line-oriented command loop over a process source and a terminator.

    Each command fetches a fresh process list, builds a table, renders it and
    discards it. Errors derived from MonitorError are reported and the loop
    carries on; only ``exit`` or end of input leaves it.
    """

    def __init__(
        self,
        source: ProcessSourceFn,
        terminator: TerminatorFn,
        *,
        settings: Settings | None = None,
        out: TextIO | None = None,
        read_line: ReadLineFn | None = None,
        console: Console | None = None,
    ) -> None:
        """
        Initialize the Session.

        Args:
            source: Returns processes sorted by CPU usage, raises FetchError.
            terminator: Kills a process by identifier, raises TerminationError.
            settings: Limits, refresh interval and colour preference.
            out: Stream tables and messages are written to. Defaults to the
                console's file.
            read_line: Reads one line after showing a prompt; raises EOFError
                at end of input. Defaults to ``console.input``.
            console: Rich console used for messages.
        """
        self._source = source
        self._terminator = terminator
        self._settings = settings or Settings()
        self._console = console or Console(file=out, highlight=False, no_color=not self._settings.color)
        self._out = out or self._console.file
        self._read_line = read_line or self._console.input
        self._palette = Palette(color=self._settings.color and self._console.is_terminal)
        self._renderer = TableRenderer(self._out, self._palette)
        self._state = SessionState.AWAITING_COMMAND

        commands: dict[tuple[str, ...], Callable[[list[str]], None]] = {
            ("list", "ls"): self._list_command,
            ("kill",): self._kill_command,
            ("refresh", "r"): self._refresh_command,
            ("top",): self._top_command,
            ("help", "h", "?"): self._help_command,
            ("clear", "cls"): self._clear_command,
            ("exit", "quit", "q"): self._exit_command,
        }
        self._commands = {name: handler for names, handler in commands.items() for name in names}

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def palette(self) -> Palette:
        return self._palette

    def welcome(self) -> None:
        """Clear the screen and print the banner."""
        self.clear()
        self._console.print(BANNER, style="bold bright_cyan", markup=False)
        self._info("Ready to monitor your system! Type 'help' for commands or 'list' to start.")

    def run(self) -> None:
        """Read and dispatch commands until ``exit`` or end of input."""
        while self._state is SessionState.AWAITING_COMMAND:
            line = self._read(PROMPT)
            if line is None:
                self._exit_command([])
                break
            self.handle(line)

    def handle(self, line: str) -> SessionState:
        """Dispatch one input line and return the resulting state."""
        args = line.split()
        if not args:
            return self._state

        name, rest = args[0], args[1:]
        handler = self._commands.get(name)
        if handler is None:
            self._error(f"Unknown command: {name}")
            self._info("INFO: Type 'help' to see available commands")
            return self._state

        logger.debug("Dispatching %r with %r", name, rest)
        try:
            handler(rest)
        except MonitorError as exc:
            logger.warning("%s failed: %s", name, exc)
            self._error(str(exc))
        return self._state

    def refresh(self, stop: threading.Event | None = None) -> None:
        """
        Redraw the process list every ``settings.interval`` seconds.

        Runs until ``stop`` is set. A FetchError ends the loop and propagates
        to the caller.
        """
        stop = stop or threading.Event()
        self._info("Auto-refresh mode (Press Ctrl+C to stop)")
        while not stop.is_set():
            self._show_processes(self._source())
            self._console.print(f"\n[bold bright_blue]Last updated:[/] {datetime.now():%H:%M:%S}")
            self._info("Press Ctrl+C to stop auto-refresh")
            stop.wait(self._settings.interval)

    def clear(self) -> None:
        self._out.write(CLEAR_SCREEN)
        self._out.flush()

    # Commands

    def _list_command(self, args: list[str]) -> None:
        self._show_processes(self._source())

    def _kill_command(self, args: list[str]) -> None:
        if not args:
            raise ValidationError("Usage: kill <pid>")
        pid = args[0]
        if not DECIMAL_PATTERN.fullmatch(pid):
            raise ValidationError("Invalid PID - must be a number")

        answer = self._read(f"[bold bright_blue]WARNING: Are you sure you want to kill process[/] {pid}? (y/N): ")
        if answer is None or answer.strip().lower() not in CONFIRM_ANSWERS:
            self._info("CANCELLED: Kill operation cancelled")
            return

        self._terminator(pid)
        self._console.print(f"[bold bright_green on black]SUCCESS: Successfully killed process {pid}[/]")

    def _refresh_command(self, args: list[str]) -> None:
        try:
            self.refresh()
        except KeyboardInterrupt:
            self._console.print()
            self._info("Auto-refresh stopped")

    def _top_command(self, args: list[str]) -> None:
        count = self._settings.top_default
        if args:
            if DECIMAL_PATTERN.fullmatch(args[0]) and int(args[0]) > 0:
                count = int(args[0])

        samples = self._source()
        count = min(count, len(samples))
        self.clear()
        self._console.print(f"[bold bright_blue]Top[/] [bold bright_green on black]{count}[/]\n")
        self._render(top_table(samples, count, self._palette))

    def _help_command(self, args: list[str]) -> None:
        self._console.print(HELP, style="bold bright_blue", markup=False)

    def _clear_command(self, args: list[str]) -> None:
        self.clear()

    def _exit_command(self, args: list[str]) -> None:
        self._console.print("[bold bright_green on black]Thanks for using termtop! Goodbye![/]")
        self._state = SessionState.EXITED

    # Output helpers

    def _show_processes(self, samples: Sequence[ProcessSample]) -> None:
        self.clear()
        self._console.print(
            f"\n[bold bright_blue]Total Processes:[/] [bold bright_green on black]{len(samples)}[/]\n"
        )
        self._render(process_table(samples, self._settings.list_limit, self._palette))
        self._console.print()
        self._console.print(LEGEND)

    def _render(self, table: TableModel) -> None:
        self._renderer.render(table)
        self._out.flush()

    def _read(self, prompt: str) -> str | None:
        try:
            return self._read_line(prompt)
        except EOFError:
            return None

    def _error(self, message: str) -> None:
        self._console.print(f"ERROR: {message}", style="bold bright_red on black", markup=False)

    def _info(self, message: str) -> None:
        self._console.print(message, style="bold bright_blue", markup=False)
