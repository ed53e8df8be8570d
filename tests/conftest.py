"""Shared fixtures and fakes for termtop tests."""

import io

from rich.console import Console
import pytest

from termtop.config import Settings
from termtop.errors import FetchError, TerminationError
from termtop.models import ProcessSample
from termtop.session import Session


def make_samples(count: int) -> list[ProcessSample]:
    """Samples sorted by descending CPU, as a process source returns them."""
    return [
        ProcessSample(
            pid=str(1000 + i),
            user="root" if i % 2 else "alice",
            cpu_percent=float(90 - i * 10),
            memory_percent=float(i),
            command=f"proc{i}",
        )
        for i in range(count)
    ]


class FakeSource:
    """Process source returning canned samples, or raising on chosen calls."""

    def __init__(self, samples=None, fail_on=(), raise_exc=None):
        self.samples = samples if samples is not None else make_samples(5)
        self.fail_on = set(fail_on)
        self.raise_exc = raise_exc
        self.calls = 0
        self.on_call = None

    def __call__(self):
        self.calls += 1
        if self.on_call is not None:
            self.on_call(self.calls)
        if self.calls in self.fail_on:
            raise self.raise_exc or FetchError("ps unavailable")
        return list(self.samples)


class FakeTerminator:
    """Records every pid it is asked to kill."""

    def __init__(self, error=None):
        self.error = error
        self.calls: list[str] = []

    def __call__(self, pid):
        self.calls.append(pid)
        if self.error is not None:
            raise TerminationError(pid, self.error)


class ScriptedInput:
    """Feeds prepared lines to the session, then signals end of input."""

    def __init__(self, lines=()):
        self.lines = list(lines)
        self.prompts: list[str] = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


class SessionHarness:
    def __init__(self, source=None, terminator=None, lines=(), settings=None):
        self.out = io.StringIO()
        self.source = source or FakeSource()
        self.terminator = terminator or FakeTerminator()
        self.input = ScriptedInput(lines)
        console = Console(file=self.out, width=200, highlight=False)
        self.session = Session(
            self.source,
            self.terminator,
            settings=settings or Settings(interval=0.1),
            out=self.out,
            read_line=self.input,
            console=console,
        )

    @property
    def output(self) -> str:
        return self.out.getvalue()

    def table_rows(self) -> list[str]:
        """Data rows of the last rendered table."""
        lines = self.output.splitlines()
        start = max(i for i, line in enumerate(lines) if line.startswith("├"))
        rows = []
        for line in lines[start + 1 :]:
            if line.startswith("└"):
                break
            rows.append(line)
        return rows


@pytest.fixture
def harness():
    return SessionHarness()
