"""Table model and box-drawing renderer for process listings."""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TextIO

from rich.color import ColorSystem
from rich.style import Style

from termtop.ansi import pad, visible_length
from termtop.models import DisplayCategory, Formatted

ROLE_STYLES: dict[str, Style] = {
    "header": Style(color="bright_cyan", bgcolor="blue", bold=True),
    "border": Style(color="bright_blue", bold=True),
    "pid": Style(color="bright_white", bold=True),
    "user": Style(color="bright_cyan"),
    "command": Style(color="white"),
}

CPU_STYLES: dict[DisplayCategory, Style] = {
    DisplayCategory.CRITICAL: Style(color="bright_red", bold=True),
    DisplayCategory.WARNING: Style(color="bright_yellow", bold=True),
    DisplayCategory.NORMAL: Style(color="bright_green"),
}

MEMORY_STYLES: dict[DisplayCategory, Style] = {
    DisplayCategory.CRITICAL: Style(color="bright_magenta", bold=True),
    DisplayCategory.NORMAL: Style(color="white"),
}


class TableModel:
    """Headers, rows of display cells and the width each column needs.

    A column is as wide as its header or its widest cell, whichever is
    larger. Cells are measured by visible length so embedded styling does not
    count, but they are stored untouched.
    """

    def __init__(self, headers: Sequence[str]) -> None:
        if not headers:
            raise ValueError("A table needs at least one column")
        self._headers = tuple(headers)
        self._rows: list[tuple[str, ...]] = []
        self._widths = [visible_length(header) for header in self._headers]

    @property
    def headers(self) -> tuple[str, ...]:
        return self._headers

    @property
    def rows(self) -> list[tuple[str, ...]]:
        return list(self._rows)

    @property
    def widths(self) -> tuple[int, ...]:
        return tuple(self._widths)

    def add_row(self, cells: Sequence[str]) -> None:
        """Append a row; cells beyond the last header are dropped."""
        row = tuple(cells[: len(self._headers)])
        self._rows.append(row)
        for i, cell in enumerate(row):
            self._widths[i] = max(self._widths[i], visible_length(cell))

    def __len__(self) -> int:
        return len(self._rows)


class Palette:
    """Turns display roles and metric categories into styled text.

    With ``color=False`` every method returns its text unchanged.
    """

    def __init__(self, color: bool = True) -> None:
        self._color_system = ColorSystem.STANDARD if color else None

    @property
    def color(self) -> bool:
        return self._color_system is not None

    def paint(self, text: str, style: Style) -> str:
        return style.render(text, color_system=self._color_system)

    def role(self, text: str, role: str) -> str:
        return self.paint(text, ROLE_STYLES[role])

    def cpu(self, value: Formatted) -> str:
        return self._metric(value, CPU_STYLES)

    def memory(self, value: Formatted) -> str:
        return self._metric(value, MEMORY_STYLES)

    def command(self, value: Formatted) -> str:
        return self.role(value.text, "command")

    def _metric(self, value: Formatted, styles: Mapping[DisplayCategory, Style]) -> str:
        if value.category is None:
            return value.text
        return self.paint(value.text, styles.get(value.category, styles[DisplayCategory.NORMAL]))


class TableRenderer:
    """Draws a TableModel as a bordered grid.

    Each field is the column width plus one space of padding on each side.
    Rows shorter than the header list get blank fields for the missing
    columns so the right border stays aligned.
    """

    def __init__(self, out: TextIO, palette: Palette | None = None) -> None:
        self._out = out
        self._palette = palette or Palette()

    def render(self, model: TableModel) -> None:
        """Write the table to the output stream."""
        for line in self.lines(model):
            self._out.write(line + "\n")

    def lines(self, model: TableModel) -> Iterator[str]:
        """Yield the table's lines, top border first."""
        widths = model.widths
        yield self._border(widths, "┌", "┬", "┐")
        yield self._row(
            self._palette.role(pad(header, width), "header")
            for header, width in zip(model.headers, widths)
        )
        yield self._border(widths, "├", "┼", "┤")
        for row in model.rows:
            yield self._row(
                pad(row[i], width) if i < len(row) else " " * width
                for i, width in enumerate(widths)
            )
        yield self._border(widths, "└", "┴", "┘")

    def _border(self, widths: Sequence[int], left: str, middle: str, right: str) -> str:
        fill = middle.join("─" * (width + 2) for width in widths)
        return self._palette.role(f"{left}{fill}{right}", "border")

    @staticmethod
    def _row(fields: Iterable[str]) -> str:
        return "│ " + " │ ".join(fields) + " │"
