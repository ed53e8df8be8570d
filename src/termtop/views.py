"""Layouts of the process tables shown by the session."""

from collections.abc import Sequence

from termtop.formatting import format_command, format_cpu, format_memory
from termtop.models import ProcessSample
from termtop.table import Palette, TableModel

LIST_HEADERS = ("PID", "USER", "CPU%", "MEM%", "COMMAND")
TOP_HEADERS = ("RANK",) + LIST_HEADERS

# Ranks shown in brackets instead of with a hash
PODIUM = 3


def sample_cells(sample: ProcessSample, palette: Palette) -> list[str]:
    """Styled cells for one process, in LIST_HEADERS order."""
    return [
        palette.role(sample.pid, "pid"),
        palette.role(sample.user, "user"),
        palette.cpu(format_cpu(sample.cpu_percent)),
        palette.memory(format_memory(sample.memory_percent)),
        palette.command(format_command(sample.command)),
    ]


def rank_label(rank: int) -> str:
    return f"[{rank}]" if rank <= PODIUM else f"#{rank}"


def process_table(samples: Sequence[ProcessSample], limit: int, palette: Palette) -> TableModel:
    """Table of the first ``limit`` samples in source order."""
    table = TableModel(LIST_HEADERS)
    for sample in samples[:limit]:
        table.add_row(sample_cells(sample, palette))
    return table


def top_table(samples: Sequence[ProcessSample], count: int, palette: Palette) -> TableModel:
    """Ranked table of the first ``count`` samples, capped at what is available."""
    table = TableModel(TOP_HEADERS)
    for rank, sample in enumerate(samples[:count], start=1):
        table.add_row([rank_label(rank), *sample_cells(sample, palette)])
    return table


LEGEND = (
    "[bold bright_blue]Legend:[/]\n"
    "  [bold bright_red]RED[/] High CPU (>50%)  "
    "[bold bright_yellow]YELLOW[/] Medium CPU (>20%)  "
    "[bright_green]GREEN[/] Low CPU\n"
    "  [bold bright_magenta]PURPLE[/] High Memory (>10%)  "
    "[bold bright_green on black]SUCCESS[/] Process terminated successfully"
)

HELP = """\
╔════════════════════════════════════════════════════════════════════════════╗
║                                COMMANDS                                    ║
╠════════════════════════════════════════════════════════════════════════════╣
║  list, ls                │  Show running processes                         ║
║  kill <pid>              │  Terminate process by PID                       ║
║  refresh, r              │  Auto-refresh process list                      ║
║  top [n]                 │  Show top N processes (default: 15)             ║
║  help, h, ?              │  Show this help menu                            ║
║  clear, cls              │  Clear the screen                               ║
║  exit, quit, q           │  Exit termtop                                   ║
╚════════════════════════════════════════════════════════════════════════════╝"""

BANNER = r"""
  _                      _
 | |_ ___ _ __ _ __ ___ | |_ ___  _ __
 | __/ _ \ '__| '_ ` _ \| __/ _ \| '_ \
 | ||  __/ |  | | | | | | || (_) | |_) |
  \__\___|_|  |_| |_| |_|\__\___/| .__/
                                 |_|
"""
