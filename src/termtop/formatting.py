"""Pure formatting of process metrics into display text."""

from termtop.models import DisplayCategory, Formatted

CPU_CRITICAL = 50.0
CPU_WARNING = 20.0
MEMORY_CRITICAL = 10.0

COMMAND_MAX_WIDTH = 25
ELLIPSIS = "..."


def _parse_percent(value: float | str) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_cpu(value: float | str) -> Formatted:
    """Format a CPU percentage as ``X.X%``.

    Above 50 is critical, above 20 is a warning, anything else is normal.
    Input that is not a number is returned as-is without a category.
    """
    percent = _parse_percent(value)
    if percent is None:
        return Formatted(str(value))

    if percent > CPU_CRITICAL:
        category = DisplayCategory.CRITICAL
    elif percent > CPU_WARNING:
        category = DisplayCategory.WARNING
    else:
        category = DisplayCategory.NORMAL
    return Formatted(f"{percent:.1f}%", category)


def format_memory(value: float | str) -> Formatted:
    """Format a memory percentage as ``X.X%``; above 10 is critical."""
    percent = _parse_percent(value)
    if percent is None:
        return Formatted(str(value))

    category = DisplayCategory.CRITICAL if percent > MEMORY_CRITICAL else DisplayCategory.NORMAL
    return Formatted(f"{percent:.1f}%", category)


def format_command(text: str) -> Formatted:
    """Cut commands longer than 25 characters to 22 plus an ellipsis."""
    if len(text) > COMMAND_MAX_WIDTH:
        text = text[: COMMAND_MAX_WIDTH - len(ELLIPSIS)] + ELLIPSIS
    return Formatted(text, DisplayCategory.NORMAL)
