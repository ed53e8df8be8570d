"""Terminal escape markers and visible-length measurement.

Styled cells carry ANSI escape sequences that occupy no screen columns.
Measuring a cell therefore walks the string with a small state machine over
this grammar:

    CSI sequence   ESC '[' parameter* intermediate* final
                   parameter    0x30-0x3F  (digits, ';', '?', ...)
                   intermediate 0x20-0x2F
                   final        0x40-0x7E  ('m' for colours, 'J', 'H', ...)
    OSC sequence   ESC ']' payload* (BEL | ESC '\\')
    short escape   ESC <any other character>

Everything inside a sequence is non-printing; every other character counts
as one column. A malformed CSI (a byte outside the ranges above) ends the
sequence and the offending character is counted as text. An unterminated
sequence at the end of the string contributes nothing.
"""

from collections.abc import Iterator
from enum import Enum

ESC = "\x1b"
BEL = "\x07"

CLEAR_SCREEN = f"{ESC}[2J{ESC}[H"


class _State(Enum):
    TEXT = 0
    ESCAPE = 1
    CSI = 2
    OSC = 3
    OSC_ESCAPE = 4


def _visible_chars(text: str) -> Iterator[str]:
    """Yield the characters of ``text`` that are drawn on screen."""
    state = _State.TEXT
    for char in text:
        if state is _State.TEXT:
            if char == ESC:
                state = _State.ESCAPE
            else:
                yield char
        elif state is _State.ESCAPE:
            if char == "[":
                state = _State.CSI
            elif char == "]":
                state = _State.OSC
            else:
                state = _State.TEXT
        elif state is _State.CSI:
            code = ord(char)
            if 0x20 <= code <= 0x3F:
                continue
            state = _State.TEXT
            if not 0x40 <= code <= 0x7E:
                yield char
        elif state is _State.OSC:
            if char == BEL:
                state = _State.TEXT
            elif char == ESC:
                state = _State.OSC_ESCAPE
        else:
            state = _State.TEXT if char == "\\" else _State.OSC


def strip_markers(text: str) -> str:
    """Return ``text`` with every escape sequence removed."""
    return "".join(_visible_chars(text))


def visible_length(text: str) -> int:
    """Number of screen columns ``text`` occupies, ignoring escape sequences."""
    return sum(1 for _ in _visible_chars(text))


def pad(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces to ``width`` visible columns.

    The original text, markers included, is kept intact.
    """
    return text + " " * max(0, width - visible_length(text))
