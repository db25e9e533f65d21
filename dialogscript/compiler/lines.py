"""
Line classification.

Every non-blank script line is one of five kinds. Classification looks
at the raw line (indentation included); indentation is stripped
afterwards, once, before the line is dispatched.

    Kind          Rule (first match wins)
    CHOICE        starts with a tab, or indented by >= 4 whitespace chars
    TAG           "[...]", longer than one char
    COMMAND       starts with '@'
    CHARACTER_ID  ends with ':'
    DIALOGUE_LINE anything else
"""

from __future__ import annotations

from enum import Enum, auto

DEFAULT_INDENT_THRESHOLD = 4


class LineType(Enum):
    """Syntactic kind of a script line."""
    CHARACTER_ID = auto()
    DIALOGUE_LINE = auto()
    COMMAND = auto()
    CHOICE = auto()
    TAG = auto()


def is_blank(line: str) -> bool:
    """True for empty or whitespace-only lines."""
    return not line or line.isspace()


def is_indented(line: str, threshold: int = DEFAULT_INDENT_THRESHOLD) -> bool:
    """
    Check whether a line belongs to a choice block.

    A leading tab always counts. Otherwise the run of leading whitespace
    must be at least `threshold` characters long. A line made only of
    whitespace counts as indented.
    """
    if not line:
        return False

    if line[0] == '\t':
        return True

    for i, char in enumerate(line):
        if not char.isspace():
            return i >= threshold

    return True


def classify(line: str, indent_threshold: int = DEFAULT_INDENT_THRESHOLD) -> LineType:
    """Determine the kind of a raw line."""
    if is_indented(line, indent_threshold):
        return LineType.CHOICE
    if len(line) > 1 and line[0] == '[' and line[-1] == ']':
        return LineType.TAG
    if line.startswith('@'):
        return LineType.COMMAND
    if line.endswith(':'):
        return LineType.CHARACTER_ID
    return LineType.DIALOGUE_LINE


def strip_indent(line: str) -> str:
    """
    Remove leading indentation.

    Exactly one leading tab is removed if the line starts with one,
    otherwise the whole leading whitespace run is removed.
    """
    if line.startswith('\t'):
        return line[1:]
    return line.lstrip()
