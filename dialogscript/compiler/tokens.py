"""
Token parsers for classified lines.
"""

from __future__ import annotations

from dialogscript.graph.nodes import Command


def parse_command(line: str) -> Command:
    """
    Parse a command line such as "@heal 10".

    The name runs from after '@' to the first whitespace character, the
    parameter is everything after that whitespace run. Without any space
    the whole rest of the line is the name and there is no parameter.
    """
    if ' ' not in line:
        return Command(name=line[1:], parameter=None)

    end = 1
    while not line[end].isspace():
        end += 1

    return Command(name=line[1:end], parameter=line[end:].lstrip())


def parse_character_id(line: str) -> str:
    """Return the label text before the last ':' ("Alice:" -> "Alice")."""
    index = line.rfind(':')
    if index < 0:
        return line
    return line[:index]


def parse_tag(line: str) -> str | None:
    """
    Extract the content of a bracket tag ("[intro]" -> "intro").

    Each '[' moves the start past itself; the first ']' ends the scan.
    Lines shorter than three characters hold no tag.
    """
    if len(line) < 3:
        return None

    start = 0
    for i, char in enumerate(line):
        if char == '[':
            start = i + 1
        elif char == ']':
            return line[start:i]

    return line
