"""Reading a scene file and splitting off its six leading elements."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from os import PathLike

_log = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\n\v\f\r")
_SEPARATORS = re.compile(r"[ \t\n]+")

ELEMENT_ORDER = ("NO", "SO", "WE", "EA", "F", "C")
ELEMENT_COUNT = len(ELEMENT_ORDER)


class CubError(ValueError):
    """Raised when a scene file is missing or malformed."""


@dataclass
class CubFile:
    """A scene file read and checked.

    ``elements`` holds the values of the element lines in file order;
    ``end_of_elements`` is the index of the line holding the last one.
    """

    lines: list[str]
    elements: list[str]
    end_of_elements: int
    map_rows: list[str] = field(default_factory=list)
    floor: tuple[int, int, int] | None = None
    ceiling: tuple[int, int, int] | None = None
    player_count: int = 0


def is_blank(line: str | None) -> bool:
    """True for a non-empty line made only of whitespace."""
    if not line:
        return False
    return all(ch in _WHITESPACE for ch in line)


def is_element(word: str) -> bool:
    """True if the word names one of the six scene elements."""
    return word in ELEMENT_ORDER


def line_is_map(line: str | None) -> bool:
    """Tell whether a line opens the map block while elements are read.

    Only a blank line gets past the first test, and a blank line never
    passes the second, so no line qualifies.
    """
    if not line or not is_blank(line):
        return False
    return not is_blank(line) and line[0] in " 10"


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def read_cub_file(path: str | PathLike[str]) -> list[str]:
    """Read a .cub file into lines that keep their newline characters."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            name = str(os.fspath(path))
            if len(name) < 4 or not name.endswith(".cub"):
                raise CubError("The file need to be .cub at the end")
            text = handle.read()
    except OSError as exc:
        raise CubError("File doesn't exist") from exc
    return _split_lines(text)


def split_elements(lines: list[str]) -> tuple[list[str], int]:
    """Collect the six element values, which must come in the fixed order.

    Blank lines are skipped. A line that is not the next element in order
    is reported and counted, and the scan goes on. Returns the values and
    the index of the line where the sixth element was found.
    """
    elements: list[str] = []
    count = 0
    for index, line in enumerate(lines):
        if is_blank(line):
            continue
        count += 1
        words = [word for word in _SEPARATORS.split(line) if word]
        if (
            len(words) != 2
            or not is_element(words[0])
            or ELEMENT_ORDER.index(words[0]) + 1 != count
        ):
            _log.error("Wrong orders of elements")
            continue
        elements.append(words[1])
        if count == ELEMENT_COUNT:
            return elements, index
    raise CubError("Elements are missing or out of order")