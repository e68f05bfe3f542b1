"""Checks on a scene's element values and map, and loading a whole scene."""

from __future__ import annotations

import itertools
import os
import re
from dataclasses import dataclass
from os import PathLike

from .cubfile import CubError, CubFile, is_blank, read_cub_file, split_elements

_MAP_CHARS = frozenset("10NSWE")
_ALLOWED = frozenset("0 1NESW\n")
_PLAYER = frozenset("NESW")
_OPEN = frozenset(" \t\0")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_FLOOR_POSITION = 4
_CEILING_POSITION = 5


@dataclass(frozen=True)
class PlayerStart:
    """Where the player stands and which way ('N', 'E', 'S', 'W') it faces."""

    x: int
    y: int
    direction: str


def _is_map_content(line: str) -> bool:
    return any(ch in _MAP_CHARS for ch in line)


def extract_map(lines: list[str], end_of_elements: int) -> list[str]:
    """Return the map rows that follow the elements.

    The map runs from the first to the last line holding a map character;
    a blank line after its start is an error, and its first row must
    begin with a wall once leading spaces and tabs are skipped.
    """
    start: int | None = None
    end = -1
    first = end_of_elements + 1
    for index, line in enumerate(lines[first:], start=first):
        if _is_map_content(line):
            if start is None:
                start = index
            end = index
        elif start is not None and is_blank(line):
            raise CubError("Map contains invalid the map")
    if start is None:
        raise CubError("No map found in file")
    if not lines[start].lstrip(" \t").startswith("1"):
        raise CubError("Map corner doesn't start with a 1")
    return lines[start:end + 1]


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_rgb(text: str) -> tuple[int, int, int]:
    """Parse "R,G,B" with three components of one to three characters in 0..255."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise CubError("RGB color isn't valid")
    values = []
    for part in parts:
        if not 1 <= len(part) <= 3:
            raise CubError("RGB color isn't valid")
        value = _atoi(part)
        if not 0 <= value <= 255:
            raise CubError("RGB color isn't valid")
        values.append(value)
    red, green, blue = values
    return red, green, blue


def _readable_xpm(path: str) -> bool:
    if len(path) < 4 or not path.endswith(".xpm"):
        return False
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    os.close(fd)
    return True


def check_element_values(
    elements: list[str],
) -> tuple[tuple[int, int, int] | None, tuple[int, int, int] | None]:
    """Check texture paths and colours; return the floor and ceiling colours.

    Leading values without a comma must be readable .xpm files; every
    value after them must be a colour. Colours are taken as floor and
    ceiling from the fifth and sixth positions.
    """
    paths = list(itertools.takewhile(lambda value: "," not in value, elements))
    for path in paths:
        if not _readable_xpm(path):
            raise CubError("File doesn't exist or end with .xpm")
    floor = ceiling = None
    for position, value in enumerate(elements[len(paths):], start=len(paths)):
        rgb = parse_rgb(value)
        if position == _FLOOR_POSITION:
            floor = rgb
        elif position == _CEILING_POSITION:
            ceiling = rgb
    return floor, ceiling


def _cell(rows: list[str], x: int, y: int) -> str:
    if 0 <= y < len(rows) and 0 <= x < len(rows[y]):
        return rows[y][x]
    return "\0"


def _touches_outside(rows: list[str], x: int, y: int) -> bool:
    neighbours = ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y))
    return any(_cell(rows, nx, ny) in _OPEN for nx, ny in neighbours)


def check_map_content(rows: list[str]) -> int:
    """Check the map's characters and walls; return the number of players.

    Floor and player cells must not touch a space, a tab or the outside
    of the map.
    """
    if not rows:
        raise CubError("Map doesn't exist")
    players = 0
    for row in rows:
        for ch in row:
            if ch not in _ALLOWED:
                raise CubError("Map got other content than 01NESW' '")
            if ch in _PLAYER:
                players += 1
            if ch == "\n":
                break
    if players > 1:
        raise CubError("Too many player in the map")
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if (ch == "0" or ch in _PLAYER) and _touches_outside(rows, x, y):
                raise CubError("Map isn't closed")
    return players


def find_player(rows: list[str]) -> PlayerStart:
    """Find the first player cell, replace it in rows with floor, and return it."""
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch in _PLAYER:
                rows[y] = row[:x] + "0" + row[x + 1:]
                return PlayerStart(x, y, ch)
    raise CubError("There is no player in the map")


def load_cub(path: str | PathLike[str]) -> CubFile:
    """Read a scene file and run every check on it."""
    lines = read_cub_file(path)
    elements, end = split_elements(lines)
    rows = extract_map(lines, end)
    floor, ceiling = check_element_values(elements)
    players = check_map_content(rows)
    return CubFile(
        lines=lines,
        elements=elements,
        end_of_elements=end,
        map_rows=rows,
        floor=floor,
        ceiling=ceiling,
        player_count=players,
    )