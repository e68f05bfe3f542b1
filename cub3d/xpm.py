"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from os import PathLike

from .colors import text_to_rgb
from .image import Image

_TRANSPARENT = 0xFF000000
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs, dropping empty words."""
    return [word for word in text.replace("\t", " ").split(" ") if word]


def find_unquoted(text: str, pattern: str) -> int:
    """Return the first position of pattern outside double quotes, or -1."""
    inside = False
    for pos in range(len(text) - len(pattern) + 1):
        if text[pos] == '"':
            inside = not inside
        if not inside and text.startswith(pattern, pos):
            return pos
    return -1


def _blank(text: str, begin: int, span: int) -> str:
    span = min(span, len(text) - begin)
    return text[:begin] + " " * span + text[begin + span:]


def strip_comments(text: str) -> str:
    """Replace C comments outside strings with spaces, keeping the length."""
    while (begin := find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        inner = end - (begin + 2) if end != -1 else -1
        text = _blank(text, begin, inner + 4)
    while (begin := find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        inner = end - (begin + 2) if end != -1 else -1
        text = _blank(text, begin, inner + 3)
    return text


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _pixel_key(line: str, start: int, cpp: int) -> str:
    return line[start:start + cpp].ljust(cpp, "\0")


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before {what}") from None


def parse_xpm(lines: Iterable[str], byte_order: int = 0) -> Image:
    """Build an image from XPM strings: header, colours, then pixel rows.

    Colours named "None" become the transparent value 0xFF000000; pixel
    codes with no colour definition become 0.
    """
    rows = iter(lines)
    header = split_words(_next_line(rows, "the header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError(f"invalid XPM header {' '.join(header[:4])!r}")

    # Short codes (one or two characters) go into a direct table where later
    # definitions replace earlier ones; longer codes keep the first definition.
    direct = cpp <= 2
    table: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows, "all colours are defined")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without a 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without a colour value: {line!r}")
        suffix = words[index + 1] if index + 1 < len(words) else None
        rgb = text_to_rgb(words[index], suffix)
        key = _pixel_key(line, 0, cpp)
        if direct:
            table[key] = rgb
        else:
            table.setdefault(key, rgb)

    image = Image(width, height, byte_order)
    for y in range(height):
        line = _next_line(rows, "all pixel rows are read")
        for x in range(width):
            color = table.get(_pixel_key(line, cpp * x, cpp), 0)
            if color == -1:
                color = _TRANSPARENT
            image.set_pixel(x, y, color)
    return image


def load_xpm_file(path: str | PathLike[str]) -> Image:
    """Read an XPM file, ignoring comments, and return its image."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(quoted_strings(strip_comments(text)))


def xpm_to_image(data: Iterable[str]) -> Image:
    """Build an image from in-memory XPM strings."""
    return parse_xpm(list(data))