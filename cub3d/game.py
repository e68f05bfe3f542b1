"""Setting up a game from a checked scene: player, window and textures."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .cubfile import CubError, CubFile
from .display import Display, DisplayError
from .events import Window
from .image import Image
from .mapcheck import find_player, load_cub
from .xpm import XpmError

TILE_SIZE = 32
WINDOW_TITLE = "CUB3D"
TEXTURE_COUNT = 4

EXIT_PARSE = 1
EXIT_DONE = 2
EXIT_SETUP = 3
EXIT_GRAPHICS = 4

# direction -> (view x, view y, plane x, plane y)
_FACINGS: dict[str, tuple[float, float, float, float]] = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "W": (-1.0, 0.0, 0.0, 0.66),
    "E": (1.0, 0.0, 0.0, -0.66),
}


class Key(IntEnum):
    """Key symbols the game reacts to."""

    ESC = 0xFF1B
    LEFT = 0xFF51
    UP = 0xFF52
    RIGHT = 0xFF53
    DOWN = 0xFF54


@dataclass
class Player:
    """The player's position, view direction and camera plane."""

    x: float
    y: float
    view_x: float = 0.0
    view_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    @classmethod
    def facing(cls, x: float, y: float, direction: str) -> Player:
        """A player at (x, y) looking towards 'N', 'S', 'E' or 'W'.

        Any other direction leaves the view and plane vectors at zero.
        """
        view_x, view_y, plane_x, plane_y = _FACINGS.get(direction, (0.0, 0.0, 0.0, 0.0))
        return cls(x, y, view_x, view_y, plane_x, plane_y)


def map_size(rows: Sequence[str]) -> tuple[int, int]:
    """Width (longest row, line ending included) and height of a map."""
    if not rows:
        return 0, 0
    return max(len(row) for row in rows), len(rows)


class GameExit(Exception):
    """Raised to end the game with an exit status; status 0 becomes 1."""

    def __init__(self, code: int) -> None:
        self.code = 1 if code == 0 else code
        super().__init__(f"game ended with status {self.code}")


def _on_key(key: int, game: Game) -> int:
    return game.key_event(key)


class Game:
    """A scene bound to a display, with its player, window and textures."""

    def __init__(self, scene: CubFile, display: Display, player: Player) -> None:
        self.scene = scene
        self.display = display
        self.player = player
        self.width, self.height = map_size(scene.map_rows)
        self.window: Window | None = None
        self.frame: Image | None = None
        self.textures: list[Image] = []

    def __enter__(self) -> Game:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def open_window(self) -> Window:
        """Open a window of TILE_SIZE pixels per map cell, and its frame image."""
        pixel_width = self.width * TILE_SIZE
        pixel_height = self.height * TILE_SIZE
        try:
            window = self.display.new_window(pixel_width, pixel_height, WINDOW_TITLE)
            self.frame = self.display.new_image(pixel_width, pixel_height)
        except (ValueError, DisplayError) as exc:
            raise GameExit(EXIT_GRAPHICS) from exc
        window.key_hook(_on_key, self)
        self.window = window
        return window

    def load_textures(self) -> list[Image]:
        """Load the four wall textures named by the first four elements."""
        textures = []
        for index in range(TEXTURE_COUNT):
            try:
                path = self.scene.elements[index]
                textures.append(self.display.xpm_file_to_image(path))
            except (IndexError, XpmError) as exc:
                raise GameExit(EXIT_GRAPHICS) from exc
        self.textures = textures
        return textures

    def key_event(self, key: int) -> int:
        """React to a key: Escape ends the game, other keys change nothing."""
        if key == Key.ESC:
            raise GameExit(EXIT_PARSE)
        return 0

    def close(self) -> None:
        """Release the display and everything drawn on it."""
        self.window = None
        self.frame = None
        self.textures = []
        self.display.close()


def init_game(scene: CubFile, display: Display) -> Game:
    """Place the player, open the window and load the textures."""
    start = find_player(scene.map_rows)
    player = Player.facing(start.x, start.y, start.direction)
    game = Game(scene, display, player)
    game.open_window()
    game.load_textures()
    return game


def _print_error(message: str) -> None:
    sys.stderr.write(f"Error\n{message}\n")


def _print_scene(scene: CubFile) -> None:
    out = sys.stdout
    for index, line in enumerate(scene.lines):
        out.write(f"file[{index}]: {line}\n")
    for index, value in enumerate(scene.elements):
        out.write(f"elements[{index}] {value}\n")
    for index, row in enumerate(scene.map_rows):
        out.write(f"map[{index}] {row}\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and set the game up."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        _print_error("Need one file\n")
        return EXIT_PARSE
    try:
        scene = load_cub(args[0])
    except CubError as exc:
        _print_error(str(exc))
        return EXIT_PARSE
    _print_scene(scene)
    try:
        display = Display()
    except DisplayError as exc:
        _print_error(str(exc))
        return EXIT_GRAPHICS
    with display:
        try:
            init_game(scene, display)
        except CubError as exc:
            _print_error(str(exc))
            return EXIT_PARSE
        except GameExit as exc:
            return exc.code
    return EXIT_DONE


def _run(*_: Any) -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    _run()