# cub3d

Tools for the `.cub` scene files of a grid-based raycasting game:

- `cub3d.mapcheck` reads a scene and checks it. A scene holds wall textures,
  floor and ceiling colours, and a map. Each problem found raises
  `cub3d.cubfile.CubError` with a short reason.
- `cub3d.xpm` reads XPM textures into `cub3d.image.Image` objects.
- `cub3d.display` is a small display layer. It provides windows, images,
  drawing, event hooks and a main loop.
  - By default it draws through pygame.
  - `MemoryBackend` keeps everything in memory for headless use.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## The command

```
cub3d path/to/scene.cub
```

The command takes exactly one argument, the scene file. It then goes through
these steps:

1. It loads and checks the scene.
2. It prints the file's lines, the six element values and the map rows to
   standard output.
3. It finds the player. The player's cell in the map becomes floor.
4. It opens a window titled `CUB3D`, 32 pixels per map cell.
5. It loads the four wall textures.
6. It closes the display and exits.

Exit status:

| Status | Meaning |
| --- | --- |
| 2 | The setup succeeded. |
| 1 | Wrong arguments, or a scene error. The command prints `Error` and the reason to standard error. |
| 4 | The window or a texture could not be created. |

## Scene files

The six elements come first, one per line, in this exact order. Blank lines
may appear between them.

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

Rules for the element values:

- A texture value must name a readable file ending in `.xpm`.
- A colour value is three comma-separated numbers, each written with one to
  three characters and in 0..255.

The map follows the elements and ends the file. Its first row must begin with
`1`; leading spaces and tabs are skipped before that check. No blank line may
follow the start of the map.

The map may contain only these characters:

- `0`
- `1`
- spaces
- at most one of `N`, `S`, `E`, `W`

Every `0` and the player cell must be enclosed: none of their four neighbours
may be a space, a tab, or outside the map.

`load_cub` accepts a map with no player. The command rejects such a map, with
"There is no player in the map".

## Using it as a library

```python
from cub3d.mapcheck import load_cub, find_player
from cub3d.colors import lookup_color, text_to_rgb
from cub3d.xpm import load_xpm_file

scene = load_cub("maps/level.cub")     # CubFile: lines, elements, map_rows, floor, ceiling
start = find_player(scene.map_rows)    # PlayerStart(x, y, direction)
red = lookup_color("red")              # 0xFF0000; unknown names raise KeyError
sky = text_to_rgb("#87CEEB")           # unknown names give 0
texture = load_xpm_file("textures/north.xpm")  # raises XpmError on failure
```

For smaller steps, use `read_cub_file` and `split_elements` in
`cub3d.cubfile`. `cub3d.mapcheck` provides `extract_map`, `parse_rgb`,
`check_element_values` and `check_map_content`.

### Display layer

`cub3d.display.Display(backend=None)` uses a `PygameBackend` unless it is given
another backend. It can also be used as a context manager.

| Task | Method |
| --- | --- |
| Create and destroy windows | `new_window`, `destroy_window` |
| Create images | `new_image`, `xpm_file_to_image`, `xpm_to_image` |
| Draw | `put_image`, `pixel_put`, `string_put`, `clear_window` |
| Run a function on every loop pass | `loop_hook` |
| Run the main loop | `loop` |
| Stop the main loop | `loop_end` |
| Other | `flush_events`, `screen_size`, `color_value`, `close` |

The loop stops in either of two cases:

- no window is left,
- `loop_end` is called.

Hooks are set on a `cub3d.events.Window` with these methods:

- `key_hook`: called on key release.
- `mouse_hook`: called on button press.
- `expose_hook`: called when the window is exposed.
- `hook`: called for any `EventType`, with an `EventMask`.

A close request runs the window's `DESTROY_NOTIFY` hook.

With `PygameBackend`, all windows share pygame's single display. Only the most
recently opened window that is still open is shown and receives input.

`cub3d.game` provides the game objects:

- `init_game(scene, display)` returns a `Game` with the player placed, the
  window open and the textures loaded.
- `Game.key_event` raises `GameExit` for Escape and ignores other keys.

## What it does not do

- It does not draw the 3D view.
- It does not move the player. The arrow keys change nothing.
- The `cub3d` command does not run the event loop. It sets the game up and
  then exits.