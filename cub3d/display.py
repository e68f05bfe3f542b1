"""Display connection: windows, drawing and the event loop."""

from __future__ import annotations

import os
import time
from collections import deque
from collections.abc import Iterable
from os import PathLike
from typing import Any, Protocol

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .colors import PixelFormat  # noqa: E402
from .events import Event, EventType, HookFunc, Window  # noqa: E402
from .image import LITTLE_ENDIAN, Image  # noqa: E402
from .xpm import load_xpm_file, xpm_to_image  # noqa: E402

_IDLE_DELAY = 0.01
_DEFAULT_FORMAT = PixelFormat.from_masks(24, 0xFF0000, 0x00FF00, 0x0000FF)


class DisplayError(RuntimeError):
    """Raised when the display cannot be used as asked."""


class _Backend(Protocol):
    def open_window(self, window: Window) -> None: ...
    def close_window(self, window: Window) -> None: ...
    def draw_image(self, window: Window, image: Image, x: int, y: int) -> None: ...
    def draw_point(self, window: Window, x: int, y: int, color: int) -> None: ...
    def draw_text(self, window: Window, x: int, y: int, color: int, text: str) -> None: ...
    def clear(self, window: Window) -> None: ...
    def poll(self) -> list[Event]: ...
    def screen_size(self) -> tuple[int, int]: ...
    def shutdown(self) -> None: ...


class MemoryBackend:
    """A backend that draws into in-memory canvases and replays posted events."""

    def __init__(self, screen: tuple[int, int] = (1920, 1080)) -> None:
        self.canvases: dict[Window, Image] = {}
        self.texts: dict[Window, list[tuple[int, int, int, str]]] = {}
        self.closed = False
        self._screen = screen
        self._pending: deque[Event] = deque()

    def post(self, event: Event) -> None:
        """Queue an event for the next poll."""
        self._pending.append(event)

    def open_window(self, window: Window) -> None:
        self.canvases[window] = Image(window.width, window.height)
        self.texts[window] = []
        self.post(Event(EventType.EXPOSE, window))

    def close_window(self, window: Window) -> None:
        self.canvases.pop(window, None)
        self.texts.pop(window, None)

    def draw_image(self, window: Window, image: Image, x: int, y: int) -> None:
        canvas = self.canvases[window]
        for src_y in range(max(0, -y), min(image.height, canvas.height - y)):
            for src_x in range(max(0, -x), min(image.width, canvas.width - x)):
                canvas.set_pixel(x + src_x, y + src_y, image.get_pixel(src_x, src_y))

    def draw_point(self, window: Window, x: int, y: int, color: int) -> None:
        canvas = self.canvases[window]
        if 0 <= x < canvas.width and 0 <= y < canvas.height:
            canvas.set_pixel(x, y, color)

    def draw_text(self, window: Window, x: int, y: int, color: int, text: str) -> None:
        self.texts[window].append((x, y, color, text))

    def clear(self, window: Window) -> None:
        self.canvases[window].fill(0)
        self.texts[window].clear()

    def poll(self) -> list[Event]:
        events = list(self._pending)
        self._pending.clear()
        return events

    def screen_size(self) -> tuple[int, int]:
        return self._screen

    def shutdown(self) -> None:
        self.closed = True
        self.canvases.clear()
        self.texts.clear()


_KEYSYMS = {
    pygame.K_ESCAPE: 0xFF1B,
    pygame.K_RETURN: 0xFF0D,
    pygame.K_BACKSPACE: 0xFF08,
    pygame.K_TAB: 0xFF09,
    pygame.K_LEFT: 0xFF51,
    pygame.K_UP: 0xFF52,
    pygame.K_RIGHT: 0xFF53,
    pygame.K_DOWN: 0xFF54,
    pygame.K_DELETE: 0xFFFF,
    pygame.K_LSHIFT: 0xFFE1,
    pygame.K_RSHIFT: 0xFFE2,
    pygame.K_LCTRL: 0xFFE3,
    pygame.K_RCTRL: 0xFFE4,
}


def _rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _image_surface(image: Image) -> pygame.Surface:
    data = image.data
    rgb = bytearray(image.width * image.height * 3)
    if image.byte_order == LITTLE_ENDIAN:
        rgb[0::3], rgb[1::3], rgb[2::3] = data[2::4], data[1::4], data[0::4]
    else:
        rgb[0::3], rgb[1::3], rgb[2::3] = data[1::4], data[2::4], data[3::4]
    return pygame.image.frombuffer(bytes(rgb), (image.width, image.height), "RGB")


class PygameBackend:
    """A backend drawing through pygame.

    All windows share pygame's single display; the most recently opened
    window still open is the one shown and the one that receives input.
    """

    def __init__(self) -> None:
        try:
            pygame.display.init()
            pygame.font.init()
        except pygame.error as exc:
            raise DisplayError(f"cannot open the display: {exc}") from exc
        self._canvases: dict[Window, pygame.Surface] = {}
        self._order: list[Window] = []
        self._shown: Window | None = None
        self._screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._dirty = False
        self._synthetic: list[Event] = []

    def _present(self, window: Window) -> None:
        if not pygame.display.get_init():
            pygame.display.init()
        if self._shown is not window or self._screen is None:
            self._screen = pygame.display.set_mode((window.width, window.height))
            pygame.display.set_caption(window.title)
            self._shown = window
        self._screen.blit(self._canvases[window], (0, 0))
        pygame.display.flip()
        self._dirty = False

    def _refresh(self, window: Window) -> None:
        if window is self._shown:
            self._present(window)

    def open_window(self, window: Window) -> None:
        surface = pygame.Surface((window.width, window.height))
        surface.fill((0, 0, 0))
        self._canvases[window] = surface
        self._order.append(window)
        self._present(window)
        self._synthetic.append(Event(EventType.EXPOSE, window))

    def close_window(self, window: Window) -> None:
        self._canvases.pop(window, None)
        if window in self._order:
            self._order.remove(window)
        self._synthetic = [event for event in self._synthetic if event.window is not window]
        if self._shown is window:
            self._shown = None
            self._screen = None
            if self._order:
                self._present(self._order[-1])
            else:
                pygame.display.quit()

    def draw_image(self, window: Window, image: Image, x: int, y: int) -> None:
        self._canvases[window].blit(_image_surface(image), (x, y))
        self._refresh(window)

    def draw_point(self, window: Window, x: int, y: int, color: int) -> None:
        self._canvases[window].set_at((x, y), _rgb(color))
        if window is self._shown:
            self._dirty = True

    def draw_text(self, window: Window, x: int, y: int, color: int, text: str) -> None:
        if self._font is None:
            self._font = pygame.font.Font(None, 18)
        rendered = self._font.render(text, False, _rgb(color))
        self._canvases[window].blit(rendered, (x, y - self._font.get_ascent()))
        self._refresh(window)

    def clear(self, window: Window) -> None:
        self._canvases[window].fill((0, 0, 0))
        self._refresh(window)

    def _translate(self, event: Any, target: Window) -> Event | None:
        kind = event.type
        if kind == pygame.QUIT:
            return Event(EventType.CLIENT_MESSAGE, target, delete_window=True)
        if kind in (pygame.KEYDOWN, pygame.KEYUP):
            keysym = _KEYSYMS.get(event.key, event.key)
            code = EventType.KEY_PRESS if kind == pygame.KEYDOWN else EventType.KEY_RELEASE
            return Event(code, target, keysym=keysym)
        if kind in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            x, y = event.pos
            code = EventType.BUTTON_PRESS if kind == pygame.MOUSEBUTTONDOWN else EventType.BUTTON_RELEASE
            return Event(code, target, button=event.button, x=x, y=y)
        if kind == pygame.MOUSEMOTION:
            x, y = event.pos
            return Event(EventType.MOTION_NOTIFY, target, x=x, y=y)
        if kind in (pygame.VIDEOEXPOSE, pygame.WINDOWEXPOSED):
            self._present(target)
            return Event(EventType.EXPOSE, target)
        return None

    def poll(self) -> list[Event]:
        events, self._synthetic = self._synthetic, []
        target = self._shown
        if target is None or not pygame.display.get_init():
            return events
        if self._dirty:
            self._present(target)
        for raw in pygame.event.get():
            translated = self._translate(raw, target)
            if translated is not None:
                events.append(translated)
        return events

    def screen_size(self) -> tuple[int, int]:
        if not pygame.display.get_init():
            pygame.display.init()
        width, height = pygame.display.get_desktop_sizes()[0]
        return width, height

    def shutdown(self) -> None:
        self._canvases.clear()
        self._order.clear()
        self._shown = None
        self._screen = None
        pygame.quit()


class Display:
    """A connection to a display: the windows on it and its event loop."""

    def __init__(
        self,
        backend: _Backend | None = None,
        pixel_format: PixelFormat = _DEFAULT_FORMAT,
        byte_order: int = LITTLE_ENDIAN,
    ) -> None:
        self._backend: _Backend = backend if backend is not None else PygameBackend()
        self.pixel_format = pixel_format
        self.byte_order = byte_order
        self._windows: list[Window] = []
        self._loop_hook: HookFunc | None = None
        self._loop_param: Any = None
        self._ended = False
        self._queue: deque[Event] = deque()

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def windows(self) -> tuple[Window, ...]:
        """Open windows, most recently created first."""
        return tuple(self._windows)

    def _require(self, window: Window) -> None:
        if window not in self._windows:
            raise DisplayError(f"window {window.title!r} is not open on this display")

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a fixed-size window with no hooks installed."""
        window = Window(width, height, title)
        self._backend.open_window(window)
        self._windows.insert(0, window)
        return window

    def destroy_window(self, window: Window) -> None:
        """Close a window and forget its hooks."""
        self._require(window)
        self._windows = [w for w in self._windows if w is not window]
        self._backend.close_window(window)

    def new_image(self, width: int, height: int) -> Image:
        """Create a black image in this display's byte order."""
        return Image(width, height, self.byte_order)

    def put_image(self, window: Window, image: Image, x: int, y: int) -> None:
        """Copy an image into a window with its top left corner at (x, y)."""
        self._require(window)
        self._backend.draw_image(window, image, x, y)

    def pixel_put(self, window: Window, x: int, y: int, color: int) -> None:
        """Draw one 0xRRGGBB pixel."""
        self._require(window)
        self._backend.draw_point(window, x, y, self.color_value(color))

    def string_put(self, window: Window, x: int, y: int, color: int, text: str) -> None:
        """Draw text with its baseline starting at (x, y)."""
        self._require(window)
        self._backend.draw_text(window, x, y, self.color_value(color), text)

    def clear_window(self, window: Window) -> None:
        """Fill a window with black."""
        self._require(window)
        self._backend.clear(window)

    def xpm_file_to_image(self, path: str | PathLike[str]) -> Image:
        """Load an XPM file; raises XpmError on failure."""
        return load_xpm_file(path)

    def xpm_to_image(self, data: Iterable[str]) -> Image:
        """Build an image from XPM strings; raises XpmError on failure."""
        return xpm_to_image(data)

    def color_value(self, color: int) -> int:
        """Convert 0xRRGGBB to this display's pixel value."""
        return self.pixel_format.convert(color)

    def loop_hook(self, func: HookFunc | None, param: Any = None) -> None:
        """Call func(param) once per loop pass, after pending events."""
        self._loop_hook = func
        self._loop_param = param

    def _next_event(self) -> Event | None:
        if not self._queue:
            self._queue.extend(self._backend.poll())
        return self._queue.popleft() if self._queue else None

    def _deliver(self, event: Event) -> None:
        window = event.window
        if window is None or window not in self._windows:
            return
        if event.type == EventType.CLIENT_MESSAGE and event.delete_window:
            window.handle_close()
        window.dispatch(event)

    def loop(self) -> None:
        """Dispatch events until no window is left or loop_end is called."""
        while self._windows and not self._ended:
            while not self._ended:
                event = self._next_event()
                if event is None:
                    break
                self._deliver(event)
            if self._loop_hook is not None:
                self._loop_hook(self._loop_param)
            elif not self._ended and self._windows:
                time.sleep(_IDLE_DELAY)

    def loop_end(self) -> None:
        """Make the event loop return; it stays ended afterwards."""
        self._ended = True

    def flush_events(self) -> None:
        """Discard every pending event."""
        self._queue.clear()
        self._backend.poll()

    def screen_size(self) -> tuple[int, int]:
        """Width and height of the screen."""
        return self._backend.screen_size()

    def close(self) -> None:
        """Release the display connection."""
        self._windows.clear()
        self._queue.clear()
        self._backend.shutdown()