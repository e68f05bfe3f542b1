"""Window event types, event masks and per-window hook tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from functools import reduce
from operator import or_
from typing import Any

HookFunc = Callable[..., Any]


class EventType(IntEnum):
    """Event codes, numbered as the X protocol numbers them."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35
    LAST = 36


MAX_EVENT = int(EventType.LAST)


class EventMask(IntFlag):
    """Event selection bits."""

    NONE = 0
    KEY_PRESS = 1 << 0
    KEY_RELEASE = 1 << 1
    BUTTON_PRESS = 1 << 2
    BUTTON_RELEASE = 1 << 3
    ENTER_WINDOW = 1 << 4
    LEAVE_WINDOW = 1 << 5
    POINTER_MOTION = 1 << 6
    POINTER_MOTION_HINT = 1 << 7
    BUTTON1_MOTION = 1 << 8
    BUTTON2_MOTION = 1 << 9
    BUTTON3_MOTION = 1 << 10
    BUTTON4_MOTION = 1 << 11
    BUTTON5_MOTION = 1 << 12
    BUTTON_MOTION = 1 << 13
    KEYMAP_STATE = 1 << 14
    EXPOSURE = 1 << 15
    VISIBILITY_CHANGE = 1 << 16
    STRUCTURE_NOTIFY = 1 << 17
    RESIZE_REDIRECT = 1 << 18
    SUBSTRUCTURE_NOTIFY = 1 << 19
    SUBSTRUCTURE_REDIRECT = 1 << 20
    FOCUS_CHANGE = 1 << 21
    PROPERTY_CHANGE = 1 << 22
    COLORMAP_CHANGE = 1 << 23
    OWNER_GRAB_BUTTON = 1 << 24


@dataclass(frozen=True)
class Event:
    """One input or window event aimed at a window.

    ``delete_window`` marks a close request from the window manager.
    """

    type: int
    window: Window | None = None
    keysym: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0
    delete_window: bool = False


@dataclass
class _Hook:
    func: HookFunc | None
    param: Any
    mask: int


@dataclass(eq=False)
class Window:
    """A window's size, title and table of event hooks."""

    width: int
    height: int
    title: str = ""
    _hooks: dict[int, _Hook] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"window size must be positive, got {self.width}x{self.height}")

    def hook(self, event: int, mask: int, func: HookFunc | None, param: Any = None) -> None:
        """Call func for events of the given type, selecting them with mask."""
        if not 0 <= event < MAX_EVENT:
            raise ValueError(f"event type must be in 0..{MAX_EVENT - 1}, got {event}")
        self._hooks[int(event)] = _Hook(func, param, int(mask))

    def key_hook(self, func: HookFunc | None, param: Any = None) -> None:
        """Call func(keysym, param) when a key is released."""
        self.hook(EventType.KEY_RELEASE, EventMask.KEY_RELEASE, func, param)

    def mouse_hook(self, func: HookFunc | None, param: Any = None) -> None:
        """Call func(button, x, y, param) when a mouse button is pressed."""
        self.hook(EventType.BUTTON_PRESS, EventMask.BUTTON_PRESS, func, param)

    def expose_hook(self, func: HookFunc | None, param: Any = None) -> None:
        """Call func(param) when the window needs redrawing."""
        self.hook(EventType.EXPOSE, EventMask.EXPOSURE, func, param)

    def event_mask(self) -> EventMask:
        """The union of the masks of every installed hook."""
        return EventMask(reduce(or_, (hook.mask for hook in self._hooks.values()), 0))

    def dispatch(self, event: Event) -> Any:
        """Run the hook for this event, if any, and return its result."""
        kind = event.type
        if not 0 <= kind < MAX_EVENT:
            return None
        hook = self._hooks.get(kind)
        if hook is None or hook.func is None or kind < EventType.KEY_PRESS:
            return None
        if kind in (EventType.KEY_PRESS, EventType.KEY_RELEASE):
            return hook.func(event.keysym, hook.param)
        if kind in (EventType.BUTTON_PRESS, EventType.BUTTON_RELEASE):
            return hook.func(event.button, event.x, event.y, hook.param)
        if kind == EventType.MOTION_NOTIFY:
            return hook.func(event.x, event.y, hook.param)
        if kind == EventType.EXPOSE:
            return hook.func(hook.param) if event.count == 0 else None
        return hook.func(hook.param)

    def handle_close(self) -> Any:
        """Run the DestroyNotify hook in answer to a close request."""
        hook = self._hooks.get(EventType.DESTROY_NOTIFY)
        if hook is None or hook.func is None:
            return None
        return hook.func(hook.param)