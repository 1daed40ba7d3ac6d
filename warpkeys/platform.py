"""Screens, pointer geometry helpers and the interface a display backend provides."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .keys import InputEvent

_WAYLAND_BUTTONS = {1: 272, 2: 274, 3: 273}


@dataclass(frozen=True)
class Screen:
    """A monitor's area within the global pointer space."""

    x: int
    y: int
    w: int
    h: int


class ScrollDirection(Enum):
    """Directions in which the backend can scroll."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


_SCROLL_BUTTONS = {
    ScrollDirection.UP: 4,
    ScrollDirection.DOWN: 5,
    ScrollDirection.LEFT: 6,
    ScrollDirection.RIGHT: 7,
}


def screen_at(screens: Sequence[Screen], x: int, y: int) -> tuple[Screen, int, int]:
    """Find the screen holding global point (x, y) and return it with local coordinates.

    Screen edges are inclusive; the first screen that contains the point wins.
    """
    for scr in screens:
        if scr.x <= x <= scr.x + scr.w and scr.y <= y <= scr.y + scr.h:
            return scr, x - scr.x, y - scr.y
    raise ValueError(f"point ({x}, {y}) is not on any screen")


def pointer_extent(screens: Sequence[Screen]) -> tuple[int, int, int, int]:
    """Return (min_x, min_y, width, height) of the box enclosing all screens."""
    if not screens:
        raise ValueError("no screens")
    min_x = min(s.x for s in screens)
    min_y = min(s.y for s in screens)
    max_x = max(s.x + s.w for s in screens)
    max_y = max(s.y + s.h for s in screens)
    return min_x, min_y, max_x - min_x, max_y - min_y


def normalize_button(button: int) -> int:
    """Map buttons 1-3 (left, middle, right) to evdev button codes."""
    return _WAYLAND_BUTTONS.get(button, button)


def scroll_button(direction: ScrollDirection) -> int:
    """Return the pointer button number that scrolls in ``direction``."""
    return _SCROLL_BUTTONS[direction]


class Platform(ABC):
    """What the pointer modes need from a display backend.

    Coordinates passed to and returned from these methods are local to the
    given screen. Timeouts are in milliseconds; a timeout of 0 blocks.
    """

    @abstractmethod
    def screens(self) -> list[Screen]:
        """Return all screens."""

    @abstractmethod
    def mouse_get_position(self) -> tuple[Screen, int, int]:
        """Return the screen under the pointer and the pointer's local position."""

    @abstractmethod
    def mouse_move(self, screen: Screen, x: int, y: int) -> None:
        """Warp the pointer to (x, y) on ``screen``."""

    @abstractmethod
    def mouse_click(self, button: int) -> None:
        """Press and release a pointer button."""

    @abstractmethod
    def mouse_down(self, button: int) -> None:
        """Press a pointer button."""

    @abstractmethod
    def mouse_up(self, button: int) -> None:
        """Release a pointer button."""

    @abstractmethod
    def mouse_hide(self) -> None:
        """Hide the pointer."""

    @abstractmethod
    def mouse_show(self) -> None:
        """Show the pointer again."""

    @abstractmethod
    def screen_clear(self, screen: Screen) -> None:
        """Remove everything drawn on ``screen``."""

    @abstractmethod
    def screen_draw_box(
        self, screen: Screen, x: int, y: int, w: int, h: int, color: str
    ) -> None:
        """Draw a filled box in a hex colour."""

    @abstractmethod
    def hint_draw(self, screen: Screen, hints: Sequence[object]) -> None:
        """Draw a set of labelled hints."""

    @abstractmethod
    def grab_keyboard(self) -> None:
        """Route all keyboard input to this program."""

    @abstractmethod
    def ungrab_keyboard(self) -> None:
        """Release the keyboard grab."""

    @abstractmethod
    def next_event(self, timeout: int) -> InputEvent | None:
        """Return the next key event, or None when ``timeout`` ms pass first."""

    @abstractmethod
    def copy_selection(self) -> None:
        """Copy the current selection to the clipboard."""

    @abstractmethod
    def scroll(self, direction: ScrollDirection) -> None:
        """Scroll one step in ``direction``."""

    @abstractmethod
    def commit(self) -> None:
        """Flush pending drawing and pointer requests."""

    def screen_dimensions(self, screen: Screen) -> tuple[int, int]:
        """Return the width and height of ``screen``."""
        return screen.w, screen.h