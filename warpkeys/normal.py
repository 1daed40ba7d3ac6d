"""Normal mode: move, click, scroll and switch modes from the keyboard."""

from __future__ import annotations

import sys
from typing import TextIO

from .keys import InputEvent, event_to_str
from .platform import ScrollDirection

_GAP = 10

_NORMAL_KEYS = (
    "accelerator",
    "bottom",
    "buttons",
    "copy_and_exit",
    "decelerator",
    "down",
    "drag",
    "end",
    "exit",
    "grid",
    "hint",
    "hint2",
    "hist_back",
    "hist_forward",
    "history",
    "left",
    "middle",
    "oneshot_buttons",
    "print",
    "right",
    "screen",
    "scroll_down",
    "scroll_up",
    "start",
    "top",
    "up",
)

_MODE_KEYS = ("exit", "grid", "screen", "history", "hint2", "hint")


class OneshotExit(Exception):
    """Raised when a button is pressed in oneshot mode; the program should end."""

    def __init__(self, button: int, x: int, y: int) -> None:
        super().__init__(f"button {button} at {x} {y}")
        self.button = button
        self.x = x
        self.y = y


def indicator_box(
    indicator: str, width: int, height: int, size: int
) -> tuple[int, int, int, int] | None:
    """Return the (x, y, w, h) of the mode indicator in a corner, or None for none."""
    if indicator == "bottomleft":
        return _GAP, height - size - _GAP, size, size
    if indicator == "topleft":
        return _GAP, _GAP, size, size
    if indicator == "topright":
        return width - size - _GAP, _GAP, size, size
    if indicator == "bottomright":
        return width - size - _GAP, height - size - _GAP, size, size
    return None


class NormalMode:
    """Runs normal mode against a config, backend, mouse mover and scroller.

    The scroller is expected to provide ``tick()``, ``stop()``,
    ``accelerate(direction)`` and ``decelerate()``.
    """

    def __init__(
        self,
        config,
        platform,
        mouse,
        scroller,
        history,
        histfile,
        out: TextIO | None = None,
    ) -> None:
        self._config = config
        self._platform = platform
        self._mouse = mouse
        self._scroller = scroller
        self._history = history
        self._histfile = histfile
        self._out = out
        self._dragging = False

    @property
    def dragging(self) -> bool:
        """Whether a drag is in progress."""
        return self._dragging

    def _write(self, text: str) -> None:
        out = self._out if self._out is not None else sys.stdout
        out.write(text)
        out.flush()

    def _redraw(self, screen, x: int, y: int, hide_cursor: bool = False) -> None:
        config = self._config
        platform = self._platform
        sw, sh = platform.screen_dimensions(screen)
        size = (config.get_int("indicator_size") * sh) // 1080
        cursz = config.get_int("cursor_size")

        platform.screen_clear(screen)
        if not hide_cursor:
            platform.screen_draw_box(
                screen, x + 1, y - cursz // 2, cursz, cursz, config.get("cursor_color")
            )
        box = indicator_box(config.get("indicator"), sw, sh, size)
        if box is not None:
            platform.screen_draw_box(screen, *box, config.get("indicator_color"))
        platform.commit()

    def _move(self, screen, x: int, y: int) -> None:
        self._platform.mouse_move(screen, x, y)
        self._redraw(screen, x, y)

    def _toggle_drag(self) -> None:
        if self._dragging:
            self._platform.mouse_up(1)
        else:
            self._platform.mouse_down(1)
        self._dragging = not self._dragging

    def _oneshot_click(self, event: InputEvent, button: int, mx: int, my: int) -> None:
        platform = self._platform
        self._history.add(mx, my)
        platform.mouse_click(button)

        timeout = self._config.get_int("oneshot_timeout")
        remaining = timeout
        while remaining > 0:
            remaining -= 1
            follow = platform.next_event(1)
            if (
                follow is not None
                and follow.pressed
                and self._config.match(follow, "oneshot_buttons")
            ):
                platform.mouse_click(button)
                remaining = timeout

    def _dispatch(
        self, event: InputEvent, screen, mx: int, my: int, sw: int, sh: int, oneshot: bool
    ) -> tuple[bool, InputEvent | None]:
        """Handle one event; return (finished, event to return)."""
        match = self._config.match
        mouse = self._mouse
        scroller = self._scroller
        cursz = self._config.get_int("cursor_size")

        if match(event, "scroll_down"):
            self._redraw(screen, mx, my, hide_cursor=True)
            if event.pressed:
                scroller.stop()
                scroller.accelerate(ScrollDirection.DOWN)
            else:
                scroller.decelerate()
        elif match(event, "scroll_up"):
            self._redraw(screen, mx, my, hide_cursor=True)
            if event.pressed:
                scroller.stop()
                scroller.accelerate(ScrollDirection.UP)
            else:
                scroller.decelerate()
        elif match(event, "accelerator"):
            if event.pressed:
                mouse.fast()
            else:
                mouse.normal()
        elif match(event, "decelerator"):
            if event.pressed:
                mouse.slow()
            else:
                mouse.normal()
        elif not event.pressed:
            return False, None

        if match(event, "top"):
            self._move(screen, mx, cursz // 2)
        elif match(event, "bottom"):
            self._move(screen, mx, sh - cursz // 2)
        elif match(event, "middle"):
            self._move(screen, mx, sh // 2)
        elif match(event, "start"):
            self._move(screen, 1, my)
        elif match(event, "end"):
            self._move(screen, sw - cursz, my)
        elif match(event, "hist_back"):
            self._history.add(mx, my)
            self._history.prev()
            mx, my = self._history.get() or (mx, my)
            self._move(screen, mx, my)
        elif match(event, "hist_forward"):
            self._history.next()
            mx, my = self._history.get() or (mx, my)
            self._move(screen, mx, my)
        elif match(event, "drag"):
            self._toggle_drag()
        elif match(event, "copy_and_exit"):
            self._platform.copy_selection()
            return True, None
        elif any(match(event, key) for key in _MODE_KEYS):
            return True, event
        elif match(event, "print"):
            self._write(f"{mx} {my} {event_to_str(event)}\n")
        else:
            button = match(event, "buttons")
            if button:
                if oneshot:
                    self._write(f"{mx} {my}\n")
                    raise OneshotExit(button, mx, my)
                self._history.add(mx, my)
                self._histfile.add(mx, my)
                self._platform.mouse_click(button)
            else:
                button = match(event, "oneshot_buttons")
                if button:
                    self._oneshot_click(event, button, mx, my)
                    return True, event
        return False, None

    def run(self, start_event: InputEvent | None = None, oneshot: bool = False):
        """Run normal mode and return the event that ended it.

        ``start_event`` is handled before any real input. Returns None when
        the copy key ends the mode. Raises :class:`OneshotExit` when a button
        is pressed in oneshot mode.
        """
        platform = self._platform
        config = self._config

        platform.grab_keyboard()
        screen, mx, my = platform.mouse_get_position()
        sw, sh = platform.screen_dimensions(screen)
        platform.mouse_hide()
        self._mouse.reset()
        self._redraw(screen, mx, my)

        try:
            while True:
                config.whitelist(_NORMAL_KEYS)
                if start_event is None:
                    event = platform.next_event(10)
                else:
                    event, start_event = start_event, None

                self._scroller.tick()
                if self._mouse.process_key(event, "up", "down", "left", "right"):
                    screen, mx, my = platform.mouse_get_position()
                    self._redraw(screen, mx, my)
                    continue

                if event is None:
                    continue

                screen, mx, my = platform.mouse_get_position()
                finished, result = self._dispatch(event, screen, mx, my, sw, sh, oneshot)
                if finished:
                    return result

                screen, mx, my = platform.mouse_get_position()
                platform.commit()
        finally:
            platform.mouse_show()
            platform.screen_clear(screen)
            platform.ungrab_keyboard()
            platform.commit()