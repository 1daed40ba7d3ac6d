"""Continuous keyboard-driven pointer movement with acceleration."""

from __future__ import annotations

import time
from typing import Callable

from .keys import InputEvent, Mod, lookup_name

_DIRECTIONS = ("up", "down", "left", "right")


def _digit(code: int) -> int | None:
    name = lookup_name(code)
    if not name or not ("0" <= name[0] <= "9"):
        return None
    return ord(name[0]) - ord("0")


class Mouse:
    """Moves the pointer while direction keys are held.

    Speeds are kept in pixels per millisecond and accelerations in pixels per
    millisecond squared. A numeric prefix typed before a direction key moves
    the pointer by a fixed number of steps instead.
    """

    STEP = 15

    def __init__(
        self,
        config,
        platform,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._platform = platform
        self._clock = clock

        self._v0 = config.get_int("speed") / 1000.0
        self._vf = config.get_int("max_speed") / 1000.0
        self._vd = config.get_int("decelerator_speed") / 1000.0
        self._a0 = config.get_int("acceleration") / 1_000_000.0
        self._a1 = config.get_int("accelerator_acceleration") / 1_000_000.0

        self._a = self._a0
        self._v = self._v0
        self._held = dict.fromkeys(_DIRECTIONS, False)
        self._resting = True
        self._slow = False
        self._opnum = 0

        self._screen = None
        self._cx = 0.0
        self._cy = 0.0
        self._sw = 0
        self._sh = 0
        self._cursor_size = 0
        self._last_update: float | None = None

    def _update_position(self) -> None:
        screen, x, y = self._platform.mouse_get_position()
        self._screen = screen
        self._sw, self._sh = screen.w, screen.h
        self._cursor_size = (self._config.get_int("cursor_size") * self._sh) // 1080
        self._cx = float(x)
        self._cy = float(y)

    def _release_all(self) -> None:
        for key in self._held:
            self._held[key] = False

    def _moving(self) -> bool:
        return any(self._held.values())

    def reset(self) -> None:
        """Forget held keys and pending counts and resync with the real pointer."""
        self._opnum = 0
        self._release_all()
        self._a = self._a0
        self._v = self._v0
        self._update_position()
        self.tick()

    def fast(self) -> None:
        """Switch to the accelerator's acceleration."""
        self._a = self._a1

    def normal(self) -> None:
        """Return to the normal speed and acceleration."""
        self._v = self._v0
        self._a = self._a0
        self._slow = False

    def slow(self) -> None:
        """Move at the constant decelerator speed."""
        self._v = self._vd
        self._a = 0.0
        self._slow = True

    def tick(self) -> None:
        """Advance the pointer by the time passed since the previous tick."""
        now = self._clock()
        elapsed = 0.0 if self._last_update is None else (now - self._last_update) * 1000.0
        self._last_update = now

        dx = int(self._held["right"]) - int(self._held["left"])
        dy = int(self._held["down"]) - int(self._held["up"])

        if not dx and not dy:
            self._resting = True
            return

        if self._resting:
            self._update_position()
            if not self._slow:
                self._v = self._v0
            self._resting = False

        self._cx += self._v * elapsed * dx
        self._cy += self._v * elapsed * dy

        self._v = min(self._v + elapsed * self._a, self._vf)

        size = self._cursor_size
        min_x, min_y = 1, size // 2
        max_x, max_y = self._sw - size, self._sh - size // 2

        self._cx = max(self._cx, min_x)
        self._cy = max(self._cy, min_y)
        self._cy = min(self._cy, max_y)
        self._cx = min(self._cx, max_x)

        self._platform.mouse_move(self._screen, int(self._cx), int(self._cy))

    def process_key(
        self,
        event: InputEvent | None,
        up_key: str,
        down_key: str,
        left_key: str,
        right_key: str,
    ) -> bool:
        """Feed an event (None on timeout) and return whether the pointer is affected.

        Expected to be called every 10 ms or so; :meth:`reset` should be
        called before the event loop starts.
        """
        if event is None:
            self.tick()
            return self._moving()

        n = _digit(event.code)
        if n is not None and event.mods == Mod.NONE:
            if event.pressed:
                self._opnum = self._opnum * 10 + n
            # A lone 0 is left for the caller to handle.
            return self._opnum != 0

        matched = False
        for direction, key in (
            ("down", down_key),
            ("left", left_key),
            ("right", right_key),
            ("up", up_key),
        ):
            if self._config.match(event, key):
                self._held[direction] = event.pressed
                matched = True
                break

        if self._opnum and matched:
            dx = int(self._held["right"]) - int(self._held["left"])
            dy = int(self._held["down"]) - int(self._held["up"])

            self._update_position()
            self._cx += self.STEP * self._opnum * dx
            self._cy += self.STEP * self._opnum * dy
            self._platform.mouse_move(self._screen, int(self._cx), int(self._cy))

            self._opnum = 0
            self._release_all()
            return True

        self.tick()
        return matched