"""Hint generation and the interactive hint selection modes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .keys import event_to_str

_HINT_KEYS = ("hint_exit", "hint_undo_all", "hint_undo")
_MAX_LABEL = 15


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass(frozen=True)
class Hint:
    """A labelled box on a screen; selecting it moves the pointer to its centre."""

    x: int
    y: int
    w: int
    h: int
    label: str

    @property
    def center(self) -> tuple[int, int]:
        return self.x + self.w // 2, self.y + self.h // 2


def hint_size(config, width: int, height: int) -> tuple[int, int]:
    """Return the hint width and height for a screen (hint_size is in 1/1000ths)."""
    size = config.get_int("hint_size")
    return (width * size) // 1000, (height * size) // 1000


def generate_fullscreen_hints(
    chars: str, width: int, height: int, hint_w: int, hint_h: int
) -> list[Hint]:
    """Spread len(chars)**2 two-letter hints evenly over the screen, column by column."""
    if not chars:
        raise ValueError("hint characters must not be empty")
    n = len(chars)
    colgap = _cdiv(width, n) - hint_w
    rowgap = _cdiv(height, n) - hint_h
    x_offset = _cdiv(width - n * hint_w - (n - 1) * colgap, 2)
    y_offset = _cdiv(height - n * hint_h - (n - 1) * rowgap, 2)

    return [
        Hint(
            x=x_offset + i * (colgap + hint_w),
            y=y_offset + j * (rowgap + hint_h),
            w=hint_w,
            h=hint_h,
            label=col + row,
        )
        for i, col in enumerate(chars)
        for j, row in enumerate(chars)
    ]


def sift_hints(
    chars: str,
    x: int,
    y: int,
    screen_height: int,
    grid_size: int,
    hint_size: int,
    gap_size: int,
) -> list[Hint]:
    """Build the small second-pass grid of one-letter hints centred on (x, y).

    ``hint_size`` and ``gap_size`` are in 1/1000ths of the screen height.
    """
    gap = (gap_size * screen_height) // 1000
    size = (hint_size * screen_height) // 1000
    shift = _cdiv((size + (gap - 1)) * grid_size, 2)
    x -= shift
    y -= shift

    hints = []
    for col in range(grid_size):
        for row in range(grid_size):
            idx = row * grid_size + col
            if idx < len(chars):
                hints.append(
                    Hint(
                        x=x + (size + gap) * col,
                        y=y + (size + gap) * row,
                        w=size,
                        h=size,
                        label=chars[idx],
                    )
                )
    return hints


def history_hints(
    entries: Iterable[tuple[int, int]], hint_w: int, hint_h: int
) -> list[Hint]:
    """Label stored positions a, b, c, ... with hints centred on them."""
    return [
        Hint(x=ex - hint_w // 2, y=ey - hint_h // 2, w=hint_w, h=hint_h, label=chr(ord("a") + i))
        for i, (ex, ey) in enumerate(entries)
    ]


def parse_hintspec(text: str, hint_w: int, hint_h: int) -> list[Hint]:
    """Read ``label x y`` triples until the input ends or stops making sense."""
    tokens = text.split()
    hints = []
    for start in range(0, len(tokens) - 2, 3):
        label, sx, sy = tokens[start : start + 3]
        if len(label) > _MAX_LABEL:
            break
        try:
            x, y = int(sx), int(sy)
        except ValueError:
            break
        hints.append(Hint(x=x - hint_w // 2, y=y - hint_h // 2, w=hint_w, h=hint_h, label=label))
    return hints


def filter_hints(hints: Sequence[Hint], prefix: str) -> list[Hint]:
    """Return the hints whose labels start with ``prefix``."""
    return [h for h in hints if h.label.startswith(prefix)]


class HintSession:
    """Runs the hint modes against a config and a display backend."""

    def __init__(self, config, platform) -> None:
        self._config = config
        self._platform = platform
        self.last_selected: str | None = None

    def _show(self, screen, hints: Sequence[Hint]) -> None:
        self._platform.screen_clear(screen)
        self._platform.hint_draw(screen, list(hints))
        self._platform.commit()

    def select(self, screen, hints: Sequence[Hint]) -> bool:
        """Let the user type a hint label; return False if they pressed the exit key.

        When exactly one hint remains the pointer moves to its centre.
        Typing a prefix that matches nothing ends the selection quietly.
        """
        platform = self._platform
        config = self._config

        self._show(screen, filter_hints(hints, ""))
        platform.grab_keyboard()
        platform.mouse_hide()
        config.whitelist(_HINT_KEYS)

        typed = ""
        completed = True
        try:
            while True:
                event = platform.next_event(0)
                if event is None or not event.pressed:
                    continue

                if config.match(event, "hint_exit"):
                    completed = False
                    break
                elif config.match(event, "hint_undo_all"):
                    typed = ""
                elif config.match(event, "hint_undo"):
                    typed = typed[:-1]
                else:
                    name = event_to_str(event)
                    if len(name) != 1:
                        continue
                    typed += name

                matched = filter_hints(hints, typed)
                self._show(screen, matched)

                if len(matched) == 1:
                    platform.screen_clear(screen)
                    nx, ny = matched[0].center
                    # A one-pixel wiggle helps widgets that ignore sudden warps.
                    platform.mouse_move(screen, nx + 1, ny + 1)
                    platform.mouse_move(screen, nx, ny)
                    self.last_selected = typed
                    break
                if not matched:
                    break
        finally:
            platform.ungrab_keyboard()
            platform.screen_clear(screen)
            platform.mouse_show()
            platform.commit()
        return completed

    def sift(self) -> bool:
        """Refine the pointer position with a small grid of hints around it."""
        config = self._config
        screen, x, y = self._platform.mouse_get_position()
        _, sh = self._platform.screen_dimensions(screen)
        hints = sift_hints(
            config.get("hint2_chars"),
            x,
            y,
            sh,
            config.get_int("hint2_grid_size"),
            config.get_int("hint2_size"),
            config.get_int("hint2_gap_size"),
        )
        return self.select(screen, hints)

    def full_hint_mode(self, second_pass: bool = False, history=None) -> bool:
        """Select from hints covering the whole screen, optionally refining after."""
        screen, mx, my = self._platform.mouse_get_position()
        if history is not None:
            history.add(mx, my)

        sw, sh = self._platform.screen_dimensions(screen)
        w, h = hint_size(self._config, sw, sh)
        hints = generate_fullscreen_hints(self._config.get("hint_chars"), sw, sh, w, h)

        if not self.select(screen, hints):
            return False
        return self.sift() if second_pass else True

    def history_hint_mode(self, histfile) -> bool:
        """Select from hints placed on previously clicked positions."""
        screen, _, _ = self._platform.mouse_get_position()
        sw, sh = self._platform.screen_dimensions(screen)
        w, h = hint_size(self._config, sw, sh)
        return self.select(screen, history_hints(histfile.read(), w, h))

    def hintspec_mode(self, text: str) -> bool:
        """Select from hints given as ``label x y`` triples."""
        screen, _, _ = self._platform.mouse_get_position()
        sw, sh = self._platform.screen_dimensions(screen)
        w, h = hint_size(self._config, sw, sh)
        return self.select(screen, parse_hintspec(text, w, h))