"""Grid mode: repeatedly narrow a grid over the screen to position the pointer."""

from __future__ import annotations

_GRID_KEYS = (
    "grid_up",
    "grid_down",
    "grid_right",
    "grid_left",
    "grid_keys",
    "buttons",
    "oneshot_buttons",
    "grid",
    "hint",
    "exit",
    "drag",
    "grid_exit",
)

_EXIT_KEYS = ("grid", "hint", "exit", "drag", "grid_exit")


def grid_lines(
    x: int, y: int, w: int, h: int, nc: int, nr: int, thickness: int
) -> list[tuple[int, int, int, int]]:
    """Return the (x, y, w, h) boxes forming an nc by nr grid, or [] if it cannot fit."""
    ygap = (h - (nr + 1) * thickness) / nr
    xgap = (w - (nc + 1) * thickness) / nc
    if xgap < 0 or ygap < 0:
        return []
    rows = [(x, int(y + (ygap + thickness) * i), w, thickness) for i in range(nr + 1)]
    cols = [(int(x + (xgap + thickness) * i), y, thickness, h) for i in range(nc + 1)]
    return rows + cols


class GridMode:
    """Draws a grid centred on the pointer and lets keys pick or shift cells."""

    def __init__(self, config, platform, mouse) -> None:
        self._config = config
        self._platform = platform
        self._mouse = mouse
        self._screen = None
        self._width = 0
        self._height = 0
        self._last: tuple[int, int] | None = None

    def _redraw(self, mx: int, my: int, force: bool = False) -> None:
        if not force and self._last == (mx, my):
            return
        self._last = (mx, my)

        config = self._config
        platform = self._platform
        screen = self._screen
        gw, gh = self._width, self._height
        x = mx - gw // 2
        y = my - gh // 2

        nc = config.get_int("grid_nc")
        nr = config.get_int("grid_nr")
        cursz = config.get_int("cursor_size")
        gsz = config.get_int("grid_size")
        gbsz = config.get_int("grid_border_size")
        gbcol = config.get("grid_border_color")
        gcol = config.get("grid_color")

        platform.screen_clear(screen)
        for box in grid_lines(x, y, gw, gh, nc, nr, gsz + gbsz * 2):
            platform.screen_draw_box(screen, *box, gbcol)
        for box in grid_lines(x + gbsz, y + gbsz, gw - gbsz * 2, gh - gbsz * 2, nc, nr, gsz):
            platform.screen_draw_box(screen, *box, gcol)
        platform.screen_draw_box(
            screen,
            x + gw // 2 - cursz // 2,
            y + gh // 2 - cursz // 2,
            cursz,
            cursz,
            config.get("cursor_color"),
        )
        platform.commit()

    def run(self):
        """Run grid mode and return the event that ended it."""
        config = self._config
        platform = self._platform
        match = config.match

        nc = config.get_int("grid_nc")
        nr = config.get_int("grid_nr")

        platform.grab_keyboard()
        platform.mouse_hide()
        self._mouse.reset()

        self._screen, _, _ = platform.mouse_get_position()
        self._width, self._height = platform.screen_dimensions(self._screen)

        mx, my = self._width // 2, self._height // 2
        platform.mouse_move(self._screen, mx, my)
        self._redraw(mx, my, force=True)

        config.whitelist(_GRID_KEYS)
        event = None
        try:
            while True:
                event = platform.next_event(10)
                _, mx, my = platform.mouse_get_position()

                if self._mouse.process_key(event, "grid_up", "grid_down", "grid_left", "grid_right"):
                    self._redraw(mx, my)
                    continue

                if event is None or not event.pressed:
                    continue

                idx = match(event, "grid_keys")
                if idx and idx <= nc * nr:
                    my = (my - self._height // 2) + (self._height // nr) * ((idx - 1) // nc)
                    mx = (mx - self._width // 2) + (self._width // nc) * ((idx - 1) % nc)
                    self._height //= nr
                    self._width //= nc
                    mx += self._width // 2
                    my += self._height // 2
                    platform.mouse_move(self._screen, mx, my)
                    self._redraw(mx, my)

                if match(event, "buttons") or match(event, "oneshot_buttons"):
                    break
                if any(match(event, key) for key in _EXIT_KEYS):
                    break

                self._redraw(mx, my)
        finally:
            config.whitelist(None)
            platform.screen_clear(self._screen)
            platform.mouse_show()
            platform.ungrab_keyboard()
            platform.commit()
        return event