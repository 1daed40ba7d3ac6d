from collections import deque

from warpkeys.config import Config
from warpkeys.grid import GridMode, grid_lines
from warpkeys.keys import parse_key
from warpkeys.mouse import Mouse
from warpkeys.platform import Platform, Screen


class FakePlatform(Platform):
    def __init__(self, screen, x, y, keys=()):
        self.screen = screen
        self.pos = (x, y)
        self.events = deque(parse_key(k) for k in keys)
        self.moves = []
        self.boxes = []
        self.grabbed = False
        self.hidden = False

    def screens(self):
        return [self.screen]

    def mouse_get_position(self):
        return self.screen, self.pos[0], self.pos[1]

    def mouse_move(self, screen, x, y):
        self.pos = (x, y)
        self.moves.append((x, y))

    def mouse_click(self, button):
        pass

    def mouse_down(self, button):
        pass

    def mouse_up(self, button):
        pass

    def mouse_hide(self):
        self.hidden = True

    def mouse_show(self):
        self.hidden = False

    def screen_clear(self, screen):
        self.boxes = []

    def screen_draw_box(self, screen, x, y, w, h, color):
        self.boxes.append((x, y, w, h, color))

    def hint_draw(self, screen, hints):
        pass

    def grab_keyboard(self):
        self.grabbed = True

    def ungrab_keyboard(self):
        self.grabbed = False

    def next_event(self, timeout):
        return self.events.popleft() if self.events else parse_key("esc")

    def copy_selection(self):
        pass

    def scroll(self, direction):
        pass

    def commit(self):
        pass


SCREEN = Screen(0, 0, 1000, 800)


def _mode(keys, config=None):
    config = config or Config()
    platform = FakePlatform(SCREEN, 10, 10, keys)
    mouse = Mouse(config, platform, clock=lambda: 0.0)
    return GridMode(config, platform, mouse), platform, config


def test_grid_lines_counts_and_extent():
    boxes = grid_lines(0, 0, 100, 100, 2, 2, 4)
    rows, cols = boxes[:3], boxes[3:]
    assert len(rows) == 3 and len(cols) == 3
    assert all(b[2] == 100 and b[3] == 4 for b in rows)
    assert all(b[2] == 4 and b[3] == 100 for b in cols)
    assert rows[0][1] == 0
    assert rows[-1][1] == 100 - 4
    assert cols[-1][0] == 100 - 4


def test_grid_lines_too_thick_is_empty():
    assert grid_lines(0, 0, 10, 10, 5, 5, 4) == []


def test_grid_key_narrows_to_cell_and_exit_key_ends():
    mode, platform, _ = _mode(["u", "c"])
    event = mode.run()
    assert event == parse_key("c")
    assert platform.moves[0] == (SCREEN.w // 2, SCREEN.h // 2)
    assert platform.moves[-1] == (SCREEN.w // 4, SCREEN.h // 4)
    assert platform.grabbed is False
    assert platform.hidden is False


def test_grid_button_ends_mode():
    mode, platform, _ = _mode(["m"])
    assert mode.run() == parse_key("m")
    assert platform.moves == [(SCREEN.w // 2, SCREEN.h // 2)]


def test_grid_key_beyond_cells_is_ignored():
    config = Config()
    config.add("grid_nc", "1")
    config.add("grid_nr", "1")
    mode, platform, _ = _mode(["i", "c"], config)
    mode.run()
    assert platform.moves == [(SCREEN.w // 2, SCREEN.h // 2)]


def test_grid_draws_cursor_box_in_cursor_color():
    captured = []

    class Recording(FakePlatform):
        def screen_draw_box(self, screen, x, y, w, h, color):
            captured.append(color)
            super().screen_draw_box(screen, x, y, w, h, color)

    config = Config()
    platform = Recording(SCREEN, 10, 10, ["c"])
    mode = GridMode(config, platform, Mouse(config, platform, clock=lambda: 0.0))
    mode.run()
    assert captured[-1] == config.get("cursor_color")
    assert config.get("grid_color") in captured


def test_grid_restores_whitelist():
    mode, _, config = _mode(["c"])
    mode.run()
    assert config.match(parse_key("p"), "print") == 1