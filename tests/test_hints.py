from collections import deque

import pytest

from warpkeys.config import Config
from warpkeys.histfile import HistoryFile
from warpkeys.history import History
from warpkeys.hints import (
    Hint,
    HintSession,
    filter_hints,
    generate_fullscreen_hints,
    hint_size,
    history_hints,
    parse_hintspec,
    sift_hints,
)
from warpkeys.keys import parse_key
from warpkeys.platform import Platform, Screen


class FakePlatform(Platform):
    def __init__(self, screen, x, y, keys=()):
        self.screen = screen
        self.pos = (x, y)
        self.events = deque(parse_key(k) for k in keys)
        self.moves = []
        self.drawn = []
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
        pass

    def screen_draw_box(self, screen, x, y, w, h, color):
        pass

    def hint_draw(self, screen, hints):
        self.drawn.append(list(hints))

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


SCREEN = Screen(0, 0, 1000, 1000)


def _hints(*labels):
    return [Hint(x=i * 100, y=i * 50, w=20, h=10, label=lab) for i, lab in enumerate(labels)]


def test_filter_hints_by_prefix():
    hints = _hints("ab", "ac", "bb")
    assert [h.label for h in filter_hints(hints, "a")] == ["ab", "ac"]
    assert filter_hints(hints, "") == hints
    assert filter_hints(hints, "z") == []


def test_hint_size_uses_thousandths():
    config = Config()
    w, h = hint_size(config, 1000, 2000)
    assert w == config.get_int("hint_size")
    assert h == 2 * w


def test_fullscreen_hints_cover_all_pairs():
    chars = "abc"
    hints = generate_fullscreen_hints(chars, 900, 600, 30, 20)
    labels = [h.label for h in hints]
    assert len(labels) == len(chars) ** 2
    assert len(set(labels)) == len(labels)
    assert labels[:3] == ["aa", "ab", "ac"]
    # Hints sharing a first letter share a column.
    assert {h.x for h in hints[:3]} == {hints[0].x}
    for h in hints:
        assert 0 <= h.x and h.x + h.w <= 900
        assert 0 <= h.y and h.y + h.h <= 600


def test_fullscreen_hints_need_chars():
    with pytest.raises(ValueError):
        generate_fullscreen_hints("", 100, 100, 10, 10)


def test_sift_hints_column_major_and_limited_by_chars():
    hints = sift_hints("abcd", 500, 500, 1000, 2, 20, 1)
    assert [h.label for h in hints] == ["a", "c", "b", "d"]
    short = sift_hints("ab", 500, 500, 1000, 3, 20, 1)
    assert len(short) == 2
    assert all(h.w == h.h for h in hints)


def test_history_hints_centre_on_entries():
    entries = [(100, 200), (300, 400)]
    hints = history_hints(entries, 20, 10)
    assert [h.label for h in hints] == ["a", "b"]
    assert [h.center for h in hints] == entries


def test_parse_hintspec_reads_triples_until_bad_input():
    hints = parse_hintspec("ab 100 200\ncd 10 20\nef x 5", 20, 10)
    assert [h.label for h in hints] == ["ab", "cd"]
    assert hints[0].center == (100, 200)
    assert parse_hintspec("", 20, 10) == []


def test_select_moves_to_unique_match():
    platform = FakePlatform(SCREEN, 0, 0, ["a", "b"])
    session = HintSession(Config(), platform)
    hints = _hints("ab", "ac", "bb")
    assert session.select(SCREEN, hints) is True
    nx, ny = hints[0].center
    assert platform.moves == [(nx + 1, ny + 1), (nx, ny)]
    assert session.last_selected == "ab"
    assert platform.grabbed is False and platform.hidden is False


def test_select_exit_key_returns_false():
    platform = FakePlatform(SCREEN, 0, 0, ["esc"])
    session = HintSession(Config(), platform)
    assert session.select(SCREEN, _hints("ab", "ac")) is False
    assert platform.moves == []


def test_select_undo_removes_last_char():
    platform = FakePlatform(SCREEN, 0, 0, ["a", "backspace", "b"])
    session = HintSession(Config(), platform)
    hints = _hints("ab", "ac", "bb")
    assert session.select(SCREEN, hints) is True
    assert session.last_selected == "b"
    assert platform.pos == hints[2].center


def test_select_no_match_ends_without_moving():
    platform = FakePlatform(SCREEN, 0, 0, ["z"])
    session = HintSession(Config(), platform)
    assert session.select(SCREEN, _hints("ab", "ac")) is True
    assert platform.moves == []
    assert platform.drawn[-1] == []


def test_full_hint_mode_records_history_and_selects():
    platform = FakePlatform(SCREEN, 123, 456, ["a", "a"])
    config = Config()
    history = History()
    session = HintSession(config, platform)
    assert session.full_hint_mode(False, history) is True
    assert history.get() == (123, 456)
    w, h = hint_size(config, SCREEN.w, SCREEN.h)
    expected = generate_fullscreen_hints(config.get("hint_chars"), SCREEN.w, SCREEN.h, w, h)[0]
    assert platform.pos == expected.center


def test_full_hint_mode_second_pass_sifts():
    platform = FakePlatform(SCREEN, 0, 0, ["a", "a", "h"])
    config = Config()
    session = HintSession(config, platform)
    assert session.full_hint_mode(True, None) is True
    first_x, first_y = platform.moves[1]
    sifted = sift_hints(
        config.get("hint2_chars"),
        first_x,
        first_y,
        SCREEN.h,
        config.get_int("hint2_grid_size"),
        config.get_int("hint2_size"),
        config.get_int("hint2_gap_size"),
    )
    assert platform.pos == sifted[0].center
    assert session.last_selected == "h"


def test_history_hint_mode_uses_histfile(tmp_path):
    histfile = HistoryFile(tmp_path / "history", 16)
    histfile.add(100, 100)
    histfile.add(500, 500)
    platform = FakePlatform(SCREEN, 0, 0, ["b"])
    session = HintSession(Config(), platform)
    assert session.history_hint_mode(histfile) is True
    assert platform.pos == (500, 500)


def test_hintspec_mode_selects_given_label():
    platform = FakePlatform(SCREEN, 0, 0, ["c", "d"])
    session = HintSession(Config(), platform)
    assert session.hintspec_mode("ab 100 200\ncd 300 400\n") is True
    assert platform.pos == (300, 400)