import pytest

from warpkeys.config import Config
from warpkeys.keys import InputEvent, Mod, lookup_code
from warpkeys.mouse import Mouse
from warpkeys.platform import Screen

DIRS = ("up", "down", "left", "right")


class FakeClock:
    def __init__(self):
        self.t = 100.0

    def __call__(self):
        return self.t

    def advance_ms(self, ms):
        self.t += ms / 1000.0


class FakePlatform:
    def __init__(self, screen, x, y):
        self.screen = screen
        self.x = x
        self.y = y
        self.moves = []

    def mouse_get_position(self):
        return self.screen, self.x, self.y

    def mouse_move(self, screen, x, y):
        self.x, self.y = x, y
        self.moves.append((x, y))


def make(width=1920, height=1080, x=500, y=500):
    config = Config()
    config.whitelist(DIRS)
    platform = FakePlatform(Screen(0, 0, width, height), x, y)
    clock = FakeClock()
    mouse = Mouse(config, platform, clock)
    mouse.reset()
    return mouse, platform, clock, config


def key(name, pressed=True, mods=Mod.NONE):
    return InputEvent(code=lookup_code(name), mods=mods, pressed=pressed)


def step(mouse, event):
    return mouse.process_key(event, *DIRS)


def move_right(mouse, clock, ticks, ms=100):
    step(mouse, key("l"))
    for _ in range(ticks):
        clock.advance_ms(ms)
        step(mouse, None)


def test_idle_timeout_reports_no_movement():
    mouse, platform, clock, _ = make()
    clock.advance_ms(100)
    assert step(mouse, None) is False
    assert (platform.x, platform.y) == (500, 500)


def test_holding_right_moves_right_only():
    mouse, platform, clock, _ = make()
    assert step(mouse, key("l")) is True
    clock.advance_ms(100)
    assert step(mouse, None) is True
    assert platform.x > 500
    assert platform.y == 500


def test_holding_down_moves_down_only():
    mouse, platform, clock, _ = make()
    step(mouse, key("j"))
    clock.advance_ms(100)
    step(mouse, None)
    assert platform.y > 500
    assert platform.x == 500


def test_release_stops_movement():
    mouse, platform, clock, _ = make()
    move_right(mouse, clock, 1)
    assert step(mouse, key("l", pressed=False)) is True
    stopped_at = (platform.x, platform.y)
    clock.advance_ms(500)
    assert step(mouse, None) is False
    assert (platform.x, platform.y) == stopped_at


def test_numeric_prefix_moves_fixed_steps():
    mouse, platform, _, _ = make()
    assert step(mouse, key("5")) is True
    assert step(mouse, key("l")) is True
    assert platform.x == 500 + Mouse.STEP * 5
    assert platform.y == 500


def test_lone_zero_is_not_consumed():
    mouse, _, _, _ = make()
    assert step(mouse, key("0")) is False


def test_digit_with_modifier_is_not_a_count():
    mouse, platform, _, _ = make()
    assert step(mouse, key("5", mods=Mod.CONTROL)) is False
    step(mouse, key("l"))
    assert platform.x == 500


def test_count_is_cleared_after_use():
    mouse, platform, clock, _ = make()
    step(mouse, key("3"))
    step(mouse, key("l"))
    after_jump = platform.x
    clock.advance_ms(100)
    assert step(mouse, None) is False
    assert platform.x == after_jump


def test_left_movement_clamps_at_left_edge():
    mouse, platform, clock, _ = make()
    step(mouse, key("h"))
    clock.advance_ms(10_000)
    step(mouse, None)
    assert platform.x == 1


def test_right_movement_stays_on_screen():
    mouse, platform, clock, _ = make()
    move_right(mouse, clock, 5, ms=1000)
    assert 1800 < platform.x < platform.screen.w


def test_speed_never_exceeds_max_speed():
    mouse, platform, clock, config = make(width=1_000_000, x=10)
    step(mouse, key("l"))
    limit = config.get_int("max_speed") / 1000.0 * 100 + 1
    previous = platform.x
    for _ in range(30):
        clock.advance_ms(100)
        step(mouse, None)
        assert platform.x - previous <= limit
        previous = platform.x


def test_slow_mode_moves_less_than_normal():
    normal, np_, nclock, _ = make()
    move_right(normal, nclock, 1)
    slow, sp, sclock, _ = make()
    slow.slow()
    move_right(slow, sclock, 1)
    assert 0 < sp.x - 500 < np_.x - 500


def test_fast_mode_moves_further_than_normal():
    normal, np_, nclock, _ = make(width=100_000)
    move_right(normal, nclock, 3)
    fast, fp, fclock, _ = make(width=100_000)
    fast.fast()
    move_right(fast, fclock, 3)
    assert fp.x > np_.x


def test_normal_restores_speed_after_slow():
    a, ap, aclock, _ = make()
    move_right(a, aclock, 1)
    b, bp, bclock, _ = make()
    b.slow()
    b.normal()
    move_right(b, bclock, 1)
    assert bp.x == ap.x


@pytest.mark.parametrize("name", ["h", "j", "k", "l"])
def test_direction_key_press_is_reported(name):
    mouse, _, _, _ = make()
    assert step(mouse, key(name)) is True