"""Configuration options, loading and key-binding lookup."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, TextIO

from .keys import EXACT_MATCH, InputEvent, KeyMatcher, KeyParseError, parse_key


class OptionType(Enum):
    """The kind of value an option holds."""

    KEY = "key"
    BUTTON = "button"
    INT = "int"
    STRING = "string"


@dataclass(frozen=True)
class Option:
    """A known configuration option with its default value."""

    key: str
    default: str
    description: str
    type: OptionType


class ConfigError(ValueError):
    """Raised for unknown options or values of the wrong form."""


_K = OptionType.KEY
_B = OptionType.BUTTON
_I = OptionType.INT
_S = OptionType.STRING

OPTIONS: tuple[Option, ...] = (
    Option("hint_activation_key", "A-M-x", "Activates hint mode.", _K),
    Option("hint2_activation_key", "A-M-X", "Activate two pass hint mode.", _K),
    Option("grid_activation_key", "A-M-g", "Activates grid mode and allows for further manipulation of the pointer using the mapped keys.", _K),
    Option("history_activation_key", "A-M-h", "Activate history mode.", _K),
    Option("screen_activation_key", "A-M-s", "Activate (s)creen selection mode.", _K),
    Option("activation_key", "A-M-c", "Activate normal movement mode (manual (c)ursor movement).", _K),
    Option("hint_oneshot_key", "A-M-l", "Activate hint mode and exit upon selection.", _K),
    Option("hint2_oneshot_key", "A-M-L", "Activate two pass hint mode and exit upon selection.", _K),
    Option("exit", "esc", "Exit the currently active warpd session.", _K),
    Option("drag", "v", "Toggle drag mode (mnemonic (v)isual mode).", _K),
    Option("copy_and_exit", "c", "Send the copy key and exit (useful in combination with v).", _K),
    Option("accelerator", "a", "Increase the acceleration of the pointer while held.", _K),
    Option("decelerator", "d", "Decrease the speed of the pointer while held.", _K),
    Option("buttons", "m , .", "A space separated list of mouse buttons (2 is middle click).", _B),
    Option("oneshot_buttons", "n - /", "Oneshot mouse buttons (deactivate on click).", _B),
    Option("print", "p", "Print the current mouse coordinates to stdout (useful for scripts).", _K),
    Option("history", ";", "Activate hint history mode while in normal mode.", _K),
    Option("hint", "x", "Activate hint mode while in normal mode (mnemonic: x marks the spot?).", _K),
    Option("hint2", "X", "Activate two pass hint mode.", _K),
    Option("grid", "g", "Activate (g)rid mode while in normal mode.", _K),
    Option("screen", "s", "Activate (s)creen selection while in normal mode.", _K),
    Option("left", "h", "Move the cursor left in normal mode.", _K),
    Option("down", "j", "Move the cursor down in normal mode.", _K),
    Option("up", "k", "Move the cursor up in normal mode.", _K),
    Option("right", "l", "Move the cursor right in normal mode.", _K),
    Option("top", "H", "Moves the cursor to the top of the screen in normal mode.", _K),
    Option("middle", "M", "Moves the cursor to the middle of the screen in normal mode.", _K),
    Option("bottom", "L", "Moves the cursor to the bottom of the screen in normal mode.", _K),
    Option("start", "0", "Moves the cursor to the leftmost corner of the screen in normal mode.", _K),
    Option("end", "$", "Moves the cursor to the rightmost corner of the screen in normal mode.", _K),
    Option("scroll_down", "e", "Scroll down key.", _K),
    Option("scroll_up", "r", "Scroll up key.", _K),
    Option("cursor_color", "#FF4500", "The color of the pointer in normal mode (rgba hex value).", _S),
    Option("cursor_size", "7", "The height of the pointer in normal mode.", _I),
    Option("repeat_interval", "20", "The number of milliseconds before repeating a movement event.", _I),
    Option("speed", "220", "Pointer speed in pixels/second.", _I),
    Option("max_speed", "1600", "The maximum pointer speed.", _I),
    Option("decelerator_speed", "50", "Pointer speed while decelerator is depressed.", _I),
    Option("acceleration", "700", "Pointer acceleration in pixels/second^2.", _I),
    Option("accelerator_acceleration", "2900", "Pointer acceleration while the accelerator is depressed.", _I),
    Option("oneshot_timeout", "300", "The length of time in milliseconds to wait for a second click after a oneshot key has been pressed.", _I),
    Option("hist_hint_size", "2", "History hint size as a percentage of screen height.", _I),
    Option("grid_nr", "2", "The number of rows in the grid.", _I),
    Option("grid_nc", "2", "The number of columns in the grid.", _I),
    Option("hist_back", "C-o", "Move to the last position in the history stack.", _K),
    Option("hist_forward", "C-i", "Move to the next position in the history stack.", _K),
    Option("grid_up", "w", "Move the grid up.", _K),
    Option("grid_left", "a", "Move the grid left.", _K),
    Option("grid_down", "s", "Move the grid down.", _K),
    Option("grid_right", "d", "Move the grid right.", _K),
    Option("grid_keys", "u i j k", "A sequence of comma delimited keybindings which are ordered bookwise with respect to grid position.", _K),
    Option("grid_exit", "c", "Exit grid mode and return to normal mode.", _K),
    Option("grid_size", "4", "The thickness of grid lines in pixels.", _I),
    Option("grid_border_size", "0", "The thickness of the grid border in pixels.", _I),
    Option("grid_color", "#1c1c1e", "The color of the grid.", _S),
    Option("grid_border_color", "#ffffff", "The color of the grid border.", _S),
    Option("hint_bgcolor", "#1c1c1e", "The background hint color.", _S),
    Option("hint_fgcolor", "#a1aba7", "The foreground hint color.", _S),
    Option("hint_chars", "abcdefghijklmnopqrstuvwxyz", "The character set from which hints are generated. The total number of hints is the square of the size of this string. It may be desirable to increase this for larger screens or trim it to increase gaps between hints.", _S),
    Option("hint_font", "Arial", "The font name used by hints. Note: This is platform specific, in X it corresponds to a valid xft font name, on macos it corresponds to a postscript name.", _S),
    Option("hint_size", "20", "Hint size (range: 1-1000)", _I),
    Option("hint_border_radius", "3", "Border radius.", _I),
    Option("hint_exit", "esc", "The exit key used for hint mode.", _K),
    Option("hint_undo", "backspace", "undo last selection step in one of the hint based modes.", _K),
    Option("hint_undo_all", "C-u", "undo all selection steps in one of the hint based modes.", _K),
    Option("hint2_chars", "hjkl;asdfgqwertyuiopzxcvb", "The character set used for the second hint selection, should consist of at least hint_grid_size^2 characters.", _S),
    Option("hint2_size", "20", "The size of hints in the secondary grid (range: 1-1000).", _I),
    Option("hint2_gap_size", "1", "The spacing between hints in the secondary grid. (range: 1-1000)", _I),
    Option("hint2_grid_size", "3", "The size of the secondary grid.", _I),
    Option("screen_chars", "jkl;asdfg", "The characters used for screen selection.", _S),
    Option("scroll_speed", "300", "Initial scroll speed in units/second (unit varies by platform).", _I),
    Option("scroll_max_speed", "9000", "Maximum scroll speed.", _I),
    Option("scroll_acceleration", "1600", "Scroll acceleration in units/second^2.", _I),
    Option("scroll_deceleration", "-3400", "Scroll deceleration.", _I),
    Option("indicator", "none", "Specifies an optional visual indicator to be displayed while normal mode is active, must be one of: topright, topleft, bottomright, bottomleft, none", _S),
    Option("indicator_color", "#00ff00", "The color of the visual indicator color.", _S),
    Option("indicator_size", "12", "The size of the visual indicator in pixels.", _I),
)

_OPTION_TYPES: dict[str, OptionType] = {opt.key: opt.type for opt in OPTIONS}

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def option_type(key: str) -> OptionType:
    """Return the type of a known option."""
    try:
        return _OPTION_TYPES[key]
    except KeyError:
        raise ConfigError(f"{key} is not a valid config option") from None


def format_options() -> str:
    """Describe every option with its default, one per line."""
    return "".join(
        f"{opt.key}: {opt.description} (default: {opt.default})\n" for opt in OPTIONS
    )


def _key_tokens(value: str) -> list[str]:
    return [tok for tok in value.split(" ") if tok]


def _validate(key: str, value: str, kind: OptionType) -> None:
    if kind is OptionType.INT:
        for i, ch in enumerate(value):
            if not ch.isdigit() and not (i == 0 and ch == "-"):
                raise ConfigError(f"{value} must be a valid int")
    elif kind in (OptionType.KEY, OptionType.BUTTON):
        for tok in _key_tokens(value):
            try:
                parse_key(tok)
            except KeyParseError:
                raise ConfigError(f"{tok} is not a valid key name") from None


@dataclass
class _Entry:
    key: str
    value: str
    type: OptionType
    whitelisted: bool


class Config:
    """Option values, newest setting first, with key-binding matching.

    A fresh config holds every option at its default. Key and button options
    are all active for matching until :meth:`whitelist` narrows them.
    """

    def __init__(self) -> None:
        self._entries: list[_Entry] = []
        self._matcher = KeyMatcher()
        for opt in OPTIONS:
            self.add(opt.key, opt.default)

    def get(self, key: str) -> str:
        """Return the most recently set value of an option."""
        for entry in reversed(self._entries):
            if entry.key == key:
                return entry.value
        raise ConfigError(f"unrecognized config entry: {key}")

    def get_int(self, key: str) -> int:
        """Return the leading integer of an option's value (0 if there is none)."""
        m = _INT_PREFIX.match(self.get(key))
        return int(m.group(1)) if m else 0

    def add(self, key: str, value: str) -> None:
        """Set an option, checking the value against the option's type."""
        kind = option_type(key)
        _validate(key, value, kind)
        self._entries.append(
            _Entry(key, value, kind, kind in (OptionType.KEY, OptionType.BUTTON))
        )

    def load(self, stream: Iterable[str]) -> None:
        """Read ``key: value`` lines; lines without ':' or starting with '#' are skipped."""
        for raw in stream:
            line = raw[:-1] if raw.endswith("\n") else raw
            if line.startswith("#") or ":" not in line:
                continue
            key, _, value = line.partition(":")
            self.add(key, value.lstrip(" "))

    def whitelist(self, names: Iterable[str] | None) -> None:
        """Limit matching to the named key options, or to all of them if None."""
        allowed = None if names is None else set(names)
        for entry in self._entries:
            is_key = entry.type in (OptionType.KEY, OptionType.BUTTON)
            entry.whitelisted = is_key and (allowed is None or entry.key in allowed)

    def _key_index(self, value: str, event: InputEvent) -> tuple[int, bool]:
        for idx, tok in enumerate(_key_tokens(value), 1):
            result = self._matcher.match(event, tok)
            if result:
                return idx, result == EXACT_MATCH
        return 0, False

    def match(self, event: InputEvent | None, key: str) -> int:
        """Return the 1-based index of the key in option ``key`` that the event hits.

        Returns 0 if nothing matches or if a newer active binding of another
        option claims the event first.
        """
        for entry in reversed(self._entries):
            if not entry.whitelisted:
                continue
            idx, exact = self._key_index(entry.value, event)
            if not idx:
                continue
            if (entry.type is OptionType.KEY and exact) or entry.type is OptionType.BUTTON:
                return idx if entry.key == key else 0
        return 0


def load_config(path: str | os.PathLike) -> Config:
    """Build a config from defaults and the file at ``path`` ('-' for stdin).

    A file that cannot be opened leaves the defaults in place.
    """
    config = Config()
    if str(path) == "-":
        config.load(sys.stdin)
        return config
    try:
        fh: TextIO = open(path, encoding="utf-8")
    except OSError:
        return config
    with fh:
        config.load(fh)
    return config