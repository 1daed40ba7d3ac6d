"""Key names, modifier handling and key-spec parsing and matching."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

NO_MATCH = 0
CODE_MATCH = 1
EXACT_MATCH = 2


class Mod(IntFlag):
    """Keyboard modifier flags."""

    NONE = 0
    SHIFT = 1
    CONTROL = 2
    META = 4
    ALT = 8


@dataclass(frozen=True)
class InputEvent:
    """A key press or release with the modifiers active at the time."""

    code: int
    mods: Mod = Mod.NONE
    pressed: bool = True


class KeyParseError(ValueError):
    """Raised when a key specification cannot be parsed."""


class _UnknownKeyError(KeyParseError):
    """The key name in a specification does not exist."""


def _block(start: int, names: str) -> dict[int, str]:
    return {code: name for code, name in enumerate(names.split(), start)}


def _function_keys(start: int, first: int, last: int) -> dict[int, str]:
    return {start + i: f"f{n}" for i, n in enumerate(range(first, last + 1))}


_KEY_NAMES: dict[int, str] = {
    **_block(
        1,
        "esc 1 2 3 4 5 6 7 8 9 0 - = backspace tab q w e r t y u i o p [ ] "
        "enter leftcontrol a s d f g h j k l ; ' ` leftshift \\ z x c v b n m "
        ", . / rightshift kpasterisk leftalt space capslock",
    ),
    **_function_keys(59, 1, 10),
    **_block(
        69,
        "numlock scrolllock kp7 kp8 kp9 kpminus kp4 kp5 kp6 kpplus kp1 kp2 "
        "kp3 kp0 kpdot iso-level3-shift zenkakuhankaku 102nd f11 f12 ro "
        "katakana hiragana henkan katakanahiragana muhenkan kpjpcomma kpenter "
        "rightcontrol kpslash sysrq rightalt linefeed home up pageup left "
        "right end down pagedown insert delete macro mute volumedown volumeup "
        "power kpequal kpplusminus pause scale kpcomma hangeul hanja yen "
        "leftmeta rightmeta compose",
    ),
    **_block(
        128,
        "stop again props undo front copy open paste find cut help menu calc "
        "setup sleep wakeup file sendfile deletefile xfer prog1 prog2 www "
        "msdos coffee display cyclewindows mail bookmarks computer back "
        "forward closecd ejectcd ejectclosecd nextsong playpause previoussong "
        "stopcd record rewind phone iso config homepage refresh exit move "
        "edit scrollup scrolldown kpleftparen kprightparen new redo",
    ),
    **_function_keys(183, 13, 24),
    **_block(
        200,
        "playcd pausecd prog3 prog4 dashboard suspend close play fastforward "
        "bassboost print hp camera sound question email chat search connect "
        "finance sport shop alterase cancel brightnessdown brightnessup media "
        "switchvideomode",
    ),
    **_block(
        231,
        "send reply forwardmail save documents battery bluetooth wlan uwb "
        "unknown next prev cycle auto",
    ),
    **_block(246, "wwan rfkill micmute"),
}

_KEY_CODES: dict[str, int] = {name: code for code, name in _KEY_NAMES.items()}

_MODIFIER_KEYS: dict[int, Mod] = {
    29: Mod.CONTROL,
    97: Mod.CONTROL,
    125: Mod.META,
    126: Mod.META,
    56: Mod.ALT,
    100: Mod.ALT,
    42: Mod.SHIFT,
    54: Mod.SHIFT,
}

_SHIFTED: dict[str, str] = dict(
    zip(
        "1234567890-=qwertyuiop[]asdfghjkl;`\\zxcvbnm,./",
        '!@#$%^&*()_+QWERTYUIOP{}ASDFGHJKL:~|ZXCVBNM<>?',
    )
)
_UNSHIFTED: dict[str, str] = {v: k for k, v in _SHIFTED.items()}

_MODIFIER_PREFIXES: dict[str, Mod] = {
    "A": Mod.ALT,
    "M": Mod.META,
    "S": Mod.SHIFT,
    "C": Mod.CONTROL,
}


def lookup_code(name: str) -> int | None:
    """Return the key code for a key name, or None if it is unknown."""
    return _KEY_CODES.get(name)


def lookup_name(code: int) -> str | None:
    """Return the key name for a code, or None if the code has no name."""
    return _KEY_NAMES.get(code)


def modifier_for_code(code: int) -> Mod:
    """Return the modifier a physical key code produces (Mod.NONE if none)."""
    return _MODIFIER_KEYS.get(code, Mod.NONE)


def parse_key(spec: str) -> InputEvent:
    """Parse a key specification such as ``A-M-x`` into a pressed event."""
    mods = Mod.NONE
    rest = spec
    while len(rest) >= 2 and rest[1] == "-":
        try:
            mods |= _MODIFIER_PREFIXES[rest[0]]
        except KeyError:
            raise KeyParseError(f"{spec} is not a valid modifier") from None
        rest = rest[2:]

    if not rest:
        return InputEvent(code=0, mods=mods, pressed=True)

    if rest in _UNSHIFTED:
        rest = _UNSHIFTED[rest]
        mods |= Mod.SHIFT

    code = lookup_code(rest)
    if code is None:
        raise _UnknownKeyError(f"{spec} is not a valid key name")
    return InputEvent(code=code, mods=mods, pressed=True)


def event_to_str(event: InputEvent | None) -> str:
    """Render an event in key specification form."""
    if event is None:
        return "NULL"

    name = lookup_name(event.code)
    prefix = []
    if event.mods & Mod.CONTROL:
        prefix.append("C-")
    if event.mods & Mod.SHIFT:
        if name in _SHIFTED:
            name = _SHIFTED[name]
        else:
            prefix.append("S-")
    if event.mods & Mod.ALT:
        prefix.append("A-")
    if event.mods & Mod.META:
        prefix.append("M-")
    return "".join(prefix) + (name if name is not None else "UNDEFINED")


class KeyMatcher:
    """Matches events against key specifications.

    Modifiers seen on key down are remembered so that the matching key up
    is recognised even if the modifiers changed in between.
    """

    def __init__(self) -> None:
        self._cached_mods: dict[int, Mod] = {}

    def match(self, event: InputEvent | None, spec: str) -> int:
        """Return NO_MATCH, CODE_MATCH or EXACT_MATCH for the event and spec."""
        if event is None:
            return NO_MATCH

        if event.pressed:
            mods = event.mods
            self._cached_mods[event.code] = event.mods
        else:
            mods = self._cached_mods.get(event.code, Mod.NONE)

        try:
            target = parse_key(spec)
        except _UnknownKeyError:
            return NO_MATCH

        if target.code != event.code:
            return NO_MATCH
        if target.mods != mods:
            return CODE_MATCH
        return EXACT_MATCH