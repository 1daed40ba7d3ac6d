# warpkeys

Building blocks for driving the mouse pointer from the keyboard: key
bindings, configuration, position history, accelerated pointer motion and
the hint, grid and normal modes of a modal pointing system.

## Modules

- `warpkeys.keys`: `parse_key` turns a key specification such as `A-M-x` or
  `C-o` into an `InputEvent` (raising `KeyParseError` on a bad modifier or an
  unknown key name); `event_to_str` renders an event back to that form;
  `lookup_code`, `lookup_name` and `modifier_for_code` map between key names,
  codes and the `Mod` flags; `KeyMatcher.match` compares an event with a
  specification and reports no match, a key-code match or an exact match.
- `warpkeys.config`: `Config` holds every option at its default, validates
  integer and key/button values as they are added (raising `ConfigError`),
  and matches events against bindings with `Config.match`, limited to the
  option names given to `Config.whitelist`. `load_config(path)` reads
  `key: value` lines from a file (`"-"` reads standard input; a file that
  cannot be opened leaves the defaults). `format_options()` lists every
  option with its description and default; `option_type(key)` gives an
  option's `OptionType`.
- `warpkeys.color`: `hex_to_rgba` parses `#rrggbb` or `#rrggbbaa` (the `#`
  is optional) into an RGBA tuple, raising `ColorError` on a wrong length or
  non-hex digits.
- `warpkeys.history`: `History`, a bounded in-session list of positions with
  `add`, `get`, `prev` and `next`. Adding after moving back drops the
  positions ahead of the cursor; a repeat of the current position is ignored.
- `warpkeys.histfile`: `HistoryFile(path, capacity=16)` keeps click
  positions in a fixed-size binary file. `add` replaces stored positions
  within 30 pixels of the new one and drops the oldest when full.
- `warpkeys.platform`: `Screen`, `ScrollDirection`, the geometry helpers
  `screen_at`, `pointer_extent`, `normalize_button` and `scroll_button`, and
  `Platform`, the abstract interface the modes use for drawing, pointer
  control and keyboard input.
- `warpkeys.mouse`: `Mouse` turns held direction keys into accelerated
  pointer movement, with `fast`, `slow` and `normal` speed modes and numeric
  count prefixes that move the pointer in fixed steps. The clock is
  injectable.
- `warpkeys.hints`: hint layout functions (`generate_fullscreen_hints`,
  `sift_hints`, `history_hints`, `parse_hintspec`, `filter_hints`,
  `hint_size`) and `HintSession`, which runs full-screen, two-pass, history
  and hint-spec selection.
- `warpkeys.grid`: `grid_lines` computes grid boxes; `GridMode.run` narrows
  a grid around the pointer and returns the event that ended it.
- `warpkeys.normal`: `NormalMode.run` handles movement, clicks, drag,
  scrolling, history and mode switching, returning the event that ended it.
  In oneshot mode a button press prints the position and raises
  `OneshotExit`. `indicator_box` places the corner indicator.

## Configuration

One option per line; lines starting with `#` and lines without a colon are
ignored:

```
# config
speed: 300
cursor_color: #00ff00
hint_chars: asdfghjkl
buttons: m , .
```

```python
from warpkeys.config import load_config

config = load_config("config")
config.get("cursor_color")   # "#00ff00"
config.get_int("speed")      # 300
```

## Keys

```python
from warpkeys.keys import parse_key, event_to_str, Mod

event = parse_key("C-o")
assert event.mods == Mod.CONTROL
event_to_str(event)          # "C-o"
```

Shifted characters are accepted directly: `X` is read as `x` with `Mod.SHIFT`.

## Colours

```python
from warpkeys.color import hex_to_rgba

hex_to_rgba("#FF4500")       # (255, 69, 0, 255)
```

## Position history

```python
from warpkeys.history import History

history = History()
history.add(10, 20)
history.add(300, 400)
history.prev()
history.get()                # (10, 20)
```

## What this package does not do

- It has no display backend. `Platform` is abstract: to move a real pointer,
  draw boxes and hints, or grab the keyboard you must subclass it for your
  display system.
- It has no command-line program or background service that listens for
  activation keys; the modes are run by calling them from your own code.
- It provides no scroller. `NormalMode` expects an object with `tick()`,
  `stop()`, `accelerate(direction)` and `decelerate()`.
- There is no screen selection mode, although the `screen` bindings exist
  among the options.

## Running the tests

The test suite uses pytest, available through the `test` extra.