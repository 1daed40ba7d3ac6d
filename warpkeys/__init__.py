"""Building blocks for modal, keyboard-driven pointer control."""

__version__ = "1.3.3"

__all__ = [
    "color",
    "config",
    "grid",
    "hints",
    "histfile",
    "history",
    "keys",
    "mouse",
    "normal",
    "platform",
]