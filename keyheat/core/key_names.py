from __future__ import annotations

# Applied in order to every occurrence.
_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("Key", ""),
    ("Left", ""),
    ("Right", ""),
    ("Control", "Ctrl"),
    ("Meta", "Cmd"),
    ("Alt", "Option"),
)


def format_key_name(name: str) -> str:
    """Shorten a capture-side key name for display, e.g. ``KeyA`` -> ``A``, ``ControlLeft`` -> ``Ctrl``."""
    for old, new in _REPLACEMENTS:
        name = name.replace(old, new)
    return name
