from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

import yaml

DEFAULT_LAYOUT = "qwerty"
DEFAULT_KEY_WIDTH = 12


@dataclass(frozen=True)
class KeyboardLayout:
    """Static keyboard description: rows of physical key labels plus display metadata.

    Widths are in the same units as ``default_width``; a standard key is
    ``default_width`` wide.
    """

    key: str
    name: str
    rows: Tuple[Tuple[str, ...], ...]
    display_names: Dict[str, str] = field(default_factory=dict)
    widths: Dict[str, float] = field(default_factory=dict)
    default_width: float = DEFAULT_KEY_WIDTH

    def labels(self) -> Iterator[str]:
        for row in self.rows:
            yield from row

    def display_name(self, label: str) -> str:
        return self.display_names.get(label) or label.upper()

    def width(self, label: str) -> float:
        return self.widths.get(label, self.default_width)

    def relative_width(self, label: str) -> float:
        """Width of *label* in standard-key units (a letter key is 1.0)."""
        return self.width(label) / self.default_width


class LayoutRepository:
    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "layouts"
        self._layouts = self._load_layouts()

    def all(self) -> list[KeyboardLayout]:
        return list(self._layouts.values())

    def get(self, key: str) -> KeyboardLayout:
        return self._layouts[key]

    def default(self) -> KeyboardLayout:
        if DEFAULT_LAYOUT in self._layouts:
            return self._layouts[DEFAULT_LAYOUT]
        return next(iter(self._layouts.values()))

    def _load_layouts(self) -> Dict[str, KeyboardLayout]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Layouts directory not found: {base_dir}")

        layouts: Dict[str, KeyboardLayout] = {}
        for layout_path in sorted(base_dir.glob("layout_*.yaml")):
            key = re.sub(r"^layout_", "", layout_path.stem)
            raw = yaml.safe_load(layout_path.read_text(encoding="utf-8"))
            layouts[key] = parse_layout(key, raw, source=layout_path.name)

        if not layouts:
            raise ValueError(f"No layout files (layout_*.yaml) found in {base_dir}")
        return layouts


def parse_layout(key: str, raw: object, source: str = "<layout>") -> KeyboardLayout:
    """Validate one decoded YAML document and build a :class:`KeyboardLayout`."""
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{source}: expected YAML mapping with 'name' and 'rows'")

    name = raw.get("name") or key
    if not isinstance(name, str):
        raise ValueError(f"{source}: invalid 'name'")

    raw_rows = raw.get("rows")
    if not raw_rows or not isinstance(raw_rows, list):
        raise ValueError(f"{source}: missing 'rows'")

    seen: set[str] = set()
    rows: list[Tuple[str, ...]] = []
    for index, raw_row in enumerate(raw_rows):
        if not raw_row or not isinstance(raw_row, list):
            raise ValueError(f"{source}: row {index} is empty or not a list")
        row: list[str] = []
        for label in raw_row:
            # YAML turns unquoted digits into ints; labels are always text.
            if isinstance(label, bool) or not isinstance(label, (str, int)):
                raise ValueError(f"{source}: row {index} has invalid label {label!r}")
            label = str(label)
            if not label:
                raise ValueError(f"{source}: row {index} has an empty label")
            if label in seen:
                raise ValueError(f"{source}: duplicate label {label!r}")
            seen.add(label)
            row.append(label)
        rows.append(tuple(row))

    display_names = raw.get("display_names") or {}
    if not isinstance(display_names, dict):
        raise ValueError(f"{source}: 'display_names' must be a mapping")

    default_width = raw.get("default_width", DEFAULT_KEY_WIDTH)
    if isinstance(default_width, bool) or not isinstance(default_width, (int, float)) or default_width <= 0:
        raise ValueError(f"{source}: invalid 'default_width' {default_width!r}")

    raw_widths = raw.get("widths") or {}
    if not isinstance(raw_widths, dict):
        raise ValueError(f"{source}: 'widths' must be a mapping")
    widths: Dict[str, float] = {}
    for label, width in raw_widths.items():
        if isinstance(width, bool) or not isinstance(width, (int, float)) or width <= 0:
            raise ValueError(f"{source}: invalid width {width!r} for {label!r}")
        widths[str(label)] = width

    return KeyboardLayout(
        key=key,
        name=name.strip(),
        rows=tuple(rows),
        display_names={str(k): str(v) for k, v in display_names.items()},
        widths=widths,
        default_width=default_width,
    )
