"""Per-key heat values for one snapshot rendered onto one keyboard layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from keyheat.core.intensity import bucket, intensity, max_count
from keyheat.core.layout import KeyboardLayout
from keyheat.core.resolver import resolve
from keyheat.core.snapshot import AllStats


@dataclass(frozen=True)
class HeatmapCell:
    label: str
    display: str
    count: int
    intensity: float
    bucket: int
    width: float


def build_heatmap(
    layout: KeyboardLayout,
    frequencies: Mapping[str, int],
    peak: Optional[int] = None,
) -> list[list[HeatmapCell]]:
    """Resolve every key of *layout* against *frequencies*, row by row.

    *peak* is the global maximum of *frequencies*; computed here when not given.
    """
    if peak is None:
        peak = max_count(frequencies)
    rows: list[list[HeatmapCell]] = []
    for row in layout.rows:
        cells: list[HeatmapCell] = []
        for label in row:
            count = resolve(label, frequencies)
            level = intensity(count, peak)
            cells.append(
                HeatmapCell(
                    label=label,
                    display=layout.display_name(label),
                    count=count,
                    intensity=level,
                    bucket=bucket(level),
                    width=layout.width(label),
                )
            )
        rows.append(cells)
    return rows


class KeyboardHeatmap:
    """Heatmap bound to a single snapshot.

    Built eagerly; a refreshed snapshot gets a new instance instead of being
    applied to this one.
    """

    def __init__(self, snapshot: AllStats, layout: KeyboardLayout) -> None:
        self._snapshot = snapshot
        self._layout = layout
        self._max_count = max_count(snapshot.key_frequency_map)
        self._rows = build_heatmap(layout, snapshot.key_frequency_map, self._max_count)
        self._by_label: Dict[str, HeatmapCell] = {
            cell.label: cell for row in self._rows for cell in row
        }

    @property
    def snapshot(self) -> AllStats:
        return self._snapshot

    @property
    def layout(self) -> KeyboardLayout:
        return self._layout

    @property
    def max_count(self) -> int:
        return self._max_count

    @property
    def rows(self) -> list[list[HeatmapCell]]:
        return [list(row) for row in self._rows]

    def cell(self, label: str) -> HeatmapCell:
        return self._by_label[label]

    def total_presses(self) -> int:
        """Sum of resolved counts over the keys drawn on this layout."""
        return sum(cell.count for cell in self._by_label.values())

    def hottest(self) -> Optional[HeatmapCell]:
        """Cell with the highest count, first in layout order on ties; None if nothing was pressed."""
        best: Optional[HeatmapCell] = None
        for row in self._rows:
            for cell in row:
                if cell.count > 0 and (best is None or cell.count > best.count):
                    best = cell
        return best
