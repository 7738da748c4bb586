"""Keyboard heatmap and legend widgets."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGridLayout, QHBoxLayout, QLabel, QWidget

from keyheat.core.heatmap import HeatmapCell, KeyboardHeatmap
from keyheat.core.intensity import BUCKET_COUNT, BUCKET_NAMES
from keyheat.ui.colors import HeatColors, blend_hex, bucket_color, text_color_for

# Grid columns per standard key; widths are rounded to this resolution.
UNIT_SCALE = 4


def cell_tooltip(cell: HeatmapCell) -> str:
    return f"{cell.label}: {cell.count:,} presses"


def build_key_style(bucket: int, font_px: int) -> str:
    """Generate a ``QLabel`` stylesheet for one key in heat bucket *bucket*."""
    fill = bucket_color(bucket)
    border = blend_hex(fill, HeatColors.TEXT_PRIMARY, 0.25)
    return f"""
        QLabel {{
            background: {fill};
            color: {text_color_for(fill)};
            border: 1px solid {border};
            border-radius: 6px;
            padding: 6px 4px;
            font-size: {font_px}px;
            font-weight: 500;
        }}
    """


class KeyboardHeatmapWidget(QWidget):
    """Virtual keyboard on a ``QGridLayout``; each key is tinted by its heat bucket."""

    def __init__(self, parent: Optional[QWidget] = None, *, font_px: int = 13, key_height: int = 48) -> None:
        super().__init__(parent)
        self._font_px = font_px
        self._key_height = key_height
        self._labels: dict[str, QLabel] = {}
        self._heatmap: Optional[KeyboardHeatmap] = None
        self._grid = QGridLayout(self)
        self._grid.setSpacing(4)
        self._grid.setContentsMargins(0, 0, 0, 0)
        self.setStyleSheet("background: transparent;")

    @property
    def heatmap(self) -> Optional[KeyboardHeatmap]:
        return self._heatmap

    def key_label(self, label: str) -> QLabel:
        return self._labels[label]

    def set_heatmap(self, heatmap: KeyboardHeatmap) -> None:
        """Show *heatmap*, rebuilding the key grid when the layout changed."""
        if self._heatmap is None or self._heatmap.layout != heatmap.layout:
            self._rebuild_grid(heatmap)
        self._heatmap = heatmap
        for row in heatmap.rows:
            for cell in row:
                self._apply_cell(self._labels[cell.label], cell)

    def _rebuild_grid(self, heatmap: KeyboardHeatmap) -> None:
        while self._grid.count():
            item = self._grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._labels = {}

        layout = heatmap.layout
        max_columns = 0
        for row_index, row in enumerate(layout.rows):
            col = 0
            for label in row:
                span = max(1, round(layout.relative_width(label) * UNIT_SCALE))
                key_label = QLabel()
                key_label.setTextFormat(Qt.PlainText)
                key_label.setAlignment(Qt.AlignCenter)
                key_label.setMinimumHeight(self._key_height)
                key_label.setMinimumWidth(0)
                self._grid.addWidget(key_label, row_index, col, 1, span)
                self._labels[label] = key_label
                col += span
            max_columns = max(max_columns, col)

        for column in range(max_columns):
            self._grid.setColumnMinimumWidth(column, 2)
            self._grid.setColumnStretch(column, 1)

    def _apply_cell(self, key_label: QLabel, cell: HeatmapCell) -> None:
        key_label.setText(cell.display)
        key_label.setStyleSheet(build_key_style(cell.bucket, self._font_px))
        key_label.setToolTip(cell_tooltip(cell))


class HeatLegend(QWidget):
    """Grid of swatches naming every heat bucket, coldest first."""

    def __init__(self, parent: Optional[QWidget] = None, columns: int = 4) -> None:
        super().__init__(parent)
        grid = QGridLayout(self)
        grid.setHorizontalSpacing(12)
        grid.setVerticalSpacing(6)
        grid.setContentsMargins(0, 0, 0, 0)
        for index in range(BUCKET_COUNT):
            item = QWidget()
            row = QHBoxLayout(item)
            row.setContentsMargins(0, 0, 0, 0)
            row.setSpacing(6)
            swatch = QLabel()
            swatch.setFixedSize(24, 16)
            swatch.setStyleSheet(
                f"background: {bucket_color(index)}; border: 1px solid {HeatColors.CARD_BORDER}; border-radius: 3px;"
            )
            name = QLabel(BUCKET_NAMES[index])
            name.setStyleSheet(f"color: {HeatColors.TEXT_MUTED}; font-size: 11px;")
            row.addWidget(swatch)
            row.addWidget(name)
            row.addStretch(1)
            grid.addWidget(item, index // columns, index % columns)
