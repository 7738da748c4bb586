from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtGui import QColor, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from keyheat.core.heatmap import KeyboardHeatmap
from keyheat.core.key_names import format_key_name
from keyheat.core.layout import KeyboardLayout
from keyheat.core.snapshot import load_snapshot
from keyheat.ui.colors import HeatColors
from keyheat.ui.heatmap_widget import HeatLegend, KeyboardHeatmapWidget

logger = logging.getLogger(__name__)


def summary_text(heatmap: KeyboardHeatmap) -> str:
    """One-line digest shown above the keyboard."""
    hottest = heatmap.hottest()
    if hottest is None:
        return "No key presses recorded yet."
    text = (
        f"{heatmap.total_presses():,} presses on this layout · "
        f"busiest key {hottest.display} ({hottest.count:,})"
    )
    overall = heatmap.snapshot.most_pressed_key
    if overall is not None and overall.key_name:
        text += f" · most pressed overall {format_key_name(overall.key_name)}"
    return text


class Card(QFrame):
    """Rounded panel with a soft shadow."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")
        self.setStyleSheet(
            f"""
            QFrame#card {{
                background: {HeatColors.CARD_BG};
                border: 1px solid {HeatColors.CARD_BORDER};
                border-radius: 16px;
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(24)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 80))
        self.setGraphicsEffect(shadow)


class MainWindow(QMainWindow):
    """Single-screen window: keyboard heatmap, legend, and a refresh action.

    Every refresh reads the snapshot file again and swaps in a fully built
    heatmap; on failure the previous heatmap stays on screen.
    """

    def __init__(self, snapshot_path: Path, layout: KeyboardLayout) -> None:
        super().__init__()
        self._snapshot_path = Path(snapshot_path)
        self._layout = layout
        self._heatmap: Optional[KeyboardHeatmap] = None

        self._heatmap_widget: Optional[KeyboardHeatmapWidget] = None
        self._status_label: Optional[QLabel] = None
        self._summary_label: Optional[QLabel] = None

        self._build_ui()
        self.refresh()

    @property
    def heatmap(self) -> Optional[KeyboardHeatmap]:
        return self._heatmap

    @property
    def status_text(self) -> str:
        return self._status_label.text() if self._status_label else ""

    def _build_ui(self) -> None:
        self.setWindowTitle("Keyboard Heatmap")
        self.setMinimumSize(960, 560)

        root = QWidget()
        root.setObjectName("root")
        root.setStyleSheet(f"QWidget#root {{ background: {HeatColors.BG_MAIN}; }}")
        outer = QVBoxLayout(root)
        outer.setContentsMargins(32, 24, 32, 24)
        outer.setSpacing(16)

        header = QHBoxLayout()
        title = QLabel("⌨ Keyboard Heatmap")
        title.setStyleSheet(f"color: {HeatColors.TEXT_PRIMARY}; font-size: 24px; font-weight: 800;")
        header.addWidget(title)
        header.addStretch(1)

        refresh_button = QPushButton("Refresh")
        refresh_button.setStyleSheet(
            f"""
            QPushButton {{
                background: {HeatColors.ACCENT};
                color: {HeatColors.BG_MAIN};
                border: none;
                border-radius: 8px;
                padding: 8px 18px;
                font-weight: 700;
            }}
            QPushButton:hover {{ background: {HeatColors.TEXT_SECONDARY}; }}
            """
        )
        refresh_button.clicked.connect(self.refresh)
        header.addWidget(refresh_button)
        shortcut = QShortcut(QKeySequence(QKeySequence.StandardKey.Refresh), self)
        shortcut.activated.connect(self.refresh)
        outer.addLayout(header)

        self._summary_label = QLabel("")
        self._summary_label.setStyleSheet(f"color: {HeatColors.TEXT_SECONDARY}; font-size: 13px;")
        outer.addWidget(self._summary_label)

        card = Card()
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(32, 32, 32, 24)
        card_layout.setSpacing(20)
        self._heatmap_widget = KeyboardHeatmapWidget()
        card_layout.addWidget(self._heatmap_widget)
        card_layout.addWidget(HeatLegend())
        outer.addWidget(card, 1)

        self._status_label = QLabel("")
        self._status_label.setStyleSheet(f"color: {HeatColors.TEXT_MUTED}; font-size: 11px;")
        outer.addWidget(self._status_label)

        self.setCentralWidget(root)

    def refresh(self) -> None:
        """Reload the snapshot file and redraw the heatmap from it."""
        try:
            snapshot = load_snapshot(self._snapshot_path)
        except (OSError, ValueError) as e:
            logger.warning("Could not load snapshot from %s: %s", self._snapshot_path, e)
            self._set_status(str(e), error=True)
            return

        heatmap = KeyboardHeatmap(snapshot, self._layout)
        self._heatmap = heatmap
        if self._heatmap_widget:
            self._heatmap_widget.set_heatmap(heatmap)
        self._update_summary(heatmap)
        self._set_status(f"Loaded {self._snapshot_path}")

    def _update_summary(self, heatmap: KeyboardHeatmap) -> None:
        if self._summary_label:
            self._summary_label.setText(summary_text(heatmap))

    def _set_status(self, text: str, error: bool = False) -> None:
        if not self._status_label:
            return
        color = HeatColors.ERROR if error else HeatColors.TEXT_MUTED
        self._status_label.setStyleSheet(f"color: {color}; font-size: 11px;")
        self._status_label.setText(text)
