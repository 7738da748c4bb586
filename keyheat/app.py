"""Application entry point for the keyboard heatmap viewer."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from keyheat.core.layout import DEFAULT_LAYOUT, LayoutRepository
from keyheat.ui.main_window import MainWindow

DEFAULT_SNAPSHOT_PATH = Path.home() / ".keyheat" / "stats.json"


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def resolve_snapshot_path(argv: Sequence[str], environ: Optional[dict] = None) -> Path:
    """Snapshot path from the first positional argument, ``KEYHEAT_SNAPSHOT``, or the default."""
    environ = os.environ if environ is None else environ
    args = [arg for arg in argv[1:] if not arg.startswith("-")]
    if args:
        return Path(args[0]).expanduser()
    env_path = environ.get("KEYHEAT_SNAPSHOT")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_SNAPSHOT_PATH


def run() -> None:
    """Initialize the application, load the layout, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("keyheat")
    app.setApplicationDisplayName("Keyboard Heatmap")

    layouts = LayoutRepository()
    layout_key = os.environ.get("KEYHEAT_LAYOUT", DEFAULT_LAYOUT)
    try:
        layout = layouts.get(layout_key)
    except KeyError:
        logging.warning(f"Unknown layout {layout_key!r}, using {layouts.default().key!r}")
        layout = layouts.default()

    snapshot_path = resolve_snapshot_path(sys.argv)
    logging.info(f"Reading snapshot from {snapshot_path} with layout {layout.key!r}")

    window = MainWindow(snapshot_path=snapshot_path, layout=layout)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
