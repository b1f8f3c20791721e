"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from sightline.config import AppSettings, parse_settings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Install a root stderr handler; DEBUG also echoes engine traffic."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=_LOG_FORMAT,
    )


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from sightline.ui.styles.theme import APP_STYLE

    app.setApplicationName("Sightline")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from sightline.ui.main_window import MainWindow

    args = sys.argv if argv is None else argv
    if settings is None:
        settings = parse_settings(args[1:])
    configure_logging(settings.verbose)
    _LOGGER.info(
        "Starting with engine %s at depth %d",
        settings.engine_path,
        settings.analysis_depth,
    )

    app = QApplication(args[:1])
    _configure_application(app)

    window = MainWindow(settings)
    window.show()

    return app.exec()
