"""Visual theme constants and QSS styles for Sightline."""

from __future__ import annotations

from dataclasses import dataclass, field

from PyQt6.QtGui import QColor


def _rgba(r: int, g: int, b: int, a: int) -> QColor:
    """Dataclass field defaulting to a fresh colour per theme instance."""
    return field(default_factory=lambda: QColor(r, g, b, a))  # type: ignore[return-value]


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_origin: QColor = _rgba(255, 255, 0, 100)  # dragged piece origin
    highlight_quiet: QColor = _rgba(0, 0, 0, 110)  # empty legal destinations
    highlight_capture: QColor = _rgba(255, 0, 0, 130)  # legal captures
    highlight_check: QColor = _rgba(255, 0, 0, 120)  # king in check
    last_move: QColor = _rgba(155, 199, 0, 105)
    best_move_arrow: QColor = _rgba(0, 200, 0, 200)

    @classmethod
    def by_name(cls, name: str) -> BoardTheme:
        """Look up a named theme, falling back to :meth:`green`."""
        factory = {
            "Classic": cls.default,
            "Blue": cls.blue,
            "Green": cls.green,
            "Walnut": cls.walnut,
            "Slate": cls.slate,
        }.get(name, cls.green)
        return factory()

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
        )

    @classmethod
    def blue(cls) -> BoardTheme:
        return cls(
            light_square=QColor(222, 227, 230),
            dark_square=QColor(140, 162, 173),
        )

    @classmethod
    def green(cls) -> BoardTheme:
        return cls(
            light_square=QColor(233, 237, 204),
            dark_square=QColor(119, 153, 84),
        )

    @classmethod
    def walnut(cls) -> BoardTheme:
        return cls(
            light_square=QColor(228, 210, 184),
            dark_square=QColor(118, 74, 47),
        )

    @classmethod
    def slate(cls) -> BoardTheme:
        return cls(
            light_square=QColor(224, 226, 231),
            dark_square=QColor(101, 110, 122),
        )


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #121212;
}

QLabel {
    color: #e0e0e0;
    font-family: "Adwaita Sans", "Helvetica Neue", sans-serif;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}
QPushButton:disabled {
    color: #666;
    background: #2b2b2b;
}

QStatusBar {
    color: #a0a0a0;
}
"""
