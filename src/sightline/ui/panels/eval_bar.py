"""EvalBar — vertical evaluation bar."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPainter, QPaintEvent
from PyQt6.QtWidgets import QSizePolicy, QWidget

from sightline.engine.models import Score
from sightline.ui.formatting import eval_percent, format_score


class EvalBar(QWidget):
    """Vertical bar showing the engine evaluation from White's side.

    White advantage → white fills from bottom.
    Black advantage → black fills from top.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._score: Score | None = None
        self.setFixedWidth(28)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Expanding)
        self.setMinimumHeight(200)

    @property
    def white_percent(self) -> float:
        return eval_percent(self._score)

    def set_score(self, score: Score | None) -> None:
        """Set a White-relative score; None shows an even bar."""
        self._score = score
        self.update()

    def paintEvent(self, event: QPaintEvent | None) -> None:
        h = self.height()
        w = self.width()

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Background (black side)
        painter.fillRect(0, 0, w, h, QColor(34, 34, 34))

        white_h = int(h * self.white_percent / 100.0)
        painter.fillRect(0, h - white_h, w, white_h, QColor(240, 240, 240))

        # Centre marker
        painter.setPen(QColor(239, 68, 68))
        painter.drawLine(0, h // 2, w, h // 2)

        painter.setPen(QColor(120, 120, 120))
        painter.setFont(QFont("Helvetica Neue", 8))
        painter.drawText(
            0, 0, w, 18, Qt.AlignmentFlag.AlignCenter, format_score(self._score)
        )

        painter.end()
