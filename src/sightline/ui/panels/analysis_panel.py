"""AnalysisPanel — live engine output next to the board."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget

from sightline.analysis.models import AnalysisSnapshot
from sightline.engine.models import Score
from sightline.ui.formatting import format_best_move, format_pv, format_score
from sightline.ui.i18n import t


class _Card(QFrame):
    """Caption above a large value label."""

    def __init__(self, value_font: QFont, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("analysisCard")
        self.setStyleSheet(
            "#analysisCard { background: #1e1e1e; border: 1px solid #333;"
            " border-radius: 8px; }"
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(4)

        self.caption = QLabel()
        self.caption.setFont(QFont("Adwaita Sans", 9))
        self.caption.setStyleSheet("color: #9a9a9a;")
        layout.addWidget(self.caption)

        self.value = QLabel()
        self.value.setFont(value_font)
        self.value.setWordWrap(True)
        self.value.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse
        )
        layout.addWidget(self.value)


class AnalysisPanel(QWidget):
    """Shows evaluation, depth, suggested move and principal variation."""

    def __init__(self, target_depth: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._target_depth = target_depth
        self._snapshot = AnalysisSnapshot()
        self._white_score: Score | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(8)

        self._title = QLabel()
        self._title.setFont(QFont("Adwaita Sans", 14, QFont.Weight.Bold))
        layout.addWidget(self._title)

        big = QFont("Adwaita Mono", 20, QFont.Weight.Bold)
        self._eval_card = _Card(big)
        self._depth_card = _Card(big)
        self._best_card = _Card(big)
        self._pv_card = _Card(QFont("Adwaita Mono", 10))
        for card in (self._eval_card, self._depth_card, self._best_card):
            layout.addWidget(card)
        layout.addWidget(self._pv_card, stretch=1)

        self.retranslate_ui()

    def retranslate_ui(self) -> None:
        s = t()
        self._title.setText(s.analysis_title)
        self._eval_card.caption.setText(s.analysis_eval)
        self._depth_card.caption.setText(s.analysis_depth)
        self._best_card.caption.setText(s.analysis_best_move)
        self._pv_card.caption.setText(s.analysis_pv)
        self._refresh()

    def set_target_depth(self, depth: int) -> None:
        self._target_depth = depth
        self._refresh()

    def show_snapshot(
        self,
        snapshot: AnalysisSnapshot,
        white_score: Score | None,
    ) -> None:
        """Display *snapshot*; *white_score* is its score from White's side."""
        self._snapshot = snapshot
        self._white_score = white_score
        self._refresh()

    def eval_text(self) -> str:
        return self._eval_card.value.text()

    def depth_text(self) -> str:
        return self._depth_card.value.text()

    def best_move_text(self) -> str:
        return self._best_card.value.text()

    def pv_text(self) -> str:
        return self._pv_card.value.text()

    def _refresh(self) -> None:
        s = t()
        snap = self._snapshot
        self._eval_card.value.setText(format_score(self._white_score))
        self._depth_card.value.setText(f"{snap.depth or 0} / {self._target_depth}")
        if snap.best_move is not None:
            best = format_best_move(snap.best_move)
        elif snap.finished:
            best = s.analysis_no_move
        else:
            best = s.analysis_calculating
        self._best_card.value.setText(best)
        pv_placeholder = "" if snap.finished else s.analysis_pv_waiting
        self._pv_card.value.setText(
            format_pv(snap.principal_variation) or pv_placeholder
        )
