"""ControlPanel — board action buttons."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QWidget

from sightline.ui.i18n import t


class ControlPanel(QWidget):
    """Buttons for board actions: flip, reset, undo."""

    flip_clicked = pyqtSignal()
    reset_clicked = pyqtSignal()
    undo_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        btn_font = QFont("Adwaita Sans", 10)

        self._btn_flip = QPushButton()
        self._btn_reset = QPushButton()
        self._btn_undo = QPushButton()
        self._btn_reset.setStyleSheet(
            "QPushButton { background-color: #6b2020; }"
            "QPushButton:hover { background-color: #8b2020; }"
        )
        for button, signal in (
            (self._btn_flip, self.flip_clicked),
            (self._btn_reset, self.reset_clicked),
            (self._btn_undo, self.undo_clicked),
        ):
            button.setFont(btn_font)
            button.setMinimumHeight(36)
            button.clicked.connect(signal)
            layout.addWidget(button)

    def retranslate_ui(self) -> None:
        s = t()
        self._btn_flip.setText(s.btn_flip)
        self._btn_reset.setText(s.btn_reset)
        self._btn_undo.setText(s.btn_undo)

    def set_undo_enabled(self, enabled: bool) -> None:
        self._btn_undo.setEnabled(enabled)
