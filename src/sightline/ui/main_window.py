"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from sightline.analysis.models import AnalysisSnapshot
from sightline.config import AppSettings
from sightline.engine.models import UciMove
from sightline.game.state import GameState
from sightline.ui.analysis_session import AnalysisSession
from sightline.ui.board.board_view import BoardView
from sightline.ui.engine_session import ChannelFactory
from sightline.ui.formatting import white_relative
from sightline.ui.i18n import set_language, t
from sightline.ui.panels.analysis_panel import AnalysisPanel
from sightline.ui.panels.control_panel import ControlPanel
from sightline.ui.panels.eval_bar import EvalBar
from sightline.ui.styles.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Board, evaluation bar and analysis panel driven by one engine."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        channel_factory: ChannelFactory | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or AppSettings()
        set_language(self._settings.language)
        self.setWindowTitle(t().window_title)
        self.setMinimumSize(900, 640)
        self.resize(1200, 760)

        self._game = GameState()
        self._analysis = AnalysisSession(
            settings=self._settings,
            channel_factory=channel_factory,
            parent=self,
        )

        self._setup_ui()
        self._connect_signals()

        self._analysis.subscribe(self._on_snapshot)
        self._analysis.subscribe_engine_lost(self._on_engine_lost)
        if not self._analysis.setup():
            self._on_engine_lost()
        self._on_position_changed()

    # ── Construction ─────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(12)

        self._eval_bar = EvalBar()
        root.addWidget(self._eval_bar)

        board_col = QVBoxLayout()
        self._board_view = BoardView()
        scene = self._board_view.board_scene
        scene.set_theme(BoardTheme.by_name(self._settings.board_theme))
        scene.set_show_legal_moves(self._settings.show_legal_moves)
        scene.set_game(self._game)
        board_col.addWidget(self._board_view, stretch=1)

        self._control_panel = ControlPanel()
        board_col.addWidget(self._control_panel)
        root.addLayout(board_col, stretch=3)

        self._analysis_panel = AnalysisPanel(self._settings.analysis_depth)
        self._analysis_panel.setMinimumWidth(320)
        root.addWidget(self._analysis_panel, stretch=2)

        status_bar = QStatusBar()
        self._status_label = QLabel(t().status_ready)
        status_bar.addWidget(self._status_label, stretch=1)
        self._engine_label = QLabel()
        status_bar.addPermanentWidget(self._engine_label)
        self.setStatusBar(status_bar)

    def _connect_signals(self) -> None:
        self._board_view.board_scene.move_attempted.connect(self._on_move_attempted)
        self._control_panel.flip_clicked.connect(self._on_flip)
        self._control_panel.reset_clicked.connect(self._on_reset)
        self._control_panel.undo_clicked.connect(self._on_undo)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game(self) -> GameState:
        return self._game

    @property
    def analysis(self) -> AnalysisSession:
        return self._analysis

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_move_attempted(self, move: UciMove) -> None:
        if not self._game.apply_move(move):
            self._status_label.setText(t().status_illegal_move)
            return
        self._on_position_changed()

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())

    def _on_reset(self) -> None:
        self._game.reset()
        self._on_position_changed()

    def _on_undo(self) -> None:
        if self._game.undo():
            self._on_position_changed()

    def _on_position_changed(self) -> None:
        self._board_view.board_scene.refresh()
        self._control_panel.set_undo_enabled(bool(self._game.move_log))
        self._status_label.setText(
            t().status_game_over if self._game.is_game_over else t().status_ready
        )
        if self._analysis.analyze(self._game.serialize()) is None:
            self._on_snapshot(AnalysisSnapshot())

    def _on_engine_lost(self) -> None:
        self._engine_label.setText(
            t().status_engine_unavailable.format(path=self._settings.engine_path)
        )

    def _on_snapshot(self, snapshot: AnalysisSnapshot) -> None:
        white_score = white_relative(snapshot.score, self._game.white_to_move)
        self._eval_bar.set_score(white_score)
        self._analysis_panel.show_snapshot(snapshot, white_score)
        self._board_view.board_scene.set_best_move(snapshot.best_move)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._analysis.shutdown()
        _LOGGER.info("Main window closed")
        super().closeEvent(event)
