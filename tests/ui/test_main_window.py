"""Tests for MainWindow wiring between the board, game and analysis."""

from __future__ import annotations

from typing import Any

from sightline.config import AppSettings
from sightline.engine.models import UciMove
from sightline.engine.process import EngineUnavailable
from sightline.ui.i18n import t
from sightline.ui.main_window import MainWindow

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"


def _window(channel: Any, **settings: Any) -> MainWindow:
    return MainWindow(AppSettings(**settings), channel_factory=lambda: channel)


def _go_commands(channel: Any) -> list[str]:
    return [c for c in channel.sent if c.startswith(("position", "go"))]


def test_start_position_is_analysed_on_open(stub_channel: Any) -> None:
    _window(stub_channel, analysis_depth=12)
    assert _go_commands(stub_channel) == [f"position fen {START_FEN}", "go depth 12"]


def test_move_restarts_analysis(stub_channel: Any) -> None:
    window = _window(stub_channel)
    stub_channel.sent.clear()

    window._on_move_attempted(UciMove("e2", "e4"))

    assert stub_channel.sent[:2] == ["stop", f"position fen {AFTER_E4}"]
    assert window.analysis.engine.sequence == 2
    assert window._control_panel._btn_undo.isEnabled()


def test_illegal_move_keeps_analysis(stub_channel: Any) -> None:
    window = _window(stub_channel)
    stub_channel.sent.clear()

    window._on_move_attempted(UciMove("e2", "e5"))

    assert stub_channel.sent == []
    assert window._status_label.text() == t().status_illegal_move


def test_snapshot_updates_panels_from_whites_side(stub_channel: Any) -> None:
    window = _window(stub_channel, analysis_depth=20)
    window._on_move_attempted(UciMove("e2", "e4"))

    # The start-position search answers the stop first.
    stub_channel.line_received.emit("bestmove e2e4")
    # Black to move and better by 0.50, so White sees -0.50.
    stub_channel.line_received.emit("info depth 9 score cp 50 pv e7e5 g1f3")
    stub_channel.line_received.emit("bestmove e7e5")

    panel = window._analysis_panel
    assert panel.eval_text() == "-0.50"
    assert panel.depth_text() == "9 / 20"
    assert panel.best_move_text() == "E7 ➝ E5"
    assert panel.pv_text() == "e7e5 g1f3"
    assert window._eval_bar.white_percent == 47.5
    assert window._board_view.board_scene.best_move == UciMove("e7", "e5")


def test_late_lines_for_old_position_do_not_reach_panel(stub_channel: Any) -> None:
    window = _window(stub_channel)
    window._on_move_attempted(UciMove("e2", "e4"))

    stub_channel.line_received.emit("info depth 30 score cp 90 pv d2d4")
    stub_channel.line_received.emit("bestmove d2d4")

    panel = window._analysis_panel
    assert panel.eval_text() == "—"
    assert panel.best_move_text() == t().analysis_calculating
    assert panel.pv_text() == t().analysis_pv_waiting
    assert window._board_view.board_scene.best_move is None


def test_undo_and_reset(stub_channel: Any) -> None:
    window = _window(stub_channel)
    window._on_move_attempted(UciMove("e2", "e4"))

    window._on_undo()
    assert window.game.serialize() == START_FEN
    assert not window._control_panel._btn_undo.isEnabled()

    window._on_move_attempted(UciMove("d2", "d4"))
    window._on_reset()
    assert window.game.move_log == ()
    assert window.analysis.snapshot.request_sequence == window.analysis.engine.sequence


def test_flip(stub_channel: Any) -> None:
    window = _window(stub_channel)
    window._on_flip()
    assert window._board_view.board_scene.is_flipped()


def test_missing_engine_reports_status_and_board_still_works() -> None:
    def factory() -> Any:
        raise EngineUnavailable("not found")

    window = MainWindow(AppSettings(engine_path="/no/engine"), channel_factory=factory)
    assert window._engine_label.text() == t().status_engine_unavailable.format(
        path="/no/engine"
    )

    window._on_move_attempted(UciMove("e2", "e4"))
    assert window.game.move_log == ("e2e4",)
    assert window._analysis_panel.eval_text() == "—"


def test_close_shuts_engine_down(stub_channel: Any) -> None:
    window = _window(stub_channel)
    window.show()
    window.close()
    assert stub_channel.closed


def test_turkish_strings(stub_channel: Any) -> None:
    window = _window(stub_channel, language="Turkish")
    assert window._control_panel._btn_undo.text() == "Geri Al"


def test_checkmate_search_shows_no_move(stub_channel: Any) -> None:
    window = _window(stub_channel)
    for move in ("f2f3", "e7e5", "g2g4", "d8h4"):
        window._on_move_attempted(UciMove.parse(move))
    for _ in range(4):
        stub_channel.line_received.emit("bestmove e2e4")

    stub_channel.line_received.emit("info depth 0 score mate 0")
    stub_channel.line_received.emit("bestmove (none)")

    panel = window._analysis_panel
    assert panel.best_move_text() == t().analysis_no_move
    assert panel.pv_text() == ""
    assert window._status_label.text() == t().status_game_over


def test_engine_dying_mid_session_is_reported(stub_channel: Any) -> None:
    window = _window(stub_channel, engine_path="/opt/stockfish")
    assert window._engine_label.text() == ""

    stub_channel.line_received.emit("bestmove e2e4")
    stub_channel.channel_lost.emit("stockfish crashed")

    assert window._engine_label.text() == t().status_engine_unavailable.format(
        path="/opt/stockfish"
    )
    window._on_move_attempted(UciMove("e2", "e4"))
    assert window.game.move_log == ("e2e4",)
    assert window._analysis_panel.best_move_text() == t().analysis_calculating
