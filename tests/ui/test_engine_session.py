"""Regression tests for EngineSession wiring."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable

import pytest

from sightline.engine.models import AnalysisRequest
from sightline.engine.options import EngineOptions
from sightline.engine.process import EngineChannelError, EngineUnavailable
from sightline.ui.engine_session import EngineSession

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"


class _StubSignal:
    def __init__(self) -> None:
        self.slots: list[Callable[..., object]] = []

    def connect(self, slot: Callable[..., object]) -> object:
        self.slots.append(slot)
        return object()

    def disconnect(self, slot: Callable[..., object]) -> object:
        self.slots.remove(slot)
        return object()

    def emit(self, text: str) -> None:
        for slot in list(self.slots):
            slot(text)


class _StubChannel:
    def __init__(self, *, fail_on: tuple[str, ...] = ()) -> None:
        self.line_received = _StubSignal()
        self.channel_lost = _StubSignal()
        self.sent: list[str] = []
        self.started = False
        self.closed = False
        self._fail_on = fail_on

    def start(self) -> None:
        self.started = True

    def send(self, command: str) -> None:
        if any(command.startswith(prefix) for prefix in self._fail_on):
            raise EngineChannelError(f"rejected {command}")
        self.sent.append(command)

    def close(self) -> None:
        self.closed = True


def _session(
    channel: _StubChannel | None = None,
    lines: list[str] | None = None,
) -> tuple[EngineSession, _StubChannel]:
    channel = channel or _StubChannel()
    received = lines if lines is not None else []
    session = EngineSession(
        channel_factory=lambda: channel,
        on_line=received.append,
    )
    return session, channel


class TestLifecycle:
    def test_start_sends_handshake(self) -> None:
        session, channel = _session()
        assert session.start() is True
        assert channel.started
        assert channel.sent[0] == "uci"
        assert channel.sent[1:] == [
            "setoption name Hash value 32",
            "setoption name Threads value 1",
            "setoption name Skill Level value 20",
            "setoption name MultiPV value 1",
            "setoption name Move Overhead value 100",
        ]

    def test_start_uses_configured_options(self) -> None:
        channel = _StubChannel()
        session = EngineSession(
            channel_factory=lambda: channel,
            on_line=lambda _line: None,
            options=EngineOptions(skill_level=5),
        )
        session.start()
        assert "setoption name Skill Level value 5" in channel.sent

    def test_failed_option_does_not_abort_handshake(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        session, channel = _session(_StubChannel(fail_on=("setoption name Threads",)))
        with caplog.at_level(logging.WARNING):
            assert session.start() is True

        assert "setoption name Threads value 1" not in channel.sent
        assert "setoption name Skill Level value 20" in channel.sent
        assert "setoption name Move Overhead value 100" in channel.sent
        assert "Threads" in caplog.text

    def test_start_twice_is_idempotent(self) -> None:
        session, channel = _session()
        session.start()
        session.start()
        assert channel.sent.count("uci") == 1

    def test_connects_slots_without_weakref_error(self) -> None:
        session, _ = _session()
        assert weakref.ref(session)() is session
        session.start()
        session.terminate()

    def test_terminate_releases_channel(self) -> None:
        session, channel = _session()
        session.start()
        session.terminate()

        assert channel.closed
        assert channel.line_received.slots == []
        assert not session.is_available

    def test_context_manager_scopes_channel(self) -> None:
        session, channel = _session()
        with session as active:
            assert active is session
            assert session.is_available
        assert channel.closed


class TestUnavailableEngine:
    def _broken(self) -> EngineSession:
        def factory() -> _StubChannel:
            raise EngineUnavailable("no such binary")

        return EngineSession(channel_factory=factory, on_line=lambda _line: None)

    def test_start_failure_degrades_to_noop(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        session = self._broken()
        with caplog.at_level(logging.ERROR):
            assert session.start() is False
            assert session.start() is False

        assert not session.is_available
        assert session.analyze(START_FEN, 20) is None
        session.stop()
        session.terminate()
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "no such binary" in errors[0].getMessage()

    def test_os_error_from_factory_is_treated_as_unavailable(self) -> None:
        def factory() -> _StubChannel:
            raise OSError("exec format error")

        session = EngineSession(channel_factory=factory, on_line=lambda _line: None)
        assert session.start() is False
        assert session.analyze(START_FEN, 20) is None


class TestCommands:
    def test_analyze_sends_stop_position_go(self) -> None:
        session, channel = _session()
        session.start()
        channel.sent.clear()

        sequence = session.analyze(START_FEN, 25)

        assert sequence == 1
        assert channel.sent == [
            "stop",
            f"position fen {START_FEN}",
            "go depth 25",
        ]
        assert session.active_request == AnalysisRequest(START_FEN, 25, 1)

    def test_each_analyze_increments_sequence(self) -> None:
        session, _ = _session()
        session.start()
        assert session.analyze(START_FEN, 25) == 1
        assert session.analyze(AFTER_E4, 25) == 2
        assert session.active_request == AnalysisRequest(AFTER_E4, 25, 2)

    def test_stop_does_not_change_sequence(self) -> None:
        session, channel = _session()
        session.start()
        session.analyze(START_FEN, 25)
        channel.sent.clear()

        session.stop()

        assert channel.sent == ["stop"]
        assert session.sequence == 1

    def test_analyze_before_start_is_noop(self) -> None:
        session, channel = _session()
        assert session.analyze(START_FEN, 25) is None
        assert channel.sent == []

    def test_commands_after_terminate_are_noops(self) -> None:
        session, channel = _session()
        session.start()
        session.terminate()
        channel.sent.clear()

        assert session.analyze(START_FEN, 25) is None
        session.stop()
        session.terminate()
        assert session.start() is False
        assert channel.sent == []

    def test_undelivered_go_is_not_a_request(self) -> None:
        session, channel = _session(_StubChannel(fail_on=("go",)))
        session.start()
        channel.sent.clear()

        assert session.analyze(START_FEN, 25) is None
        assert session.active_request is None
        assert channel.sent == ["stop", f"position fen {START_FEN}"]

    def test_failed_command_aborts_the_rest(self) -> None:
        session, channel = _session(_StubChannel(fail_on=("position",)))
        session.start()
        channel.sent.clear()

        assert session.analyze(START_FEN, 25) is None
        assert channel.sent == ["stop"]

    def test_failed_request_still_consumes_a_sequence(self) -> None:
        session, _ = _session(_StubChannel(fail_on=("go",)))
        session.start()
        session.analyze(START_FEN, 25)
        assert session.sequence == 1
        assert session.is_available


class TestInbound:
    def test_lines_forwarded_in_order_unmodified(self) -> None:
        lines: list[str] = []
        session, channel = _session(lines=lines)
        session.start()

        for line in ("uciok", "info depth 1 score cp 10", "bestmove e2e4"):
            channel.line_received.emit(line)

        assert lines == ["uciok", "info depth 1 score cp 10", "bestmove e2e4"]

    def test_lines_after_terminate_are_dropped(self) -> None:
        lines: list[str] = []
        session, channel = _session(lines=lines)
        session.start()
        slot = channel.line_received.slots[0]
        session.terminate()

        slot("bestmove e2e4")

        assert lines == []


class TestLostEngine:
    def test_lost_channel_disables_session(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        lost: list[bool] = []
        channel = _StubChannel()
        session = EngineSession(
            channel_factory=lambda: channel,
            on_line=lambda _line: None,
            on_lost=lambda: lost.append(True),
        )
        session.start()
        session.analyze(START_FEN, 25)

        with caplog.at_level(logging.ERROR):
            channel.channel_lost.emit("stockfish exited with code 1")
            channel.channel_lost.emit("stockfish exited with code 1")

        assert lost == [True]
        assert channel.closed
        assert not session.is_available
        assert session.active_request is None
        assert session.analyze(AFTER_E4, 25) is None
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "exited with code 1" in errors[0].getMessage()

    def test_terminate_after_loss_is_noop(self) -> None:
        session, channel = _session()
        session.start()
        channel.channel_lost.emit("crashed")
        session.terminate()
        assert channel.line_received.slots == []
        assert channel.channel_lost.slots == []
