"""Tests for the QProcess-backed engine channel."""

from __future__ import annotations

import sys
from collections.abc import Iterator

import pytest
from PyQt6.QtTest import QSignalSpy

from sightline.engine.process import EngineChannelError, EngineUnavailable, UciProcess

# Minimal stand-in engine: echoes commands, splits one reply across writes.
_ECHO_ENGINE = """
import sys, time
for line in sys.stdin:
    cmd = line.strip()
    if cmd == "quit":
        break
    if cmd == "die":
        sys.exit(3)
    if cmd == "go":
        sys.stdout.write("bestmo")
        sys.stdout.flush()
        time.sleep(0.05)
        sys.stdout.write("ve e2e4\\n")
        sys.stdout.flush()
        continue
    print("echo " + cmd, flush=True)
"""


@pytest.fixture
def echo_engine(qapp: object) -> Iterator[UciProcess]:
    del qapp
    process = UciProcess(sys.executable, ["-u", "-c", _ECHO_ENGINE])
    process.start()
    yield process
    process.close()


class TestUciProcess:
    def test_start_failure_raises_unavailable(self, qapp: object) -> None:
        del qapp
        process = UciProcess("/nonexistent/sightline-test-engine")
        with pytest.raises(EngineUnavailable):
            process.start()
        assert not process.is_running

    def test_send_before_start_raises_channel_error(self) -> None:
        process = UciProcess(sys.executable)
        with pytest.raises(EngineChannelError):
            process.send("uci")

    def test_lines_arrive_in_order(self, echo_engine: UciProcess) -> None:
        spy = QSignalSpy(echo_engine.line_received)
        echo_engine.send("uci")
        echo_engine.send("isready")

        while len(spy) < 2:
            assert spy.wait(5000)

        assert [spy[0][0], spy[1][0]] == ["echo uci", "echo isready"]

    def test_partial_writes_are_joined_into_one_line(
        self, echo_engine: UciProcess
    ) -> None:
        spy = QSignalSpy(echo_engine.line_received)
        echo_engine.send("go")

        assert spy.wait(5000)
        assert spy[0][0] == "bestmove e2e4"

    def test_close_stops_process(self, echo_engine: UciProcess) -> None:
        assert echo_engine.is_running
        echo_engine.close()
        assert not echo_engine.is_running
        with pytest.raises(EngineChannelError):
            echo_engine.send("uci")

    def test_unexpected_exit_reports_channel_lost(
        self, echo_engine: UciProcess
    ) -> None:
        spy = QSignalSpy(echo_engine.channel_lost)
        echo_engine.send("die")

        assert spy.wait(5000)
        assert "exited with code 3" in spy[0][0]
        assert not echo_engine.is_running

    def test_close_does_not_report_channel_lost(
        self, echo_engine: UciProcess
    ) -> None:
        spy = QSignalSpy(echo_engine.channel_lost)
        echo_engine.close()
        assert len(spy) == 0
