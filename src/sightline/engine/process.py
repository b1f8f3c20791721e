"""Qt bridge to a UCI engine running as a child process."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from PyQt6.QtCore import QObject, QProcess, pyqtSignal, pyqtSlot

_LOGGER = logging.getLogger(__name__)


class EngineUnavailable(RuntimeError):
    """Raised when the engine binary cannot be launched."""


class EngineChannelError(OSError):
    """Raised when a command cannot be written to the engine."""


class UciProcess(QObject):
    """Line-oriented channel to an engine process.

    Output is read on the owning thread's event loop and re-emitted one whole
    line at a time through :attr:`line_received`, in arrival order.

    Signals:
        line_received(str): A complete output line without its newline.
        channel_lost(str): The process exited on its own; carries the reason.
    """

    line_received = pyqtSignal(str)
    channel_lost = pyqtSignal(str)

    _START_TIMEOUT_MS = 3000
    _QUIT_TIMEOUT_MS = 1000

    __slots__ = ("_program", "_arguments", "_process", "_buffer")

    def __init__(
        self,
        program: str,
        arguments: Sequence[str] = (),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._program = program
        self._arguments = list(arguments)
        self._process: QProcess | None = None
        self._buffer = b""

    @property
    def is_running(self) -> bool:
        return (
            self._process is not None
            and self._process.state() != QProcess.ProcessState.NotRunning
        )

    def start(self) -> None:
        """Launch the engine and wait until it is running.

        Raises:
            EngineUnavailable: If the process fails to start.
        """
        if self.is_running:
            return
        process = QProcess(self)
        process.setProgram(self._program)
        process.setArguments(self._arguments)
        process.readyReadStandardOutput.connect(self._on_ready_read)
        process.start()
        if not process.waitForStarted(self._START_TIMEOUT_MS):
            message = process.errorString()
            process.deleteLater()
            raise EngineUnavailable(f"Cannot start {self._program!r}: {message}")
        process.errorOccurred.connect(self._on_error)
        process.finished.connect(self._on_finished)
        self._process = process
        self._buffer = b""
        _LOGGER.info(
            "Engine process started: %s (pid %s)",
            self._program,
            process.processId(),
        )

    def send(self, command: str) -> None:
        """Write one command line to the engine.

        Raises:
            EngineChannelError: If the engine is not running or the write fails.
        """
        if not self.is_running or self._process is None:
            raise EngineChannelError(f"Engine not running, dropped {command!r}")
        written = self._process.write((command + "\n").encode("utf-8"))
        if written < 0:
            raise EngineChannelError(
                f"Write failed for {command!r}: {self._process.errorString()}"
            )
        _LOGGER.debug(">> %s", command)

    def close(self) -> None:
        """Ask the engine to quit, killing it if it does not exit promptly."""
        process = self._process
        if process is None:
            return
        self._process = None
        process.readyReadStandardOutput.disconnect(self._on_ready_read)
        process.errorOccurred.disconnect(self._on_error)
        process.finished.disconnect(self._on_finished)
        if process.state() != QProcess.ProcessState.NotRunning:
            process.write(b"quit\n")
            process.closeWriteChannel()
            if not process.waitForFinished(self._QUIT_TIMEOUT_MS):
                _LOGGER.warning("Engine did not quit in time, killing it")
                process.kill()
                process.waitForFinished(self._QUIT_TIMEOUT_MS)
        process.deleteLater()
        self._buffer = b""
        _LOGGER.info("Engine process closed: %s", self._program)

    @pyqtSlot()
    def _on_ready_read(self) -> None:
        if self._process is None:
            return
        self._buffer += bytes(self._process.readAllStandardOutput())
        *lines, self._buffer = self._buffer.split(b"\n")
        for raw in lines:
            line = raw.decode("utf-8", errors="replace").rstrip("\r")
            _LOGGER.debug("<< %s", line)
            self.line_received.emit(line)

    @pyqtSlot(QProcess.ProcessError)
    def _on_error(self, error: QProcess.ProcessError) -> None:
        if self._process is None:
            return
        _LOGGER.warning(
            "Engine process error %s: %s", error.name, self._process.errorString()
        )

    @pyqtSlot(int, QProcess.ExitStatus)
    def _on_finished(self, exit_code: int, exit_status: QProcess.ExitStatus) -> None:
        if self._process is None:
            return
        if exit_status == QProcess.ExitStatus.CrashExit:
            reason = f"{self._program} crashed"
        else:
            reason = f"{self._program} exited with code {exit_code}"
        self.channel_lost.emit(reason)
