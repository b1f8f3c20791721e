"""Engine process session orchestration for the main UI thread."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Protocol

from sightline.engine.models import AnalysisRequest
from sightline.engine.options import EngineOptions
from sightline.engine.process import EngineChannelError, EngineUnavailable
from sightline.engine.protocol import CMD_STOP, serialize_handshake, serialize_request

_LOGGER = logging.getLogger(__name__)


class LineSignal(Protocol):
    """Minimal signal interface used by :class:`EngineSession`."""

    def connect(self, slot: Callable[..., object]) -> object: ...

    def disconnect(self, slot: Callable[..., object]) -> object: ...


class IEngineChannel(Protocol):
    """Ordered, line-based link to one engine process."""

    @property
    def line_received(self) -> LineSignal: ...

    @property
    def channel_lost(self) -> LineSignal: ...

    def start(self) -> None: ...

    def send(self, command: str) -> None: ...

    def close(self) -> None: ...


ChannelFactory = Callable[[], IEngineChannel]
LineCallback = Callable[[str], None]
LostCallback = Callable[[], None]


class EngineSession:
    """Owns the engine channel and keeps a single request active.

    The session only orders outbound commands and forwards inbound lines; it
    never looks at what the engine says. If the engine cannot be started the
    session degrades to a no-op and analysis simply produces no output.
    """

    __slots__ = (
        "__weakref__",
        "_channel_factory",
        "_options",
        "_on_line",
        "_on_lost",
        "_channel",
        "_sequence",
        "_active_request",
        "_is_started",
        "_is_terminated",
    )

    def __init__(
        self,
        *,
        channel_factory: ChannelFactory,
        on_line: LineCallback,
        on_lost: LostCallback | None = None,
        options: EngineOptions | None = None,
    ) -> None:
        self._channel_factory = channel_factory
        self._options = options or EngineOptions()
        self._on_line = on_line
        self._on_lost = on_lost
        self._channel: IEngineChannel | None = None
        self._sequence = 0
        self._active_request: AnalysisRequest | None = None
        self._is_started = False
        self._is_terminated = False

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def is_available(self) -> bool:
        """Whether commands currently reach a running engine."""
        return self._channel is not None

    @property
    def active_request(self) -> AnalysisRequest | None:
        return self._active_request

    @property
    def sequence(self) -> int:
        return self._sequence

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> bool:
        """Launch the engine and send the configuration handshake.

        Returns False (after logging once) when the engine is unavailable.
        """
        if self._channel is not None:
            return True
        if self._is_started or self._is_terminated:
            return False
        self._is_started = True

        try:
            channel = self._channel_factory()
            channel.start()
        except (EngineUnavailable, OSError) as exc:
            _LOGGER.error("Engine unavailable, analysis disabled: %s", exc)
            return False

        channel.line_received.connect(self._deliver)
        channel.channel_lost.connect(self._on_channel_lost)
        self._channel = channel
        # Options are independent; one the engine rejects must not stop the rest.
        for command in serialize_handshake(self._options):
            self._send(command)
        return True

    def terminate(self) -> None:
        """Release the engine. Later calls on the session do nothing."""
        if self._is_terminated:
            return
        self._is_terminated = True
        self._active_request = None
        channel = self._channel
        self._channel = None
        if channel is None:
            return
        self._release(channel)

    def __enter__(self) -> EngineSession:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.terminate()

    # ── Commands ─────────────────────────────────────────────────────────

    def analyze(self, position: str, depth: int) -> int | None:
        """Supersede any running search with one for *position*.

        Returns the new request's sequence number, or None when no engine is
        attached or the request did not reach it. A failed command aborts the
        rest, so None always means no ``go`` was sent.
        """
        if self._channel is None:
            return None
        commands = serialize_request(position, depth)
        self._sequence += 1
        self._active_request = None
        for command in commands:
            if not self._send(command):
                return None
        self._active_request = AnalysisRequest(position, depth, self._sequence)
        return self._sequence

    def stop(self) -> None:
        """Pause the current search without superseding it."""
        if self._channel is None:
            return
        self._send(CMD_STOP)

    # ── Internals ────────────────────────────────────────────────────────

    def _send(self, command: str) -> bool:
        if self._channel is None:
            return False
        try:
            self._channel.send(command)
        except EngineChannelError as exc:
            _LOGGER.warning("Engine command failed (%s): %s", command, exc)
            return False
        return True

    def _deliver(self, line: str) -> None:
        if self._is_terminated:
            return
        self._on_line(line)

    def _on_channel_lost(self, reason: str) -> None:
        channel = self._channel
        if channel is None:
            return
        _LOGGER.error("Engine stopped, analysis disabled: %s", reason)
        self._channel = None
        self._active_request = None
        self._release(channel)
        if self._on_lost is not None:
            self._on_lost()

    def _release(self, channel: IEngineChannel) -> None:
        channel.line_received.disconnect(self._deliver)
        channel.channel_lost.disconnect(self._on_channel_lost)
        channel.close()
