"""Live position analysis orchestration for the UI thread."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from PyQt6.QtCore import QObject

from sightline.analysis import AnalysisReducer, AnalysisSnapshot, SnapshotCallback
from sightline.config import AppSettings
from sightline.engine.models import Unrecognized
from sightline.engine.process import UciProcess
from sightline.engine.protocol import ends_search, parse_line
from sightline.ui.engine_session import ChannelFactory, EngineSession

_LOGGER = logging.getLogger(__name__)


class AnalysisSession:
    """Connects the engine session, line codec and reducer.

    Each ``go`` produces exactly one ``bestmove``, so inbound lines belong to
    the oldest search still in flight. The reducer then drops anything that
    belongs to a superseded request.
    """

    __slots__ = (
        "__weakref__",
        "_settings",
        "_engine",
        "_reducer",
        "_in_flight",
        "_lost_callbacks",
        "_is_started",
    )

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        channel_factory: ChannelFactory | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        if channel_factory is None:
            engine_path = self._settings.engine_path

            def channel_factory() -> UciProcess:
                return UciProcess(engine_path, parent=parent)

        self._engine = EngineSession(
            channel_factory=channel_factory,
            on_line=self._on_engine_line,
            on_lost=self._on_engine_lost,
            options=self._settings.engine,
        )
        self._reducer = AnalysisReducer()
        self._in_flight: deque[int] = deque()
        self._lost_callbacks: list[Callable[[], None]] = []
        self._is_started = False

    @property
    def snapshot(self) -> AnalysisSnapshot:
        return self._reducer.snapshot

    @property
    def reducer(self) -> AnalysisReducer:
        return self._reducer

    @property
    def engine(self) -> EngineSession:
        return self._engine

    @property
    def target_depth(self) -> int:
        return self._settings.analysis_depth

    def subscribe(self, callback: SnapshotCallback) -> None:
        self._reducer.subscribe(callback)

    def subscribe_engine_lost(self, callback: Callable[[], None]) -> None:
        """Call *callback* once if the engine process dies while in use."""
        self._lost_callbacks.append(callback)

    def setup(self) -> bool:
        """Start the engine; returns False when analysis is unavailable."""
        if self._is_started:
            return self._engine.is_available
        self._is_started = True
        return self._engine.start()

    def shutdown(self) -> None:
        """Stop the engine process."""
        if not self._is_started:
            return
        self._engine.terminate()
        self._in_flight.clear()
        self._is_started = False

    def analyze(self, position: str, depth: int | None = None) -> int | None:
        """Start (or restart) analysis of *position*.

        The reducer is reset for the new request before this returns, so
        observers never see the previous position's results again. Only a
        request that reached the engine waits for a ``bestmove``.
        """
        sequence = self._engine.analyze(
            position,
            self._settings.analysis_depth if depth is None else depth,
        )
        if sequence is None:
            if self._engine.is_available:
                # Undelivered request: older output no longer matches the board.
                self._reducer.begin(self._engine.sequence)
            return None
        self._reducer.begin(sequence)
        self._in_flight.append(sequence)
        return sequence

    def pause(self) -> None:
        self._engine.stop()

    def _on_engine_line(self, line: str) -> None:
        if not self._in_flight:
            return
        finished = ends_search(line)
        sequence = self._in_flight.popleft() if finished else self._in_flight[0]
        try:
            event = parse_line(line)
            if finished and isinstance(event, Unrecognized):
                # ``bestmove (none)``: the position has no legal move.
                self._reducer.finish(sequence)
            else:
                self._reducer.apply(sequence, event)
        except Exception:
            _LOGGER.exception("Dropped engine line %r", line)

    def _on_engine_lost(self) -> None:
        self._in_flight.clear()
        for callback in list(self._lost_callbacks):
            callback()
