"""AnalysisReducer — folds engine events into a single snapshot.

All mutation happens on the UI thread in event-arrival order, so no locking
is needed. Superseded requests are filtered here by sequence number; this is
the only place stale engine output is rejected.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from sightline.analysis.models import AnalysisSnapshot
from sightline.engine.models import AnalysisEvent, BestMove, Progress

SnapshotCallback = Callable[[AnalysisSnapshot], None]


class AnalysisReducer:
    """Single-writer fold of ``(sequence, event)`` pairs.

    Observers registered with :meth:`subscribe` are called with the new
    snapshot after every accepted change.
    """

    __slots__ = ("_snapshot", "_active_sequence", "_observers")

    def __init__(self) -> None:
        self._snapshot = AnalysisSnapshot()
        self._active_sequence = 0
        self._observers: list[SnapshotCallback] = []

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def snapshot(self) -> AnalysisSnapshot:
        return self._snapshot

    @property
    def active_sequence(self) -> int:
        return self._active_sequence

    # ── Observers ────────────────────────────────────────────────────────

    def subscribe(self, callback: SnapshotCallback) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: SnapshotCallback) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    # ── Fold ─────────────────────────────────────────────────────────────

    def begin(self, sequence: int) -> None:
        """Make *sequence* the active request and clear its results."""
        self._active_sequence = sequence
        self._publish(AnalysisSnapshot(request_sequence=sequence))

    def apply(self, sequence: int, event: AnalysisEvent) -> bool:
        """Merge *event* into the snapshot; return whether anything changed."""
        if sequence < self._active_sequence:
            return False

        current = self._snapshot
        if isinstance(event, Progress):
            # Secondary multi-PV lines describe alternatives, not the main line.
            if event.multipv > 1:
                return False
            updated = replace(
                current,
                depth=current.depth if event.depth is None else event.depth,
                score=current.score if event.score is None else event.score,
                principal_variation=(
                    current.principal_variation
                    if event.principal_variation is None
                    else event.principal_variation
                ),
                request_sequence=sequence,
            )
        elif isinstance(event, BestMove):
            if current.best_move is not None and current.request_sequence == sequence:
                return False
            updated = replace(
                current,
                best_move=event.move,
                request_sequence=sequence,
                finished=True,
            )
        else:
            return False

        if updated == current:
            return False
        self._publish(updated)
        return True

    def finish(self, sequence: int) -> bool:
        """Mark *sequence* as ended without a best move (no legal moves)."""
        if sequence < self._active_sequence:
            return False
        current = self._snapshot
        if current.finished and current.request_sequence == sequence:
            return False
        self._publish(replace(current, request_sequence=sequence, finished=True))
        return True

    def _publish(self, snapshot: AnalysisSnapshot) -> None:
        self._snapshot = snapshot
        for callback in list(self._observers):
            callback(snapshot)
