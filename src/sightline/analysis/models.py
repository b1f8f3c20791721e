"""Snapshot of the live analysis shown by the UI."""

from __future__ import annotations

from dataclasses import dataclass

from sightline.engine.models import Score, UciMove


@dataclass(slots=True, frozen=True)
class AnalysisSnapshot:
    """Latest accepted engine output for one request.

    Fields stay ``None`` until the engine reports them. ``finished`` is set
    once the search has ended, with or without a best move.
    """

    depth: int | None = None
    score: Score | None = None
    principal_variation: tuple[UciMove, ...] | None = None
    best_move: UciMove | None = None
    request_sequence: int = 0
    finished: bool = False
