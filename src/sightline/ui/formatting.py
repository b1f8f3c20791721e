"""Presentation helpers for engine scores and moves.

Engine scores are relative to the side to move; the eval bar and score label
are drawn from White's point of view.
"""

from __future__ import annotations

from collections.abc import Iterable

from sightline.engine.models import Centipawn, MateIn, Score, UciMove

EVAL_CLAMP_CP = 1000
MATE_AS_CP = 10_000


def white_relative(score: Score | None, white_to_move: bool) -> Score | None:
    """Flip *score* to White's perspective."""
    if score is None or white_to_move:
        return score
    if isinstance(score, MateIn):
        return MateIn(-score.plies_signed)
    return Centipawn(-score.value)


def score_to_cp(score: Score | None) -> int:
    """Collapse a score to centipawns; mates become ±10000."""
    if score is None:
        return 0
    if isinstance(score, MateIn):
        # Mate in 0 means the side to move is already mated.
        return MATE_AS_CP if score.plies_signed > 0 else -MATE_AS_CP
    return score.value


def eval_percent(score: Score | None) -> float:
    """Share of the eval bar filled by the advantaged side, 0..100."""
    cp = max(-EVAL_CLAMP_CP, min(EVAL_CLAMP_CP, score_to_cp(score)))
    return 50.0 + cp / 20.0


def format_score(score: Score | None) -> str:
    if score is None:
        return "—"
    if isinstance(score, MateIn):
        sign = "-" if score.plies_signed < 0 else ""
        return f"{sign}M{abs(score.plies_signed)}"
    return f"{score.value / 100:+.2f}"


def format_best_move(move: UciMove | None) -> str:
    if move is None:
        return ""
    return f"{move.from_sq.upper()} ➝ {move.to_sq.upper()}"


def format_pv(moves: Iterable[UciMove] | None) -> str:
    if not moves:
        return ""
    return " ".join(str(move) for move in moves)
