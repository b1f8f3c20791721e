"""Square overlays shown while a piece is being dragged."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from sightline.engine.models import is_square

if TYPE_CHECKING:
    from sightline.game.interfaces import IPositionSource


class HighlightStyle(StrEnum):
    ORIGIN = "origin"
    QUIET_MOVE = "quiet_move"
    CAPTURE_MOVE = "capture_move"


def compute_highlights(
    position: IPositionSource,
    origin: str,
) -> dict[str, HighlightStyle]:
    """Map squares to overlay styles for a drag starting on *origin*.

    Empty when *origin* is not a square or holds no piece. A piece without
    legal moves (pinned, or the side not to move) still marks its origin.
    """
    if not is_square(origin):
        return {}
    origin = origin.lower()
    piece = position.piece_at(origin)
    if piece is None:
        return {}

    highlights = {origin: HighlightStyle.ORIGIN}
    for square in sorted(position.legal_destinations(origin)):
        target = position.piece_at(square)
        if target is not None and target.color != piece.color:
            highlights[square] = HighlightStyle.CAPTURE_MOVE
        else:
            highlights[square] = HighlightStyle.QUIET_MOVE
    return highlights
