"""Interfaces between the UI layer and the rules library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import chess

    from sightline.engine.models import UciMove


class IPositionSource(Protocol):
    """Authoritative game position as seen by the analysis and UI code."""

    def serialize(self) -> str: ...

    def legal_destinations(self, square: str) -> frozenset[str]: ...

    def piece_at(self, square: str) -> chess.Piece | None: ...

    def apply_move(self, move: UciMove) -> bool: ...
