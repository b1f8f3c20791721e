"""GameState — the current position and its move history.

Rules (legality, move application, FEN) are delegated to ``python-chess``.
"""

from __future__ import annotations

import logging

import chess

from sightline.engine.models import UciMove

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = chess.STARTING_FEN


def _square(name: str) -> chess.Square | None:
    try:
        return chess.parse_square(name.lower())
    except ValueError:
        return None


class GameState:
    """Mutable game holding a ``chess.Board``.

    Positions leave this class only as FEN strings, so callers never share
    the board itself.
    """

    __slots__ = ("_board",)

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen) if fen else chess.Board()

    # ── Queries ──────────────────────────────────────────────────────────

    def serialize(self) -> str:
        """Current position as FEN."""
        return self._board.fen()

    @property
    def start_fen(self) -> str:
        return self._board.root().fen()

    @property
    def move_log(self) -> tuple[str, ...]:
        """Moves applied since the start position, in UCI notation."""
        return tuple(move.uci() for move in self._board.move_stack)

    @property
    def last_move(self) -> UciMove | None:
        if not self._board.move_stack:
            return None
        return UciMove.parse(self._board.peek().uci())

    @property
    def white_to_move(self) -> bool:
        return self._board.turn == chess.WHITE

    @property
    def is_check(self) -> bool:
        return self._board.is_check()

    @property
    def is_game_over(self) -> bool:
        return self._board.is_game_over()

    def king_square(self) -> str | None:
        """Square of the king whose side is to move."""
        sq = self._board.king(self._board.turn)
        return None if sq is None else chess.square_name(sq)

    def piece_at(self, square: str) -> chess.Piece | None:
        sq = _square(square)
        if sq is None:
            return None
        return self._board.piece_at(sq)

    def legal_destinations(self, square: str) -> frozenset[str]:
        """Squares reachable by a legal move starting on *square*."""
        sq = _square(square)
        if sq is None:
            return frozenset()
        return frozenset(
            chess.square_name(move.to_square)
            for move in self._board.legal_moves
            if move.from_square == sq
        )

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply_move(self, move: UciMove) -> bool:
        """Play *move* if legal; return False and leave the board untouched
        otherwise. Pawns reaching the last rank without a promotion piece
        become queens."""
        from_sq = _square(move.from_sq)
        to_sq = _square(move.to_sq)
        if from_sq is None or to_sq is None:
            return False

        promotion = None
        if move.promotion:
            promotion = chess.Piece.from_symbol(move.promotion).piece_type
        elif self._is_promotion_push(from_sq, to_sq):
            promotion = chess.QUEEN

        candidate = chess.Move(from_sq, to_sq, promotion=promotion)
        if not self._board.is_legal(candidate):
            _LOGGER.debug("Rejected illegal move %s in %s", move, self.serialize())
            return False
        self._board.push(candidate)
        return True

    def undo(self) -> bool:
        """Take back the last move; False when there is nothing to undo."""
        if not self._board.move_stack:
            return False
        self._board.pop()
        return True

    def reset(self, fen: str | None = None) -> None:
        """Start over from *fen* (or the standard start position)."""
        self._board = chess.Board(fen) if fen else chess.Board()

    def _is_promotion_push(self, from_sq: chess.Square, to_sq: chess.Square) -> bool:
        piece = self._board.piece_at(from_sq)
        if piece is None or piece.piece_type != chess.PAWN:
            return False
        last_rank = 7 if piece.color == chess.WHITE else 0
        return chess.square_rank(to_sq) == last_rank
