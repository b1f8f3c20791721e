"""Value types exchanged with a UCI engine."""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"
_PROMOTIONS = "qrbn"


def is_square(text: str) -> bool:
    """Return True for a two-character algebraic square (any case)."""
    return len(text) == 2 and text[0].lower() in _FILES and text[1] in _RANKS


@dataclass(slots=True, frozen=True)
class UciMove:
    """A coordinate move: origin, destination and optional promotion letter."""

    from_sq: str
    to_sq: str
    promotion: str | None = None

    @classmethod
    def parse(cls, token: str) -> UciMove:
        """Parse ``e2e4`` / ``E7E8Q`` style tokens.

        Raises:
            ValueError: If *token* is not a coordinate move.
        """
        text = token.strip().lower()
        if len(text) not in (4, 5):
            raise ValueError(f"Not a coordinate move: {token!r}")
        from_sq, to_sq = text[:2], text[2:4]
        if not (is_square(from_sq) and is_square(to_sq)):
            raise ValueError(f"Not a coordinate move: {token!r}")
        promotion = text[4:] or None
        if promotion is not None and promotion not in _PROMOTIONS:
            raise ValueError(f"Invalid promotion piece in {token!r}")
        return cls(from_sq, to_sq, promotion)

    def __str__(self) -> str:
        return f"{self.from_sq}{self.to_sq}{self.promotion or ''}"


# ── Scores ───────────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class Centipawn:
    """Material-style evaluation, side-to-move relative."""

    value: int


@dataclass(slots=True, frozen=True)
class MateIn:
    """Forced mate distance; negative means the side to move gets mated."""

    plies_signed: int


Score = Centipawn | MateIn


# ── Requests and events ──────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class AnalysisRequest:
    """One ``go depth`` search issued for a position."""

    position: str
    depth: int
    sequence: int


@dataclass(slots=True, frozen=True)
class BestMove:
    move: UciMove
    ponder: UciMove | None = None


@dataclass(slots=True, frozen=True)
class Progress:
    """Partial search report; absent fields are ``None``."""

    depth: int | None = None
    score: Score | None = None
    principal_variation: tuple[UciMove, ...] | None = None
    multipv: int = 1


@dataclass(slots=True, frozen=True)
class Unrecognized:
    raw_line: str


AnalysisEvent = BestMove | Progress | Unrecognized
