"""UCI line codec: outbound command builders and the inbound line parser.

Everything here is pure. ``parse_line`` keeps no state between calls, so the
same line always yields an equal event.
"""

from __future__ import annotations

from sightline.engine.models import (
    AnalysisEvent,
    BestMove,
    Centipawn,
    MateIn,
    Progress,
    Score,
    UciMove,
    Unrecognized,
)
from sightline.engine.options import EngineOptions

BEST_MOVE_TOKEN = "bestmove"
INFO_TOKEN = "info"

CMD_UCI = "uci"
CMD_STOP = "stop"

_BOUND_TOKENS = frozenset({"lowerbound", "upperbound"})


# ── Outbound ─────────────────────────────────────────────────────────────────


def setoption_command(name: str, value: object) -> str:
    return f"setoption name {name} value {value}"


def serialize_handshake(options: EngineOptions) -> tuple[str, ...]:
    """``uci`` followed by one ``setoption`` per configured option."""
    return (CMD_UCI,) + tuple(
        setoption_command(name, value) for name, value in options.uci_options()
    )


def serialize_request(position: str, depth: int) -> tuple[str, ...]:
    """Commands for a fresh search of *position* to *depth*.

    ``stop`` must precede ``position``: repositioning an engine that is still
    searching can corrupt its state.
    """
    if depth < 1:
        raise ValueError(f"Search depth must be >= 1, got {depth}")
    return (CMD_STOP, f"position fen {position}", f"go depth {depth}")


# ── Inbound ──────────────────────────────────────────────────────────────────


def ends_search(line: str) -> bool:
    """True for any ``bestmove`` line, well-formed or not."""
    return line.lstrip().startswith(BEST_MOVE_TOKEN)


def parse_line(line: str) -> AnalysisEvent:
    """Classify a single engine output line."""
    tokens = line.split()
    if not tokens:
        return Unrecognized(line)
    head = tokens[0]
    if head == BEST_MOVE_TOKEN:
        return _parse_best_move(line, tokens)
    if head == INFO_TOKEN:
        return _parse_info(line, tokens)
    return Unrecognized(line)


def _parse_move(token: str) -> UciMove | None:
    try:
        return UciMove.parse(token)
    except ValueError:
        return None


def _parse_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def _parse_best_move(line: str, tokens: list[str]) -> AnalysisEvent:
    if len(tokens) < 2 or len(tokens[1]) < 4:
        return Unrecognized(line)
    move = _parse_move(tokens[1])
    if move is None:
        return Unrecognized(line)
    ponder = None
    if len(tokens) >= 4 and tokens[2] == "ponder":
        ponder = _parse_move(tokens[3])
    return BestMove(move, ponder)


def _parse_info(line: str, tokens: list[str]) -> AnalysisEvent:
    depth: int | None = None
    score: Score | None = None
    pv: tuple[UciMove, ...] | None = None
    multipv = 1

    i = 1
    n = len(tokens)
    while i < n:
        token = tokens[i]
        if token == "string":
            break
        if token == "depth" and i + 1 < n:
            value = _parse_int(tokens[i + 1])
            if value is not None and value >= 0:
                depth = value
            i += 2
            continue
        if token == "multipv" and i + 1 < n:
            value = _parse_int(tokens[i + 1])
            if value is not None:
                multipv = value
            i += 2
            continue
        if token == "score" and i + 2 < n:
            score = _parse_score(tokens[i + 1], tokens[i + 2])
            i += 3
            while i < n and tokens[i] in _BOUND_TOKENS:
                i += 1
            continue
        if token == "pv":
            pv = _parse_pv(tokens[i + 1 :])
            break
        i += 1

    if depth is None and score is None and pv is None:
        return Unrecognized(line)
    return Progress(
        depth=depth,
        score=score,
        principal_variation=pv,
        multipv=multipv,
    )


def _parse_score(kind: str, raw: str) -> Score | None:
    value = _parse_int(raw)
    if value is None:
        return None
    if kind == "cp":
        return Centipawn(value)
    if kind == "mate":
        return MateIn(value)
    return None


def _parse_pv(tokens: list[str]) -> tuple[UciMove, ...] | None:
    moves: list[UciMove] = []
    for token in tokens:
        move = _parse_move(token)
        if move is None:
            break
        moves.append(move)
    return tuple(moves) or None
