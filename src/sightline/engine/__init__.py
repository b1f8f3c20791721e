"""UCI engine package: value types, line codec and the process channel."""

from sightline.engine.models import (
    AnalysisEvent,
    AnalysisRequest,
    BestMove,
    Centipawn,
    MateIn,
    Progress,
    Score,
    UciMove,
    Unrecognized,
)
from sightline.engine.options import EngineOptions
from sightline.engine.process import EngineChannelError, EngineUnavailable, UciProcess
from sightline.engine.protocol import (
    ends_search,
    parse_line,
    serialize_handshake,
    serialize_request,
)

__all__ = [
    "AnalysisEvent",
    "AnalysisRequest",
    "BestMove",
    "Centipawn",
    "EngineChannelError",
    "EngineOptions",
    "EngineUnavailable",
    "MateIn",
    "Progress",
    "Score",
    "UciMove",
    "UciProcess",
    "Unrecognized",
    "ends_search",
    "parse_line",
    "serialize_handshake",
    "serialize_request",
]
