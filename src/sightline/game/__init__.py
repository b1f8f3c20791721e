"""Game layer: position source backed by python-chess."""

from sightline.game.interfaces import IPositionSource
from sightline.game.state import STARTING_FEN, GameState

__all__ = [
    "STARTING_FEN",
    "GameState",
    "IPositionSource",
]
