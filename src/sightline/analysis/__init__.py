"""Live analysis state."""

from sightline.analysis.models import AnalysisSnapshot
from sightline.analysis.reducer import AnalysisReducer, SnapshotCallback

__all__ = [
    "AnalysisReducer",
    "AnalysisSnapshot",
    "SnapshotCallback",
]
