from graphmapper.analysis.impact import analyze_impact
from graphmapper.analysis.paths import find_paths
from graphmapper.analysis.results import (
    ImpactAnalysisResult,
    ImpactMetrics,
    Path,
    PathAnalysisResult,
    PathMetrics,
)

__all__ = [
    "Path",
    "PathMetrics",
    "PathAnalysisResult",
    "ImpactMetrics",
    "ImpactAnalysisResult",
    "analyze_impact",
    "find_paths",
]
