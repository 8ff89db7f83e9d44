"""Services module for vidint."""

from vidint.services.analysis import VideoAnalysisService
from vidint.services.video_intelligence import (
    CompletionCallback,
    VideoIntelligenceClient,
)

__all__ = [
    "CompletionCallback",
    "VideoAnalysisService",
    "VideoIntelligenceClient",
]
