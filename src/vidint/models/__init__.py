"""Data models for vidint."""

from vidint.models.annotation import (
    AnnotateVideoResponse,
    AnnotationStatus,
    FaceAnnotation,
    FeatureKind,
    LabelAnnotation,
    LabelLevel,
    LabelLocation,
    SafeSearchAnnotation,
    VideoAnnotationResults,
    VideoSegment,
    microseconds_to_seconds,
)
from vidint.models.request import AnalysisRequest

__all__ = [
    # Request
    "AnalysisRequest",
    "FeatureKind",
    # Annotations
    "AnnotateVideoResponse",
    "AnnotationStatus",
    "VideoAnnotationResults",
    "LabelAnnotation",
    "LabelLevel",
    "LabelLocation",
    "FaceAnnotation",
    "SafeSearchAnnotation",
    "VideoSegment",
    "microseconds_to_seconds",
]
