"""Annotation models returned by the video intelligence service.

The service speaks camelCase JSON and encodes every time offset as an
integer number of microseconds (int64, often serialized as a string).
"""

import base64
import binascii
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vidint.errors import OperationError

MICROSECONDS_PER_SECOND = 1000000.0


def microseconds_to_seconds(offset: int) -> float:
    """Convert a wire time offset in microseconds to seconds."""
    return offset / MICROSECONDS_PER_SECOND


class WireModel(BaseModel):
    """Base for models parsed from the service's camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeatureKind(str, Enum):
    """Analysis feature requested for a video."""

    LABEL_DETECTION = "LABEL_DETECTION"
    FACE_DETECTION = "FACE_DETECTION"
    SAFE_SEARCH_DETECTION = "SAFE_SEARCH_DETECTION"
    SHOT_CHANGE_DETECTION = "SHOT_CHANGE_DETECTION"


class LabelLevel(str, Enum):
    """Scope of a label location."""

    LABEL_LEVEL_UNSPECIFIED = "LABEL_LEVEL_UNSPECIFIED"
    VIDEO_LEVEL = "VIDEO_LEVEL"
    SEGMENT_LEVEL = "SEGMENT_LEVEL"
    SHOT_LEVEL = "SHOT_LEVEL"
    FRAME_LEVEL = "FRAME_LEVEL"


class VideoSegment(WireModel):
    """Time segment in microseconds."""

    start_time_offset: int = Field(default=0, ge=0)
    end_time_offset: int = Field(default=0, ge=0)

    @property
    def start_seconds(self) -> float:
        return microseconds_to_seconds(self.start_time_offset)

    @property
    def end_seconds(self) -> float:
        return microseconds_to_seconds(self.end_time_offset)


class LabelLocation(WireModel):
    """Where a label was detected."""

    segment: VideoSegment | None = None
    confidence: float | None = None
    level: LabelLevel = LabelLevel.LABEL_LEVEL_UNSPECIFIED

    @property
    def is_entire_video(self) -> bool:
        return self.level == LabelLevel.VIDEO_LEVEL


class LabelAnnotation(WireModel):
    """A detected label and its locations."""

    description: str = ""
    language_code: str | None = None
    locations: list[LabelLocation] = Field(default_factory=list)


class FaceAnnotation(WireModel):
    """A detected face with its thumbnail and segments."""

    thumbnail: str = Field(default="", description="Base64-encoded thumbnail bytes")
    segments: list[VideoSegment] = Field(default_factory=list)

    @property
    def thumbnail_bytes(self) -> bytes:
        """Decoded thumbnail image.

        Raises:
            OperationError: If the service sent invalid base64.
        """
        try:
            return base64.b64decode(self.thumbnail)
        except binascii.Error as e:
            raise OperationError(f"Face thumbnail is not valid base64: {e}") from e


class SafeSearchAnnotation(WireModel):
    """Safe search likelihoods for one point in time.

    Likelihoods are kept as the service's names (``VERY_UNLIKELY`` ..
    ``VERY_LIKELY``) so they render verbatim.
    """

    time_offset: int = Field(default=0, ge=0)
    adult: str = "UNKNOWN"
    spoof: str = "UNKNOWN"
    medical: str = "UNKNOWN"
    racy: str = "UNKNOWN"
    violent: str = "UNKNOWN"

    @property
    def time_seconds(self) -> float:
        return microseconds_to_seconds(self.time_offset)


class AnnotationStatus(WireModel):
    """Error status attached to an operation or a single video result."""

    code: int = 0
    message: str = ""
    details: list[dict] = Field(default_factory=list)


class VideoAnnotationResults(WireModel):
    """All annotations produced for a single video."""

    input_uri: str | None = None
    label_annotations: list[LabelAnnotation] = Field(default_factory=list)
    face_annotations: list[FaceAnnotation] = Field(default_factory=list)
    safe_search_annotations: list[SafeSearchAnnotation] = Field(default_factory=list)
    shot_annotations: list[VideoSegment] = Field(default_factory=list)
    error: AnnotationStatus | None = None


class AnnotateVideoResponse(WireModel):
    """Response payload of a finished annotate operation."""

    annotation_results: list[VideoAnnotationResults] = Field(default_factory=list)
