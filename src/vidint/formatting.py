"""Console rendering of annotation results.

Every function returns a list of lines; printing is left to the caller.
"""

from vidint.models.annotation import (
    LabelAnnotation,
    VideoAnnotationResults,
    VideoSegment,
    microseconds_to_seconds,
)

__all__ = [
    "format_faces",
    "format_label_locations",
    "format_labels",
    "format_safe_search",
    "format_segment",
    "format_shots",
    "microseconds_to_seconds",
]


def format_segment(segment: VideoSegment) -> str:
    """Render a segment as ``"<start> through <end>"`` in seconds."""
    return f"{segment.start_seconds} through {segment.end_seconds}"


def format_label_locations(label: LabelAnnotation) -> list[str]:
    lines = []
    for location in label.locations:
        if location.is_entire_video:
            lines.append("Entire video")
        else:
            lines.append(format_segment(location.segment or VideoSegment()))
    return lines


def format_labels(result: VideoAnnotationResults) -> list[str]:
    lines = []
    for label in result.label_annotations:
        lines.append(f"Label description: {label.description}")
        lines.append("Locations:")
        lines.extend(format_label_locations(label))
    return lines


def format_faces(result: VideoAnnotationResults) -> list[str]:
    lines = []
    for face in result.face_annotations:
        lines.append(f"Thumbnail size: {len(face.thumbnail_bytes)}")
        lines.append("Locations:")
        lines.extend(format_segment(segment) for segment in face.segments)
    return lines


def format_safe_search(result: VideoAnnotationResults) -> list[str]:
    # Values are column-aligned after the label
    lines = []
    for entry in result.safe_search_annotations:
        lines.append(f"Time:    {entry.time_seconds}")
        lines.append(f"adult:   {entry.adult}")
        lines.append(f"spoof:   {entry.spoof}")
        lines.append(f"medical: {entry.medical}")
        lines.append(f"racy:    {entry.racy}")
        lines.append(f"violent: {entry.violent}")
    return lines


def format_shots(result: VideoAnnotationResults) -> list[str]:
    lines = ["Scenes:"]
    lines.extend(format_segment(shot) for shot in result.shot_annotations)
    return lines
