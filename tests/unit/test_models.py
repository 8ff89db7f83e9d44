"""Tests for request, annotation and operation models."""

import base64
import json

import pytest

from vidint.errors import InvalidRequestError, LocalFileError, OperationError
from vidint.jobs.models import Operation, OperationStatus
from vidint.models.annotation import (
    FaceAnnotation,
    FeatureKind,
    LabelLevel,
    VideoAnnotationResults,
    VideoSegment,
    microseconds_to_seconds,
)
from vidint.models.request import AnalysisRequest


class TestTimeConversion:
    def test_one_and_a_half_seconds(self) -> None:
        assert microseconds_to_seconds(1500000) == 1.5

    def test_float_division(self) -> None:
        for m in (0, 1, 999999, 2000000, 123456789):
            assert microseconds_to_seconds(m) == m / 1_000_000.0
        assert isinstance(microseconds_to_seconds(2000000), float)

    def test_segment_seconds(self) -> None:
        segment = VideoSegment(start_time_offset=2000000, end_time_offset=5000000)
        assert segment.start_seconds == 2.0
        assert segment.end_seconds == 5.0


class TestAnalysisRequest:
    def test_uri_request(self) -> None:
        request = AnalysisRequest.from_uri("gs://bucket/video.mp4", [FeatureKind.LABEL_DETECTION])
        assert request.to_payload() == {
            "features": ["LABEL_DETECTION"],
            "inputUri": "gs://bucket/video.mp4",
        }

    def test_inline_content_is_base64(self) -> None:
        request = AnalysisRequest(input_content=b"video", features=[FeatureKind.SHOT_CHANGE_DETECTION])
        payload = request.to_payload()
        assert payload["inputContent"] == base64.b64encode(b"video").decode("ascii")
        assert "inputUri" not in payload

    def test_optional_fields_passed_through(self) -> None:
        request = AnalysisRequest.from_uri(
            "gs://bucket/video.mp4",
            [FeatureKind.FACE_DETECTION],
            location_id="us-east1",
            output_uri="gs://bucket/out.json",
        )
        payload = request.to_payload()
        assert payload["locationId"] == "us-east1"
        assert payload["outputUri"] == "gs://bucket/out.json"

    def test_both_sources_rejected(self) -> None:
        with pytest.raises(InvalidRequestError):
            AnalysisRequest(
                input_uri="gs://bucket/video.mp4",
                input_content=b"video",
                features=[FeatureKind.LABEL_DETECTION],
            )

    def test_no_source_rejected(self) -> None:
        with pytest.raises(InvalidRequestError):
            AnalysisRequest(features=[FeatureKind.LABEL_DETECTION])

    def test_empty_features_rejected(self) -> None:
        with pytest.raises(InvalidRequestError):
            AnalysisRequest(input_uri="gs://bucket/video.mp4", features=[])

    def test_from_local_file(self, tmp_path) -> None:
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"\x00\x01video")
        request = AnalysisRequest.from_local_file(video, [FeatureKind.LABEL_DETECTION])
        assert request.input_content == b"\x00\x01video"
        assert request.input_uri is None

    def test_missing_local_file(self, tmp_path) -> None:
        with pytest.raises(LocalFileError):
            AnalysisRequest.from_local_file(tmp_path / "missing.mp4", [FeatureKind.LABEL_DETECTION])


class TestAnnotationParsing:
    def test_camel_case_wire_format(self) -> None:
        raw = json.loads("""
        {
          "inputUri": "/bucket/video.mp4",
          "labelAnnotations": [
            {
              "description": "Dog",
              "languageCode": "en-us",
              "locations": [
                {"level": "VIDEO_LEVEL"},
                {"segment": {"startTimeOffset": "2000000", "endTimeOffset": "5000000"},
                 "confidence": 0.9, "level": "SEGMENT_LEVEL"}
              ]
            }
          ],
          "shotAnnotations": [{"endTimeOffset": "1500000"}]
        }
        """)
        result = VideoAnnotationResults.model_validate(raw)
        label = result.label_annotations[0]
        assert label.description == "Dog"
        assert label.language_code == "en-us"
        assert label.locations[0].level == LabelLevel.VIDEO_LEVEL
        assert label.locations[1].segment.start_time_offset == 2000000
        # Zero offsets are omitted on the wire
        assert result.shot_annotations[0].start_time_offset == 0
        assert result.shot_annotations[0].end_seconds == 1.5


class TestOperation:
    def test_pending(self) -> None:
        op = Operation.from_wire({"name": "operations/1"})
        assert op.status == OperationStatus.PENDING
        assert not op.done
        with pytest.raises(OperationError):
            op.first_result()

    def test_succeeded(self) -> None:
        op = Operation.from_wire({
            "name": "operations/1",
            "done": True,
            "response": {
                "@type": "type.googleapis.com/google.cloud.videointelligence.v1beta1.AnnotateVideoResponse",
                "annotationResults": [
                    {"inputUri": "/bucket/first.mp4"},
                    {"inputUri": "/bucket/second.mp4"},
                ],
            },
        })
        assert op.status == OperationStatus.SUCCEEDED
        assert op.completed_at is not None
        # Only the first video's result is honored
        assert op.first_result().input_uri == "/bucket/first.mp4"

    def test_failed(self) -> None:
        op = Operation.from_wire({
            "name": "operations/1",
            "done": True,
            "error": {"code": 3, "message": "Invalid video"},
        })
        assert op.status == OperationStatus.FAILED
        assert op.is_error
        with pytest.raises(OperationError) as exc_info:
            op.first_result()
        assert exc_info.value.code == 3
        assert "Invalid video" in str(exc_info.value)

    def test_per_video_error(self) -> None:
        op = Operation.from_wire({
            "name": "operations/1",
            "done": True,
            "response": {"annotationResults": [{"error": {"code": 5, "message": "not found"}}]},
        })
        with pytest.raises(OperationError, match="not found"):
            op.first_result()

    def test_terminal_is_final(self) -> None:
        op = Operation.from_wire({"name": "operations/1", "done": True, "error": {"code": 13}})
        op.update_from_wire({"name": "operations/1", "done": True, "response": {}})
        assert op.status == OperationStatus.FAILED
        assert op.response is None


class TestFaceThumbnail:
    def test_decoded_size(self) -> None:
        face = FaceAnnotation(thumbnail=base64.b64encode(b"jpeg").decode("ascii"))
        assert face.thumbnail_bytes == b"jpeg"

    def test_invalid_base64(self) -> None:
        face = FaceAnnotation(thumbnail="abc")
        with pytest.raises(OperationError, match="not valid base64"):
            face.thumbnail_bytes
