"""Sample analysis flows: one request, one callback, one blocking wait."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from vidint.formatting import (
    format_faces,
    format_labels,
    format_safe_search,
    format_shots,
)
from vidint.jobs.models import Operation
from vidint.models.annotation import FeatureKind, VideoAnnotationResults
from vidint.models.request import AnalysisRequest
from vidint.services.video_intelligence import VideoIntelligenceClient

logger = logging.getLogger(__name__)

Formatter = Callable[[VideoAnnotationResults], list[str]]

_FORMATTERS: dict[FeatureKind, Formatter] = {
    FeatureKind.LABEL_DETECTION: format_labels,
    FeatureKind.FACE_DETECTION: format_faces,
    FeatureKind.SAFE_SEARCH_DETECTION: format_safe_search,
    FeatureKind.SHOT_CHANGE_DETECTION: format_shots,
}

_DISPLAY_NAMES: dict[FeatureKind, str] = {
    FeatureKind.LABEL_DETECTION: "label",
    FeatureKind.FACE_DETECTION: "face",
    FeatureKind.SAFE_SEARCH_DETECTION: "safe search",
    FeatureKind.SHOT_CHANGE_DETECTION: "shot change",
}


class VideoAnalysisService:
    """Runs one feature detection per call and echoes the formatted result."""

    def __init__(
        self,
        client: VideoIntelligenceClient,
        echo: Callable[[str], None] = print,
    ) -> None:
        self._client = client
        self._echo = echo

    async def analyze_labels(self, uri: str) -> VideoAnnotationResults:
        """Detect labels in a video stored at a remote URI."""
        request = AnalysisRequest.from_uri(uri, [FeatureKind.LABEL_DETECTION])
        return await self._run(request, FeatureKind.LABEL_DETECTION)

    async def analyze_labels_local(self, path: Path | str) -> VideoAnnotationResults:
        """Detect labels in a local video file sent inline."""
        request = AnalysisRequest.from_local_file(path, [FeatureKind.LABEL_DETECTION])
        return await self._run(request, FeatureKind.LABEL_DETECTION)

    async def analyze_faces(self, uri: str) -> VideoAnnotationResults:
        request = AnalysisRequest.from_uri(uri, [FeatureKind.FACE_DETECTION])
        return await self._run(request, FeatureKind.FACE_DETECTION)

    async def analyze_safe_search(self, uri: str) -> VideoAnnotationResults:
        request = AnalysisRequest.from_uri(uri, [FeatureKind.SAFE_SEARCH_DETECTION])
        return await self._run(request, FeatureKind.SAFE_SEARCH_DETECTION)

    async def analyze_shots(self, uri: str) -> VideoAnnotationResults:
        request = AnalysisRequest.from_uri(uri, [FeatureKind.SHOT_CHANGE_DETECTION])
        return await self._run(request, FeatureKind.SHOT_CHANGE_DETECTION)

    async def _run(
        self, request: AnalysisRequest, feature: FeatureKind
    ) -> VideoAnnotationResults:
        formatter = _FORMATTERS[feature]

        def on_complete(operation: Operation) -> VideoAnnotationResults:
            # Raises OperationError before anything is printed
            result = operation.first_result()
            self._echo("Finished processing.")
            for line in formatter(result):
                self._echo(line)
            return result

        operation = await self._client.submit(request, on_complete)
        self._echo(f"Processing video for {_DISPLAY_NAMES[feature]} annotations:")
        logger.debug("Waiting for operation %s", operation.name)
        return await self._client.wait_until_done(operation)
