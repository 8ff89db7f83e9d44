"""Analysis request model."""

import base64
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from vidint.errors import InvalidRequestError, LocalFileError
from vidint.models.annotation import FeatureKind


class AnalysisRequest(BaseModel):
    """A single video to annotate with a set of features.

    Constraint violations raise InvalidRequestError instead of pydantic's
    ValidationError so callers only deal with vidint errors.
    """

    input_uri: str | None = Field(default=None, description="Remote storage URI (gs://bucket/video.mp4)")
    input_content: bytes | None = Field(default=None, description="Raw video file bytes")
    features: list[FeatureKind] = Field(default_factory=list)
    location_id: str | None = Field(default=None, description="Cloud region hint")
    output_uri: str | None = Field(default=None, description="Where the service also writes its JSON result")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidRequestError(str(e)) from e

    @model_validator(mode="after")
    def validate_source(self) -> "AnalysisRequest":
        """Exactly one source and at least one feature."""
        if (self.input_uri is None) == (self.input_content is None):
            raise ValueError("exactly one of input_uri or input_content must be set")
        if not self.features:
            raise ValueError("at least one feature is required")
        return self

    @classmethod
    def from_uri(cls, uri: str, features: list[FeatureKind], **kwargs: Any) -> "AnalysisRequest":
        return cls(input_uri=uri, features=features, **kwargs)

    @classmethod
    def from_local_file(
        cls, path: Path | str, features: list[FeatureKind], **kwargs: Any
    ) -> "AnalysisRequest":
        """Build a request carrying the file's bytes inline.

        Raises:
            LocalFileError: If the file cannot be read.
        """
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise LocalFileError(f"Cannot read video file {path}: {e}") from e
        return cls(input_content=content, features=features, **kwargs)

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the annotate call."""
        payload: dict[str, Any] = {"features": [f.value for f in self.features]}
        if self.input_uri is not None:
            payload["inputUri"] = self.input_uri
        else:
            payload["inputContent"] = base64.b64encode(self.input_content).decode("ascii")
        if self.location_id:
            payload["locationId"] = self.location_id
        if self.output_uri:
            payload["outputUri"] = self.output_uri
        return payload
