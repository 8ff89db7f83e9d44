"""Long-running operation models."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import ValidationError

from vidint.errors import OperationError
from vidint.models.annotation import (
    AnnotateVideoResponse,
    AnnotationStatus,
    VideoAnnotationResults,
)


class OperationStatus(str, Enum):
    """Status of a long-running operation."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class Operation:
    """Handle to an annotate job running inside the service.

    Created on submission and updated only from polling responses. Once
    ``done`` is set the operation is terminal and is never reused.
    """

    name: str
    status: OperationStatus = OperationStatus.PENDING
    done: bool = False
    error: AnnotationStatus | None = None
    response: AnnotateVideoResponse | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None
    # Resolved with the completion callback's outcome
    _completion: asyncio.Future | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Operation:
        """Create an operation from the service's JSON representation."""
        operation = cls(name=data.get("name", ""))
        operation.update_from_wire(data)
        return operation

    def update_from_wire(self, data: dict[str, Any]) -> None:
        """Apply a polling snapshot. Snapshots of a terminal operation are ignored.

        Raises:
            OperationError: If a finished snapshot cannot be parsed.
        """
        if self.done:
            return
        self.metadata = data.get("metadata", {}) or {}
        if not data.get("done", False):
            return

        try:
            if data.get("error"):
                error = AnnotationStatus.model_validate(data["error"])
                response = None
            else:
                error = None
                response = AnnotateVideoResponse.model_validate(data.get("response") or {})
        except ValidationError as e:
            raise OperationError(
                f"Operation {self.name} returned an unreadable result: {e}", details=data
            ) from e

        self.done = True
        self.completed_at = datetime.now(timezone.utc)
        self.error = error
        self.response = response
        self.status = OperationStatus.FAILED if error is not None else OperationStatus.SUCCEEDED

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> None:
        """Raise OperationError if the service reported a failure."""
        if self.error is not None:
            raise OperationError(
                self.error.message or f"Operation {self.name} failed",
                code=self.error.code,
                details=self.error.details,
            )

    def first_result(self) -> VideoAnnotationResults:
        """Return the annotations of the first (and only) submitted video.

        One job carries one video, so any further results are ignored.

        Raises:
            OperationError: If the operation failed, is still pending, or
                produced no usable result.
        """
        self.raise_for_error()
        if not self.done:
            raise OperationError(f"Operation {self.name} has not finished")
        if self.response is None or not self.response.annotation_results:
            raise OperationError(f"Operation {self.name} returned no annotation results")

        result = self.response.annotation_results[0]
        if result.error is not None and result.error.code:
            raise OperationError(
                result.error.message or f"Annotation of {result.input_uri} failed",
                code=result.error.code,
                details=result.error.details,
            )
        return result
