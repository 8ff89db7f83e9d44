"""Async client for the video intelligence annotate API."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

import httpx

from vidint.config import settings
from vidint.errors import OperationTimeoutError, SubmissionError, VidIntError
from vidint.jobs.models import Operation
from vidint.models.request import AnalysisRequest

logger = logging.getLogger(__name__)


# Completion callback type: (finished operation) -> result handed to the waiter
CompletionCallback = Callable[[Operation], Any]


class VideoIntelligenceClient:
    """Client for the annotate endpoint and its long-running operations.

    Meant to be constructed once and reused; it owns a single HTTP
    connection pool. Each submitted operation is polled by a background
    task which invokes the completion callback exactly once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_version: str | None = None,
        access_token: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        poll_interval: float | None = None,
        max_poll_time: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Service root. Defaults to VIDINT_API_BASE_URL.
            api_version: API version path segment. Defaults to VIDINT_API_VERSION.
            access_token: OAuth bearer token. Defaults to VIDINT_ACCESS_TOKEN.
            api_key: API key sent as the ``key`` query parameter.
            timeout: HTTP request timeout in seconds.
            poll_interval: Seconds between operation status checks.
            max_poll_time: Give up waiting after this many seconds. None
                waits until the service finishes.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.api_version = api_version or settings.api_version
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.poll_interval = poll_interval if poll_interval is not None else settings.poll_interval
        self.max_poll_time = max_poll_time if max_poll_time is not None else settings.max_poll_time

        access_token = access_token or settings.access_token
        api_key = api_key or settings.api_key
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        params = {"key": api_key} if api_key else {}

        self._http = httpx.AsyncClient(
            base_url=f"{self.base_url}/{self.api_version}",
            timeout=self.timeout,
            headers=headers,
            params=params,
            transport=transport,
        )
        self._pollers: set[asyncio.Task] = set()

    async def __aenter__(self) -> VideoIntelligenceClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop outstanding pollers and close the connection pool."""
        for task in list(self._pollers):
            task.cancel()
        if self._pollers:
            await asyncio.gather(*self._pollers, return_exceptions=True)
        await self._http.aclose()

    async def submit(
        self,
        request: AnalysisRequest,
        on_complete: CompletionCallback | None = None,
    ) -> Operation:
        """Submit an annotate request and return its pending operation.

        Polling starts in the background; this returns as soon as the
        service has accepted the job.

        Args:
            request: Video source and features to detect.
            on_complete: Called once with the finished operation. Its return
                value is what wait_until_done() returns; an exception it
                raises is what wait_until_done() raises. Defaults to
                Operation.first_result.

        Returns:
            The pending Operation.

        Raises:
            SubmissionError: If the service cannot be reached or rejects the call.
        """
        data = await self._request("POST", "/videos:annotate", json=request.to_payload())
        operation = Operation.from_wire(data)
        if not operation.name and not operation.done:
            raise SubmissionError("Service did not return an operation name", details=data)

        operation._completion = asyncio.get_running_loop().create_future()
        task = asyncio.create_task(self._poll_until_done(operation, on_complete))
        self._pollers.add(task)
        task.add_done_callback(self._pollers.discard)

        logger.info(
            "Submitted operation %s (features=%s)",
            operation.name,
            ",".join(f.value for f in request.features),
        )
        return operation

    async def wait_until_done(self, operation: Operation) -> Any:
        """Block until the operation's completion callback has run.

        Returns:
            Whatever the completion callback returned.

        Raises:
            Whatever the completion callback raised (OperationError for a
            failed operation), SubmissionError if polling failed, or
            OperationTimeoutError if max_poll_time elapsed.
        """
        if operation._completion is None:
            raise ValueError(f"Operation {operation.name} was not submitted by this client")
        return await operation._completion

    async def get_operation(self, name: str) -> dict[str, Any]:
        """Fetch the current JSON snapshot of an operation."""
        return await self._request("GET", f"/{name.lstrip('/')}")

    async def _poll_until_done(
        self,
        operation: Operation,
        on_complete: CompletionCallback | None,
    ) -> None:
        """Poll until the operation is done, then deliver it exactly once."""
        try:
            if self.max_poll_time is None:
                await self._poll(operation)
            else:
                # Bounds the sleeps and the in-flight status request alike
                try:
                    await asyncio.wait_for(self._poll(operation), timeout=self.max_poll_time)
                except asyncio.TimeoutError:
                    raise OperationTimeoutError(
                        f"Operation {operation.name} did not finish within {self.max_poll_time}s"
                    ) from None
        except VidIntError as e:
            logger.error("Polling %s failed: %s", operation.name, e)
            operation._completion.set_exception(e)
            return
        except asyncio.CancelledError:
            operation._completion.cancel()
            raise
        except Exception as e:
            logger.exception("Unexpected operation snapshot for %s", operation.name)
            operation._completion.set_exception(e)
            return

        logger.info("Operation %s finished: %s", operation.name, operation.status.value)
        await self._deliver(operation, on_complete)

    async def _poll(self, operation: Operation) -> None:
        while not operation.done:
            await asyncio.sleep(self.poll_interval)
            data = await self.get_operation(operation.name)
            operation.update_from_wire(data)
            logger.debug("Polled %s: done=%s", operation.name, operation.done)

    async def _deliver(
        self,
        operation: Operation,
        on_complete: CompletionCallback | None,
    ) -> None:
        future = operation._completion
        if future.done():
            return

        try:
            if on_complete is None:
                result = operation.first_result()
            else:
                result = on_complete(operation)
                if inspect.isawaitable(result):
                    result = await result
        except VidIntError as e:
            logger.info("Operation %s completed with error: %s", operation.name, e)
            future.set_exception(e)
        except Exception as e:
            logger.exception("Completion callback for %s failed", operation.name)
            future.set_exception(e)
        else:
            future.set_result(result)

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise SubmissionError(
                f"Failed to connect to video intelligence service: {e}"
            ) from e

        if not response.is_success:
            raise SubmissionError(
                f"Video intelligence service returned error: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SubmissionError(
                "Video intelligence service returned invalid JSON",
                status_code=response.status_code,
                details=response.text,
            ) from e
