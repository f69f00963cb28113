"""HTTP client for the stickies REST API."""

from collections.abc import Sequence
from types import TracebackType
from typing import Any, Literal

import httpx
from pydantic import ValidationError

from stickies_sync.domain.entities.note import Note
from stickies_sync.domain.interfaces.stickies_api import IStickiesApi
from stickies_sync.error_codes import ErrorCode
from stickies_sync.exceptions import (
    MalformedResponseError,
    NetworkFailure,
    ServerError,
    StickiesNotFoundError,
)
from stickies_sync.utils.logging import get_logger

logger = get_logger(__name__)


class StickiesApiClient(IStickiesApi):
    """Async client for the stickies API.

    Endpoints (relative to ``api_url``):
        GET    {id}   -> {"stickies": [...]}
        POST   ""     -> {"id": "..."}
        PUT    {id}
        DELETE {id}

    Every failure is raised as a ``StickiesApiError`` subclass; retrying is
    left to the caller.
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            api_url: Root of the API, e.g. ``http://localhost:3000/api/``
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests, proxies)
        """
        self.api_url = api_url if api_url.endswith("/") else f"{api_url}/"
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        logger.debug("stickies_api_client_initialized", api_url=self.api_url)

    async def _request(
        self,
        method: str,
        path: str,
        error_code: ErrorCode,
        json: Any = None,
    ) -> httpx.Response:
        logger.debug("stickies_api_request", method=method, path=path)
        try:
            if json is None:
                response = await self._client.request(method, path)
            else:
                response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            msg = f"{method} {self.api_url}{path} timed out"
            raise NetworkFailure(
                msg,
                suggestion="Check the server is responsive or raise request_timeout.",
                error_code=ErrorCode.API_TIMEOUT.value,
                context={"method": method, "path": path},
            ) from e
        except httpx.TransportError as e:
            msg = f"Cannot reach stickies API at {self.api_url}: {e}"
            raise NetworkFailure(
                msg,
                suggestion=f"Verify the server is running at {self.api_url}.",
                error_code=ErrorCode.API_CONNECTION_FAILED.value,
                context={"method": method, "path": path},
            ) from e

        if response.status_code == 404 and method == "GET":
            msg = f"No stickies found at {path}"
            raise StickiesNotFoundError(
                msg,
                error_code=ErrorCode.API_NOT_FOUND.value,
                context={"path": path},
            )

        if not response.is_success:
            msg = f"{method} {path} failed with HTTP {response.status_code}"
            raise ServerError(
                msg,
                status_code=response.status_code,
                error_code=error_code.value,
                context={"method": method, "path": path},
            )

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            msg = f"Invalid JSON response: {e}"
            raise MalformedResponseError(
                msg, error_code=ErrorCode.API_MALFORMED_RESPONSE.value
            ) from e

    async def fetch(self, stickies_id: str) -> list[Note]:
        response = await self._request("GET", stickies_id, ErrorCode.API_LOAD_FAILED)
        data = self._json(response)

        if not isinstance(data, dict) or not isinstance(data.get("stickies"), list):
            msg = "Malformed response: expected an object with a 'stickies' list"
            raise MalformedResponseError(
                msg,
                error_code=ErrorCode.API_MALFORMED_RESPONSE.value,
                context={"stickies_id": stickies_id},
            )

        try:
            notes = [Note.model_validate(item) for item in data["stickies"]]
        except ValidationError as e:
            msg = f"Malformed note in response: {e}"
            raise MalformedResponseError(
                msg,
                error_code=ErrorCode.API_MALFORMED_RESPONSE.value,
                context={"stickies_id": stickies_id},
            ) from e

        logger.debug("stickies_fetched", stickies_id=stickies_id, count=len(notes))
        return notes

    async def create(self, notes: Sequence[Note]) -> str:
        payload = [note.model_dump() for note in notes]
        response = await self._request(
            "POST", "", ErrorCode.API_CREATE_FAILED, json=payload
        )
        data = self._json(response)

        stickies_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(stickies_id, str) or not stickies_id:
            msg = "Malformed response: create did not return an 'id'"
            raise MalformedResponseError(
                msg, error_code=ErrorCode.API_MALFORMED_RESPONSE.value
            )

        logger.debug("stickies_created", stickies_id=stickies_id, count=len(payload))
        return stickies_id

    async def update(self, stickies_id: str, notes: Sequence[Note]) -> None:
        payload = [note.model_dump() for note in notes]
        await self._request(
            "PUT", stickies_id, ErrorCode.API_UPDATE_FAILED, json=payload
        )
        logger.debug("stickies_updated", stickies_id=stickies_id, count=len(payload))

    async def delete(self, stickies_id: str) -> None:
        await self._request("DELETE", stickies_id, ErrorCode.API_DELETE_FAILED)
        logger.debug("stickies_deleted", stickies_id=stickies_id)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug("stickies_api_client_closed", api_url=self.api_url)

    async def __aenter__(self) -> "StickiesApiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        """Async context manager exit with cleanup."""
        await self.aclose()
        return False
