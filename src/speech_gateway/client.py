import asyncio
import logging
import os
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, Optional, TypedDict, Union

import httpx

from .config import BASE64_PATH, FILE_PATH, LARGE_FILE_PATH, LINK_PATH, ClientConfig

logger = logging.getLogger(__name__)

MAX_ERROR_TEXT = 200

PathType = Union[str, "os.PathLike[str]"]


class ClientError(Exception):
    """Raised when a gateway call fails for any reason.

    The message starts with the name of the failed operation, followed by
    the message of the underlying transport, HTTP or file error.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details or {}


class ResponseMeta(TypedDict):
    requestId: str
    shamsiDate: str


class ApiResponse(TypedDict):
    data: Dict[str, Any]
    meta: ResponseMeta


class UploadEndpoint(Enum):
    """Multipart upload targets. Both take the same form fields."""

    FILE = (FILE_PATH, "Error sending file")
    LARGE_FILE = (LARGE_FILE_PATH, "Error sending large file")

    def __init__(self, path: str, error_prefix: str) -> None:
        self.path = path
        self.error_prefix = error_prefix


@contextmanager
def _wrap_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except ClientError as exc:
        logger.debug("%s failed with status %s", operation, exc.status_code)
        raise ClientError(f"{operation}: {exc}", status_code=exc.status_code, details=exc.details) from exc
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, OSError, ValueError) as exc:
        logger.debug("%s failed: %r", operation, exc)
        raise ClientError(f"{operation}: {str(exc) or type(exc).__name__}") from exc


class SpeechClient:
    """Client for the speech recognition gateway REST API.

    Every operation sends exactly one request and returns the decoded
    response envelope, or raises ClientError. Each has a blocking form and
    an awaitable ``*_async`` form.
    """

    def __init__(
        self,
        endpoint_url: str,
        gateway_token: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize SpeechClient.

        Args:
            endpoint_url: Base URL of the gateway, e.g. 'https://api.example.com'
            gateway_token: Token sent in the 'gateway-token' header
            timeout: HTTP timeout in seconds (None disables timeouts)
            transport: Custom HTTP transport for sync requests
            async_transport: Custom HTTP transport for async requests
        """
        self.config = ClientConfig(endpoint_url=endpoint_url, gateway_token=gateway_token)
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._async_client = httpx.AsyncClient(timeout=timeout, transport=async_transport)

    def close(self) -> None:
        self._client.close()
        if self._async_client.is_closed:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._async_client.aclose())
        # Inside a running loop the async client must be closed with aclose().

    def __enter__(self) -> "SpeechClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def __aenter__(self) -> "SpeechClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self._client.close()
        if not self._async_client.is_closed:
            await self._async_client.aclose()

    def send_file_as_base64(self, language: str, base64_data: str) -> ApiResponse:
        """Submit audio that is already base64 encoded."""
        with _wrap_errors("Error sending file as base64"):
            return self._request(
                "POST",
                self.config.url_for(BASE64_PATH),
                json={"language": language, "data": base64_data},
            )

    async def send_file_as_base64_async(self, language: str, base64_data: str) -> ApiResponse:
        """Async: submit audio that is already base64 encoded."""
        with _wrap_errors("Error sending file as base64"):
            return await self._arequest(
                "POST",
                self.config.url_for(BASE64_PATH),
                json={"language": language, "data": base64_data},
            )

    def send_file(self, language: str, file_path: PathType) -> ApiResponse:
        """Upload a local audio file as multipart form data."""
        return self._upload(UploadEndpoint.FILE, language, file_path)

    async def send_file_async(self, language: str, file_path: PathType) -> ApiResponse:
        """Async: upload a local audio file as multipart form data."""
        return await self._aupload(UploadEndpoint.FILE, language, file_path)

    def send_large_file(self, language: str, file_path: PathType) -> ApiResponse:
        """Upload a local audio file to the large file endpoint.

        The request has the same shape as send_file. The server processes
        these uploads separately, so the response usually carries a job
        token to poll with check_result.
        """
        return self._upload(UploadEndpoint.LARGE_FILE, language, file_path)

    async def send_large_file_async(self, language: str, file_path: PathType) -> ApiResponse:
        """Async: upload a local audio file to the large file endpoint."""
        return await self._aupload(UploadEndpoint.LARGE_FILE, language, file_path)

    def check_result(self, token: str) -> ApiResponse:
        """Poll the processing state of a submitted job."""
        with _wrap_errors("Error checking result"):
            return self._request("GET", self.config.tracking_url(token))

    async def check_result_async(self, token: str) -> ApiResponse:
        """Async: poll the processing state of a submitted job."""
        with _wrap_errors("Error checking result"):
            return await self._arequest("GET", self.config.tracking_url(token))

    def process_link(self, language: str, link: str) -> ApiResponse:
        """Submit a URL pointing at externally hosted audio."""
        with _wrap_errors("Error processing link"):
            return self._request("POST", self.config.url_for(LINK_PATH), json={"language": language, "link": link})

    async def process_link_async(self, language: str, link: str) -> ApiResponse:
        """Async: submit a URL pointing at externally hosted audio."""
        with _wrap_errors("Error processing link"):
            return await self._arequest(
                "POST", self.config.url_for(LINK_PATH), json={"language": language, "link": link}
            )

    def _upload(self, endpoint: UploadEndpoint, language: str, file_path: PathType) -> ApiResponse:
        with _wrap_errors(endpoint.error_prefix):
            with open(file_path, "rb") as audio:
                return self._request(
                    "POST",
                    self.config.url_for(endpoint.path),
                    data={"language": language},
                    files={"file": (os.path.basename(file_path), audio)},
                )

    async def _aupload(self, endpoint: UploadEndpoint, language: str, file_path: PathType) -> ApiResponse:
        with _wrap_errors(endpoint.error_prefix):
            with open(file_path, "rb") as audio:
                return await self._arequest(
                    "POST",
                    self.config.url_for(endpoint.path),
                    data={"language": language},
                    files={"file": (os.path.basename(file_path), audio)},
                )

    def _request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        logger.debug("%s %s", method, url)
        response = self._client.request(method, url, headers=self.config.auth_headers(), **kwargs)
        return self._parse_response(response)

    async def _arequest(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        logger.debug("%s %s", method, url)
        response = await self._async_client.request(method, url, headers=self.config.auth_headers(), **kwargs)
        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> ApiResponse:
        self._raise_for_status(response)
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        return payload  # type: ignore[return-value]

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message = response.text.strip()
        if len(message) > MAX_ERROR_TEXT:
            message = message[:MAX_ERROR_TEXT] + "..."
        details: Dict = {}
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            details = payload
            error = payload.get("error")
            message = (
                (error.get("message") if isinstance(error, dict) else None)
                or payload.get("message")
                or payload.get("statusText")
                or message
            )
        status = f"HTTP {response.status_code}"
        message = f"{status}: {message}" if message else status
        raise ClientError(message=message, status_code=response.status_code, details=details)
