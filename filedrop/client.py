"""HTTP clients for the file storage service."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import httpx
from pydantic import BaseModel

from .endpoint import EndpointResolver, PageLocation
from .errors import ResponseNotOKError
from .outcome import Operation, Success, TransferOutcome
from .protocol import (
    CHUNK_SIZE,
    check_download_status,
    delete_completed,
    delete_request_failed,
    download_failed,
    interpret_upload_body,
    upload_request_failed,
)
from .types import UploadName

logger = logging.getLogger(__name__)

# Malformed URLs (control characters, excessive length) fail before any
# request is sent and are reported like transport failures
REQUEST_ERRORS = (httpx.RequestError, httpx.InvalidURL)


class UploadFile(BaseModel):
    """A file selected for upload."""

    name: UploadName
    content: bytes

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> UploadFile:
        """Read a local file. The upload name is the file's base name."""
        path = Path(path)
        return cls(name=path.name, content=path.read_bytes())


def _resolve_origin(origin: str | None) -> PageLocation:
    origin = origin or os.environ.get("FILEDROP_ORIGIN", "")
    if not origin:
        raise ValueError(
            "origin is required. Pass it directly or set FILEDROP_ORIGIN environment variable."
        )
    return PageLocation.from_url(origin)


class FileDropClient:
    """Client for the upload/download/delete exchanges.

    Every method performs exactly one request and returns a transfer
    outcome; HTTP errors never escape.

    Example:
        with FileDropClient(origin="http://localhost:8080") as client:
            outcome = client.upload(UploadFile.from_path("notes.txt"))
            if outcome.ok:
                print(f"Shared at {outcome.payload}")
    """

    def __init__(
        self,
        origin: str | None = None,
        *,
        timeout: float = 30.0,
    ):
        """Create a new client.

        Args:
            origin: Any URL on the storage service (default: FILEDROP_ORIGIN env var)
            timeout: Request timeout in seconds (default: 30.0)

        Raises:
            ValueError: If origin is not provided and not in environment
        """
        self._location = _resolve_origin(origin)
        self._resolver = EndpointResolver(lambda: self._location)
        self._http = httpx.Client(timeout=timeout)

    @property
    def location(self) -> PageLocation:
        return self._location

    @property
    def resolver(self) -> EndpointResolver:
        return self._resolver

    @property
    def http(self) -> httpx.Client:
        return self._http

    def navigate(self, url: str) -> None:
        """Point the client at the origin of ``url``."""
        self._location = PageLocation.from_url(url)

    def upload(self, file: UploadFile) -> TransferOutcome:
        """Store a file.

        PUT /<percent-encoded name>

        Returns:
            Success with the shareable URL, or Failure with the text to show
        """
        url = self._resolver.upload_url(file.name)
        logger.info(
            f"Uploading '{file.name}'",
            extra={"file_id": file.name, "size": len(file.content)},
        )
        try:
            response = self._http.put(url, content=file.content)
        except REQUEST_ERRORS as e:
            return upload_request_failed(file.name, e)
        return interpret_upload_body(file.name, response.text)

    def download(self, file_id: str) -> TransferOutcome:
        """Retrieve a stored file.

        GET /<file_id>

        Returns:
            Success with the file bytes, or Failure with the generic alert
        """
        url = self._resolver.url_for(file_id)
        logger.info(f"Downloading '{file_id}'", extra={"file_id": file_id})
        try:
            with self._http.stream("GET", url) as response:
                check_download_status(response.status_code)
                data = b"".join(response.iter_bytes(chunk_size=CHUNK_SIZE))
        except (httpx.RequestError, httpx.InvalidURL, ResponseNotOKError) as e:
            return download_failed(file_id, e)
        return Success(operation=Operation.DOWNLOAD, file_id=file_id, payload=data)

    def delete(self, file_id: str) -> TransferOutcome:
        """Remove a stored file.

        DELETE /<file_id>

        Returns:
            Success once any response arrives, Failure if none does
        """
        url = self._resolver.url_for(file_id)
        logger.info(f"Deleting '{file_id}'", extra={"file_id": file_id})
        try:
            response = self._http.delete(url)
        except REQUEST_ERRORS as e:
            return delete_request_failed(file_id, e)
        return delete_completed(file_id, response.status_code)

    def close(self) -> None:
        """Close the client connection."""
        self._http.close()

    def __enter__(self) -> FileDropClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()


class AsyncFileDropClient:
    """Async client for the upload/download/delete exchanges.

    Same semantics as FileDropClient. Independent calls may run
    concurrently; nothing is shared between them apart from the
    connection pool.

    Example:
        async with AsyncFileDropClient(origin="http://localhost:8080") as client:
            outcome = await client.download("3fa2c1/notes.txt")
    """

    def __init__(
        self,
        origin: str | None = None,
        *,
        timeout: float = 30.0,
    ):
        """Create a new async client.

        Args:
            origin: Any URL on the storage service (default: FILEDROP_ORIGIN env var)
            timeout: Request timeout in seconds (default: 30.0)
        """
        self._location = _resolve_origin(origin)
        self._resolver = EndpointResolver(lambda: self._location)
        self._http = httpx.AsyncClient(timeout=timeout)

    @property
    def location(self) -> PageLocation:
        return self._location

    @property
    def resolver(self) -> EndpointResolver:
        return self._resolver

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    def navigate(self, url: str) -> None:
        """Point the client at the origin of ``url``."""
        self._location = PageLocation.from_url(url)

    async def upload(self, file: UploadFile) -> TransferOutcome:
        """Store a file.

        PUT /<percent-encoded name>
        """
        url = self._resolver.upload_url(file.name)
        logger.info(
            f"Uploading '{file.name}'",
            extra={"file_id": file.name, "size": len(file.content)},
        )
        try:
            response = await self._http.put(url, content=file.content)
        except REQUEST_ERRORS as e:
            return upload_request_failed(file.name, e)
        return interpret_upload_body(file.name, response.text)

    async def download(self, file_id: str) -> TransferOutcome:
        """Retrieve a stored file.

        GET /<file_id>
        """
        url = self._resolver.url_for(file_id)
        logger.info(f"Downloading '{file_id}'", extra={"file_id": file_id})
        try:
            async with self._http.stream("GET", url) as response:
                check_download_status(response.status_code)
                chunks = []
                async for chunk in response.aiter_bytes(chunk_size=CHUNK_SIZE):
                    chunks.append(chunk)
        except (httpx.RequestError, httpx.InvalidURL, ResponseNotOKError) as e:
            return download_failed(file_id, e)
        return Success(
            operation=Operation.DOWNLOAD, file_id=file_id, payload=b"".join(chunks)
        )

    async def delete(self, file_id: str) -> TransferOutcome:
        """Remove a stored file.

        DELETE /<file_id>
        """
        url = self._resolver.url_for(file_id)
        logger.info(f"Deleting '{file_id}'", extra={"file_id": file_id})
        try:
            response = await self._http.delete(url)
        except REQUEST_ERRORS as e:
            return delete_request_failed(file_id, e)
        return delete_completed(file_id, response.status_code)

    async def close(self) -> None:
        """Close the client connection."""
        await self._http.aclose()

    async def __aenter__(self) -> AsyncFileDropClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
