"""Interpretation rules for storage service responses.

Shared by the sync and async clients so both read responses the same way.
"""

import logging

from .errors import ResponseNotOKError
from .outcome import Failure, Operation, Success, TransferOutcome

logger = logging.getLogger(__name__)

# Only plain http:// bodies are recognised as shareable URLs. An https://
# URL falls through to the message branch.
SHAREABLE_URL_PREFIX = "http://"

GENERIC_DOWNLOAD_ALERT = (
    "Something went wrong, this is likely because the file doesn't exist"
)

# Chunk size for streamed downloads
CHUNK_SIZE = 8192


def interpret_upload_body(file_id: str, body: str) -> TransferOutcome:
    """Turn an upload response body into an outcome.

    A body starting with ``http://`` is the shareable URL of the stored
    file (the server terminates it with CRLF, which is dropped). Anything
    else is a message to show as-is.
    """
    if body.startswith(SHAREABLE_URL_PREFIX):
        return Success(
            operation=Operation.UPLOAD, file_id=file_id, payload=body.rstrip()
        )
    return Failure(operation=Operation.UPLOAD, file_id=file_id, message=body)


def upload_request_failed(file_id: str, error: Exception) -> Failure:
    logger.error(f"Upload of '{file_id}' failed: {error}")
    return Failure(
        operation=Operation.UPLOAD,
        file_id=file_id,
        message=f"Upload failed: {error}",
        cause=type(error).__name__,
    )


def check_download_status(status_code: int) -> None:
    """Raise ResponseNotOKError unless the status is exactly 200."""
    if status_code != 200:
        raise ResponseNotOKError(status_code)


def download_failed(file_id: str, error: Exception) -> Failure:
    """Funnel any download failure into the generic alert.

    The cause is kept for logs only.
    """
    if isinstance(error, ResponseNotOKError):
        cause = f"{error} (status {error.status_code})"
    else:
        cause = f"{type(error).__name__}: {error}"
    logger.warning(f"Download of '{file_id}' failed: {cause}")
    return Failure(
        operation=Operation.DOWNLOAD,
        file_id=file_id,
        message=GENERIC_DOWNLOAD_ALERT,
        cause=cause,
    )


def delete_completed(file_id: str, status_code: int) -> Success:
    """Any response to a delete counts as completed.

    Non-2xx statuses are only logged.
    """
    if not 200 <= status_code < 300:
        logger.warning(
            f"Delete of '{file_id}' answered with status {status_code}",
            extra={"file_id": file_id, "status_code": status_code},
        )
    return Success(operation=Operation.DELETE, file_id=file_id)


def delete_request_failed(file_id: str, error: Exception) -> Failure:
    logger.error(f"Delete of '{file_id}' failed: {error}")
    return Failure(
        operation=Operation.DELETE,
        file_id=file_id,
        message=f"Failed to delete file '{file_id}'",
        cause=type(error).__name__,
    )
