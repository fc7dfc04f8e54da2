"""Error types for file transfers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .outcome import Failure


class FileDropError(Exception):
    """Base class for filedrop errors."""


class ResponseNotOKError(FileDropError):
    """Download response status was not 200."""

    def __init__(self, status_code: int):
        super().__init__("Response was not '200 OK'")
        self.status_code = status_code


class TransferFailedError(FileDropError):
    """Raised when unwrapping a failed transfer outcome."""

    def __init__(self, outcome: Failure):
        super().__init__(outcome.message)
        self.outcome = outcome
