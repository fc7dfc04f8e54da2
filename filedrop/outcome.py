"""Transfer outcomes.

Every exchange with the storage service ends in exactly one outcome, which
is handed to a single render step and then dropped.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .errors import TransferFailedError
from .types import FileId


class Operation(str, Enum):
    """Kind of exchange that produced an outcome."""

    UPLOAD = "upload"
    DOWNLOAD = "download"
    DELETE = "delete"


class Success(BaseModel):
    """Completed exchange.

    The payload is the shareable URL for uploads, the file bytes for
    downloads and None for deletes.
    """

    kind: Literal["success"] = "success"
    operation: Operation
    file_id: FileId
    payload: str | bytes | None = None

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> str | bytes | None:
        """Return the payload."""
        return self.payload


class Failure(BaseModel):
    """Failed exchange.

    ``message`` is what the user sees. ``cause`` keeps diagnostic detail
    (exception class, status code) and is only logged.
    """

    kind: Literal["failure"] = "failure"
    operation: Operation
    file_id: FileId
    message: str
    cause: str | None = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> str | bytes | None:
        """Raise TransferFailedError carrying this outcome."""
        raise TransferFailedError(self)


TransferOutcome = Annotated[Success | Failure, Field(discriminator="kind")]
