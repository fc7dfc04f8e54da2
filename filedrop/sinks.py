"""Status sinks.

A sink is wherever an outcome's text ends up: one per status region
(upload, download, delete) plus the alert channel. Each new message
replaces the previous one for that region.
"""

import logging
import sys
from typing import Protocol, TextIO, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class StatusSink(Protocol):
    """Anything able to display a status message."""

    def show(self, text: str) -> None: ...


class MemorySink:
    """Keeps every message shown, newest last."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def show(self, text: str) -> None:
        self.messages.append(text)

    @property
    def last(self) -> str | None:
        """Current content of the region."""
        return self.messages[-1] if self.messages else None


class LoggingSink:
    """Logs each message at INFO level."""

    def __init__(self, name: str = "filedrop.status"):
        self._logger = logging.getLogger(name)

    def show(self, text: str) -> None:
        self._logger.info(text)


class ConsoleSink:
    """Writes each message as one line to a text stream."""

    def __init__(self, stream: TextIO | None = None, prefix: str = ""):
        self._stream = stream
        self._prefix = prefix

    def show(self, text: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(f"{self._prefix}{text}\n")
        stream.flush()


class StatusRegions(BaseModel):
    """The output regions of the page, one per operation kind plus alerts."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    upload: StatusSink = Field(default_factory=lambda: LoggingSink("filedrop.upload"))
    download: StatusSink = Field(
        default_factory=lambda: LoggingSink("filedrop.download")
    )
    delete: StatusSink = Field(default_factory=lambda: LoggingSink("filedrop.delete"))
    alert: StatusSink = Field(default_factory=lambda: LoggingSink("filedrop.alert"))

    @classmethod
    def in_memory(cls) -> "StatusRegions":
        return cls(
            upload=MemorySink(),
            download=MemorySink(),
            delete=MemorySink(),
            alert=MemorySink(),
        )
