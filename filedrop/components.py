"""UI-facing transfer components.

Each component runs one exchange, renders the outcome into its status
region and returns the outcome. Failures stay inside the component's own
region and never raise.
"""

from __future__ import annotations

import logging

from .client import AsyncFileDropClient, UploadFile
from .outcome import Failure, Operation, Success, TransferOutcome
from .protocol import GENERIC_DOWNLOAD_ALERT
from .render import render_delete, render_download, render_upload
from .save import Saver
from .sinks import StatusSink

logger = logging.getLogger(__name__)


class Uploader:
    """Uploads a selected file and shows the shareable link or message."""

    def __init__(self, client: AsyncFileDropClient, sink: StatusSink):
        self._client = client
        self._sink = sink

    async def upload(self, file: UploadFile) -> TransferOutcome:
        outcome = await self._client.upload(file)
        self._sink.show(render_upload(outcome))
        return outcome


class Downloader:
    """Downloads a file by identifier and hands it to a saver.

    Failures of any kind show one generic alert; the saver is only
    called for a 200 response.
    """

    def __init__(
        self,
        client: AsyncFileDropClient,
        sink: StatusSink,
        alert: StatusSink,
        saver: Saver,
    ):
        self._client = client
        self._sink = sink
        self._alert = alert
        self._saver = saver

    async def download(self, file_id: str) -> TransferOutcome:
        outcome = await self._client.download(file_id)

        if isinstance(outcome, Success):
            try:
                self._saver.save(file_id, outcome.payload or b"")
            except OSError as e:
                logger.error(f"Saving '{file_id}' failed: {e}")
                outcome = Failure(
                    operation=Operation.DOWNLOAD,
                    file_id=file_id,
                    message=GENERIC_DOWNLOAD_ALERT,
                    cause=f"{type(e).__name__}: {e}",
                )

        if isinstance(outcome, Failure):
            self._alert.show(outcome.message)
        else:
            self._sink.show(render_download(outcome))
        return outcome


class Deleter:
    """Deletes a file by identifier and reports completion."""

    def __init__(self, client: AsyncFileDropClient, sink: StatusSink):
        self._client = client
        self._sink = sink

    async def delete(self, file_id: str) -> TransferOutcome:
        outcome = await self._client.delete(file_id)
        self._sink.show(render_delete(outcome))
        return outcome
