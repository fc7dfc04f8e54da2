"""filedrop - client for a simple shared file storage service.

Upload a file and get a shareable link back, download a stored file by its
identifier, or delete it. Every exchange ends in a transfer outcome that is
rendered into a status region.

Example:
    import asyncio

    from filedrop import (
        AsyncFileDropClient, DirectorySaver, Downloader, StatusRegions,
        UploadFile, Uploader,
    )

    async def share(path: str) -> None:
        regions = StatusRegions()
        async with AsyncFileDropClient(origin="http://localhost:8080") as client:
            uploader = Uploader(client, regions.upload)
            outcome = await uploader.upload(UploadFile.from_path(path))
            if outcome.ok:
                downloader = Downloader(
                    client, regions.download, regions.alert, DirectorySaver("copies")
                )
                file_id = outcome.payload.removeprefix(client.resolver.resolve())
                await downloader.download(file_id)

    asyncio.run(share("notes.txt"))
"""

from importlib.metadata import PackageNotFoundError, version

from .client import AsyncFileDropClient, FileDropClient, UploadFile
from .components import Deleter, Downloader, Uploader
from .config import ClientConfig
from .endpoint import EndpointResolver, PageLocation, percent_encode
from .errors import FileDropError, ResponseNotOKError, TransferFailedError
from .ip_lookup import IpInfo, lookup_public_ip
from .outcome import Failure, Operation, Success, TransferOutcome
from .protocol import GENERIC_DOWNLOAD_ALERT, interpret_upload_body
from .render import (
    render_curl_help,
    render_delete,
    render_download,
    render_guide,
    render_link,
    render_upload,
)
from .save import DirectorySaver, MemorySaver, Saver, suggested_filename
from .sinks import ConsoleSink, LoggingSink, MemorySink, StatusRegions, StatusSink

try:
    __version__ = version("filedrop")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "GENERIC_DOWNLOAD_ALERT",
    "AsyncFileDropClient",
    "ClientConfig",
    "ConsoleSink",
    "Deleter",
    "DirectorySaver",
    "Downloader",
    "EndpointResolver",
    "Failure",
    "FileDropClient",
    "FileDropError",
    "IpInfo",
    "LoggingSink",
    "MemorySaver",
    "MemorySink",
    "Operation",
    "PageLocation",
    "ResponseNotOKError",
    "Saver",
    "StatusRegions",
    "StatusSink",
    "Success",
    "TransferFailedError",
    "TransferOutcome",
    "UploadFile",
    "Uploader",
    "__version__",
    "interpret_upload_body",
    "lookup_public_ip",
    "percent_encode",
    "render_curl_help",
    "render_delete",
    "render_download",
    "render_guide",
    "render_link",
    "render_upload",
    "suggested_filename",
]
