#!/usr/bin/env python3
"""Upload a file, fetch it back and delete it again.

Usage:
    export FILEDROP_ORIGIN=http://localhost:8080
    python examples/share_file.py notes.txt
"""

import asyncio
import logging
import sys

from filedrop import (
    AsyncFileDropClient,
    ConsoleSink,
    Deleter,
    DirectorySaver,
    Downloader,
    StatusRegions,
    UploadFile,
    Uploader,
)


async def main(path: str) -> int:
    regions = StatusRegions(
        upload=ConsoleSink(prefix="[upload] "),
        download=ConsoleSink(prefix="[download] "),
        delete=ConsoleSink(prefix="[delete] "),
        alert=ConsoleSink(sys.stderr, prefix="[alert] "),
    )

    async with AsyncFileDropClient() as client:
        outcome = await Uploader(client, regions.upload).upload(
            UploadFile.from_path(path)
        )
        if not outcome.ok:
            return 1

        # The shareable URL is <base><file id>
        file_id = str(outcome.payload).removeprefix(client.resolver.resolve())

        downloader = Downloader(
            client, regions.download, regions.alert, DirectorySaver("roundtrip")
        )
        await downloader.download(file_id)
        await Deleter(client, regions.delete).delete(file_id)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1])))
