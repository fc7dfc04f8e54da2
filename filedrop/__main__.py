"""Command line entry point.

Usage:
    python -m filedrop upload notes.txt photo.png
    python -m filedrop download 3fa2c1/notes.txt --dir ~/Downloads
    python -m filedrop delete 3fa2c1/notes.txt

    Or via the console script:
    filedrop --origin http://files.example.com guide

Environment variables:
    FILEDROP_ORIGIN: Storage service origin (required unless --origin is given)
    FILEDROP_TIMEOUT: Request timeout in seconds (default: 30)
    FILEDROP_DOWNLOAD_DIR: Directory downloads are saved to (default: ".")
    FILEDROP_IP_LOOKUP_URL: Service used by the "ip" command

Several paths or identifiers are transferred concurrently; each prints its
own outcome as it completes.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .client import AsyncFileDropClient, UploadFile
from .components import Deleter, Downloader, Uploader
from .config import ClientConfig
from .ip_lookup import lookup_public_ip
from .outcome import TransferOutcome
from .render import render_curl_help, render_guide
from .save import DirectorySaver
from .sinks import ConsoleSink, StatusRegions

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filedrop", description="Upload, download and delete shared files."
    )
    parser.add_argument("--origin", help="Storage service origin (FILEDROP_ORIGIN)")
    commands = parser.add_subparsers(dest="command", required=True)

    upload = commands.add_parser("upload", help="Upload files")
    upload.add_argument("paths", nargs="+", type=Path)

    download = commands.add_parser("download", help="Download files by ID")
    download.add_argument("ids", nargs="+")
    download.add_argument("--dir", type=Path, help="Target directory")

    delete = commands.add_parser("delete", help="Delete files by ID")
    delete.add_argument("ids", nargs="+")

    commands.add_parser("ip", help="Show your public IP address")
    commands.add_parser("guide", help="Show how to address stored files")
    return parser


def console_regions() -> StatusRegions:
    return StatusRegions(
        upload=ConsoleSink(),
        download=ConsoleSink(),
        delete=ConsoleSink(),
        alert=ConsoleSink(sys.stderr, prefix="Alert: "),
    )


async def run(args: argparse.Namespace, config: ClientConfig) -> int:
    """Run one command. Returns the process exit status."""
    regions = console_regions()
    outcomes: list[TransferOutcome] = []

    origin = str(config.origin)
    async with AsyncFileDropClient(origin, timeout=config.timeout) as client:
        if args.command == "upload":
            try:
                files = [UploadFile.from_path(path) for path in args.paths]
            except OSError as e:
                logger.error(f"Cannot read file: {e}")
                return 1
            uploader = Uploader(client, regions.upload)
            outcomes = await asyncio.gather(*(uploader.upload(f) for f in files))

        elif args.command == "download":
            saver = DirectorySaver(args.dir or config.download_dir)
            downloader = Downloader(client, regions.download, regions.alert, saver)
            outcomes = await asyncio.gather(*(downloader.download(i) for i in args.ids))

        elif args.command == "delete":
            deleter = Deleter(client, regions.delete)
            outcomes = await asyncio.gather(*(deleter.delete(i) for i in args.ids))

        elif args.command == "ip":
            ip = await lookup_public_ip(client.http, str(config.ip_lookup_url))
            print(f"Your IP address: {ip or 'unknown'}")

        elif args.command == "guide":
            base = client.resolver.resolve()
            print(render_guide(base))
            print()
            print(render_curl_help(base))

    return 0 if all(outcome.ok for outcome in outcomes) else 1


def main(argv: list[str] | None = None) -> None:
    """Run the filedrop command line client."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Suppress httpx request logging
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    try:
        if args.origin:
            config = ClientConfig(origin=args.origin)
        else:
            config = ClientConfig()  # type: ignore[call-arg]  # pydantic-settings loads from env
    except ValidationError as e:
        logger.error(f"Failed to load config: {e}")
        logger.error("Set FILEDROP_ORIGIN or pass --origin")
        sys.exit(1)

    status = asyncio.run(run(args, config))
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
