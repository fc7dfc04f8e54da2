"""Map transfer outcomes to status text."""

from html import escape

from .outcome import Success, TransferOutcome


def render_link(url: str) -> str:
    """Anchor opening ``url`` in a new browsing context."""
    href = escape(url, quote=True)
    return f'<a href="{href}" target="_blank">{escape(url, quote=False)}</a>'


def render_upload(outcome: TransferOutcome) -> str:
    if isinstance(outcome, Success):
        return (
            "File successfully uploaded! Your file is accessible at "
            + render_link(str(outcome.payload))
        )
    return outcome.message


def render_download(outcome: TransferOutcome) -> str:
    if isinstance(outcome, Success):
        return f"Successfully downloaded file '{outcome.file_id}'"
    return outcome.message


def render_delete(outcome: TransferOutcome) -> str:
    if isinstance(outcome, Success):
        return f"Successfully deleted file '{outcome.file_id}'"
    return outcome.message


def render_guide(base: str) -> str:
    """Hint shown above the download and delete inputs."""
    return f"Enter the file ID and name below (the stuff that came after {base})."


def render_curl_help(base: str) -> str:
    """Usage text for plain HTTP clients."""
    return (
        "To upload, type:\n"
        f"$ curl --upload-file <filename> {base}\n\n"
        "To download, type:\n"
        f"$ curl {base}<file_id>/<file_name> --output filename.txt\n\n"
        "And to delete, type:\n"
        f"$ curl -X DELETE {base}<file_id>/<file_name>"
    )
