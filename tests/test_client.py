"""Tests for filedrop HTTP clients."""

import os
from unittest import mock

import httpx
import pytest
import pytest_asyncio
from pytest_httpx import HTTPXMock

from filedrop import (
    GENERIC_DOWNLOAD_ALERT,
    AsyncFileDropClient,
    Failure,
    FileDropClient,
    Operation,
    Success,
    UploadFile,
)

BASE = "http://localhost:8080/"


@pytest.fixture
def clean_env():
    """Clear filedrop environment variables."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("FILEDROP_")}
    with mock.patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def client():
    client = FileDropClient(origin="http://localhost:8080")
    yield client
    client.close()


@pytest_asyncio.fixture
async def async_client():
    client = AsyncFileDropClient(origin="http://localhost:8080")
    yield client
    await client.close()


# ============================================================================
# Initialization
# ============================================================================


@pytest.mark.usefixtures("clean_env")
class TestFileDropClientInit:
    """Test client initialization."""

    def test_init_with_origin(self):
        client = FileDropClient(origin="http://localhost:8080/some/page")
        assert client.location.origin == "http://localhost:8080"
        assert client.resolver.resolve() == BASE
        client.close()

    def test_init_from_env(self):
        os.environ["FILEDROP_ORIGIN"] = "https://files.example.com"
        client = FileDropClient()
        assert client.resolver.resolve() == "https://files.example.com/"
        client.close()

    def test_init_missing_origin_raises(self):
        with pytest.raises(ValueError, match="origin is required"):
            FileDropClient()

    def test_async_init_missing_origin_raises(self):
        with pytest.raises(ValueError, match="origin is required"):
            AsyncFileDropClient()

    def test_context_manager(self):
        with FileDropClient(origin="http://localhost:8080") as client:
            assert client.location.host == "localhost:8080"

    def test_navigate_changes_endpoint(self):
        with FileDropClient(origin="http://localhost:8080") as client:
            client.navigate("http://mirror.example:9000/other")
            assert client.resolver.resolve() == "http://mirror.example:9000/"


# ============================================================================
# UploadFile
# ============================================================================


class TestUploadFile:
    """Test UploadFile."""

    def test_from_path(self, tmp_path):
        path = tmp_path / "my notes.txt"
        path.write_bytes(b"hello")

        file = UploadFile.from_path(path)

        assert file.name == "my notes.txt"
        assert file.content == b"hello"

    def test_from_missing_path_raises(self, tmp_path):
        with pytest.raises(OSError):
            UploadFile.from_path(tmp_path / "missing.txt")


# ============================================================================
# Sync client exchanges
# ============================================================================


class TestFileDropClientUpload:
    """Test sync upload."""

    def test_upload_success(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT",
            url=BASE + "report%201.txt",
            text="http://localhost:8080/3fa2c1/report 1.txt\r\n",
        )

        outcome = client.upload(UploadFile(name="report 1.txt", content=b"data"))

        assert isinstance(outcome, Success)
        assert outcome.payload == "http://localhost:8080/3fa2c1/report 1.txt"
        request = httpx_mock.get_request()
        assert request.content == b"data"

    def test_upload_error_message(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT",
            url=BASE + "a.txt",
            status_code=403,
            text="error: quota exceeded",
        )

        outcome = client.upload(UploadFile(name="a.txt", content=b""))

        assert isinstance(outcome, Failure)
        assert outcome.message == "error: quota exceeded"

    def test_upload_connection_error(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        outcome = client.upload(UploadFile(name="a.txt", content=b"x"))

        assert isinstance(outcome, Failure)
        assert outcome.message == "Upload failed: Connection refused"
        assert outcome.cause == "ConnectError"


class TestFileDropClientDownload:
    """Test sync download."""

    def test_download_success(self, client, httpx_mock: HTTPXMock):
        payload = bytes(range(256)) * 100
        httpx_mock.add_response(
            method="GET", url=BASE + "3fa2c1/data.bin", content=payload
        )

        outcome = client.download("3fa2c1/data.bin")

        assert isinstance(outcome, Success)
        assert outcome.operation == Operation.DOWNLOAD
        assert outcome.payload == payload

    def test_download_not_found(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET", url=BASE + "3fa2c1/missing.bin", status_code=404
        )

        outcome = client.download("3fa2c1/missing.bin")

        assert isinstance(outcome, Failure)
        assert outcome.message == GENERIC_DOWNLOAD_ALERT
        assert "404" in outcome.cause

    def test_download_non_200_success_status_is_failure(
        self, client, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(method="GET", url=BASE + "a", status_code=204)

        outcome = client.download("a")

        assert isinstance(outcome, Failure)
        assert "204" in outcome.cause

    def test_download_connection_error(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        outcome = client.download("a")

        assert isinstance(outcome, Failure)
        assert outcome.message == GENERIC_DOWNLOAD_ALERT
        assert outcome.cause.startswith("ConnectError")


class TestFileDropClientDelete:
    """Test sync delete."""

    def test_delete_success(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="DELETE", url=BASE + "3fa2c1/a.txt")

        outcome = client.delete("3fa2c1/a.txt")

        assert isinstance(outcome, Success)
        assert outcome.payload is None

    def test_delete_server_error_still_completes(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="DELETE", url=BASE + "3fa2c1/a.txt", status_code=500
        )

        outcome = client.delete("3fa2c1/a.txt")

        assert isinstance(outcome, Success)

    def test_delete_connection_error(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        outcome = client.delete("3fa2c1/a.txt")

        assert isinstance(outcome, Failure)
        assert outcome.message == "Failed to delete file '3fa2c1/a.txt'"

    def test_requests_follow_navigation(self, client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="DELETE", url="http://localhost:8080/a")
        httpx_mock.add_response(method="DELETE", url="https://other.example/a")

        client.delete("a")
        client.navigate("https://other.example/")
        client.delete("a")

        urls = [str(r.url) for r in httpx_mock.get_requests()]
        assert urls == ["http://localhost:8080/a", "https://other.example/a"]


class TestFileDropClientMalformedUrl:
    """Test identifiers that cannot form a valid URL."""

    @pytest.mark.parametrize("file_id", ["abc/def\nghi", "abc\x00"])
    def test_download_control_character(
        self, client, httpx_mock: HTTPXMock, file_id
    ):
        outcome = client.download(file_id)

        assert isinstance(outcome, Failure)
        assert outcome.message == GENERIC_DOWNLOAD_ALERT
        assert outcome.cause.startswith("InvalidURL")
        assert httpx_mock.get_requests() == []

    @pytest.mark.parametrize("file_id", ["a\nb", "abc\x00"])
    def test_delete_control_character(self, client, httpx_mock: HTTPXMock, file_id):
        outcome = client.delete(file_id)

        assert isinstance(outcome, Failure)
        assert outcome.message == f"Failed to delete file '{file_id}'"
        assert outcome.cause == "InvalidURL"
        assert httpx_mock.get_requests() == []

    def test_upload_name_too_long(self, client, httpx_mock: HTTPXMock):
        outcome = client.upload(UploadFile(name="a" * 70000, content=b"x"))

        assert isinstance(outcome, Failure)
        assert outcome.message.startswith("Upload failed:")
        assert outcome.cause == "InvalidURL"
        assert httpx_mock.get_requests() == []

    def test_http_client_exposed(self, client):
        assert isinstance(client.http, httpx.Client)


# ============================================================================
# Async client exchanges
# ============================================================================


class TestAsyncFileDropClient:
    """Test async client exchanges."""

    @pytest.mark.asyncio
    async def test_upload_success(self, async_client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT", url=BASE + "a%26b.txt", text="http://x/3fa2c1/a&b.txt"
        )

        outcome = await async_client.upload(UploadFile(name="a&b.txt", content=b"1"))

        assert isinstance(outcome, Success)
        assert outcome.payload == "http://x/3fa2c1/a&b.txt"

    @pytest.mark.asyncio
    async def test_upload_connection_error(self, async_client, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        outcome = await async_client.upload(UploadFile(name="a.txt", content=b"1"))

        assert isinstance(outcome, Failure)
        assert outcome.cause == "ConnectError"

    @pytest.mark.asyncio
    async def test_download_success(self, async_client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET", url=BASE + "3fa2c1/a.txt", content=b"file content here"
        )

        outcome = await async_client.download("3fa2c1/a.txt")

        assert isinstance(outcome, Success)
        assert outcome.payload == b"file content here"

    @pytest.mark.asyncio
    async def test_download_server_error(self, async_client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url=BASE + "a", status_code=500)

        outcome = await async_client.download("a")

        assert isinstance(outcome, Failure)
        assert outcome.message == GENERIC_DOWNLOAD_ALERT

    @pytest.mark.asyncio
    async def test_delete_any_status_completes(
        self, async_client, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(method="DELETE", url=BASE + "a", status_code=404)

        outcome = await async_client.delete("a")

        assert isinstance(outcome, Success)

    @pytest.mark.asyncio
    async def test_delete_connection_error(self, async_client, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        outcome = await async_client.delete("a")

        assert isinstance(outcome, Failure)

    @pytest.mark.asyncio
    async def test_async_context_manager(self):
        async with AsyncFileDropClient(origin="http://localhost:8080") as client:
            assert client.resolver.resolve() == BASE

    @pytest.mark.asyncio
    async def test_download_control_character(
        self, async_client, httpx_mock: HTTPXMock
    ):
        outcome = await async_client.download("abc/def\nghi")

        assert isinstance(outcome, Failure)
        assert outcome.message == GENERIC_DOWNLOAD_ALERT
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_delete_control_character(self, async_client, httpx_mock: HTTPXMock):
        outcome = await async_client.delete("abc\x00")

        assert isinstance(outcome, Failure)
        assert outcome.cause == "InvalidURL"
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_upload_name_too_long(self, async_client, httpx_mock: HTTPXMock):
        outcome = await async_client.upload(UploadFile(name="a" * 70000, content=b"x"))

        assert isinstance(outcome, Failure)
        assert outcome.cause == "InvalidURL"
        assert httpx_mock.get_requests() == []
