"""Tests for transport module.

Uses httpx.MockTransport so no network access is needed.
"""

import base64
import io
from pathlib import Path

import httpx
import pytest

from nexus_upload.models import UploadStatus, UploadTarget
from nexus_upload.transport import (
    ACCEPTED_STATUS_HIGH,
    ACCEPTED_STATUS_LOW,
    MASKED_PASSWORD,
    NexusUploader,
    build_http_client,
    file_chunks,
    format_upload_command,
    is_accepted_status,
)

URL = "https://artifacts.unidata.ucar.edu/repository/docs-tds/tds/1.0/a/file.txt"


def make_target(local_path: str) -> UploadTarget:
    return UploadTarget(local_path=local_path, server_path="a/file.txt", url=URL)


def make_uploader(handler, password: str = "secret", chunk_size: int = 4) -> NexusUploader:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return NexusUploader(client, "user", password, chunk_size=chunk_size)


@pytest.fixture
def local_file(tmp_path: Path) -> str:
    path = tmp_path / "file.txt"
    path.write_bytes(b"hello nexus")
    return str(path)


class TestIsAcceptedStatus:
    """Tests for the accepted status window (200, 300]."""

    def test_bounds(self):
        assert ACCEPTED_STATUS_LOW == 200
        assert ACCEPTED_STATUS_HIGH == 300

    def test_200_rejected(self):
        """200 falls just outside the open lower bound."""
        assert is_accepted_status(200) is False

    def test_201_accepted(self):
        assert is_accepted_status(201) is True

    def test_204_accepted(self):
        assert is_accepted_status(204) is True

    def test_300_accepted(self):
        assert is_accepted_status(300) is True

    def test_301_rejected(self):
        assert is_accepted_status(301) is False

    @pytest.mark.parametrize("status_code", [100, 199, 400, 401, 403, 404, 500, 503])
    def test_other_codes_rejected(self, status_code):
        assert is_accepted_status(status_code) is False

    def test_custom_bounds(self):
        """The window can be widened to accept a plain 200."""
        assert is_accepted_status(200, low=199, high=299) is True
        assert is_accepted_status(300, low=199, high=299) is False


class TestFormatUploadCommand:
    """Tests for dry-run command rendering."""

    def test_command_masks_password(self):
        command = format_upload_command(make_target("./a/file.txt"), "user")

        assert command == (
            "curl -w 'httpcode=%{http_code}' -u 'user:*****' "
            f"--upload-file ./a/file.txt {URL}"
        )

    def test_mask_constant(self):
        assert MASKED_PASSWORD == "*****"

    def test_paths_with_spaces_are_quoted(self):
        command = format_upload_command(make_target("./my docs/file.txt"), "user")
        assert "'./my docs/file.txt'" in command


class TestFileChunks:
    """Tests for file_chunks generator."""

    def test_yields_whole_file(self):
        data = b"0123456789"
        chunks = list(file_chunks(io.BytesIO(data), chunk_size=4))
        assert chunks == [b"0123", b"4567", b"89"]

    def test_empty_file(self):
        assert list(file_chunks(io.BytesIO(b""), chunk_size=4)) == []


class TestBuildHttpClient:
    """Tests for build_http_client function."""

    def test_no_timeout_no_redirects(self):
        with build_http_client() as client:
            assert client.timeout.connect is None
            assert client.timeout.read is None
            assert client.follow_redirects is False


class TestNexusUploader:
    """Tests for NexusUploader.upload."""

    def test_successful_upload(self, local_file):
        """A 201 response is an accepted upload."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201)

        result = make_uploader(handler).upload(make_target(local_file))

        assert result.status == UploadStatus.UPLOADED
        assert result.status_code == 201
        assert result.ok is True

        request = requests[0]
        assert request.method == "PUT"
        assert str(request.url) == URL
        assert request.content == b"hello nexus"
        assert request.headers["Content-Length"] == str(len(b"hello nexus"))

    def test_uses_basic_auth(self, local_file):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(201)

        make_uploader(handler, password="p@ss").upload(make_target(local_file))

        expected = base64.b64encode(b"user:p@ss").decode("ascii")
        assert seen["auth"] == f"Basic {expected}"

    def test_200_is_rejected(self, local_file):
        result = make_uploader(lambda request: httpx.Response(200)).upload(
            make_target(local_file)
        )

        assert result.status == UploadStatus.REJECTED
        assert result.status_code == 200
        assert "200" in result.error_message

    def test_301_is_rejected(self, local_file):
        """Redirects are not followed and count as a failure."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(301, headers={"Location": "https://example.org/"})

        result = make_uploader(handler).upload(make_target(local_file))

        assert result.status == UploadStatus.REJECTED
        assert result.status_code == 301

    def test_401_is_rejected(self, local_file):
        result = make_uploader(lambda request: httpx.Response(401)).upload(
            make_target(local_file)
        )
        assert result.status == UploadStatus.REJECTED
        assert result.ok is False

    def test_connection_error(self, local_file):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        result = make_uploader(handler).upload(make_target(local_file))

        assert result.status == UploadStatus.TRANSPORT_ERROR
        assert result.status_code is None
        assert result.error_message == "ConnectError: Name or service not known"

    def test_unreadable_file(self, tmp_path: Path):
        """A file that vanished before upload is a transport failure."""
        called = []

        def handler(request: httpx.Request) -> httpx.Response:
            called.append(request)
            return httpx.Response(201)

        result = make_uploader(handler).upload(make_target(str(tmp_path / "gone.txt")))

        assert result.status == UploadStatus.TRANSPORT_ERROR
        assert "FileNotFoundError" in result.error_message
        assert called == []
