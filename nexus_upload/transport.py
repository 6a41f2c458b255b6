"""HTTP transport for uploading files to the artifacts server.

Each file is sent as a single authenticated PUT request. Failures are
returned as UploadResult values rather than raised, so the runner can
decide to stop:
- Transport errors (connection, DNS, TLS, a file that changed size
  mid-upload, unreadable local file)
- Responses with a status code outside the accepted window
"""

import os
import shlex
from typing import BinaryIO, Generator

import httpx
from h11 import LocalProtocolError as H11LocalProtocolError

from nexus_upload.models import UploadResult, UploadStatus, UploadTarget

# Read size when streaming a file body (1 MiB)
DEFAULT_CHUNK_SIZE = 1024 * 1024

# A response is accepted when LOW < status <= HIGH. Note this rejects a
# plain 200, which looks like an off-by-one in the rule it reproduces.
ACCEPTED_STATUS_LOW = 200
ACCEPTED_STATUS_HIGH = 300

MASKED_PASSWORD = "*****"


def is_accepted_status(
    status_code: int,
    low: int = ACCEPTED_STATUS_LOW,
    high: int = ACCEPTED_STATUS_HIGH,
) -> bool:
    """Check a response status against the accepted window (low, high]."""
    return low < status_code <= high


def format_upload_command(target: UploadTarget, username: str) -> str:
    """Render the equivalent curl command for a target.

    The password is always masked.
    """
    return shlex.join([
        "curl",
        "-w", "httpcode=%{http_code}",
        "-u", f"{username}:{MASKED_PASSWORD}",
        "--upload-file", target.local_path,
        target.url,
    ])


def file_chunks(
    f: BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Generator[bytes, None, None]:
    """Yield the contents of an open file in fixed-size chunks."""
    while True:
        chunk = f.read(chunk_size)
        if not chunk:
            return
        yield chunk


def build_http_client() -> httpx.Client:
    """Create the HTTP client used for uploads.

    No timeout is set: an upload waits for the server for as long as it
    takes. Redirects are not followed.
    """
    return httpx.Client(timeout=None, follow_redirects=False)


class NexusUploader:
    """Uploads files to the artifacts server with HTTP basic auth.

    Args:
        http_client: httpx client used for requests
        username: Artifacts server username
        password: Artifacts server password
    """

    def __init__(
        self,
        http_client: httpx.Client,
        username: str,
        password: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.http_client = http_client
        self.auth = httpx.BasicAuth(username, password)
        self.chunk_size = chunk_size

    def upload(self, target: UploadTarget) -> UploadResult:
        """PUT one file to its target URL.

        Args:
            target: The file and its destination

        Returns:
            UploadResult with UPLOADED, TRANSPORT_ERROR or REJECTED status
        """
        try:
            with open(target.local_path, "rb") as f:
                size = os.fstat(f.fileno()).st_size
                response = self.http_client.put(
                    target.url,
                    content=file_chunks(f, self.chunk_size),
                    headers={"Content-Length": str(size)},
                    auth=self.auth,
                )
        except (httpx.LocalProtocolError, H11LocalProtocolError, httpx.HTTPError, OSError) as e:
            # h11 raises its own error when the body and Content-Length disagree
            return UploadResult(
                target=target,
                status=UploadStatus.TRANSPORT_ERROR,
                error_message=_describe_error(e),
            )

        if not is_accepted_status(response.status_code):
            return UploadResult(
                target=target,
                status=UploadStatus.REJECTED,
                status_code=response.status_code,
                error_message=f"Server HTTP response code - {response.status_code}",
            )

        return UploadResult(
            target=target,
            status=UploadStatus.UPLOADED,
            status_code=response.status_code,
        )


def _describe_error(error: Exception) -> str:
    message = str(error)
    if not message:
        return type(error).__name__
    return f"{type(error).__name__}: {message}"
