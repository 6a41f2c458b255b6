"""Server-side path and URL construction.

Files are stored under a raw repository named ``<type>-<project>``:

    https://artifacts.unidata.ucar.edu/repository/<type>-<project>/<project>/<version>/<path>

The project name appears twice, once in the repository name and once as
the first path segment inside it.
"""

import posixpath
from typing import Optional

from nexus_upload.models import UploadConfig, UploadTarget

ARTIFACTS_BASE_URL = "https://artifacts.unidata.ucar.edu/repository"


def _basename(path: str) -> str:
    # Trailing slashes are ignored, as with basename(1)
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else ""
    return posixpath.basename(stripped)


def server_path(
    local_path: str,
    file_only: bool = False,
    new_filename: Optional[str] = None,
) -> str:
    """Compute the path of a file relative to the version directory.

    Args:
        local_path: Path of the local file as given by the caller
        file_only: Drop the directory part and keep only the base name
        new_filename: Name to use on the server instead of the local one

    Returns:
        The server-relative path.
    """
    if file_only:
        return _basename(new_filename or local_path)

    if new_filename:
        # Used as the full relative path, not just a filename
        return new_filename

    if local_path.startswith("/"):
        return local_path[1:]
    if local_path.startswith("./"):
        return local_path[2:]
    return local_path


def repository_url(upload_type: str, project: str) -> str:
    """URL of the raw repository for an upload type and project."""
    return f"{ARTIFACTS_BASE_URL}/{upload_type}-{project}"


def upload_url(upload_type: str, project: str, version: str, path: str) -> str:
    """Full URL a file is PUT to."""
    return f"{repository_url(upload_type, project)}/{project}/{version}/{path}"


def build_target(config: UploadConfig, local_path: str) -> UploadTarget:
    """Map a local file to its upload target under the given config."""
    path = server_path(local_path, config.file_only, config.new_filename)
    return UploadTarget(
        local_path=local_path,
        server_path=path,
        url=upload_url(config.upload_type, config.project, config.version, path),
    )
