"""Data models for the Nexus artifacts uploader."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class UploadStatus(Enum):
    """Outcome of a single file upload."""

    UPLOADED = "uploaded"
    DRY_RUN = "dry_run"
    TRANSPORT_ERROR = "transport_error"
    REJECTED = "rejected"


@dataclass(frozen=True)
class UploadConfig:
    """Parameters for one invocation of the uploader."""

    upload_type: str
    project: str
    version: str
    username: str
    password: Optional[str] = field(default=None, repr=False)
    dry_run: bool = False
    file_only: bool = False
    new_filename: Optional[str] = None
    files: tuple[str, ...] = ()


@dataclass(frozen=True)
class UploadTarget:
    """A local file and where it ends up on the server."""

    local_path: str
    server_path: str
    url: str


@dataclass
class UploadResult:
    """Result of uploading a single target."""

    target: UploadTarget
    status: UploadStatus
    status_code: Optional[int] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (UploadStatus.UPLOADED, UploadStatus.DRY_RUN)


@dataclass
class RunResult:
    """Results for every file attempted in a run."""

    results: list[UploadResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """True if no attempted upload failed."""
        return all(r.ok for r in self.results)

    @property
    def failure(self) -> Optional[UploadResult]:
        """The failed upload that aborted the run, if any."""
        for result in self.results:
            if not result.ok:
                return result
        return None
