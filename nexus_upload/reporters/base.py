"""Base reporter interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nexus_upload.models import RunResult, UploadResult, UploadTarget


class Reporter(ABC):
    """Abstract base class for upload progress reporters."""

    @abstractmethod
    def on_upload_start(self, target: "UploadTarget") -> None:
        """Called before a file is uploaded, in dry run too."""
        pass

    @abstractmethod
    def on_dry_run(self, target: "UploadTarget", command: str) -> None:
        """Called instead of uploading when in dry run."""
        pass

    @abstractmethod
    def on_upload_complete(self, result: "UploadResult") -> None:
        """Called after an upload attempt, successful or not."""
        pass

    @abstractmethod
    def on_run_complete(self, result: "RunResult") -> None:
        """Called when the run finishes or is aborted."""
        pass
