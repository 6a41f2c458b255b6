"""Upload runner.

Walks the input file list in order and uploads each regular file,
stopping at the first failure. Paths that do not exist or are not
regular files are skipped without comment.
"""

from typing import Optional

from nexus_upload.config import is_uploadable
from nexus_upload.models import RunResult, UploadConfig, UploadResult, UploadStatus
from nexus_upload.paths import build_target
from nexus_upload.reporters.base import Reporter
from nexus_upload.transport import NexusUploader, format_upload_command


class UploadRunner:
    """Runs the uploads described by an UploadConfig.

    Args:
        config: Validated invocation config, with password resolved
        uploader: Uploader used for real uploads; may be None in dry run
        reporter: Optional reporter for progress callbacks
    """

    def __init__(
        self,
        config: UploadConfig,
        uploader: Optional[NexusUploader] = None,
        reporter: Optional[Reporter] = None,
    ):
        if uploader is None and not config.dry_run:
            raise ValueError("An uploader is required unless running a dry run")
        self.config = config
        self.uploader = uploader
        self.reporter = reporter

    def run(self) -> RunResult:
        """Upload every file in order until one fails.

        Returns:
            RunResult with one entry per attempted file
        """
        run_result = RunResult()

        for local_path in self.config.files:
            if not is_uploadable(local_path):
                run_result.skipped.append(local_path)
                continue

            result = self._upload_one(local_path)
            run_result.results.append(result)

            if not result.ok:
                break

        if self.reporter:
            self.reporter.on_run_complete(run_result)

        return run_result

    def _upload_one(self, local_path: str) -> UploadResult:
        target = build_target(self.config, local_path)

        if self.reporter:
            self.reporter.on_upload_start(target)

        if self.config.dry_run:
            if self.reporter:
                self.reporter.on_dry_run(
                    target, format_upload_command(target, self.config.username)
                )
            return UploadResult(target=target, status=UploadStatus.DRY_RUN)

        result = self.uploader.upload(target)

        if self.reporter:
            self.reporter.on_upload_complete(result)

        return result
