"""Console reporter using Rich library for formatted CLI output.

Progress lines and dry-run commands go to stdout, failures to stderr.
File names and URLs are printed without markup so brackets in paths
come through verbatim.
"""

from typing import Optional

from rich.console import Console

from nexus_upload.reporters.base import Reporter
from nexus_upload.models import RunResult, UploadResult, UploadStatus, UploadTarget


class ConsoleReporter(Reporter):
    """Rich-based console reporter for CLI output.

    Args:
        quiet: If True, suppress progress lines (errors are still shown)
        console: Console for regular output (defaults to stdout)
        error_console: Console for failures (defaults to stderr)
    """

    def __init__(
        self,
        quiet: bool = False,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self.quiet = quiet

    def on_upload_start(self, target: UploadTarget) -> None:
        """Print a progress line for the file about to be uploaded."""
        if self.quiet:
            return
        self.console.print(
            f"Uploading {target.local_path}", markup=False, highlight=False, soft_wrap=True
        )

    def on_dry_run(self, target: UploadTarget, command: str) -> None:
        """Print the upload command that would have been run."""
        self.console.print(command, markup=False, highlight=False, soft_wrap=True)

    def on_upload_complete(self, result: UploadResult) -> None:
        """Report a failed upload on stderr. Successful uploads are silent."""
        if result.status == UploadStatus.TRANSPORT_ERROR:
            self._error(f"Upload request failed - {result.error_message}")
        elif result.status == UploadStatus.REJECTED:
            self._error(f"Upload to {result.target.url} failed.")
            self._error(f"Server HTTP response code - {result.status_code}")

    def on_run_complete(self, result: RunResult) -> None:
        """Print a one-line summary, or note that the run was aborted."""
        if not result.succeeded:
            self.error_console.print("[bold red]Upload aborted[/bold red]")
            return

        if self.quiet:
            return

        count = len(result.results)
        noun = "file" if count == 1 else "files"
        if any(r.status == UploadStatus.DRY_RUN for r in result.results):
            self.console.print(f"[dim]Dry run: {count} {noun} not uploaded[/dim]")
        else:
            self.console.print(f"[green]Uploaded {count} {noun}[/green]")

    def _error(self, message: str) -> None:
        self.error_console.print(
            message, style="red", markup=False, highlight=False, soft_wrap=True
        )
