"""Command-line interface for the Nexus artifacts uploader.

Provides argument parsing and main entry point for uploading files
from the command line.
"""

import argparse
import getpass
import sys
from typing import Callable, Optional, TextIO

from nexus_upload.config import (
    UsageError,
    VALID_VALUES,
    build_config,
    resolve_input_files,
    resolve_password,
)
from nexus_upload.reporters import ConsoleReporter, Reporter
from nexus_upload.runner import UploadRunner
from nexus_upload.transport import NexusUploader, build_http_client

PROG = "nexus-upload"

USAGE = (
    "%(prog)s -t <docs|downloads> -u USERNAME -o PROJECT_NAME -v PROJECT_VERSION "
    "[-p PASSWORD] [-c NEW_FILENAME] [-nfqh] file..."
)

DESCRIPTION = """\
Upload one or more files to the Unidata Nexus artifacts server.

Files are uploaded to

  https://artifacts.unidata.ucar.edu/repository/<type>-<project>/<project>/<version>/

where the raw repository name <type>-<project> is set by the upload type (-t)
and project name (-o) flags, and <version> by the project version (-v) flag.
If the password flag (-p) is not supplied, a password prompt is displayed.
"""

EPILOG = f"""\
Naming:
  The path under <version>/ matches the path used for the input file, so

    {PROG} -t downloads -u username -o tds -v 1.2.3 ./a/b/file.txt

  creates

    https://artifacts.unidata.ucar.edu/repository/downloads-tds/tds/1.2.3/a/b/file.txt

  With the filename only flag (-f) the local directories are dropped:

    {PROG} -t downloads -u username -o tds -v 1.2.3 -f ./a/b/*.tar.bz2

  creates .../downloads-tds/tds/1.2.3/tarball-1.tar.bz2 and so on for each
  matching tarball.

  To give the file a different name on the server, use the change filename
  flag (-c). It only works when uploading a single file:

    {PROG} -t downloads -u username -o tds -v 1.2.3 -c newFile.txt file.txt

  creates .../downloads-tds/tds/1.2.3/newFile.txt

Piped input:
  When standard input is a pipe, the file list is read from it instead of
  from the arguments. To upload every file under ./docs/:

    find ./docs -type f | {PROG} -t docs -u username -o tds -v 1.2.3

Valid upload types: {", ".join(VALID_VALUES["upload_type"])}
Valid projects: {", ".join(VALID_VALUES["project"])}
"""

SHORT_USAGE = f"""\
Minimum Usage:
  {PROG} -t <docs|downloads> -u USERNAME -o PROJECT_NAME -v PROJECT_VERSION file1...
Use {PROG} -h for more details."""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with 2."""

    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = _ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    required = parser.add_argument_group("required flags")
    required.add_argument(
        "-t", "--upload-type",
        required=True,
        metavar="TYPE",
        help="upload type, either docs or downloads",
    )
    required.add_argument(
        "-u", "--username",
        required=True,
        help="nexus username",
    )
    required.add_argument(
        "-o", "--project",
        required=True,
        metavar="PROJECT_NAME",
        help="project name",
    )
    required.add_argument(
        "-v", "--project-version",
        required=True,
        metavar="PROJECT_VERSION",
        help="project version",
    )

    parser.add_argument(
        "-p", "--password",
        help="nexus password (prompted for if omitted)",
    )
    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="print the upload commands, but do not execute them",
    )
    parser.add_argument(
        "-f", "--file-only",
        action="store_true",
        help="use the filename only, do not preserve the local path on the server",
    )
    parser.add_argument(
        "-c", "--change-filename",
        metavar="NEW_FILENAME",
        help="change the filename on the server (single file uploads only)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="suppress progress output, show only errors",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="file",
        help="files to upload (ignored when standard input is a pipe)",
    )

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        UsageError: If the arguments are invalid
        SystemExit: With code 0 after printing help for -h
    """
    return build_parser().parse_args(argv)


def create_reporter(args: argparse.Namespace) -> Reporter:
    """Create the reporter based on command-line arguments."""
    return ConsoleReporter(quiet=args.quiet)


def main(
    argv: Optional[list[str]] = None,
    stdin: Optional[TextIO] = None,
    prompt: Callable[[str], str] = getpass.getpass,
) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        stdin: Stream checked for piped file names (defaults to sys.stdin)
        prompt: Password prompt reading from the terminal without echo

    Returns:
        Exit code: 0 for success, 1 for usage errors or failed uploads
    """
    if argv is None:
        argv = sys.argv[1:]
    if stdin is None:
        stdin = sys.stdin

    if not argv:
        print(SHORT_USAGE, file=sys.stderr)
        return 1

    try:
        args = parse_args(argv)
        files = resolve_input_files(args.files, stdin)
        config = build_config(
            upload_type=args.upload_type,
            project=args.project,
            version=args.project_version,
            username=args.username,
            files=files,
            password=args.password,
            dry_run=args.dry_run,
            file_only=args.file_only,
            new_filename=args.change_filename,
        )
    except UsageError as e:
        print(e, file=sys.stderr)
        print(SHORT_USAGE, file=sys.stderr)
        return 1

    reporter = create_reporter(args)

    try:
        config = resolve_password(config, prompt)

        if config.dry_run:
            result = UploadRunner(config, reporter=reporter).run()
        else:
            with build_http_client() as http_client:
                uploader = NexusUploader(http_client, config.username, config.password)
                result = UploadRunner(config, uploader, reporter=reporter).run()
    except (KeyboardInterrupt, EOFError):
        print("\nAborted", file=sys.stderr)
        return 1

    return 0 if result.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
