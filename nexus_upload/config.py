"""Invocation configuration for the Nexus uploader.

Turns parsed command-line arguments and the input file list into an
immutable UploadConfig, enforcing:
1. Upload type and project name are from a closed set of known values
2. The change filename option is only used with a single input file

Input files come either from piped standard input or from positional
arguments, never both.
"""

import os
import stat
from dataclasses import replace
from typing import Callable, Iterable, Optional, TextIO

from nexus_upload.models import UploadConfig


class UsageError(Exception):
    """Raised when the command line is invalid."""

    pass


# Permitted values for validated fields
VALID_VALUES: dict[str, tuple[str, ...]] = {
    "upload_type": ("docs", "downloads"),
    "project": (
        "idv",
        "ldm",
        "netcdf-c",
        "netcdf-cxx",
        "netcdf-fortran",
        "netcdf-java",
        "rosetta",
        "ncml",
        "tds",
        "udunits",
        "awips2",
    ),
}

PASSWORD_PROMPT = "Please enter your artifacts server password: "


def validate_choice(field_name: str, value: str) -> str:
    """Check a value against the permitted values for a field.

    Args:
        field_name: Key into VALID_VALUES
        value: The value supplied on the command line

    Returns:
        The value, unchanged.

    Raises:
        UsageError: If the value is not permitted.
    """
    valid = VALID_VALUES[field_name]
    if value not in valid:
        raise UsageError(
            f'Invalid value "{value}". {field_name.upper()} must be one of '
            f"[ {' || '.join(valid)} ]"
        )
    return value


def stdin_is_pipe(stream: Optional[TextIO]) -> bool:
    """Check whether a stream is connected to a pipe."""
    if stream is None:
        return False
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        # No real file descriptor behind the stream (e.g. StringIO)
        return False
    return stat.S_ISFIFO(mode)


def resolve_input_files(
    positional: Iterable[str],
    stdin: Optional[TextIO] = None,
) -> list[str]:
    """Gather the candidate file list.

    Args:
        positional: Trailing command-line arguments
        stdin: Standard input stream; used instead of positional
               arguments when it is a pipe

    Returns:
        Ordered list of candidate paths.
    """
    if stdin_is_pipe(stdin):
        return stdin.read().split()
    return list(positional)


def is_uploadable(path: str) -> bool:
    """Only existing regular files are uploaded."""
    return os.path.isfile(path)


def build_config(
    upload_type: str,
    project: str,
    version: str,
    username: str,
    files: Iterable[str],
    password: Optional[str] = None,
    dry_run: bool = False,
    file_only: bool = False,
    new_filename: Optional[str] = None,
) -> UploadConfig:
    """Validate arguments and assemble an UploadConfig.

    Raises:
        UsageError: On an invalid upload type or project, or when a new
                    filename is given for more than one input file.
    """
    validate_choice("upload_type", upload_type)
    validate_choice("project", project)

    files = tuple(files)
    if len(files) > 1 and new_filename:
        raise UsageError(
            "Cannot use the change filename (-c flag) with multiple file uploads"
        )

    return UploadConfig(
        upload_type=upload_type,
        project=project,
        version=version,
        username=username,
        password=password or None,
        dry_run=dry_run,
        file_only=file_only,
        new_filename=new_filename or None,
        files=files,
    )


def resolve_password(
    config: UploadConfig,
    prompt: Callable[[str], str],
) -> UploadConfig:
    """Return a config with a password, prompting for one if needed.

    Args:
        config: The invocation config
        prompt: Reads a secret without echo, e.g. getpass.getpass

    Returns:
        The same config if it already had a password, otherwise a copy
        holding the entered one.
    """
    if config.password:
        return config
    return replace(config, password=prompt(PASSWORD_PROMPT))
