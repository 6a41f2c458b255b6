"""
Nexus Artifacts Uploader.

Uploads local files to the Unidata Nexus artifacts server over HTTP PUT,
deriving each remote path from the local path, the upload type, the
project name and the version.
"""

__version__ = "1.0.0"

from nexus_upload.cli import main

__all__ = ["main", "__version__"]
