"""Allow running the uploader with ``python -m nexus_upload``."""

import sys

from nexus_upload.cli import main

sys.exit(main())
