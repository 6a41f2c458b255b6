#!/usr/bin/env python3
"""
Nexus Artifacts Uploader

Run this script to upload files to the Unidata Nexus artifacts server.

Usage:
    python run.py -t docs -u USER -o tds -v 5.4 ./docs/index.html
    python run.py -t downloads -u USER -o tds -v 5.4 -f ./build/*.tar.gz
    python run.py -t downloads -u USER -o tds -v 5.4 -c tds.war build/tds-5.4.war
    python run.py -n ...              # Dry run, print upload commands only
    find ./docs -type f | python run.py -t docs -u USER -o tds -v 5.4
"""

import sys
from nexus_upload.cli import main

if __name__ == "__main__":
    sys.exit(main())
