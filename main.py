#!/usr/bin/env python3
"""
AutoCC Entry Point Script

This script initializes the CLI handler and translates one video.
"""

import sys
from autocc.cli import CLIHandler

if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("AutoCC requires Python 3.8 or later.\n")
        sys.exit(1)

    cli = CLIHandler()
    cli.run()
