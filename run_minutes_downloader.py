#!/usr/bin/env python3
"""Simplified command-line runner for minutes-downloader."""

import os
import sys

# Add the src directory to the path so we can import our package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "src")))

from minutes_downloader.main import main

if __name__ == "__main__":
    sys.exit(main())
