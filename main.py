#!/usr/bin/env python3
"""
gx - interactive front end for everyday git operations

This is a convenience wrapper for running from the repo root.
The actual entry point is gx.main:main (for pip install).
"""

from gx.main import main

if __name__ == "__main__":
    main()
