#!/usr/bin/env python3
# chan_tui/version.py
"""
Version and build metadata for the chan TUI.
"""

__version__ = "0.3.0"
__build__ = "2026-10-19"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"chan tui v{__version__} (build {__build__})"
