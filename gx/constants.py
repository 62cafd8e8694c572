"""
Centralized constants for gx.

This module contains hardcoded strings and magic numbers that are used
across the codebase. Centralizing them here makes them easier to find
and modify.
"""

# Settings file location, relative to the user's home directory
SETTINGS_FILE = ".config/gx/settings.json"

# History browsing
DEFAULT_LOG_LIMIT = 500
DEFAULT_START_POINT = "HEAD"

# Quiescence windows for detail lookups (milliseconds)
LOG_DEBOUNCE_MS = 100
BRANCH_DEBOUNCE_MS = 150

# Interaction loop tick (milliseconds)
POLL_INTERVAL_MS = 50

# Page up/down step
PAGE_SIZE = 10

# Branch picker detail pane
RECENT_COMMITS = 5
