"""
Settings management for gx
"""

import copy
import json
from pathlib import Path
from typing import Any

from gx.constants import (
    BRANCH_DEBOUNCE_MS,
    DEFAULT_LOG_LIMIT,
    LOG_DEBOUNCE_MS,
    PAGE_SIZE,
    POLL_INTERVAL_MS,
    SETTINGS_FILE,
)


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS = {
        "log": {
            "limit": DEFAULT_LOG_LIMIT,
            "debounce_ms": LOG_DEBOUNCE_MS,
        },
        "checkout": {
            "debounce_ms": BRANCH_DEBOUNCE_MS,
            "fetch_on_miss": True,  # Refresh remote branches once before reporting no match
        },
        "ui": {
            "page_size": PAGE_SIZE,
            "poll_interval_ms": POLL_INTERVAL_MS,
        },
        "logging": {
            "file": "",  # Empty means stderr
            "level": "WARNING",
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / SETTINGS_FILE

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'log.limit')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def get_log_limit(self) -> int:
        """Get the number of commits loaded into the history browser."""
        limit: int = int(self.get("log.limit", DEFAULT_LOG_LIMIT))
        return max(1, limit)

    def get_log_debounce(self) -> float:
        """Get the history detail quiescence window in seconds."""
        return max(0, int(self.get("log.debounce_ms", LOG_DEBOUNCE_MS))) / 1000

    def get_branch_debounce(self) -> float:
        """Get the branch detail quiescence window in seconds."""
        return max(0, int(self.get("checkout.debounce_ms", BRANCH_DEBOUNCE_MS))) / 1000

    def get_fetch_on_miss(self) -> bool:
        """Whether checkout runs `git fetch` once when a query matches nothing."""
        return bool(self.get("checkout.fetch_on_miss", True))

    def get_page_size(self) -> int:
        page_size: int = int(self.get("ui.page_size", PAGE_SIZE))
        return max(1, page_size)

    def get_poll_interval(self) -> float:
        """Get the interaction loop tick in seconds.

        Each tick re-checks the debounce timer, so this bounds how late a
        detail lookup can start after the quiescence window has passed.
        """
        interval: int = int(self.get("ui.poll_interval_ms", POLL_INTERVAL_MS))
        return max(10, interval) / 1000
