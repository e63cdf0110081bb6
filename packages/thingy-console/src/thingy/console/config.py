"""Configuration for a console session."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "THINGY_CONSOLE_"


@dataclass
class ConsoleConfig:
    """Console session configuration."""

    app_thread_name: str = "app"
    command_thread_name: str = "console-commands"
    secure_mask: str = "*"
    page_scroll_lines: int = 10
    initial_columns: int = 80

    @classmethod
    def from_env(cls) -> ConsoleConfig:
        """Build a config, overriding defaults from ``THINGY_CONSOLE_*`` variables.

        Unparseable integers fall back to the default.
        """
        config = cls()
        config.app_thread_name = os.environ.get(f"{ENV_PREFIX}APP_THREAD_NAME", config.app_thread_name)
        config.command_thread_name = os.environ.get(
            f"{ENV_PREFIX}COMMAND_THREAD_NAME", config.command_thread_name
        )
        mask = os.environ.get(f"{ENV_PREFIX}SECURE_MASK", "")
        if mask:
            config.secure_mask = mask
        config.page_scroll_lines = _env_int("PAGE_SCROLL_LINES", config.page_scroll_lines)
        config.initial_columns = _env_int("COLUMNS", config.initial_columns)
        return config


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(f"{ENV_PREFIX}{name}", "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
