"""Runtime configuration for validata."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MAX_VALUE_LENGTH = 40


@dataclass
class ValidataConfig:
    """Settings that shape messages and CLI defaults.

    Attributes:
        max_value_length: Offending values echoed into messages are shortened
            to this many characters.
        rules_path: Default rules file for the ``validata check`` command.
    """

    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH
    rules_path: Path | None = None

    @classmethod
    def from_env(cls) -> ValidataConfig:
        """Create config from environment variables.

        Reads:
        1. VALIDATA_MAX_VALUE_LENGTH (positive integer, default 40)
        2. VALIDATA_RULES_PATH (optional path)
        """
        max_length = DEFAULT_MAX_VALUE_LENGTH
        raw = os.environ.get("VALIDATA_MAX_VALUE_LENGTH")
        if raw:
            try:
                max_length = int(raw)
            except ValueError:
                raise ValueError(
                    f"VALIDATA_MAX_VALUE_LENGTH must be an integer, got {raw!r}"
                ) from None
            if max_length < 4:
                raise ValueError("VALIDATA_MAX_VALUE_LENGTH must be at least 4")

        rules_path = os.environ.get("VALIDATA_RULES_PATH")
        return cls(
            max_value_length=max_length,
            rules_path=Path(rules_path) if rules_path else None,
        )

    def shorten(self, value: object) -> str:
        """Render ``value`` for a message, truncating long values."""
        text = str(value)
        if len(text) <= self.max_value_length:
            return text
        return text[: self.max_value_length - 3] + "..."


_config: ValidataConfig | None = None


def get_config() -> ValidataConfig:
    """Return the process-wide config, reading the environment on first use."""
    global _config
    if _config is None:
        _config = ValidataConfig.from_env()
    return _config


def set_config(config: ValidataConfig | None) -> None:
    """Replace the process-wide config. ``None`` re-reads the environment lazily."""
    global _config
    _config = config
