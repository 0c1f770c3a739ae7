"""Runtime configuration resolved from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    """hookchain runtime settings.

    Attributes:
        metadata_path: Directory holding ``entities/*.yaml``
        log_level: Name of the logging level (e.g. "INFO")
    """

    metadata_path: Path
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> Settings:
        """Create settings from environment variables.

        Resolution order for the metadata path:
        1. HOOKCHAIN_METADATA_PATH env var
        2. {base_path}/metadata
        3. Default: ./metadata

        The log level comes from HOOKCHAIN_LOG_LEVEL (default WARNING).
        """
        log_level = os.environ.get("HOOKCHAIN_LOG_LEVEL", "WARNING").upper()

        metadata_path = os.environ.get("HOOKCHAIN_METADATA_PATH")
        if metadata_path:
            return cls(metadata_path=Path(metadata_path), log_level=log_level)

        if base_path:
            return cls(metadata_path=base_path / "metadata", log_level=log_level)

        return cls(metadata_path=Path("metadata"), log_level=log_level)

    @property
    def logging_level(self) -> int:
        """Numeric logging level; unknown names fall back to WARNING."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=self.logging_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
