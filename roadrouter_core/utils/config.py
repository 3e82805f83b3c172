"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RouterConfig")

PACKAGE_LOGGER = "roadrouter_core"


@dataclass
class RouterConfig:
    """Router configuration."""

    # Registration
    base: str = "/"

    # Pattern compilation
    sensitive: bool = False
    strict: bool = False
    end: bool = True

    # Location handling
    hash_prefix: str = "#"
    root: str = "/"

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown router options: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def merge(self, overrides: Dict[str, Any]) -> "RouterConfig":
        """Return a copy with overrides applied."""
        return self.from_dict({**asdict(self), **overrides})


def configure_logging(config: RouterConfig) -> logging.Logger:
    """Apply the configured log level to the package logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = config.log_level
    if isinstance(level, str):
        level = level.upper()
    package_logger.setLevel(level)
    return package_logger


__all__ = [
    "RouterConfig",
    "configure_logging",
]
