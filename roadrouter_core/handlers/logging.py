"""Logging Handler - Navigation logging.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from roadrouter_core.handlers.base import Context

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    """Logging handler configuration."""

    log_params: bool = True
    level: int = logging.INFO
    skip_paths: Optional[List[str]] = None


class LoggingHandler:
    """Chain handler that logs each navigation and continues.

    Usage:
        router.use("(.*)", LoggingHandler())
    """

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()

    def __call__(
        self,
        ctx: Optional[Context] = None,
        next: Optional[Callable[[], Any]] = None,
    ) -> None:
        """Log navigation, then invoke next."""
        if ctx is not None:
            self._log(ctx)

        if next is not None:
            next()

    def _log(self, ctx: Context) -> None:
        path = ctx.path
        if self.config.skip_paths and path in self.config.skip_paths:
            return

        navigation_id = str(uuid.uuid4())[:8]
        ctx.state["_navigation_id"] = navigation_id

        log_parts = [f"[{navigation_id}] --> {path or '?'}"]

        if self.config.log_params and ctx.params:
            log_parts.append(f"params={ctx.params}")

        logger.log(self.config.level, " ".join(log_parts))


__all__ = [
    "LoggingHandler",
    "LoggingConfig",
]
