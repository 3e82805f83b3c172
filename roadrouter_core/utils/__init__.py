"""Utils module - Utility functions."""

from roadrouter_core.utils.config import (
    RouterConfig,
    configure_logging,
)
from roadrouter_core.utils.helpers import (
    hash_to_url,
    path_to_hash_href,
    split_href,
)

__all__ = [
    "RouterConfig",
    "configure_logging",
    "hash_to_url",
    "path_to_hash_href",
    "split_href",
]
