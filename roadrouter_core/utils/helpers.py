"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Tuple
from urllib.parse import urlparse


def hash_to_url(hash_value: str, prefix: str = "#") -> str:
    """Turn a location hash into the url matched by the router.

    "#/users/7" -> "/users/7", "" -> "/"
    """
    if hash_value.startswith(prefix + "/"):
        hash_value = hash_value[len(prefix):]
    return hash_value or "/"


def path_to_hash_href(pathname: str, root: str = "/", prefix: str = "#") -> str:
    """Build the hash-based href for a plain pathname.

    "/about" -> "/#/about"
    """
    return root + prefix + pathname


def split_href(href: str) -> Tuple[str, str]:
    """Split an href into (pathname, hash)."""
    parsed = urlparse(href)
    pathname = parsed.path or "/"
    hash_value = f"#{parsed.fragment}" if parsed.fragment else ""
    return pathname, hash_value


__all__ = [
    "hash_to_url",
    "path_to_hash_href",
    "split_href",
]
