"""Identifier generation helpers."""

from __future__ import annotations

import secrets
import time


def new_internal_number(prefix: str = "INV") -> str:
    """Create an internal invoice number such as ``INV-1760600000000-48213``."""
    return f"{prefix}-{time.time_ns() // 1_000_000}-{secrets.randbelow(1_000_000)}"
