"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
from typing import Any


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields.

    User ids, usernames and correlation ids are logged through this helper so
    they can be matched across log lines without appearing in clear text.
    """
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def token_shape(token: str | None) -> str:
    """Describe a bearer token for logs without revealing any of its content."""
    if token is None:
        return "absent"
    if not token:
        return "empty"
    segments = token.count(".") + 1
    return f"segments={segments} length={len(token)}"
