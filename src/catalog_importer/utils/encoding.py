"""Base64 helpers for chart archives sent to the catalog API."""

from __future__ import annotations

import base64


def encode_chart(payload: bytes) -> str:
    """Encode a chart archive (.tgz bytes) for the ``package`` JSON field."""
    return base64.b64encode(payload).decode("ascii")


def decode_chart(data: str) -> bytes:
    """Inverse of encode_chart (for tests)."""
    return base64.b64decode(data.encode("ascii"))
