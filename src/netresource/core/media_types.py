from __future__ import annotations

import enum


class ContentType(str, enum.Enum):
    """Media types used for the `Accept` and `Content-Type` headers."""

    JSON = "application/json"
    XML = "application/xml"

    def __str__(self) -> str:
        return self.value
