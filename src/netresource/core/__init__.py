from __future__ import annotations

DEFAULT_TIMEOUT = 10
