from __future__ import annotations

from collections.abc import Mapping
from shlex import quote


def generate(
    *,
    method: str,
    url: str,
    body: str | bytes | None,
    headers: Mapping[str, str],
    verify: bool = True,
) -> str:
    """Generate a curl command that sends the same request."""
    command = f"curl -X {method}"

    for key, value in headers.items():
        # To send an empty header with cURL we need to use `;`, otherwise empty header is ignored
        if not value:
            header = f"{key};"
        else:
            header = f"{key}: {value}"
        command += f" -H {quote(header)}"

    if body:
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        command += f" -d {quote(body)}"

    if not verify:
        command += " --insecure"

    command += f" {quote(url)}"

    return command
