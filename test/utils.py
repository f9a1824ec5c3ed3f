from __future__ import annotations

import socket
from dataclasses import dataclass


@dataclass
class Person:
    name: str


PEOPLE_JSON = b"""
[
    {
        "name": "Alice"
    },
    {
        "name": "Bob"
    }
]
"""

BROKEN_PEOPLE_JSON = b"""
[
    {
        "name": "Alice"
    },
    {
      adasd~``
]
"""


@dataclass
class PostResult:
    statusCode: str
    statusMessage: str


POST_RESULT_JSON = b"""
    {
        "statusCode": "000",
        "statusMessage": "success"
    }
"""


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
