from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

from netresource.config._env import resolve
from netresource.config._error import ConfigError

if sys.version_info < (3, 11):
    import tomli
else:
    import tomllib as tomli

__all__ = ["NetresourceConfig", "ConfigError", "CONFIG_FILE_NAME"]

CONFIG_FILE_NAME = "netresource.toml"


class NetresourceConfig:
    """Settings shared by all requests executed through a transport."""

    headers: dict[str, str]
    """Default headers. Headers set on a resource take priority."""
    user_agent: str | None
    """Replaces the default `User-Agent` header value."""
    tls_verify: bool
    """Whether to verify TLS certificates."""
    proxy: str | None
    """Proxy URL for all requests."""
    max_redirects: int | None
    """Maximum number of redirects to follow."""
    workers: int | None
    """Size of the thread pool used by the `requests` transport."""
    _config_path: str | None

    __slots__ = ("headers", "user_agent", "tls_verify", "proxy", "max_redirects", "workers", "_config_path")

    def __init__(
        self,
        *,
        headers: Mapping[str, str] | None = None,
        user_agent: str | None = None,
        tls_verify: bool = True,
        proxy: str | None = None,
        max_redirects: int | None = None,
        workers: int | None = None,
    ) -> None:
        self.headers = dict(headers or {})
        self.user_agent = user_agent
        self.tls_verify = tls_verify
        self.proxy = proxy
        self.max_redirects = max_redirects
        self.workers = workers
        self._config_path = None

    def __repr__(self) -> str:
        defaults = NetresourceConfig()
        diffs = [
            f"{name}={getattr(self, name)!r}"
            for name in self.__slots__
            if not name.startswith("_") and getattr(self, name) != getattr(defaults, name)
        ]
        return f"NetresourceConfig({', '.join(diffs)})"

    @property
    def config_path(self) -> str | None:
        """Filesystem path to the loaded configuration file, if any."""
        return self._config_path

    @classmethod
    def discover(cls) -> NetresourceConfig:
        """Discover the configuration file.

        Search for 'netresource.toml' in the current directory and then in each parent directory,
        stopping when a directory containing a '.git' folder is encountered or the filesystem root is reached.
        If a config file is found, load it; otherwise, return a default configuration.
        """
        current_dir = os.getcwd()
        config_file = None

        while True:
            candidate = os.path.join(current_dir, CONFIG_FILE_NAME)
            if os.path.isfile(candidate):
                config_file = candidate
                break

            # Stop searching if we've reached a git repository root
            if os.path.isdir(os.path.join(current_dir, ".git")):
                break

            parent = os.path.dirname(current_dir)
            if parent == current_dir:
                break
            current_dir = parent

        if config_file:
            return cls.from_path(config_file)
        return cls()

    @classmethod
    def from_path(cls, path: PathLike | str) -> NetresourceConfig:
        """Load configuration from a file path."""
        with open(path, encoding="utf-8") as fd:
            config = cls.from_str(fd.read())
            config._config_path = str(Path(path).resolve())
            return config

    @classmethod
    def from_str(cls, data: str) -> NetresourceConfig:
        """Parse configuration from a TOML string."""
        try:
            parsed = tomli.loads(data)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML: {exc}") from None
        return cls.from_dict(parsed)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetresourceConfig:
        """Create a config instance from a dictionary."""
        from jsonschema.exceptions import ValidationError

        from netresource.config._validator import CONFIG_VALIDATOR

        try:
            CONFIG_VALIDATOR.validate(data)
        except ValidationError as exc:
            raise ConfigError.from_validation_error(exc) from None
        return cls(
            headers={resolve(name): resolve(value) for name, value in data.get("headers", {}).items()},
            user_agent=resolve(data.get("user-agent")),
            tls_verify=data.get("tls-verify", True),
            proxy=resolve(data.get("proxy")),
            max_redirects=data.get("max-redirects"),
            workers=data.get("workers"),
        )
