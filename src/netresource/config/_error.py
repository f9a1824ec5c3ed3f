from __future__ import annotations

import difflib
from collections.abc import Sequence
from typing import TYPE_CHECKING

from netresource.core.errors import NetresourceError

if TYPE_CHECKING:
    from jsonschema import ValidationError

TYPE_NAMES = {
    "object": "an object",
    "boolean": "a boolean",
    "string": "a string",
    "integer": "an integer",
}


class ConfigError(NetresourceError):
    """Invalid configuration."""

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> ConfigError:
        path = list(error.path)
        if error.validator == "additionalProperties":
            return cls(_unknown_properties(error, path))
        if error.validator in ("minimum", "type") and path:
            *parents, name = path
            if error.validator == "minimum":
                title = "Value too low"
                detail = f"Must be at least {error.validator_value}, but got {error.instance}."
            else:
                expected = TYPE_NAMES.get(str(error.validator_value), str(error.validator_value))
                title = "Type error"
                detail = f"Must be {expected}, but got {type(error.instance).__name__}: {error.instance}"
            return cls(f"Error in {section_name(parents)} section:\n  {title}:\n\n  - '{name}' -> {detail}")
        return cls(error.message)


def _unknown_properties(error: ValidationError, path: list[int | str]) -> str:
    known = list(error.schema.get("properties", {}))
    section = section_name(path)
    lines = []
    for name in sorted(set(error.instance) - set(known)):
        suggestion = difflib.get_close_matches(name, known, n=1, cutoff=0.6)
        if suggestion:
            lines.append(f"  - '{name}' -> Did you mean '{suggestion[0]}'?")
        else:
            lines.append(f"  - '{name}'")
    listed = ", ".join(f"'{name}'" for name in known)
    return (
        f"Error in {section} section:\n  Unknown properties:\n\n"
        + "\n".join(lines)
        + f"\n\nValid properties for {section} are: {listed}."
    )


def section_name(path: Sequence[int | str]) -> str:
    """TOML-like name of the section at the given JSON path."""
    if not path:
        return "root"
    return f"[{'.'.join(str(part) for part in path)}]"
