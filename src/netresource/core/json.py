import platform
from json import JSONDecodeError as JSONDecodeError
from typing import Any

if platform.python_implementation() == "PyPy":
    import dataclasses
    from json import dumps as _dumps
    from json import loads as loads

    def _default(obj: Any) -> Any:
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")

    def dumps(obj: object, *, sort_keys: bool = False) -> bytes:
        return _dumps(obj, sort_keys=sort_keys, separators=(",", ":"), default=_default).encode("utf-8")

    EncodeError: tuple[type[Exception], ...] = (TypeError, ValueError)
else:
    import orjson

    def dumps(obj: object, *, sort_keys: bool = False) -> bytes:
        option = None
        if sort_keys:
            option = orjson.OPT_SORT_KEYS
        return orjson.dumps(obj, option=option)

    loads = orjson.loads
    EncodeError = (orjson.JSONEncodeError, TypeError, ValueError)
