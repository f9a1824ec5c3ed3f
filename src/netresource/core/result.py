from typing import Any, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


class Ok(Generic[T]):
    __slots__ = ("_value",)

    def __init__(self, value: T):
        self._value = value

    def ok(self) -> T:
        return self._value

    def is_ok(self) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Ok) and self._value == other._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    __slots__ = ("_error",)

    def __init__(self, error: E):
        self._error = error

    def err(self) -> E:
        return self._error

    def is_ok(self) -> bool:
        return False

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Err) and self._error == other._error

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


Result = Ok[T] | Err[E]
