"""String wrapper that keeps secrets out of logs and tracebacks."""

MASK = "***"


class SensitiveString:
    """A secret value that renders as a mask.

    ``str()`` and ``repr()`` never reveal the value; call :meth:`secret` to
    read it explicitly at the point of use.
    """

    __slots__ = ("_value",)

    def __init__(self, value: "str | SensitiveString"):
        if isinstance(value, SensitiveString):
            value = value.secret()
        self._value = value

    def secret(self) -> str:
        return self._value

    def __str__(self) -> str:
        return MASK

    def __repr__(self) -> str:
        return f"SensitiveString({MASK!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SensitiveString):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)
