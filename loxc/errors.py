"""
Error types shared by every stage of the loxc front end.

Two kinds of failure exist: I/O failures while reading source text, and
source errors tied to a line of the input. Both derive from LoxError so a
driver can report them through a single except clause.
"""

from typing import Optional, Union


class LoxError(Exception):
    """Base class for all errors raised by loxc."""


class LoxIOError(LoxError):
    """
    Wraps a failure to read source text: an operating system error (missing
    file, permission denied, ...) or bytes that are not valid UTF-8.

    Only the kind of the failure is kept, named after the exception class
    that was raised.
    """

    def __init__(self, kind: str, filename: Optional[str] = None):
        self._kind = kind
        self._filename = filename
        super().__init__(str(self))

    @classmethod
    def from_os_error(cls, exc: Union[OSError, UnicodeDecodeError],
                      filename: Optional[str] = None) -> "LoxIOError":
        """Build an error from a caught OSError or UnicodeDecodeError."""
        if filename is None:
            filename = getattr(exc, "filename", None)
        return cls(type(exc).__name__, filename)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    def __str__(self) -> str:
        if self._filename:
            return f"IO error: {self._kind} ({self._filename})"
        return f"IO error: {self._kind}"


class SourceError(LoxError):
    """
    An error located in the source text.

    Rendered as ``[line] Error <location>: <message>``. The location is free
    text such as ``at ')'`` or ``at end``, and is empty for scanner errors.
    """

    def __init__(self, line: int, location: str, message: str):
        self._line = line
        self._location = location
        self._message = message
        super().__init__(str(self))

    @property
    def line(self) -> int:
        return self._line

    @property
    def location(self) -> str:
        return self._location

    @property
    def message(self) -> str:
        return self._message

    def __str__(self) -> str:
        return f"[{self._line}] Error {self._location}: {self._message}"

    def __repr__(self) -> str:
        return f"SourceError({self._line!r}, {self._location!r}, {self._message!r})"
