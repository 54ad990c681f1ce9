"""Exception taxonomy shared by the type registry and the unhexdump parser."""

from typing import Any


class RawdumpError(Exception):
    """Base class for every error raised by rawdump."""


class ConfigurationError(RawdumpError, ValueError):
    """Unknown format, encoding, architecture or type name."""


class ParseError(RawdumpError, ValueError):
    """Malformed address/numeric token or inconsistent repeat arithmetic."""

    def __init__(self, message: str, token: str | None = None, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.token = token
        self.line_number = line_number


class RangeError(RawdumpError, OverflowError):
    """A value does not fit the width/signedness of the requested type."""

    def __init__(self, type_name: str, value: Any):
        super().__init__(f"value {value!r} out of range for type {type_name}")
        self.type_name = type_name
        self.value = value
