"""
Exceptions raised while decoding Bencoded data or reading decoded values.
"""
__all__ = [
    "BencodeError",
    "BencodeDecodeError",
    "UnexpectedByteError",
    "TruncatedInputError",
    "MalformedNumberError",
    "NestingTooDeepError",
    "TrailingDataError",
    "InvalidUtf8Error",
]


class BencodeError(Exception):
    """Base class for all torcode errors."""


class BencodeDecodeError(BencodeError, ValueError):
    """Raised when the input is not valid Bencode."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at offset {offset})")
        self.message = message
        self.offset = offset


class UnexpectedByteError(BencodeDecodeError):
    """The byte at the cursor does not start any production."""


class TruncatedInputError(BencodeDecodeError):
    """The input ended before the value was complete."""


class MalformedNumberError(BencodeDecodeError):
    """An integer or length field is not a valid number."""


class NestingTooDeepError(BencodeDecodeError):
    """Lists and dictionaries are nested deeper than allowed."""


class TrailingDataError(BencodeDecodeError):
    """Bytes were left over after a complete value."""


class InvalidUtf8Error(BencodeError, ValueError):
    """A byte string was read as text but is not valid UTF-8."""
