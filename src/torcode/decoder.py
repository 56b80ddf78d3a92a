"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
from typing import Optional, Tuple

from .errors import (
    BencodeDecodeError,
    MalformedNumberError,
    NestingTooDeepError,
    TrailingDataError,
    TruncatedInputError,
    UnexpectedByteError,
)
from .structure import (
    INT64_MAX,
    INT64_MIN,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
)

# Each nesting level costs two Python frames (_parse_value + _parse_list/_parse_dict),
# so this stays well under the default recursion limit.
DEFAULT_MAX_DEPTH = 256

_DIGITS = frozenset(b"0123456789")

# Longest digit run that can still fit in a signed 64-bit value
_MAX_DIGITS = len(str(INT64_MAX))


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode value trees.

    The decoder walks the input with a single cursor. A value decoded from the
    front of the buffer leaves the cursor just past it, so the rest of the
    input is available through ``remaining``.

    Args:
        data: the Bencoded input.
        max_depth: deepest list/dict nesting allowed, or None for no limit.
        strict: reject leading zeros and ``-0`` in numbers.
    """
    def __init__(self, data: bytes, max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
                 strict: bool = False):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Cannot decode object of type {type(data)}")
        self.data = bytes(data)
        self.i = 0  # cursor index
        self.max_depth = max_depth
        self.strict = strict
        self._depth = 0

    @property
    def offset(self) -> int:
        return self.i

    @property
    def remaining(self) -> bytes:
        return self.data[self.i:]

    def decode(self) -> BencodeType:
        """
        Decodes one value starting at the cursor.

        On failure the cursor is left where it was before the call.
        """
        start, depth = self.i, self._depth
        try:
            return self._parse_value()
        except BencodeDecodeError:
            self.i, self._depth = start, depth
            raise
        except RecursionError as exc:
            offset = self.i
            self.i, self._depth = start, depth
            raise NestingTooDeepError(
                "Nesting exceeds the interpreter recursion limit", offset
            ) from exc

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self, what: str = "value") -> int:
        if self.i >= len(self.data):
            raise TruncatedInputError(f"Unexpected end of input, expected {what}", self.i)
        return self.data[self.i]

    def _consume(self, n=1):
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _read_digits(self, what: str) -> bytes:
        """Consumes a run of ASCII digits, which may be empty."""
        start = self.i
        while self._peek(what) in _DIGITS:
            self.i += 1
        return self.data[start:self.i]

    def _expect(self, token: int, what: str):
        if self._peek(what) != token:
            raise MalformedNumberError(
                f"Expected {what} {chr(token)!r}, found {self._byte_repr(self.i)}", self.i
            )
        self.i += 1

    def _byte_repr(self, index: int) -> str:
        return repr(self.data[index:index+1])

    def _check_canonical(self, digits: bytes, start: int):
        if self.strict and len(digits) > 1 and digits[:1] == b"0":
            raise MalformedNumberError("Leading zeros are not allowed", start)

    def _enter(self):
        self._depth += 1
        if self.max_depth is not None and self._depth > self.max_depth:
            raise NestingTooDeepError(
                f"Nesting deeper than {self.max_depth} levels", self.i
            )

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self) -> BencodeType:
        ch = self._peek()

        if ch == ord("i"):
            return self._parse_int()

        if ch in _DIGITS:  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == ord("l"):
            return self._parse_list()

        if ch == ord("d"):
            return self._parse_dict()

        raise UnexpectedByteError(f"Invalid token {self._byte_repr(self.i)}", self.i)

    def _parse_int(self) -> BencodeInt:
        """Parses an integer from the Bencoded data."""
        self._consume(1)  # skip 'i'
        start = self.i

        negative = self._peek("integer digits") == ord("-")
        if negative:
            self._consume(1)

        digits_at = self.i
        digits = self._read_digits("integer digits")
        if not digits:
            raise MalformedNumberError("Integer has no digits", digits_at)
        self._expect(ord("e"), "integer terminator")

        if len(digits) > _MAX_DIGITS:
            raise MalformedNumberError("Integer does not fit in 64 bits", start)
        self._check_canonical(digits, digits_at)
        if self.strict and negative and digits == b"0":
            raise MalformedNumberError("Negative zero is not allowed", start)

        num = -int(digits) if negative else int(digits)
        if not INT64_MIN <= num <= INT64_MAX:
            raise MalformedNumberError("Integer does not fit in 64 bits", start)

        return BencodeInt(num)

    def _parse_length(self) -> int:
        """Parses a byte string length prefix up to and including ':'."""
        start = self.i
        digits = self._read_digits("string length")
        if not digits:
            raise UnexpectedByteError(
                f"Expected string length, found {self._byte_repr(self.i)}", self.i
            )
        self._expect(ord(":"), "string length separator")
        if len(digits) > _MAX_DIGITS or int(digits) > INT64_MAX:
            raise MalformedNumberError("String length does not fit in 64 bits", start)
        self._check_canonical(digits, start)
        return int(digits)

    def _parse_string(self) -> BencodeString:
        """Parses a byte string from the Bencoded data."""
        start = self.i
        length = self._parse_length()

        available = len(self.data) - self.i
        if length > available:
            raise TruncatedInputError(
                f"String declares {length} bytes but only {available} remain", start
            )

        string_bytes = self._consume(length)
        return BencodeString(string_bytes)

    def _parse_list(self) -> BencodeList:
        """Parses a list from the Bencoded data."""
        self._enter()
        self._consume(1)  # skip 'l'
        items = []

        while self._peek("list item or 'e'") != ord("e"):
            items.append(self._parse_value())

        self._consume(1)  # skip 'e'
        self._depth -= 1
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary from the Bencoded data."""
        self._enter()
        self._consume(1)  # skip 'd'
        obj = {}

        while self._peek("dictionary key or 'e'") != ord("e"):
            # keys MUST be strings
            key = self._parse_string().value
            value = self._parse_value()
            obj[key] = value

        self._consume(1)  # skip 'e'
        self._depth -= 1
        return BencodeDict(obj)


def decode(data: bytes, *, max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
           strict: bool = False) -> Tuple[BencodeType, bytes]:
    """
    Decodes one Bencoded value from the front of ``data``.

    Returns:
        A ``(value, remaining)`` tuple, where ``remaining`` holds the bytes
        that follow the decoded value.

    Raises:
        BencodeDecodeError: if the input is not valid Bencode. Nothing is
            returned on failure.

    Example:
        >>> decode(b"i3eXYZ")
        (BencodeInt(3), b'XYZ')
    """
    decoder = BencodeDecoder(data, max_depth=max_depth, strict=strict)
    value = decoder.decode()
    return value, decoder.remaining


def decode_all(data: bytes, *, max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
               strict: bool = False) -> BencodeType:
    """
    Decodes ``data`` as exactly one Bencoded value.

    Raises:
        TrailingDataError: if bytes are left over after the value.
    """
    decoder = BencodeDecoder(data, max_depth=max_depth, strict=strict)
    value = decoder.decode()
    if decoder.remaining:
        raise TrailingDataError(
            f"{len(decoder.remaining)} bytes of extra data after value", decoder.offset
        )
    return value
