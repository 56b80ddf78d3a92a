"""
Data structures for representing Bencoded types.

Every decoded value is one of four variants: BencodeInt, BencodeString,
BencodeList or BencodeDict. Values are immutable once built.
"""
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

from .errors import InvalidUtf8Error

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "INT64_MIN",
    "INT64_MAX",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("_value",)

    def __init__(self, value):
        if type(self) is BencodeType:
            raise TypeError("BencodeType cannot be instantiated directly; use a variant.")
        object.__setattr__(self, "_value", value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, BencodeType):
            return NotImplemented
        return type(self) is type(other) and self._value == other._value

    def __hash__(self):
        return hash((type(self).__name__, self._value))

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"

    # --------------------------
    # Variant accessors
    # --------------------------

    def as_int(self) -> Optional[int]:
        """Returns the integer payload, or None for other variants."""
        return None

    def as_bytes(self) -> Optional[bytes]:
        """Returns the raw byte payload, or None for other variants."""
        return None

    def as_str(self) -> Optional[str]:
        """
        Returns the byte payload as UTF-8 text, or None for other variants.

        Raises:
            InvalidUtf8Error: if the bytes are not valid UTF-8.
        """
        return None

    def as_list(self) -> Optional[Tuple["BencodeType", ...]]:
        """Returns the list items, or None for other variants."""
        return None

    def as_dict(self) -> Optional[Mapping[bytes, "BencodeType"]]:
        """Returns the read-only dictionary mapping, or None for other variants."""
        return None


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ()

    def __init__(self, value: int):
        # bool is an int subclass but never a Bencode value
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError("BencodeInt must fit in a signed 64-bit integer.")
        super().__init__(value)

    def as_int(self) -> Optional[int]:
        return self._value


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        super().__init__(bytes(value))

    def as_bytes(self) -> Optional[bytes]:
        return self._value

    def as_str(self) -> Optional[str]:
        try:
            return self._value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8Error(
                f"Byte string is not valid UTF-8 at position {exc.start}"
            ) from exc

    def __len__(self):
        return len(self._value)


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        items = tuple(value)
        for item in items:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode values.")
        super().__init__(items)

    __hash__ = None

    def as_list(self) -> Optional[Tuple[BencodeType, ...]]:
        return self._value

    def __len__(self):
        return len(self._value)

    def __iter__(self) -> Iterator[BencodeType]:
        return iter(self._value)

    def __getitem__(self, index):
        return self._value[index]


class BencodeDict(BencodeType):
    """Represents a Bencoded dictionary."""
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (dict, MappingProxyType)):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        entries = {}
        for k, v in value.items():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError("BencodeDict values must be Bencode values.")
            entries[bytes(k)] = v
        super().__init__(MappingProxyType(entries))

    def __eq__(self, other):
        if not isinstance(other, BencodeType):
            return NotImplemented
        return type(other) is BencodeDict and dict(self._value) == dict(other._value)

    __hash__ = None

    def __repr__(self):
        return f"BencodeDict({dict(self._value)!r})"

    def as_dict(self) -> Optional[Mapping[bytes, BencodeType]]:
        return self._value

    def get(self, key: Union[bytes, str], default=None):
        """Looks up a key given as bytes or as a UTF-8 str."""
        if isinstance(key, str):
            key = key.encode("utf-8")
        return self._value.get(key, default)

    def __len__(self):
        return len(self._value)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._value)

    def __contains__(self, key):
        if isinstance(key, str):
            key = key.encode("utf-8")
        return key in self._value

    def __getitem__(self, key: Union[bytes, str]) -> BencodeType:
        if isinstance(key, str):
            key = key.encode("utf-8")
        return self._value[key]
