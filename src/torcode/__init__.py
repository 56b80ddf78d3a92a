"""
Bencode decoding for BitTorrent data.
"""
from .decoder import DEFAULT_MAX_DEPTH, BencodeDecoder, decode, decode_all
from .errors import (
    BencodeDecodeError,
    BencodeError,
    InvalidUtf8Error,
    MalformedNumberError,
    NestingTooDeepError,
    TrailingDataError,
    TruncatedInputError,
    UnexpectedByteError,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

__all__ = [
    'decode', 'decode_all', 'BencodeDecoder', 'DEFAULT_MAX_DEPTH',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'BencodeDecodeError', 'UnexpectedByteError', 'TruncatedInputError',
    'MalformedNumberError', 'NestingTooDeepError', 'TrailingDataError', 'InvalidUtf8Error',
]
