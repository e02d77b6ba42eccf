from typing import Any, Union

from .Parser import Err, ErrorKind, Ok, Parser, Result, Stream
from .Prim import token


def _byte_token(test, error: ErrorKind) -> Parser[int]:
    return token(lambda b: isinstance(b, int) and test(b), error)


def byte(b: int) -> Parser[int]:
    """Parses the byte b (0-255) and returns it as an int."""
    if isinstance(b, bool) or not isinstance(b, int):
        raise TypeError("Argument of byte parser must be an int.")
    if not 0 <= b <= 255:
        raise ValueError("Argument of byte parser must be in range 0-255.")
    return _byte_token(lambda x: x == b, ErrorKind.BYTE)


def any_byte() -> Parser[int]:
    """Parses any single byte; fails only at end of input."""
    return _byte_token(lambda _: True, ErrorKind.ANY_BYTE)


def slice_(expected: Union[bytes, bytearray]) -> Parser[bytes]:
    """Parses the exact byte sequence expected and returns it."""
    if not isinstance(expected, (bytes, bytearray)):
        raise TypeError("Argument of slice parser must be bytes.")
    expected = bytes(expected)

    def parse(stream: Stream, ctx: Any) -> Result[bytes]:
        if not stream.is_text and stream.startswith(expected):
            return Ok(stream.advance(len(expected)), expected, ctx)
        return Err(stream, ErrorKind.SLICE, ctx)
    return Parser(parse)
