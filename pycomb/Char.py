from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, TypeVar, Union

from .Parser import Err, ErrorKind, Ok, Parser, Result, Stream
from .Prim import token

V = TypeVar('V')

OCTAL_DIGITS = "01234567"
DIGITS = "0123456789"
LOWER_HEX_DIGITS = "abcdef"
UPPER_HEX_DIGITS = "ABCDEF"
LOWER_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
UPPER_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
HEX_CASES = ("both", "upper", "lower")


def ensure_single_character(c: Any) -> None:
    if not isinstance(c, str) or len(c) != 1:
        raise TypeError("Argument of character parser must be a single character.")


def char_token(test: Callable[[str], bool], error: ErrorKind) -> Parser[str]:
    """A token parser that only accepts text characters."""
    return token(lambda c: isinstance(c, str) and test(c), error)


# 1. char: a single exact character
def char(c: str) -> Parser[str]:
    """Parses the character c (case-sensitive) and returns it."""
    ensure_single_character(c)
    return char_token(lambda x: x == c, ErrorKind.CHAR)


# 2. anyChar
def any_char() -> Parser[str]:
    """Parses any character; fails only at end of input."""
    return char_token(lambda _: True, ErrorKind.ANY_CHAR)


# 3. oneOfChars / noneOfChars
def one_of_chars(*chars: str) -> Parser[str]:
    """Parses one of the given characters."""
    for c in chars:
        ensure_single_character(c)
    accepted = frozenset(chars)
    return char_token(lambda x: x in accepted, ErrorKind.ONE_OF_CHARS)


def none_of_chars(*chars: str) -> Parser[str]:
    """Parses any character that is not one of the given characters."""
    for c in chars:
        ensure_single_character(c)
    rejected = frozenset(chars)
    return char_token(lambda x: x not in rejected, ErrorKind.NONE_OF_CHARS)


# 4. escapes
def escaped_with(control: str,
                 entries: Union[Mapping[str, V], Iterable[Tuple[str, V]]]) -> Parser[V]:
    """
    Parses control followed by one of the keys of entries, returning the mapped value.

        escaped_with("\\\\", [("n", "\\n"), ("t", "\\t")])
    """
    ensure_single_character(control)
    table = dict(entries.items() if isinstance(entries, Mapping) else entries)
    for key in table:
        ensure_single_character(key)

    def parse(stream: Stream, ctx: Any) -> Result[V]:
        if stream.peek() == control:
            escaped = stream.peek(1)
            if escaped in table:
                return Ok(stream.advance(2), table[escaped], ctx)
        return Err(stream, ErrorKind.ESCAPED_WITH, ctx)
    return Parser(parse)


def escaped_by(control: str, transformer: Callable[[str], Optional[V]]) -> Parser[V]:
    """
    Parses control followed by any character, passing that character to transformer.
    Fails if transformer returns None.
    """
    ensure_single_character(control)

    def parse(stream: Stream, ctx: Any) -> Result[V]:
        if len(stream) < 2 or stream.peek() != control:
            return Err(stream, ErrorKind.ESCAPED_BY, ctx)
        output = transformer(stream.peek(1))
        if output is None:
            return Err(stream, ErrorKind.ESCAPED_BY, ctx)
        return Ok(stream.advance(2), output, ctx)
    return Parser(parse)


# 5. string: an exact literal prefix
def string(literal: str) -> Parser[str]:
    """Parses the exact string literal and returns it."""
    if not isinstance(literal, str):
        raise TypeError("Argument of string parser must be a str.")

    def parse(stream: Stream, ctx: Any) -> Result[str]:
        if stream.is_text and stream.startswith(literal):
            return Ok(stream.advance(len(literal)), literal, ctx)
        return Err(stream, ErrorKind.STRING, ctx)
    return Parser(parse)


# 6. character classes (ASCII)
def octal() -> Parser[str]:
    """Parses an octal digit (0-7)."""
    return char_token(lambda c: c in OCTAL_DIGITS, ErrorKind.OCTAL)


def digit() -> Parser[str]:
    """Parses an ASCII digit (0-9)."""
    return char_token(lambda c: c in DIGITS, ErrorKind.DIGIT)


def hex_(case: str = "both") -> Parser[str]:
    """
    Parses a hexadecimal digit.

    case is "both", "upper" or "lower". A letter digit of the wrong case fails
    with UPPER_HEX (expected upper) or LOWER_HEX (expected lower); anything
    else that is not a hex digit fails with HEX.
    """
    if case not in HEX_CASES:
        raise ValueError(f"Hex case must be one of {', '.join(HEX_CASES)}.")

    accepted = DIGITS
    if case in ("both", "upper"):
        accepted += UPPER_HEX_DIGITS
    if case in ("both", "lower"):
        accepted += LOWER_HEX_DIGITS

    def parse(stream: Stream, ctx: Any) -> Result[str]:
        c = stream.peek()
        if isinstance(c, str) and c in accepted:
            return Ok(stream.advance(), c, ctx)
        if isinstance(c, str) and c in LOWER_HEX_DIGITS:
            return Err(stream, ErrorKind.UPPER_HEX, ctx)
        if isinstance(c, str) and c in UPPER_HEX_DIGITS:
            return Err(stream, ErrorKind.LOWER_HEX, ctx)
        return Err(stream, ErrorKind.HEX, ctx)
    return Parser(parse)


def alpha() -> Parser[str]:
    """Parses an ASCII letter."""
    return char_token(lambda c: c in LOWER_ALPHABET or c in UPPER_ALPHABET, ErrorKind.ALPHABET)


def lower() -> Parser[str]:
    """Parses a lowercase ASCII letter."""
    return char_token(lambda c: c in LOWER_ALPHABET, ErrorKind.LOWER_ALPHABET)


def upper() -> Parser[str]:
    """Parses an uppercase ASCII letter."""
    return char_token(lambda c: c in UPPER_ALPHABET, ErrorKind.UPPER_ALPHABET)
