from typing import Any

from .Char import char_token
from .Parser import Err, ErrorKind, Ok, Parser, Result, Stream, T

# Characters with the Unicode White_Space property (PropList.txt).
UNICODE_WHITESPACE = frozenset(
    "\u0009\u000A\u000B\u000C\u000D\u0020\u0085\u00A0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200A"
    "\u2028\u2029\u202F\u205F\u3000"
)


def space() -> Parser[str]:
    """Parses a single ' '."""
    return char_token(lambda c: c == " ", ErrorKind.SPACE)


def cr() -> Parser[str]:
    """Parses a carriage return ('\\r')."""
    return char_token(lambda c: c == "\r", ErrorKind.CARRIAGE_RETURN)


def lf() -> Parser[str]:
    """Parses a line feed ('\\n')."""
    return char_token(lambda c: c == "\n", ErrorKind.LINE_FEED)


def tab() -> Parser[str]:
    """Parses a tab character ('\\t')."""
    return char_token(lambda c: c == "\t", ErrorKind.TAB)


def whitespace() -> Parser[str]:
    """Parses one Unicode whitespace character."""
    return char_token(lambda c: c in UNICODE_WHITESPACE, ErrorKind.WHITESPACE)


def crlf() -> Parser[str]:
    """Parses '\\r\\n' and returns it."""
    def parse(stream: Stream, ctx: Any) -> Result[str]:
        if stream.is_text and stream.startswith("\r\n"):
            return Ok(stream.advance(2), "\r\n", ctx)
        return Err(stream, ErrorKind.CARRIAGE_RETURN_LINE_FEED, ctx)
    return Parser(parse)


def linebreak() -> Parser[str]:
    """Parses '\\n' or '\\r\\n' and returns whichever matched."""
    def parse(stream: Stream, ctx: Any) -> Result[str]:
        if stream.is_text:
            if stream.startswith("\n"):
                return Ok(stream.advance(1), "\n", ctx)
            if stream.startswith("\r\n"):
                return Ok(stream.advance(2), "\r\n", ctx)
        return Err(stream, ErrorKind.LINEBREAK, ctx)
    return Parser(parse)


def trim(parser: Parser[T]) -> Parser[T]:
    """
    Skips leading Unicode whitespace (the White_Space property, U+0085 included),
    then runs parser. U+FEFF is not whitespace and is left in place.
    Byte input is passed through as is.
    """
    def parse(stream: Stream, ctx: Any) -> Result[T]:
        if stream.is_text:
            skip = 0
            while stream.peek(skip) in UNICODE_WHITESPACE:
                skip += 1
            stream = stream.advance(skip)
        return parser.parse_fn(stream, ctx)
    return Parser(parse)


def eof() -> Parser[None]:
    """Succeeds only if no input remains. Works on text and bytes."""
    def parse(stream: Stream, ctx: Any) -> Result[None]:
        if len(stream) == 0:
            return Ok(stream, None, ctx)
        return Err(stream, ErrorKind.END_OF_FILE, ctx)
    return Parser(parse)
