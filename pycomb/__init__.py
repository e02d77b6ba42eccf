# Core
from .Parser import Parser, Stream, Ok, Err, Result, ErrorKind, MinCountError, ParseError
from .Prim import (
    pure, fail, token, satisfy, map_, map_err, optional,
    lazy, context, trace, run_parser,
)

# Characters
from .Char import (
    char, any_char, one_of_chars, none_of_chars,
    escaped_with, escaped_by, string,
    octal, digit, hex_, alpha, lower, upper,
)

# Bytes
from .Byte import byte, any_byte, slice_

# Layout
from .Space import space, cr, lf, crlf, linebreak, tab, whitespace, trim, eof

# Combinators
from .Combinators import (
    serial, between, prefix, suffix, skip, or_, choice,
    many, many0, many1, many_until,
    sep_by, sep_by1, sep_end_by, sep_end_by1,
)

# Position tracking
from .Position import Position, Span, with_position_ctx, position, spanned
