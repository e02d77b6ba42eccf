"""
Sequencing, branching and repetition combinators.

Every combinator here threads the (input, context) pair from one sub-parser
into the next and passes failures through untouched unless reinterpreting
them is its job (or_ and choice try the next alternative; the repetition
combinators stop on a failed attempt).

A note on zero-width parsers: the unbounded repetitions (many0, many1,
many with an infinite max, sep_by, sep_end_by) do not guard against a
sub-parser that succeeds without consuming input. Such a grammar loops
forever; give the repetition a finite max, or make the parser consume.
"""
import math
from typing import Any, Callable, List, Tuple, Union

from .Parser import Err, ErrorKind, MinCountError, Ok, Parser, Result, Stream, T, U

Count = Union[int, float]  # float only for math.inf


def ensure_range(min_count: Count, max_count: Count) -> None:
    if min_count > max_count:
        raise ValueError("Maximum value must be greater than minimum value.")


# 1. serial: run parsers in order
def serial(*parsers: Parser[Any]) -> Parser[Tuple[Any, ...]]:
    """
    Runs each parser in order and returns a tuple of their outputs.
    Stops at the first failure and returns it.
    """
    def parse(stream: Stream, ctx: Any) -> Result[Tuple[Any, ...]]:
        outputs = []
        for p in parsers:
            result = p.parse_fn(stream, ctx)
            if not result.ok:
                return result
            outputs.append(result.output)
            stream, ctx = result.input, result.context
        return Ok(stream, tuple(outputs), ctx)
    return Parser(parse)


# 2. between: open, p, close -> p
def between(start: Parser[Any], end: Parser[Any], parser: Parser[T]) -> Parser[T]:
    """
    Parses 'start', then 'parser', then 'end', returning the result of 'parser'.
    """
    def parse(stream: Stream, ctx: Any) -> Result[T]:
        left = start.parse_fn(stream, ctx)
        if not left.ok:
            return left
        mid = parser.parse_fn(left.input, left.context)
        if not mid.ok:
            return mid
        right = end.parse_fn(mid.input, mid.context)
        if not right.ok:
            return right
        return Ok(right.input, mid.output, right.context)
    return Parser(parse)


# 3. prefix / suffix / skip
def prefix(discard: Parser[Any], parser: Parser[T]) -> Parser[T]:
    """Parses 'discard' then 'parser', keeping only the output of 'parser'."""
    def parse(stream: Stream, ctx: Any) -> Result[T]:
        first = discard.parse_fn(stream, ctx)
        if not first.ok:
            return first
        return parser.parse_fn(first.input, first.context)
    return Parser(parse)


def suffix(parser: Parser[T], discard: Parser[Any]) -> Parser[T]:
    """Parses 'parser' then 'discard', keeping only the output of 'parser'."""
    def parse(stream: Stream, ctx: Any) -> Result[T]:
        first = parser.parse_fn(stream, ctx)
        if not first.ok:
            return first
        second = discard.parse_fn(first.input, first.context)
        if not second.ok:
            return second
        return Ok(second.input, first.output, second.context)
    return Parser(parse)


def skip(parser: Parser[T], omit: Parser[Any]) -> Parser[T]:
    """Runs parser, then omit on the remainder; omit's output is dropped."""
    return suffix(parser, omit)


# 4. or / choice
def or_(left: Parser[T], right: Parser[U]) -> Parser[Union[T, U]]:
    """
    Tries left; if it fails, tries right against the original input.
    When both fail, the right-hand failure is returned.
    """
    return left | right


def choice(*parsers: Parser[Any]) -> Parser[Any]:
    """
    Applies parsers in order, each against the original input, until one succeeds.
    If all fail, the failure of the LAST parser is returned.
    """
    if not parsers:
        raise ValueError("choice requires at least one parser.")
    *init, last = parsers

    def parse(stream: Stream, ctx: Any) -> Result[Any]:
        for p in init:
            result = p.parse_fn(stream, ctx)
            if result.ok:
                return result
        return last.parse_fn(stream, ctx)
    return Parser(parse)


# 5. many family
def many(parser: Parser[T], min: Count = 0, max: Count = math.inf) -> Parser[List[T]]:
    """
    Repeats parser at least min and at most max times (both inclusive).

    Stops at max, or at the first failed attempt; the failed attempt consumes
    nothing. Below min, fails with MinCountError(MANY, output) so the partial
    output can still be recovered.
    """
    ensure_range(min, max)

    def parse(stream: Stream, ctx: Any) -> Result[List[T]]:
        output: List[T] = []
        while len(output) < max:
            result = parser.parse_fn(stream, ctx)
            if not result.ok:
                break
            output.append(result.output)
            stream, ctx = result.input, result.context

        if len(output) < min:
            return Err(stream, MinCountError(ErrorKind.MANY, output), ctx)
        return Ok(stream, output, ctx)
    return Parser(parse)


def many0(parser: Parser[T]) -> Parser[List[T]]:
    """Repeats parser any number of times. Never fails."""
    return many(parser, 0, math.inf)


def many1(parser: Parser[T]) -> Parser[List[T]]:
    """
    Repeats parser at least once. With zero matches, the failure of the first
    attempt is returned as is.
    """
    def parse(stream: Stream, ctx: Any) -> Result[List[T]]:
        result = parser.parse_fn(stream, ctx)
        if not result.ok:
            return result
        output = []
        while result.ok:
            output.append(result.output)
            stream, ctx = result.input, result.context
            result = parser.parse_fn(stream, ctx)
        return Ok(stream, output, ctx)
    return Parser(parse)


def many_until(parser: Parser[T], end: Parser[Any]) -> Parser[List[T]]:
    """
    Repeats parser until 'end' matches. 'end' is checked before each attempt
    and is never consumed. Fails with the parser's failure if it fails first.
    """
    def parse(stream: Stream, ctx: Any) -> Result[List[T]]:
        output: List[T] = []
        while True:
            if end.parse_fn(stream, ctx).ok:
                return Ok(stream, output, ctx)
            result = parser.parse_fn(stream, ctx)
            if not result.ok:
                return result
            output.append(result.output)
            stream, ctx = result.input, result.context
    return Parser(parse)


# 6. separated repetition
def _separated(separator: Parser[Any],
               parser: Parser[T],
               max_count: Count,
               keep_trailing: bool) -> Callable[[Stream, Any], Tuple[Result[T], List[T], Stream, Any]]:
    """
    The loop shared by sep_by and sep_end_by.

    Returns the first attempt's result, the outputs, and the input and context
    to continue from. With keep_trailing, a separator that matched is consumed
    even when no element follows it.
    """
    def run(stream: Stream, ctx: Any) -> Tuple[Result[T], List[T], Stream, Any]:
        output: List[T] = []
        first = result = parser.parse_fn(stream, ctx)
        while result.ok and len(output) < max_count:
            output.append(result.output)
            stream, ctx = result.input, result.context

            sep = separator.parse_fn(stream, ctx)
            if not sep.ok:
                break
            if keep_trailing:
                stream, ctx = sep.input, sep.context
            if len(output) >= max_count:
                break
            result = parser.parse_fn(sep.input, sep.context)
        return first, output, stream, ctx
    return run


def sep_by(separator: Parser[Any], parser: Parser[T],
           min: Count = 0, max: Count = math.inf) -> Parser[List[T]]:
    """
    Parses parser repeatedly, separated by separator, min to max times.

    A trailing separator is left unconsumed:

        sep_by(char(","), digit())("1,2,")  # output ["1", "2"], input ","

    Below min, fails with MinCountError(SEP_BY, output).
    """
    ensure_range(min, max)
    run = _separated(separator, parser, max, keep_trailing=False)

    def parse(stream: Stream, ctx: Any) -> Result[List[T]]:
        _, output, stream, ctx = run(stream, ctx)
        if len(output) < min:
            return Err(stream, MinCountError(ErrorKind.SEP_BY, output), ctx)
        return Ok(stream, output, ctx)
    return Parser(parse)


def sep_by1(separator: Parser[Any], parser: Parser[T]) -> Parser[List[T]]:
    """
    sep_by with at least one element. With zero elements, the failure of the
    first attempt is returned as is.
    """
    run = _separated(separator, parser, math.inf, keep_trailing=False)

    def parse(stream: Stream, ctx: Any) -> Result[List[T]]:
        first, output, stream, ctx = run(stream, ctx)
        if not first.ok:
            return first
        return Ok(stream, output, ctx)
    return Parser(parse)


def sep_end_by(separator: Parser[Any], parser: Parser[T],
               min: Count = 0, max: Count = math.inf) -> Parser[List[T]]:
    """
    Like sep_by, but the separator may also terminate the sequence and a
    trailing separator is consumed:

        sep_end_by(char(","), digit())("1,2,")  # output ["1", "2"], input ""

    Below min, fails with MinCountError(SEP_END_BY, output).
    """
    ensure_range(min, max)
    run = _separated(separator, parser, max, keep_trailing=True)

    def parse(stream: Stream, ctx: Any) -> Result[List[T]]:
        _, output, stream, ctx = run(stream, ctx)
        if len(output) < min:
            return Err(stream, MinCountError(ErrorKind.SEP_END_BY, output), ctx)
        return Ok(stream, output, ctx)
    return Parser(parse)


def sep_end_by1(separator: Parser[Any], parser: Parser[T]) -> Parser[List[T]]:
    """sep_end_by with at least one element; zero elements returns the first failure."""
    run = _separated(separator, parser, math.inf, keep_trailing=True)

    def parse(stream: Stream, ctx: Any) -> Result[List[T]]:
        first, output, stream, ctx = run(stream, ctx)
        if not first.ok:
            return first
        return Ok(stream, output, ctx)
    return Parser(parse)
