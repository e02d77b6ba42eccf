import logging
from typing import Any, Callable, Optional, Tuple, Union

from .Parser import OMITTED, Err, ErrorKind, Ok, Parser, Result, Source, Stream, T, U

log = logging.getLogger("pycomb")


def pure(value: T) -> Parser[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(stream: Stream, ctx: Any) -> Result[T]:
        return Ok(stream, value, ctx)
    return Parser(parse)


def fail(error: Any = None) -> Parser[Any]:
    """A parser that always fails with the given error, consuming nothing."""
    def parse(stream: Stream, ctx: Any) -> Result[Any]:
        return Err(stream, error, ctx)
    return Parser(parse)


def token(test_tok: Callable[[Any], bool], error: Any) -> Parser[Any]:
    """Parse a single element accepted by test_tok; fail with error otherwise, consuming nothing."""
    def parse(stream: Stream, ctx: Any) -> Result[Any]:
        first = stream.peek()
        if first is not None and test_tok(first):
            return Ok(stream.advance(), first, ctx)
        return Err(stream, error, ctx)
    return Parser(parse)


def satisfy(predicate: Callable[[Any], bool]) -> Parser[Any]:
    """Consume one element (a character, or a byte as int) if predicate accepts it."""
    return token(predicate, ErrorKind.SATISFY)


def map_(parser: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Apply fn to the output of a successful parse. Failures pass through."""
    return parser.map(fn)


def map_err(parser: Parser[T], fn: Callable[[Any], Any]) -> Parser[T]:
    """Apply fn to the error of a failed parse. Successes pass through."""
    return parser.map_err(fn)


def optional(parser: Parser[T]) -> Parser[Optional[T]]:
    """
    Tries parser; on failure succeeds with None at the original input.
    The context is whatever the failed attempt handed back.
    """
    def parse(stream: Stream, ctx: Any) -> Result[Optional[T]]:
        result = parser.parse_fn(stream, ctx)
        if result.ok:
            return result
        return Ok(stream, None, result.context)
    return Parser(parse)


class LazyParser(Parser[T]):
    """Builds its parser on first use and keeps it."""

    def __init__(self, factory: Callable[[], Parser[T]]):
        self.factory = factory
        self.parser: Optional[Parser[T]] = None
        super().__init__(self._parse)

    def _parse(self, stream: Stream, ctx: Any) -> Result[T]:
        if self.parser is None:
            # Concurrent first calls may each build one; the last write wins.
            self.parser = self.factory()
        return self.parser.parse_fn(stream, ctx)


def lazy(factory: Callable[[], Parser[T]]) -> Parser[T]:
    """Defers factory() until the first parse, so grammars can refer to themselves."""
    return LazyParser(factory)


class ContextParser(Parser[T]):
    """Runs a parser with a stored default context when the caller gives none."""

    def __init__(self, context: Any, parser: Parser[T]):
        self.context = context
        self.parser = parser
        super().__init__(parser.parse_fn)

    def default_context(self) -> Any:
        return self.context


def context(initial: Any, parser: Parser[T]) -> Parser[T]:
    """
    Attach a default context to parser. An explicitly passed context
    overrides it for that call only.
    """
    return ContextParser(initial, parser)


def trace(label: str, parser: Parser[T]) -> Parser[T]:
    """Logs entry and outcome of parser at DEBUG level on the "pycomb" logger."""
    def parse(stream: Stream, ctx: Any) -> Result[T]:
        log.debug("%s: trying at offset %d: %r", label, stream.offset, stream.source[stream.offset:stream.offset + 30])
        result = parser.parse_fn(stream, ctx)
        if result.ok:
            log.debug("%s: matched %r, now at offset %d", label, result.output, result.input.offset)
        else:
            log.debug("%s: failed with %s at offset %d", label, result.error, result.input.offset)
        return result
    return Parser(parse)


def run_parser(parser: Parser[T],
               input_data: Union[Source, Stream],
               context: Any = OMITTED) -> Tuple[Optional[T], Optional[Any]]:
    """
    Run parser and return (output, None) on success or (None, error) on failure.
    An omitted context uses the parser's default; an explicit None is passed through.
    """
    result = parser(input_data, context)
    if result.ok:
        return result.output, None
    return None, result.error
