from dataclasses import dataclass
from typing import Any, Generic, Mapping

from .Combinators import serial
from .Parser import Err, ErrorKind, Ok, Parser, Result, Source, Stream, T


@dataclass(frozen=True)
class Position:
    """Cursor position: 0-based offset and column, 1-based line."""
    offset: int = 0
    line: int = 1
    column: int = 0

    def advance(self, consumed: Source) -> 'Position':
        """Position after consuming the given text ("\\n" and "\\r\\n" both end a line)."""
        newline = "\n" if isinstance(consumed, str) else b"\n"
        offset = self.offset + len(consumed)
        breaks = consumed.count(newline)
        if breaks == 0:
            return Position(offset, self.line, self.column + len(consumed))
        last_line = len(consumed) - consumed.rfind(newline) - 1
        return Position(offset, self.line + breaks, last_line)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class Span(Generic[T]):
    """A parsed value with its start (inclusive) and end (exclusive) positions."""
    value: T
    start: Position
    end: Position


class _PositionKey:
    def __repr__(self) -> str:
        return "<position>"


# Private context key; never equal to a user key.
POSITION_KEY = _PositionKey()


@dataclass(frozen=True)
class PositionState:
    position: Position
    last_input: Stream
    origin: Stream


def with_position_ctx(parser: Parser[T]) -> Parser[T]:
    """
    Runs parser with a fresh position context (offset 0, line 1, column 0 at
    the current input). Required by position() and spanned().
    The context must be a mapping; its other keys are kept. A non-mapping
    context raises TypeError when parsing starts, the only exception any
    parser here raises at parse time.
    """
    def parse(stream: Stream, ctx: Any) -> Result[T]:
        if not isinstance(ctx, Mapping):
            raise TypeError(
                f"Position tracking needs a mapping context, not {type(ctx).__name__}.")
        state = PositionState(Position(), stream, stream)
        return parser.parse_fn(stream, {**ctx, POSITION_KEY: state})
    return Parser(parse)


def _locate(state: PositionState, stream: Stream) -> Position:
    last = state.last_input
    if stream.source is last.source and stream.offset >= last.offset:
        return state.position.advance(stream.consumed_since(last))
    # Input moved backwards (a discarded branch advanced the stored state):
    # count again from where tracking started.
    return Position().advance(stream.consumed_since(state.origin))


def position() -> Parser[Position]:
    """
    Returns the current position without consuming input.
    Fails with MISSING_POSITION_CONTEXT outside with_position_ctx().
    """
    def parse(stream: Stream, ctx: Any) -> Result[Position]:
        state = ctx.get(POSITION_KEY) if isinstance(ctx, Mapping) else None
        if state is None:
            return Err(stream, ErrorKind.MISSING_POSITION_CONTEXT, ctx)
        current = _locate(state, stream)
        return Ok(stream, current, {**ctx, POSITION_KEY: PositionState(current, stream, state.origin)})
    return Parser(parse)


def spanned(parser: Parser[T]) -> Parser[Span[T]]:
    """Wraps the output of parser in a Span. Needs a position context."""
    return serial(position(), parser, position()).map(
        lambda parts: Span(parts[1], parts[0], parts[2]))
