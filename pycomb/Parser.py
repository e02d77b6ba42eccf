from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, List, Tuple, TypeVar, Union

T = TypeVar('T')  # Generic type for parser outputs
U = TypeVar('U')

Source = Union[str, bytes]


@dataclass(frozen=True)
class Stream:
    """An immutable view over text or bytes: the source plus a read offset.

    Advancing returns a new Stream sharing the same source, so a parse step
    never copies the remaining input.
    """
    source: Source
    offset: int = 0

    @property
    def is_text(self) -> bool:
        return isinstance(self.source, str)

    @property
    def rest(self) -> Source:
        """The unconsumed input, materialized."""
        return self.source[self.offset:]

    def __len__(self) -> int:
        return len(self.source) - self.offset

    def peek(self, n: int = 0) -> Any:
        """Return the element n places ahead (a 1-char str, or an int byte), or None past the end."""
        i = self.offset + n
        if i < len(self.source):
            return self.source[i]
        return None

    def startswith(self, literal: Source) -> bool:
        return self.source.startswith(literal, self.offset)

    def advance(self, n: int = 1) -> 'Stream':
        return Stream(self.source, self.offset + n)

    def consumed_since(self, earlier: 'Stream') -> Source:
        """The slice of source between an earlier stream and this one."""
        return self.source[earlier.offset:self.offset]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Stream):
            return self.rest == other.rest
        if isinstance(other, (str, bytes)):
            return self.rest == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.rest)

    def __repr__(self) -> str:
        return f"Stream({self.rest!r})"


def to_stream(input_data: Union[Source, Stream]) -> Stream:
    if isinstance(input_data, Stream):
        return input_data
    if isinstance(input_data, bytearray):
        return Stream(bytes(input_data))
    if isinstance(input_data, (str, bytes)):
        return Stream(input_data)
    raise TypeError(f"Parser input must be str or bytes, not {type(input_data).__name__}.")


class ErrorKind(Enum):
    """Tags for the failures produced by the built-in parsers."""
    CHAR = "Char"
    ANY_CHAR = "AnyChar"
    ONE_OF_CHARS = "OneOfChars"
    NONE_OF_CHARS = "NoneOfChars"
    ESCAPED_WITH = "EscapedWith"
    ESCAPED_BY = "EscapedBy"
    STRING = "String"
    OCTAL = "Octal"
    DIGIT = "Digit"
    HEX = "Hex"
    UPPER_HEX = "UpperHex"
    LOWER_HEX = "LowerHex"
    ALPHABET = "Alphabet"
    LOWER_ALPHABET = "LowerAlphabet"
    UPPER_ALPHABET = "UpperAlphabet"
    BYTE = "Byte"
    ANY_BYTE = "AnyByte"
    SLICE = "Slice"
    SPACE = "Space"
    CARRIAGE_RETURN = "CarriageReturn"
    LINE_FEED = "LineFeed"
    CARRIAGE_RETURN_LINE_FEED = "CarriageReturnLineFeed"
    LINEBREAK = "Linebreak"
    TAB = "Tab"
    WHITESPACE = "Whitespace"
    END_OF_FILE = "EndOfFile"
    SATISFY = "Satisfy"
    MISSING_POSITION_CONTEXT = "MissingPositionContext"
    MANY = "Many"
    SEP_BY = "SepBy"
    SEP_END_BY = "SepEndBy"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MinCountError(Generic[T]):
    """A repetition stopped before its minimum count; output holds what was collected."""
    kind: ErrorKind
    output: List[T] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.kind}: expected more items after {len(self.output)}"


class ParseError(Exception):
    """Raised by Err.unwrap(); carries the error value and the failing input."""

    def __init__(self, error: Any, input: Stream):
        self.error = error
        self.input = input
        super().__init__(self._describe())

    def _describe(self) -> str:
        stream = self.input
        if not stream.is_text:
            return f"Parse error at byte {stream.offset}: {self.error}"
        consumed = stream.source[:stream.offset]
        line = consumed.count("\n") + 1
        column = stream.offset - (consumed.rfind("\n") + 1)
        return f"Parse error at line {line}, column {column}: {self.error}"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful parse: remaining input, produced output, and the context to pass forward."""
    input: Stream
    output: T
    context: Any

    ok = True

    def unwrap(self) -> T:
        return self.output


@dataclass(frozen=True)
class Err:
    """Failed parse: input at the point of failure, the error value, and the context."""
    input: Stream
    error: Any
    context: Any

    ok = False

    def unwrap(self) -> Any:
        raise ParseError(self.error, self.input)


Result = Union[Ok[T], Err]


class _Omitted:
    def __repr__(self) -> str:
        return "<omitted>"


OMITTED = _Omitted()


class Parser(Generic[T]):
    """A parser: a pure function from (input, context) to a Result.

    Parsers hold only the configuration they were built with, so one
    instance can be called any number of times, from any thread.
    """
    def __init__(self, parse_fn: Callable[[Stream, Any], Result[T]]):
        self.parse_fn = parse_fn

    def default_context(self) -> Any:
        return {}

    def __call__(self, input: Union[Source, Stream], context: Any = OMITTED) -> Result[T]:
        if context is OMITTED:
            context = self.default_context()
        return self.parse_fn(to_stream(input), context)

    # Functor map
    def map(self, fn: Callable[[T], U]) -> 'Parser[U]':
        def parse(stream: Stream, ctx: Any) -> Result[U]:
            result = self.parse_fn(stream, ctx)
            if result.ok:
                return Ok(result.input, fn(result.output), result.context)
            return result
        return Parser(parse)

    def map_err(self, fn: Callable[[Any], Any]) -> 'Parser[T]':
        def parse(stream: Stream, ctx: Any) -> Result[T]:
            result = self.parse_fn(stream, ctx)
            if result.ok:
                return result
            return Err(result.input, fn(result.error), result.context)
        return Parser(parse)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        def parse(stream: Stream, ctx: Any) -> Result[U]:
            result = self.parse_fn(stream, ctx)
            if not result.ok:
                return result
            return f(result.output).parse_fn(result.input, result.context)
        return Parser(parse)

    def __rshift__(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        return self.bind(f)

    # Alternative (<|>): the right side restarts from the original input
    def __or__(self, other: 'Parser[U]') -> 'Parser[Union[T, U]]':
        def parse(stream: Stream, ctx: Any) -> Result[Union[T, U]]:
            result = self.parse_fn(stream, ctx)
            if result.ok:
                return result
            return other.parse_fn(stream, ctx)
        return Parser(parse)

    # Sequence, keeping both outputs
    def __and__(self, other: 'Parser[U]') -> 'Parser[Tuple[T, U]]':
        def parse(stream: Stream, ctx: Any) -> Result[Tuple[T, U]]:
            first = self.parse_fn(stream, ctx)
            if not first.ok:
                return first
            second = other.parse_fn(first.input, first.context)
            if not second.ok:
                return second
            return Ok(second.input, (first.output, second.output), second.context)
        return Parser(parse)
