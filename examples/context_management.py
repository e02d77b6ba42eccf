"""
Counting digits through the parser context.

Each digit parsed bumps a counter in the context; the context is a plain
dict that is copied, never mutated, so the same parser can be run again
(or concurrently) with a different starting context.
"""
from typing import Any, Dict

from pycomb import Parser, Stream, Ok, between, char, context, digit, sep_by

DIGITS = "0123456789"

Counts = Dict[str, int]


def empty_counts() -> Counts:
    return {d: 0 for d in DIGITS}


def counted_digit() -> Parser[str]:
    plain = digit()

    def parse(stream: Stream, ctx: Any):
        result = plain.parse_fn(stream, ctx)
        if not result.ok:
            return result
        counts = {**result.context, result.output: result.context[result.output] + 1}
        return Ok(result.input, result.output, counts)
    return Parser(parse)


def digit_array() -> Parser:
    # [1,2,3]
    return between(char("["), char("]"), sep_by(char(","), counted_digit()))


def counting_parser(initial: Counts = None) -> Parser:
    return context(initial if initial is not None else empty_counts(), digit_array())


if __name__ == "__main__":
    import sys

    result = counting_parser()(sys.argv[1] if len(sys.argv) > 1 else "[1,2,2,9]")
    if result.ok:
        print(result.output, {k: v for k, v in result.context.items() if v})
    else:
        print("Parsing Failed:", result.error)
