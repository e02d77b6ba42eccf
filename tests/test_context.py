from concurrent.futures import ThreadPoolExecutor

import pytest

from examples.context_management import counting_parser, empty_counts
from pycomb.Char import char, digit
from pycomb.Combinators import between, choice, many0, many1, sep_by, sep_end_by, serial
from pycomb.Parser import Err, ErrorKind, Ok, Parser
from pycomb.Prim import context, optional


def counting(parser):
    """Adds 1 to ctx["count"] for every success of parser."""
    def parse(stream, ctx):
        result = parser.parse_fn(stream, ctx)
        if not result.ok:
            return result
        return Ok(result.input, result.output, {**result.context, "count": result.context.get("count", 0) + 1})
    return Parser(parse)


def requiring(key, parser):
    def parse(stream, ctx):
        if key not in ctx:
            return Err(stream, f"missing {key}", ctx)
        return parser.parse_fn(stream, ctx)
    return Parser(parse)


def test_primitives_return_given_context():
    my_context = {"key": "value"}
    assert digit()("5", my_context).context is my_context
    assert digit()("", my_context).context is my_context


@pytest.mark.parametrize(
    "make, text, count",
    [
        (lambda p: serial(p, p, p), "123", 3),
        (lambda p: between(char("["), char("]"), many0(p)), "[12]", 2),
        (lambda p: many1(p), "1234x", 4),
        (lambda p: sep_by(char(","), p), "1,2,3", 3),
        (lambda p: sep_end_by(char(","), p), "1,2,", 2),
        (lambda p: choice(char("x"), p), "1", 1),
        (lambda p: optional(p), "1", 1),
    ],
)
def test_context_threads_through_combinators(make, text, count):
    res = make(counting(digit()))(text, {"count": 0, "extra": "kept"})
    assert res.ok
    assert res.context == {"count": count, "extra": "kept"}


def test_failed_branch_context_is_not_seen_by_the_next_branch():
    # The left branch counts one digit and then fails; the right branch starts from the original context
    left = serial(counting(digit()), char("!"))
    right = counting(digit())
    res = (left | right)("1?", {"count": 0})
    assert res.ok
    assert res.context == {"count": 1}


def test_required_key_is_checked_at_parse_time():
    p = requiring("state", digit())
    assert p("1", {}).error == "missing state"
    assert p("1", {"state": 0, "extra": ""}).context == {"state": 0, "extra": ""}


def test_context_enrichment_keeps_unknown_keys():
    def inject(parser):
        def parse(stream, ctx):
            return parser.parse_fn(stream, {**ctx, "state": 0})
        return Parser(parse)

    res = inject(requiring("state", digit()))("", {"extra": ""})
    assert res.error is ErrorKind.DIGIT
    assert res.context == {"extra": "", "state": 0}


def test_counting_example():
    res = counting_parser()("[1,2,2,9]")
    assert res.ok
    assert res.output == ["1", "2", "2", "9"]
    assert res.context["2"] == 2
    assert res.context["9"] == 1
    assert res.context["0"] == 0


def test_counting_example_does_not_touch_the_default():
    initial = empty_counts()
    p = counting_parser(initial)
    p("[1,1]")
    assert p("[1]").context["1"] == 1
    assert initial == empty_counts()


def test_parsers_are_safe_to_share_between_threads():
    p = context({"count": 0}, sep_by(char(","), counting(digit())))
    inputs = [",".join("1" * n) for n in range(1, 40)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(p, inputs))
    assert [r.context["count"] for r in results] == list(range(1, 40))
