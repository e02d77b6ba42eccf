import pytest
from hypothesis import given
from hypothesis import strategies as st

from pycomb.Char import (
    alpha,
    any_char,
    char,
    digit,
    escaped_by,
    escaped_with,
    hex_,
    lower,
    none_of_chars,
    octal,
    one_of_chars,
    string,
    upper,
)
from pycomb.Parser import ErrorKind


# --- Basic Character Parsers ---


@given(st.characters(), st.text())
def test_char_parser(c, rest):
    # Should match the character
    res = char(c)(c + rest)
    assert res.ok
    assert res.output == c
    assert res.input == rest

    # Should fail on a different character, consuming nothing
    diff = "b" if c == "a" else "a"
    res_fail = char(c)(diff + rest)
    assert not res_fail.ok
    assert res_fail.error is ErrorKind.CHAR
    assert res_fail.input == diff + rest


def test_char_is_case_sensitive(ok, err):
    assert char("a")("a") == ok("", "a")
    assert char("a")("A") == err("A", ErrorKind.CHAR)
    assert char("a")("") == err("", ErrorKind.CHAR)


@pytest.mark.parametrize("bad", ["", "ab", 1, None])
def test_char_rejects_non_single_character(bad):
    with pytest.raises(TypeError, match="single character"):
        char(bad)


def test_char_is_referentially_pure():
    p = char("a")
    assert p("abc") == p("abc")
    assert p("xyz") == p("xyz")


def test_any_char(ok, err):
    assert any_char()("?x") == ok("x", "?")
    assert any_char()("") == err("", ErrorKind.ANY_CHAR)


@given(st.text(min_size=1), st.text())
def test_one_of_chars(allowed, rest):
    p = one_of_chars(*allowed)
    res = p(allowed[0] + rest)
    assert res.ok
    assert res.output == allowed[0]
    assert res.input == rest


def test_one_of_chars_failure(err):
    p = one_of_chars("a", "b")
    assert p("c") == err("c", ErrorKind.ONE_OF_CHARS)
    assert p("") == err("", ErrorKind.ONE_OF_CHARS)
    with pytest.raises(TypeError):
        one_of_chars("a", "bc")


def test_none_of_chars(ok, err):
    p = none_of_chars("a", "b")
    assert p("a") == err("a", ErrorKind.NONE_OF_CHARS)
    assert p("c1") == ok("1", "c")
    # End of input is not "some other character"
    assert p("") == err("", ErrorKind.NONE_OF_CHARS)


# --- Escapes ---


def test_escaped_with(ok, err):
    p = escaped_with("\\", [("n", "\n"), ("r", "\r")])
    assert p("\\nabc") == ok("abc", "\n")
    assert p("\\r") == ok("", "\r")
    assert p("\\b") == err("\\b", ErrorKind.ESCAPED_WITH)
    assert p("n") == err("n", ErrorKind.ESCAPED_WITH)
    assert p("\\") == err("\\", ErrorKind.ESCAPED_WITH)


def test_escaped_with_accepts_mapping(ok):
    p = escaped_with("%", {"t": 9})
    assert p("%t") == ok("", 9)


def test_escaped_with_validates_entries():
    with pytest.raises(TypeError):
        escaped_with("\\\\", [("n", "\n")])
    with pytest.raises(TypeError):
        escaped_with("\\", [("nn", "\n")])


def test_escaped_by(ok, err):
    def unescape(c):
        if c == "n":
            return "\n"
        return None

    p = escaped_by("\\", unescape)
    assert p("\\n!") == ok("!", "\n")
    assert p("\\t") == err("\\t", ErrorKind.ESCAPED_BY)
    assert p("\\") == err("\\", ErrorKind.ESCAPED_BY)
    assert p("n") == err("n", ErrorKind.ESCAPED_BY)


def test_escaped_by_keeps_falsy_outputs(ok):
    # Only None means "no such escape"
    p = escaped_by("\\", lambda c: "" if c == "e" else None)
    assert p("\\e") == ok("", "")


# --- String ---


@given(st.text(), st.text())
def test_string_parser(s, rest):
    res = string(s)(s + rest)
    assert res.ok
    assert res.output == s
    assert res.input == rest


def test_string_failure_consumes_nothing(err):
    assert string("ab")("ac") == err("ac", ErrorKind.STRING)
    assert string("ab")("a") == err("a", ErrorKind.STRING)
    assert string("ab")(b"ab") == err(b"ab", ErrorKind.STRING)


# --- Classification Parsers ---


@given(st.sampled_from("01234567"), st.text())
def test_octal_accepts(c, rest):
    res = octal()(c + rest)
    assert res.output == c and res.input == rest


@given(st.characters().filter(lambda c: c not in "01234567"))
def test_octal_rejects(c):
    res = octal()(c)
    assert res.error is ErrorKind.OCTAL
    assert res.input == c


@given(st.sampled_from("0123456789"))
def test_digit_accepts(c):
    assert digit()(c).output == c


@given(st.characters().filter(lambda c: c not in "0123456789"))
def test_digit_rejects(c):
    # Only ASCII digits count, not every Unicode Nd character
    res = digit()(c)
    assert res.error is ErrorKind.DIGIT
    assert res.input == c


def test_hex_both(ok, err):
    p = hex_()
    assert p("5") == ok("", "5")
    assert p("a") == ok("", "a")
    assert p("F") == ok("", "F")
    assert p("g") == err("g", ErrorKind.HEX)
    assert p("") == err("", ErrorKind.HEX)


def test_hex_upper(ok, err):
    p = hex_("upper")
    assert p("9") == ok("", "9")
    assert p("A") == ok("", "A")
    assert p("a") == err("a", ErrorKind.UPPER_HEX)
    assert p("G") == err("G", ErrorKind.HEX)


def test_hex_lower(ok, err):
    p = hex_("lower")
    assert p("f") == ok("", "f")
    assert p("F") == err("F", ErrorKind.LOWER_HEX)
    assert p("z") == err("z", ErrorKind.HEX)


def test_hex_rejects_unknown_case():
    with pytest.raises(ValueError):
        hex_("mixed")


@given(st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"))
def test_alpha(c):
    assert alpha()(c).output == c


def test_alpha_is_ascii_only(err):
    assert alpha()("é") == err("é", ErrorKind.ALPHABET)
    assert alpha()("1") == err("1", ErrorKind.ALPHABET)


def test_lower_upper(ok, err):
    assert lower()("m") == ok("", "m")
    assert lower()("M") == err("M", ErrorKind.LOWER_ALPHABET)
    assert upper()("M") == ok("", "M")
    assert upper()("m") == err("m", ErrorKind.UPPER_ALPHABET)


def test_text_parsers_fail_on_bytes(err):
    assert digit()(b"1") == err(b"1", ErrorKind.DIGIT)
    assert char("a")(b"a") == err(b"a", ErrorKind.CHAR)
