from pycomb import (
    Parser, between, char, choice, digit, escaped_with, hex_, lazy,
    many, many0, many1, none_of_chars, optional, or_, prefix,
    run_parser, sep_by, serial, string, trim,
)

# 1. Literals
def json_boolean() -> Parser:
    return or_(string("true").map(lambda _: True),
               string("false").map(lambda _: False))


def json_null() -> Parser:
    return string("null").map(lambda _: None)


def json_number() -> Parser:
    sign = optional(char("-")).map(lambda s: s or "")
    digits = many1(digit()).map("".join)
    fraction = optional(prefix(char("."), digits))

    def to_number(parts):
        sign_str, int_part, frac_part = parts
        if frac_part:
            return float(f"{sign_str}{int_part}.{frac_part}")
        return int(f"{sign_str}{int_part}")

    return serial(sign, digits, fraction).map(to_number)


def json_string() -> Parser:
    simple_escape = escaped_with("\\", [
        ('"', '"'),
        ("\\", "\\"),
        ("/", "/"),
        ("b", "\b"),
        ("f", "\f"),
        ("n", "\n"),
        ("r", "\r"),
        ("t", "\t"),
    ])
    unicode_escape = prefix(string("\\u"), many(hex_(), 4, 4)).map(
        lambda hex_digits: chr(int("".join(hex_digits), 16)))
    chars = many0(choice(none_of_chars('"', "\\"), simple_escape, unicode_escape))
    return between(char('"'), char('"'), chars).map("".join)


# 2. Recursive structures
def json_array() -> Parser:
    # [ value, value, ... ]
    return between(
        char("["),
        trim(char("]")),
        trim(sep_by(trim(char(",")), json_value())),
    )


def json_property() -> Parser:
    return serial(trim(json_string()), trim(char(":")), json_value()).map(
        lambda parts: (parts[0], parts[2]))


def json_object() -> Parser:
    # { "key": value, ... }
    return between(
        char("{"),
        trim(char("}")),
        trim(sep_by(trim(char(",")), json_property())),
    ).map(dict)


def json_value() -> Parser:
    return lazy(lambda: trim(choice(
        json_boolean(),
        json_null(),
        json_string(),
        json_object(),
        json_number(),
        json_array(),
    )))


parser = json_value()

if __name__ == "__main__":
    import json
    import sys

    text = sys.stdin.read()
    result, err = run_parser(parser, text)

    if err is not None:
        print("Parsing Failed:", err)
    else:
        print("Successfully Parsed:")
        print(json.dumps(result, indent=4))
