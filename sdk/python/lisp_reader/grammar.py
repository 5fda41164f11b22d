"""Grammar for Lisp expressions over raw bytes.

Classifiers feed the literal parsers, the literal parsers are tried in
order by ``expression``, and ``list_parser`` recurses into itself for
nested lists.
"""

import string as _string
from functools import lru_cache

from .combinators import (
    Failure, Parser, Result, alt, byte, collect, convert, fmap, lazy, literal,
    many, none_of, one_of, optional, satisfy, seq, skip,
)
from .errors import DepthExceededError
from .types import (
    MAX_DEPTH, Atom, Bool, DottedList, Expression, List, Number, String,
)

LETTERS = _string.ascii_letters.encode("ascii")
DIGITS = b"0123456789"
SYMBOLS = b"!#$%&|*+-/:<=>?@^_~"
WHITESPACE = b" \t\r\n"

_LETTER_SET = frozenset(LETTERS)
_DIGIT_SET = frozenset(DIGITS)
_SYMBOL_SET = frozenset(SYMBOLS)

# (max_depth, depth) pairs kept built; evicted parsers are rebuilt on demand
PARSER_CACHE_SIZE = 512


def is_letter(c: int) -> bool:
    return c in _LETTER_SET


def is_digit(c: int) -> bool:
    return c in _DIGIT_SET


def is_symbol(c: int) -> bool:
    return c in _SYMBOL_SET


letter = satisfy(is_letter, "letter")
digit = satisfy(is_digit, "digit")
symbol = satisfy(is_symbol, "symbol character")
whitespace = skip(many(one_of(WHITESPACE, "whitespace")))
whitespace1 = skip(many(one_of(WHITESPACE, "whitespace"), 1))


# --- Numbers ---

def _number(raw: bytes, base: int) -> Number:
    # Number() raises NumberOverflowError outside the int64 range
    return Number(int(raw.decode("ascii"), base))


def _prefixed_number(prefix: bytes, digits: bytes, base: int, name: str) -> Parser:
    body = collect(many(one_of(digits, f"{name} digit"), 1))
    return fmap(seq(literal(prefix), body), lambda v: _number(v[1], base))


decimal_number = fmap(collect(many(digit, 1)), lambda raw: _number(raw, 10))
binary_number = _prefixed_number(b"#b", b"01", 2, "binary")
octal_number = _prefixed_number(b"#o", b"01234567", 8, "octal")
hex_number = fmap(
    seq(literal(b"#x"), collect(many(one_of(b"0123456789abcdefABCDEF", "hex digit"), 1))),
    lambda v: _number(v[1].lower(), 16),
)

number = alt(octal_number, binary_number, hex_number, decimal_number)


# --- Strings ---

_QUOTE = byte(b'"')
_escaped_quote = fmap(literal(b'\\"'), lambda _v: ord('"'))
_string_char = alt(none_of(b'\\"', "string character"), _escaped_quote)


def _decode_string(raw: bytes) -> String:
    return String(raw.decode("utf-8"))


string = convert(
    fmap(seq(_QUOTE, many(_string_char), _QUOTE), lambda v: bytes(v[1])),
    _decode_string,
    "UTF-8 string",
)


# --- Atoms ---

def _atom_or_bool(token: bytes) -> Expression:
    if token == b"#t":
        return Bool(True)
    if token == b"#f":
        return Bool(False)
    return Atom(token.decode("ascii"))


atom = fmap(
    collect(seq(alt(letter, symbol), many(alt(letter, digit, symbol)))),
    _atom_or_bool,
)


# --- Expressions and lists ---

expression = alt(number, atom, string)

_OPEN = byte(b"(")
_CLOSE = byte(b")")
_DOT = byte(b".")


def _build_list(values: list) -> Expression:
    _, _, items, tail, _, _ = values
    if tail is not None:
        return DottedList(items, tail)
    return List(items)


@lru_cache(maxsize=PARSER_CACHE_SIZE)
def list_parser(max_depth: int = MAX_DEPTH, depth: int = 1) -> Parser:
    """Parser for a parenthesized list nested ``depth`` levels deep."""
    if depth > max_depth:
        def too_deep(data: bytes, pos: int) -> Result:
            if data[pos:pos + 1] == b"(":
                raise DepthExceededError(f"list nesting deeper than {max_depth}")
            return Failure(["'('"])
        return too_deep

    element = datum_parser(max_depth, depth + 1)
    items = fmap(
        optional(seq(element, many(fmap(seq(whitespace, element), lambda v: v[1])))),
        lambda v: [] if v is None else [v[0]] + v[1],
    )
    tail = optional(fmap(seq(whitespace1, _DOT, whitespace1, element), lambda v: v[3]))
    return fmap(seq(_OPEN, whitespace, items, tail, whitespace, _CLOSE), _build_list)


@lru_cache(maxsize=PARSER_CACHE_SIZE)
def datum_parser(max_depth: int = MAX_DEPTH, depth: int = 1) -> Parser:
    """An expression or a list; the element grammar of lists."""
    return alt(expression, lazy(lambda: list_parser(max_depth, depth)))
