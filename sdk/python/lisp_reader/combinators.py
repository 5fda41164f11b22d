"""Byte-level parser combinators.

A parser is a callable ``(data, pos) -> (new_pos, value)`` that returns a
``Failure`` instead of raising when the input does not match. The cursor is
a plain int, so a failed branch never moves the caller's position.
"""

from typing import Any, Callable, Iterable, Tuple, Union


class Failure:
    __slots__ = ("expected",)

    def __init__(self, expected: Iterable[str]):
        self.expected = tuple(expected)

    def describe(self) -> str:
        seen: list[str] = []
        for e in self.expected:
            if e not in seen:
                seen.append(e)
        return " or ".join(seen) if seen else "nothing"

    def __repr__(self) -> str:
        return f"Failure({self.describe()!r})"


Result = Union[Tuple[int, Any], Failure]
Parser = Callable[[bytes, int], Result]


def failed(result: Result) -> bool:
    return isinstance(result, Failure)


def satisfy(pred: Callable[[int], bool], expected: str) -> Parser:
    """Match a single byte accepted by pred; the value is the byte as an int."""

    def parse(data: bytes, pos: int) -> Result:
        if pos < len(data) and pred(data[pos]):
            return pos + 1, data[pos]
        return Failure([expected])

    return parse


def one_of(chars: bytes, expected: str = "") -> Parser:
    allowed = frozenset(chars)
    return satisfy(allowed.__contains__, expected or f"one of {chars.decode()!r}")


def none_of(chars: bytes, expected: str = "") -> Parser:
    banned = frozenset(chars)
    return satisfy(lambda c: c not in banned, expected or f"none of {chars.decode()!r}")


def byte(b: bytes) -> Parser:
    return one_of(b, repr(b.decode()))


def literal(text: bytes) -> Parser:
    n = len(text)

    def parse(data: bytes, pos: int) -> Result:
        if data[pos:pos + n] == text:
            return pos + n, text
        return Failure([repr(text.decode())])

    return parse


def seq(*parsers: Parser) -> Parser:
    """Run parsers one after another; fail as a whole if any fails."""

    def parse(data: bytes, pos: int) -> Result:
        values = []
        for p in parsers:
            r = p(data, pos)
            if failed(r):
                return r
            pos, value = r
            values.append(value)
        return pos, values

    return parse


def alt(*parsers: Parser) -> Parser:
    """Ordered alternation: the first parser to succeed wins."""

    def parse(data: bytes, pos: int) -> Result:
        expected: list[str] = []
        for p in parsers:
            r = p(data, pos)
            if not failed(r):
                return r
            expected.extend(r.expected)
        return Failure(expected)

    return parse


def many(p: Parser, minimum: int = 0) -> Parser:
    def parse(data: bytes, pos: int) -> Result:
        values = []
        while True:
            r = p(data, pos)
            if failed(r):
                if len(values) < minimum:
                    return r
                return pos, values
            new_pos, value = r
            values.append(value)
            if new_pos == pos:
                # zero-width match would loop forever
                return pos, values
            pos = new_pos

    return parse


def optional(p: Parser, default: Any = None) -> Parser:
    def parse(data: bytes, pos: int) -> Result:
        r = p(data, pos)
        if failed(r):
            return pos, default
        return r

    return parse


def collect(p: Parser) -> Parser:
    """Replace p's value with the bytes it consumed."""

    def parse(data: bytes, pos: int) -> Result:
        r = p(data, pos)
        if failed(r):
            return r
        end, _ = r
        return end, data[pos:end]

    return parse


def fmap(p: Parser, fn: Callable[[Any], Any]) -> Parser:
    def parse(data: bytes, pos: int) -> Result:
        r = p(data, pos)
        if failed(r):
            return r
        end, value = r
        return end, fn(value)

    return parse


def convert(p: Parser, fn: Callable[[Any], Any], expected: str) -> Parser:
    """Like fmap, but a ValueError from fn turns into a Failure."""

    def parse(data: bytes, pos: int) -> Result:
        r = p(data, pos)
        if failed(r):
            return r
        end, value = r
        try:
            return end, fn(value)
        except ValueError:
            return Failure([expected])

    return parse


def skip(p: Parser) -> Parser:
    return fmap(p, lambda _v: None)


def lazy(factory: Callable[[], Parser]) -> Parser:
    """Defer building a parser until first use, for recursive grammars."""
    cache: list[Parser] = []

    def parse(data: bytes, pos: int) -> Result:
        if not cache:
            cache.append(factory())
        return cache[0](data, pos)

    return parse
