"""Top-level read API: bytes in, Expression out or ParseError."""

import logging
from typing import Any, Optional

from .combinators import Parser, Result, failed
from .errors import DepthExceededError, ParseError, TrailingInputError
from .grammar import datum_parser, expression, list_parser, whitespace
from .types import DottedList, Expression, List, ReaderOptions

logger = logging.getLogger(__name__)


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes or str, got {type(data).__name__}")


def _apply(parser: Parser, buf: bytes, pos: int) -> Result:
    try:
        return parser(buf, pos)
    except RecursionError as e:
        # each nesting level costs several interpreter frames
        logger.debug("interpreter stack exhausted at byte %d", pos)
        raise DepthExceededError("list nesting too deep for the interpreter stack") from e


def _run(parser: Parser, what: str, data: Any, options: Any) -> Expression:
    opts = ReaderOptions.coerce(options)
    buf = _as_bytes(data)
    logger.debug("reading %s from %d bytes", what, len(buf))

    result = _apply(parser, buf, 0)
    if failed(result):
        logger.debug("failed to read %s: expected %s", what, result.describe())
        raise ParseError(f"expected {result.describe()}")

    end, value = result
    if opts.require_eof and end != len(buf):
        logger.debug("%d trailing bytes after %s", len(buf) - end, what)
        raise TrailingInputError(f"unexpected trailing input after {what}")
    return value


def read_expr(data: Any, options: Optional[Any] = None) -> Expression:
    """Read one number, atom, boolean or string from the start of data.

    Args:
        data: bytes-like input, or str (encoded as UTF-8)
        options: ReaderOptions or a dict with max_depth / require_eof

    Trailing input after the expression is ignored unless require_eof is set.
    """
    return _run(expression, "expression", data, options)


def read_list(data: Any, options: Optional[Any] = None) -> "List | DottedList":
    """Read one parenthesized list from the start of data."""
    opts = ReaderOptions.coerce(options)
    return _run(list_parser(opts.max_depth), "list", data, opts)


def read_datum(data: Any, options: Optional[Any] = None) -> Expression:
    """Read an expression or a list from the start of data."""
    opts = ReaderOptions.coerce(options)
    return _run(datum_parser(opts.max_depth), "datum", data, opts)


def read_all(data: Any, options: Optional[Any] = None) -> list[Expression]:
    """Read every whitespace-separated datum in data; all input must be consumed."""
    opts = ReaderOptions.coerce(options)
    buf = _as_bytes(data)
    element = datum_parser(opts.max_depth)
    logger.debug("reading all data from %d bytes", len(buf))

    out: list[Expression] = []
    pos, _ = whitespace(buf, 0)
    while pos < len(buf):
        result = _apply(element, buf, pos)
        if failed(result):
            logger.debug("failed to read datum %d: expected %s", len(out), result.describe())
            raise ParseError(f"expected {result.describe()}")
        pos, value = result
        out.append(value)
        # same separator rule as list elements: zero or more whitespace
        pos, _ = whitespace(buf, pos)
    logger.debug("read %d data", len(out))
    return out
