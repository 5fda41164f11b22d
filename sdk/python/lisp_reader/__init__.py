from .reader import read_expr, read_list, read_datum, read_all
from .types import Atom, List, DottedList, Number, String, Bool, Expression, ReaderOptions
from .errors import ParseError, NumberOverflowError, DepthExceededError, TrailingInputError

__all__ = [
    "read_expr", "read_list", "read_datum", "read_all",
    "Atom", "List", "DottedList", "Number", "String", "Bool", "Expression", "ReaderOptions",
    "ParseError", "NumberOverflowError", "DepthExceededError", "TrailingInputError",
]
