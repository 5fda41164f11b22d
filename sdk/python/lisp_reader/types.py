from dataclasses import dataclass
from typing import Tuple, Union

from .errors import NumberOverflowError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
MAX_DEPTH = 64


def _escape(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


@dataclass(frozen=True)
class Atom:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class List:
    items: Tuple["Expression", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return "(" + " ".join(str(i) for i in self.items) + ")"


@dataclass(frozen=True)
class DottedList:
    items: Tuple["Expression", ...]
    tail: "Expression"

    def __post_init__(self):
        items = tuple(self.items)
        if not items:
            raise ValueError("dotted list needs at least one item before the tail")
        object.__setattr__(self, "items", items)

    def __str__(self) -> str:
        head = " ".join(str(i) for i in self.items)
        return f"({head} . {self.tail})"


@dataclass(frozen=True)
class Number:
    value: int

    def __post_init__(self):
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise NumberOverflowError(f"integer literal out of 64-bit range: {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class String:
    value: str

    def __str__(self) -> str:
        return _escape(self.value)


@dataclass(frozen=True)
class Bool:
    value: bool

    def __str__(self) -> str:
        return "#t" if self.value else "#f"


Expression = Union[Atom, List, DottedList, Number, String, Bool]


@dataclass
class ReaderOptions:
    max_depth: int = MAX_DEPTH
    require_eof: bool = False

    @classmethod
    def coerce(cls, options: "ReaderOptions | dict | None") -> "ReaderOptions":
        if options is None:
            return cls()
        if isinstance(options, dict):
            return cls(
                max_depth=options.get("max_depth", MAX_DEPTH),
                require_eof=options.get("require_eof", False),
            )
        return options

