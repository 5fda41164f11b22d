"""Exceptions raised by the reader entry points."""


class ParseError(SyntaxError):
    pass


class NumberOverflowError(ParseError):
    pass


class DepthExceededError(ParseError):
    pass


class TrailingInputError(ParseError):
    pass
