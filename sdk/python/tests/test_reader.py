import pytest
from lisp_reader import (
    read_expr, read_list, read_datum, read_all,
    Atom, List, DottedList, Number, String, Bool, ReaderOptions,
    ParseError, NumberOverflowError, DepthExceededError, TrailingInputError,
)


# --- Numbers ---

def test_read_number():
    assert read_expr(b"123") == Number(123)


def test_read_binary_number():
    assert read_expr(b"#b11") == Number(3)


def test_read_octal_number():
    assert read_expr(b"#o321") == Number(209)


def test_read_hex_number():
    assert read_expr(b"#xFF") == Number(255)


def test_read_hex_mixed_case():
    assert read_expr(b"#xfF") == Number(255)
    assert read_expr(b"#xDeadBeef") == Number(0xDEADBEEF)


def test_leading_zeros():
    assert read_expr(b"007") == Number(7)


def test_int64_max():
    assert read_expr(b"9223372036854775807") == Number(2**63 - 1)


def test_decimal_overflow():
    with pytest.raises(NumberOverflowError, match="64-bit"):
        read_expr(b"9223372036854775808")


def test_hex_overflow_is_not_an_atom():
    with pytest.raises(NumberOverflowError):
        read_expr(b"#x8000000000000000")


def test_prefix_without_digits_is_atom():
    assert read_expr(b"#b") == Atom("#b")
    assert read_expr(b"#o9") == Atom("#o9")


def test_binary_stops_at_non_binary_digit():
    assert read_expr(b"#b12") == Number(1)


# --- Strings ---

def test_read_string():
    assert read_expr(b'"123"') == String("123")


def test_read_string_with_quote():
    assert read_expr(b'"1\\"23"') == String('1"23')


def test_read_empty_string():
    assert read_expr(b'""') == String("")


def test_string_keeps_whitespace_and_parens():
    assert read_expr(b'"a (b)\n c"') == String("a (b)\n c")


@pytest.mark.parametrize("src", [b'"a\\\\b"', b'"a\\nb"', b'"\\t"'])
def test_only_quote_is_escapable(src):
    with pytest.raises(ParseError):
        read_expr(src)


def test_unterminated_string():
    with pytest.raises(ParseError, match="expected"):
        read_expr(b'"abc')


def test_string_utf8():
    assert read_expr('"héllo"'.encode("utf-8")) == String("héllo")


def test_string_invalid_utf8():
    with pytest.raises(ParseError, match="UTF-8"):
        read_expr(b'"\xff\xfe"')


# --- Atoms and booleans ---

def test_read_atom():
    assert read_expr(b"symbol") == Atom("symbol")


@pytest.mark.parametrize("name", ["+", "set!", "a->b", "x1", "#foo", "<=?", "~_^"])
def test_atom_characters(name):
    assert read_expr(name.encode()) == Atom(name)


def test_read_bool_true():
    assert read_expr(b"#t") == Bool(True)


def test_read_bool_false():
    assert read_expr(b"#f") == Bool(False)


def test_bool_prefix_is_atom():
    assert read_expr(b"#true") == Atom("#true")
    assert read_expr(b"#t1") == Atom("#t1")


def test_atom_cannot_start_with_digit():
    # the number alternative wins and stops at the first letter
    assert read_expr(b"1abc") == Number(1)


# --- Expression entry point ---

def test_trailing_input_ignored():
    assert read_expr(b"123 456") == Number(123)


def test_trailing_input_rejected_with_require_eof():
    with pytest.raises(TrailingInputError):
        read_expr(b"123abc", ReaderOptions(require_eof=True))


def test_require_eof_from_dict():
    assert read_expr(b"abc", {"require_eof": True}) == Atom("abc")
    with pytest.raises(TrailingInputError):
        read_expr(b"abc ", {"require_eof": True})


def test_expr_does_not_read_lists():
    with pytest.raises(ParseError):
        read_expr(b"(1)")


def test_empty_input():
    with pytest.raises(ParseError, match="expected"):
        read_expr(b"")


def test_accepts_str_and_bytearray():
    assert read_expr("42") == Number(42)
    assert read_expr(bytearray(b"#t")) == Bool(True)
    assert read_expr(memoryview(b"x")) == Atom("x")


def test_rejects_other_input_types():
    with pytest.raises(TypeError):
        read_expr(42)


# --- Lists ---

def test_read_list():
    assert read_list(b"(1 2 3)") == List([Number(1), Number(2), Number(3)])


def test_read_list_strings():
    assert read_list(b'(1 2 "Hello World")') == List(
        [Number(1), Number(2), String("Hello World")]
    )


def test_read_empty_list():
    assert read_list(b"()") == List([])


def test_list_whitespace_kinds():
    assert read_list(b"(a\tb\r\nc  d)") == List([Atom("a"), Atom("b"), Atom("c"), Atom("d")])


def test_list_padding_whitespace():
    assert read_list(b"( 1 2 )") == List([Number(1), Number(2)])
    assert read_list(b"(  )") == List([])


def test_list_elements_need_no_separator_between_strings():
    assert read_list(b'("a""b")') == List([String("a"), String("b")])


def test_list_missing_close_paren():
    with pytest.raises(ParseError, match=r"'\)'"):
        read_list(b"(1 2")


def test_list_missing_open_paren():
    with pytest.raises(ParseError, match=r"'\('"):
        read_list(b"1 2)")


def test_list_bad_element():
    with pytest.raises(ParseError):
        read_list(b"(1 \"open)")


def test_nested_lists():
    assert read_list(b"(1 (2 3) ())") == List(
        [Number(1), List([Number(2), Number(3)]), List([])]
    )


def test_dotted_list():
    assert read_list(b"(1 . 2)") == DottedList((Number(1),), Number(2))


def test_dotted_list_with_list_tail():
    assert read_list(b"(a b . (c))") == DottedList((Atom("a"), Atom("b")), List([Atom("c")]))


@pytest.mark.parametrize("src", [b"( . a)", b"(a . b c)", b"(a .b)", b"(a . )", b"(a.b)"])
def test_malformed_dotted_list(src):
    with pytest.raises(ParseError):
        read_list(src)


def test_depth_limit():
    src = b"(" * 5 + b")" * 5
    assert read_list(src, ReaderOptions(max_depth=5)) is not None
    with pytest.raises(DepthExceededError, match="deeper than 4"):
        read_list(src, ReaderOptions(max_depth=4))


def test_list_trailing_input():
    assert read_list(b"(1) 2") == List([Number(1)])
    with pytest.raises(TrailingInputError):
        read_list(b"(1) 2", ReaderOptions(require_eof=True))


# --- read_datum / read_all ---

def test_read_datum():
    assert read_datum(b"(x)") == List([Atom("x")])
    assert read_datum(b"x") == Atom("x")


def test_read_all():
    assert read_all(b' 1 (a "b")\n#f ') == [
        Number(1),
        List([Atom("a"), String("b")]),
        Bool(False),
    ]


def test_read_all_empty():
    assert read_all(b"  \n") == []


def test_read_all_must_consume_everything():
    with pytest.raises(ParseError):
        read_all(b"(1) )")


def test_nesting_past_interpreter_stack_is_depth_error():
    src = b"(1 " * 300 + b")" * 300
    with pytest.raises(DepthExceededError, match="interpreter stack"):
        read_list(src, ReaderOptions(max_depth=1000))


def test_read_all_nesting_past_interpreter_stack():
    src = b"(" * 2000 + b")" * 2000
    with pytest.raises(ParseError):
        read_all(src, {"max_depth": 5000})
