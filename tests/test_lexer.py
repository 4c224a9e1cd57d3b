import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from arith.arith_lexer import CharacterStream, Lexer, Token, number_value, tokenize


def kinds(source: str) -> list[str]:
    return [tok.kind for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "+ - * / % ^ ( ) , ; ="
    assert kinds(code) == ["+", "-", "*", "/", "%", "^", "(", ")", ",", ";", "=", "EOF"]
    for tok in tokenize(code)[:-1]:
        assert tok.value == tok.kind == tok.text


def test_number_token() -> None:
    tok = tokenize("123")[0]
    assert tok.kind == "number"
    assert tok.value == 123.0
    assert tok.text == "123"


def test_float_token() -> None:
    tok = tokenize("123.456")[0]
    assert tok.kind == "number"
    assert tok.value == 123.456


def test_multiple_dots_form_one_token() -> None:
    tokens = tokenize("1.2.3")
    assert [t.kind for t in tokens] == ["number", "EOF"]
    assert tokens[0].text == "1.2.3"
    assert tokens[0].value == 1.2


@pytest.mark.parametrize(
    "lexeme,expected",
    [("7", 7.0), ("1.", 1.0), ("0.5", 0.5), ("1..2", 1.0), ("3.25.9.1", 3.25)],
)  # type: ignore[misc]
def test_number_value_clamps_to_decimal_prefix(lexeme: str, expected: float) -> None:
    assert number_value(lexeme) == expected


def test_identifier_token() -> None:
    tok = tokenize("my_Var2")[0]
    assert tok.kind == "identifier"
    assert tok.value == "my_Var2"


def test_keywords() -> None:
    assert kinds("var def") == ["var", "def", "EOF"]


def test_keyword_prefix_is_identifier() -> None:
    assert kinds("variable define Var") == ["identifier"] * 3 + ["EOF"]


def test_identifier_then_digits_stays_identifier() -> None:
    assert [t.value for t in tokenize("x1 1x")[:-1]] == ["x1", 1.0, "x"]


def test_unknown_characters_become_operator_tokens() -> None:
    tokens = tokenize("a $ é")
    assert [t.kind for t in tokens] == ["identifier", "$", "é", "EOF"]


def test_leading_dot_is_operator() -> None:
    assert kinds(".5") == [".", "number", "EOF"]


def test_line_and_column_tracking() -> None:
    tokens = tokenize("var x =\n  f(1);")
    positions = [(t.kind, t.line, t.col) for t in tokens]
    assert positions == [
        ("var", 1, 1),
        ("identifier", 1, 5),
        ("=", 1, 7),
        ("identifier", 2, 3),
        ("(", 2, 4),
        ("number", 2, 5),
        (")", 2, 6),
        (";", 2, 7),
        ("EOF", 2, 8),
    ]


def test_eof_positioned_after_trailing_whitespace() -> None:
    eof = tokenize("1 \n")[-1]
    assert (eof.kind, eof.value, eof.text) == ("EOF", "", "")
    assert eof.location == (2, 1)


def test_empty_source() -> None:
    tokens = tokenize("")
    assert tokens == [Token("EOF", "", "", 1, 1)]


def test_lexer_keeps_returning_eof() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token().kind == "identifier"
    assert lexer.next_token().kind == "EOF"
    assert lexer.next_token().kind == "EOF"


def test_character_stream_read_past_end() -> None:
    stream = CharacterStream("")
    with pytest.raises(IndexError):
        stream.next()


def test_token_is_immutable() -> None:
    tok = tokenize("x")[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        tok.value = "y"  # type: ignore[misc]


def test_token_location_absent_without_position() -> None:
    assert Token("number", 1.0).location is None
    assert Token("number", 1.0, "1", 3, 4).location == (3, 4)


def test_token_to_dict() -> None:
    tok = tokenize("  42")[0]
    assert tok.to_dict() == {
        "kind": "number",
        "value": 42.0,
        "text": "42",
        "line": 1,
        "col": 3,
    }


def test_token_describe() -> None:
    tokens = tokenize("1.5 foo ) ")
    assert [t.describe() for t in tokens] == [
        "number 1.5",
        "identifier 'foo'",
        "')'",
        "EOF",
    ]


def _expected_position(source: str, offset: int) -> tuple[int, int]:
    before = source[:offset]
    line = before.count("\n") + 1
    col = offset - (before.rfind("\n") + 1) + 1
    return line, col


@given(st.text(max_size=60))  # type: ignore[misc]
def test_lexemes_account_for_every_non_whitespace_character(source: str) -> None:
    tokens = tokenize(source)
    assert tokens[-1].kind == "EOF"
    assert tokens[-1].value == ""
    assert sum(1 for t in tokens if t.kind == "EOF") == 1
    assert "".join(t.text for t in tokens) == "".join(
        ch for ch in source if not ch.isspace()
    )


@given(st.text(alphabet="ab1.+( \n\t", max_size=40))  # type: ignore[misc]
def test_positions_match_character_offsets(source: str) -> None:
    offset = 0
    for tok in tokenize(source)[:-1]:
        offset = source.index(tok.text, offset)
        assert (tok.line, tok.col) == _expected_position(source, offset)
        offset += len(tok.text)
    assert tokenize(source)[-1].location == _expected_position(source, len(source))
