from fractions import Fraction

import pytest

from recipe_parser.parsing import LexError, TokenKind, tokenize


def kinds(text):
    return [t.kind for t in tokenize(text)]


def test_mixed_number_tokens():
    assert kinds("1 1/2 cups") == [
        TokenKind.INTEGER,
        TokenKind.WHITESPACE,
        TokenKind.FRACTION,
        TokenKind.WHITESPACE,
        TokenKind.WORD,
        TokenKind.EOF,
    ]


def test_token_values():
    tokens = tokenize("12 3/4 ½")
    assert tokens[0].value == 12
    assert tokens[2].value == Fraction(3, 4)
    assert tokens[4].value == Fraction(1, 2)


def test_glued_vulgar_fraction():
    tokens = tokenize("1½")
    assert [t.kind for t in tokens[:2]] == [TokenKind.INTEGER, TokenKind.FRACTION]


def test_header_only_at_line_start():
    tokens = tokenize("## Sauce")
    assert tokens[0].kind == TokenKind.HEADER
    assert tokens[0].value == 2

    mid_line = tokenize("a # b")
    assert mid_line[2].kind == TokenKind.PUNCT
    assert mid_line[2].text == "#"


def test_hash_without_space_is_punct():
    tokens = tokenize("#hashtag")
    assert tokens[0].kind == TokenKind.PUNCT
    assert tokens[1].kind == TokenKind.WORD


def test_delimiter_lines():
    assert kinds("---\n")[:2] == [TokenKind.DELIMITER, TokenKind.NEWLINE]
    assert kinds("====  ")[0] == TokenKind.DELIMITER
    assert kinds("***")[0] == TokenKind.DELIMITER
    # A bullet is punctuation, not a delimiter
    assert kinds("- egg")[0] == TokenKind.PUNCT
    assert kinds("--- not alone")[0] == TokenKind.PUNCT


def test_words_keep_apostrophes_and_hyphens():
    tokens = tokenize("don't all-purpose eggs,")
    words = [t.text for t in tokens if t.kind == TokenKind.WORD]
    assert words == ["don't", "all-purpose", "eggs"]
    assert tokens[-2].text == ","


def test_positions_are_one_based():
    tokens = tokenize("ab cd\nef")
    cd = tokens[2]
    ef = tokens[4]
    assert (cd.line, cd.column) == (1, 4)
    assert (ef.line, ef.column) == (2, 1)


def test_crlf_is_normalized():
    tokens = tokenize("a\r\nb\rc")
    assert [t.text for t in tokens if t.kind == TokenKind.WORD] == ["a", "b", "c"]
    assert tokens[-2].line == 3


def test_eof_position():
    tokens = tokenize("ab\n")
    eof = tokens[-1]
    assert eof.kind == TokenKind.EOF
    assert (eof.line, eof.column) == (2, 1)


def test_lossless():
    text = "# Soup\nServes 2–3\n\n- 1½ cups stock (hot), divided\n---\n"
    assert "".join(t.text for t in tokenize(text)) == text


def test_zero_denominator():
    with pytest.raises(LexError) as exc:
        tokenize("ab 3/0 cups")
    assert exc.value.line == 1
    assert exc.value.column == 4


def test_control_character():
    with pytest.raises(LexError) as exc:
        tokenize("salt\n\x00")
    assert exc.value.line == 2
