import pytest

from sqlscalar import Token, TokenKind, Keyword, Lexer, LexerException, tokenize

def kinds(text: str) -> list[TokenKind]:
    return [token.kind for token in tokenize(text)]

def test_empty_input():
    assert tokenize('') == [Token(TokenKind.END, None, 0, 0)]
    assert tokenize('  \n\t ') == [Token(TokenKind.END, None, 5, 5)]

def test_numbers():
    assert tokenize('3 3.14 3. 1e5 2.5E-3 07') == [
        Token(TokenKind.INTEGER, '3', 0, 1),
        Token(TokenKind.FLOAT, '3.14', 2, 6),
        Token(TokenKind.FLOAT, '3.', 7, 9),
        Token(TokenKind.FLOAT, '1e5', 10, 13),
        Token(TokenKind.FLOAT, '2.5E-3', 14, 20),
        Token(TokenKind.INTEGER, '07', 21, 23),
        Token(TokenKind.END, None, 23, 23),
    ]

@pytest.mark.parametrize('text, position', [('1e', 2), ('1e+', 3), ('2.5Ex', 4)])
def test_malformed_exponent(text: str, position: int):
    with pytest.raises(LexerException) as excinfo:
        tokenize(text)
    assert excinfo.value.position == position
    assert str(excinfo.value).endswith(f'at position {position}')

def test_strings():
    assert tokenize("'it''s' ''") == [
        Token(TokenKind.STRING, "it's", 0, 7),
        Token(TokenKind.STRING, '', 8, 10),
        Token(TokenKind.END, None, 10, 10),
    ]
    assert tokenize("'a\\nb'")[0].value == 'a\\nb' # no backslash escapes
    assert tokenize("'line\nbreak'")[0].value == 'line\nbreak'

def test_unterminated_string():
    with pytest.raises(LexerException) as excinfo:
        tokenize("1 + 'abc")
    assert excinfo.value.position == 4
    with pytest.raises(LexerException):
        tokenize("'abc''")

def test_keywords_and_identifiers():
    tokens = tokenize('tRuE and Price _x1 "Mixed ""Case""" nullable')
    assert tokens[0] == Token(TokenKind.KEYWORD, Keyword.TRUE, 0, 4)
    assert tokens[1] == Token(TokenKind.KEYWORD, Keyword.AND, 5, 8)
    assert tokens[2] == Token(TokenKind.IDENTIFIER, 'price', 9, 14)
    assert tokens[3] == Token(TokenKind.IDENTIFIER, '_x1', 15, 18)
    assert tokens[4].kind == TokenKind.IDENTIFIER and tokens[4].value == 'Mixed "Case"'
    assert tokens[5].kind == TokenKind.IDENTIFIER and tokens[5].value == 'nullable'
    assert tokens[4].is_keyword(Keyword.TRUE) is False and tokens[0].is_keyword(Keyword.TRUE)

def test_operators_longest_match():
    assert kinds('!= ! >= > <= < = ^%*/+-().') == [
        TokenKind.NOT_EQUAL, TokenKind.EXCLAMATION, TokenKind.GREATER_THAN_OR_EQUAL, TokenKind.GREATER_THAN,
        TokenKind.LESS_THAN_OR_EQUAL, TokenKind.LESS_THAN, TokenKind.EQUAL, TokenKind.CARET, TokenKind.PERCENT,
        TokenKind.ASTERISK, TokenKind.SLASH, TokenKind.PLUS, TokenKind.MINUS, TokenKind.OPEN_PAREN,
        TokenKind.CLOSE_PAREN, TokenKind.PERIOD, TokenKind.END,
    ]
    assert kinds('3!=3') == [TokenKind.INTEGER, TokenKind.NOT_EQUAL, TokenKind.INTEGER, TokenKind.END]
    assert kinds('3!!') == [TokenKind.INTEGER, TokenKind.EXCLAMATION, TokenKind.EXCLAMATION, TokenKind.END]

def test_qualified_column():
    assert kinds('t.x') == [TokenKind.IDENTIFIER, TokenKind.PERIOD, TokenKind.IDENTIFIER, TokenKind.END]

@pytest.mark.parametrize('text, position', [('1 # 2', 2), ('a & b', 2), ('1 ; 2', 2), ('@', 0)])
def test_unexpected_character(text: str, position: int):
    with pytest.raises(LexerException) as excinfo:
        tokenize(text)
    assert excinfo.value.position == position

def test_lexer_is_restartable():
    lexer = Lexer('a + 1')
    assert list(lexer) == list(lexer)
    assert [str(token) for token in lexer] == ['a', '+', '1', 'end of input']

def test_token_str():
    assert [str(token) for token in tokenize("'it''s' null 3.5 >=")] == ["'it''s'", 'NULL', '3.5', '>=', 'end of input']
