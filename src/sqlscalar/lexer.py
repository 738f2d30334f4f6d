"""Lexical analysis: converting expression text into a sequence of :class:`.Token`s.
"""
from typing import Final, Iterator
from enum import Enum
from dataclasses import dataclass

class LexerException(Exception):
    """Exceptions thrown for malformed input text, such as an unknown character or an unterminated literal.
    The offending position (a character offset into the input) is available as ``position``.
    """

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f'{message} at position {position}')
        self.position: Final = position
        return

class Keyword(Enum):
    """Reserved words, matched case-insensitively; they can never be used as plain identifiers.
    """
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    NULL = 'NULL'
    INFINITY = 'INFINITY'
    NAN = 'NAN'
    AND = 'AND'
    OR = 'OR'
    NOT = 'NOT'
    IS = 'IS'
    LIKE = 'LIKE'

class TokenKind(Enum):
    INTEGER = 'integer literal'
    FLOAT = 'float literal'
    STRING = 'string literal'
    IDENTIFIER = 'identifier'
    KEYWORD = 'keyword'
    PERIOD = '.'
    PLUS = '+'
    MINUS = '-'
    ASTERISK = '*'
    SLASH = '/'
    PERCENT = '%'
    CARET = '^'
    EXCLAMATION = '!'
    EQUAL = '='
    NOT_EQUAL = '!='
    GREATER_THAN = '>'
    GREATER_THAN_OR_EQUAL = '>='
    LESS_THAN = '<'
    LESS_THAN_OR_EQUAL = '<='
    OPEN_PAREN = '('
    CLOSE_PAREN = ')'
    END = 'end of input'

OPERATORS: Final[dict[str, TokenKind]] = {
    kind.value: kind for kind in TokenKind if kind not in (
        TokenKind.INTEGER, TokenKind.FLOAT, TokenKind.STRING, TokenKind.IDENTIFIER, TokenKind.KEYWORD, TokenKind.END)
}
"""Operators and punctuation by their source text.
"""

OPERATOR_MAX_LENGTH: Final = max(len(s) for s in OPERATORS)

@dataclass(frozen=True)
class Token:
    """A lexical unit and its source span ``[start, end)``.
    The payload ``value`` depends on ``kind``:
    the source digits of a number, the unescaped contents of a string, the name of an identifier,
    the :class:`.Keyword` of a keyword, and ``None`` for operators, punctuation, and the end of input.
    """
    kind: TokenKind
    value: str | Keyword | None
    start: int
    end: int

    def __str__(self) -> str:
        match self.kind:
            case TokenKind.INTEGER | TokenKind.FLOAT | TokenKind.IDENTIFIER:
                return str(self.value)
            case TokenKind.STRING:
                return "'" + str(self.value).replace("'", "''") + "'"
            case TokenKind.KEYWORD:
                assert isinstance(self.value, Keyword)
                return self.value.value
            case _:
                return str(self.kind.value)

    def is_keyword(self, keyword: Keyword) -> bool:
        return self.kind == TokenKind.KEYWORD and self.value == keyword

DIGITS: Final = frozenset('0123456789')

class Lexer:
    """Scans ``text`` into tokens, lazily.
    Iterating over a lexer scans from the beginning every time, ending with a :attr:`.TokenKind.END` token.
    """

    def __init__(self, text: str) -> None:
        self.text: Final = text
        return

    def __iter__(self) -> Iterator[Token]:
        text = self.text
        pos = 0
        while True:
            while pos < len(text) and text[pos].isspace():
                pos += 1
            if pos >= len(text):
                yield Token(TokenKind.END, None, pos, pos)
                return
            c = text[pos]
            if c in DIGITS:
                token = self._scan_number(pos)
            elif c == "'":
                token = self._scan_quoted(pos, "'", TokenKind.STRING)
            elif c == '"':
                token = self._scan_quoted(pos, '"', TokenKind.IDENTIFIER)
            elif (c.isascii() and c.isalpha()) or c == '_':
                token = self._scan_word(pos)
            else:
                token = self._scan_operator(pos)
            yield token
            pos = token.end

    def _scan_digits(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos] in DIGITS:
            pos += 1
        return pos

    def _scan_number(self, start: int) -> Token:
        """Scan digits, an optional fraction (possibly empty), and an optional exponent.
        A fraction or an exponent makes it a float literal.
        """
        text = self.text
        pos = self._scan_digits(start)
        kind = TokenKind.INTEGER
        if pos < len(text) and text[pos] == '.':
            pos = self._scan_digits(pos + 1)
            kind = TokenKind.FLOAT
        if pos < len(text) and text[pos] in 'eE':
            pos += 1
            if pos < len(text) and text[pos] in '+-':
                pos += 1
            if pos >= len(text) or text[pos] not in DIGITS:
                raise LexerException('malformed number: missing exponent digits', pos)
            pos = self._scan_digits(pos)
            kind = TokenKind.FLOAT
        return Token(kind, text[start:pos], start, pos)

    def _scan_quoted(self, start: int, quote: str, kind: TokenKind) -> Token:
        """Scan a literal enclosed in ``quote``, where a doubled ``quote`` stands for the character itself.
        No other escape sequences exist.
        """
        text = self.text
        parts: list[str] = list()
        pos = start + 1
        while True:
            end = text.find(quote, pos)
            if end < 0:
                what = 'string literal' if kind == TokenKind.STRING else 'quoted identifier'
                raise LexerException(f'unterminated {what}', start)
            parts.append(text[pos:end])
            if end + 1 < len(text) and text[end+1] == quote:
                parts.append(quote)
                pos = end + 2
            else:
                return Token(kind, ''.join(parts), start, end + 1)

    def _scan_word(self, start: int) -> Token:
        """Scan a keyword or an unquoted identifier (which is case-folded to lower case).
        """
        text = self.text
        pos = start + 1
        while pos < len(text) and ((text[pos].isascii() and text[pos].isalnum()) or text[pos] == '_'):
            pos += 1
        word = text[start:pos]
        if (upper := word.upper()) in Keyword.__members__:
            return Token(TokenKind.KEYWORD, Keyword[upper], start, pos)
        return Token(TokenKind.IDENTIFIER, word.lower(), start, pos)

    def _scan_operator(self, start: int) -> Token:
        for length in range(OPERATOR_MAX_LENGTH, 0, -1):
            if (kind := OPERATORS.get(self.text[start:start+length])) is not None:
                return Token(kind, None, start, start + length)
        raise LexerException(f'unexpected character {self.text[start]!r}', start)

def tokenize(text: str) -> list[Token]:
    """Scan all of ``text`` into a list of tokens ending with a :attr:`.TokenKind.END` token.
    """
    return list(Lexer(text))
