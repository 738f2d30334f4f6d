"""Parsing expression text into an expression tree (:class:`.ValExpr`).

The parser uses precedence climbing over the binary operator tiers of :class:`.BinaryOperator`.
Prefix and postfix operators are resolved at the unary level, before an operand ever takes part in
a binary operator: e.g., ``-3!`` is ``(-3)!`` and ``2 ^ NULL IS NULL`` is ``2 ^ (NULL IS NULL)``.
"""
from typing import Final, Iterable
import logging

from .globals import INTEGER_MAX, INTEGER_MAX_DIGITS
from .types import Value, Integer, Float, String, NULL, TRUE, FALSE
from .lexer import Token, TokenKind, Keyword, tokenize
from .valexpr import ValExpr, Literal, ColumnRef, UnaryOpValExpr, PostfixOpValExpr, BinaryOpValExpr,\
    PrefixOperator, PostfixOperator, BinaryOperator

class ParserException(Exception):
    """Exceptions thrown when the tokens do not form a valid expression,
    or when a numeric literal is out of range.
    """
    pass

BINARY_OPERATORS: Final[dict[TokenKind | Keyword, BinaryOperator]] = {
    Keyword.OR: BinaryOperator.OR,
    Keyword.AND: BinaryOperator.AND,
    TokenKind.EQUAL: BinaryOperator.EQ,
    TokenKind.NOT_EQUAL: BinaryOperator.NE,
    Keyword.LIKE: BinaryOperator.LIKE,
    TokenKind.GREATER_THAN: BinaryOperator.GT,
    TokenKind.GREATER_THAN_OR_EQUAL: BinaryOperator.GE,
    TokenKind.LESS_THAN: BinaryOperator.LT,
    TokenKind.LESS_THAN_OR_EQUAL: BinaryOperator.LE,
    TokenKind.PLUS: BinaryOperator.ADD,
    TokenKind.MINUS: BinaryOperator.SUB,
    TokenKind.ASTERISK: BinaryOperator.MUL,
    TokenKind.SLASH: BinaryOperator.DIV,
    TokenKind.PERCENT: BinaryOperator.MOD,
    TokenKind.CARET: BinaryOperator.POW,
}
"""Binary operators by token kind (or keyword, for keyword operators).
"""

PREFIX_OPERATORS: Final[dict[TokenKind | Keyword, PrefixOperator]] = {
    Keyword.NOT: PrefixOperator.NOT,
    TokenKind.PLUS: PrefixOperator.PLUS,
    TokenKind.MINUS: PrefixOperator.MINUS,
}

KEYWORD_CONSTANTS: Final[dict[Keyword, Value]] = {
    Keyword.TRUE: TRUE,
    Keyword.FALSE: FALSE,
    Keyword.NULL: NULL,
    Keyword.INFINITY: Float(float('inf')),
    Keyword.NAN: Float(float('nan')),
}

def integer_literal(digits: str) -> Integer:
    """Convert the digits of an integer literal into an :class:`.Integer`.
    The magnitude must fit in a 64-bit signed integer; a unary minus applied later does not extend the range.
    """
    if len(digits.lstrip('0')) > INTEGER_MAX_DIGITS or (v := int(digits)) > INTEGER_MAX:
        raise ParserException('number too large to fit in target type')
    return Integer(v)

def float_literal(text: str) -> Float:
    """Convert a float literal into a correctly rounded :class:`.Float`.
    Magnitudes too large become infinite and magnitudes too small become zero.
    """
    return Float(float(text))

def _operator_key(token: Token) -> TokenKind | Keyword:
    if token.kind == TokenKind.KEYWORD:
        assert token.value is not None and not isinstance(token.value, str)
        return token.value
    return token.kind

class Parser:
    """Parses a finite token sequence, such as the result of :func:`.tokenize`, into a :class:`.ValExpr`.
    A parser is good for one call to :meth:`.parse`.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens: Final = list(tokens)
        if len(self.tokens) == 0 or self.tokens[-1].kind != TokenKind.END:
            end = self.tokens[-1].end if len(self.tokens) > 0 else 0
            self.tokens.append(Token(TokenKind.END, None, end, end))
        self.pos = 0
        return

    def parse(self) -> ValExpr:
        """Parse the entire token sequence as one expression.
        Nesting deeper than the interpreter's recursion limit allows is a :class:`.ParserException`.
        """
        try:
            e = self._parse_expression(0)
        except RecursionError as err:
            raise ParserException('expression too deeply nested') from err
        self._expect(TokenKind.END)
        return e

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _next(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != TokenKind.END:
            self.pos += 1
        return token

    def _expect(self, kind: TokenKind) -> Token:
        token = self._peek()
        if token.kind != kind:
            raise ParserException(f'Expected token {kind.value}, found {token}')
        return self._next()

    def _expect_keyword(self, *keywords: Keyword) -> Keyword:
        token = self._peek()
        for keyword in keywords:
            if token.is_keyword(keyword):
                self._next()
                return keyword
        expected = ' or '.join(keyword.value for keyword in keywords)
        raise ParserException(f'Expected token {expected}, found {token}')

    def _parse_expression(self, min_precedence: int) -> ValExpr:
        """Parse an expression whose binary operators all bind at least as tightly as ``min_precedence``.
        """
        e = self._parse_unary()
        while (op := BINARY_OPERATORS.get(_operator_key(self._peek()))) is not None:
            if op.precedence < min_precedence:
                break
            self._next()
            right = self._parse_expression(op.precedence if op.right_associative else op.precedence + 1)
            e = BinaryOpValExpr(op, e, right)
        return e

    def _parse_unary(self) -> ValExpr:
        """Parse prefix operators, a primary expression, and postfix operators.
        Prefix operators apply from the innermost (closest to the primary) outward,
        and postfix operators then apply, left to right, to the prefixed result.
        """
        prefixes: list[PrefixOperator] = list()
        while (prefix := PREFIX_OPERATORS.get(_operator_key(self._peek()))) is not None:
            prefixes.append(prefix)
            self._next()
        e = self._parse_primary()
        for prefix in reversed(prefixes):
            e = UnaryOpValExpr(prefix, e)
        while (postfix := self._parse_postfix()) is not None:
            e = PostfixOpValExpr(postfix, e)
        return e

    def _parse_postfix(self) -> PostfixOperator | None:
        token = self._peek()
        if token.kind == TokenKind.EXCLAMATION:
            self._next()
            return PostfixOperator.FACTORIAL
        if not token.is_keyword(Keyword.IS):
            return None
        self._next()
        negated = self._peek().is_keyword(Keyword.NOT)
        if negated:
            self._next()
        match self._expect_keyword(Keyword.NULL, Keyword.TRUE, Keyword.FALSE):
            case Keyword.NULL:
                return PostfixOperator.IS_NOT_NULL if negated else PostfixOperator.IS_NULL
            case Keyword.TRUE:
                return PostfixOperator.IS_NOT_TRUE if negated else PostfixOperator.IS_TRUE
            case _:
                return PostfixOperator.IS_NOT_FALSE if negated else PostfixOperator.IS_FALSE

    def _parse_primary(self) -> ValExpr:
        token = self._next()
        match token.kind:
            case TokenKind.INTEGER:
                return Literal(integer_literal(str(token.value)))
            case TokenKind.FLOAT:
                return Literal(float_literal(str(token.value)))
            case TokenKind.STRING:
                return Literal(String(str(token.value)))
            case TokenKind.KEYWORD if token.value in KEYWORD_CONSTANTS:
                assert isinstance(token.value, Keyword)
                return Literal(KEYWORD_CONSTANTS[token.value])
            case TokenKind.IDENTIFIER:
                if self._peek().kind == TokenKind.PERIOD:
                    self._next()
                    column = self._expect(TokenKind.IDENTIFIER)
                    return ColumnRef(str(column.value), str(token.value))
                return ColumnRef(str(token.value))
            case TokenKind.OPEN_PAREN:
                e = self._parse_expression(0)
                self._expect(TokenKind.CLOSE_PAREN)
                return e
            case _:
                raise ParserException(f'Expected expression, found {token}')

def parse(expr_str: str) -> ValExpr:
    """Tokenize and parse the given expression text.
    Malformed text raises :class:`.LexerException`; a grammar violation raises :class:`.ParserException`.
    """
    e = Parser(tokenize(expr_str)).parse()
    logging.debug('parsed expression: %s', e)
    return e
