"""Bridge from sqlglot, which the statement layer uses to parse SQL, to our expression trees.
A planner can parse a whole statement with sqlglot and hand its expressions (e.g., the ``WHERE`` condition)
to :func:`.from_sqlglot` to obtain a :class:`.ValExpr` with the evaluation semantics of this package.

The tree keeps the shape sqlglot gives it, i.e., PostgreSQL's grammar rather than that of :func:`.parse`:
``^`` is left-associative (``2 ^ 3 ^ 2`` is 64) and ``NOT`` binds looser than comparisons
(``NOT a = b`` is ``NOT (a = b)``).
"""
from typing import Final
import logging

import sqlglot
from sqlglot import exp

from .types import Float, String, Boolean, NULL
from .parser import ParserException, integer_literal, float_literal
from .valexpr import ValExpr, Literal, ColumnRef, UnaryOpValExpr, PostfixOpValExpr, BinaryOpValExpr,\
    PrefixOperator, PostfixOperator, BinaryOperator

SQL_DIALECT = sqlglot.Dialects.POSTGRES

class DialectException(Exception):
    """Exceptions thrown when sqlglot cannot parse the input,
    or when its expression has no counterpart in this package.
    """
    pass

BINARY_EXPRESSIONS: Final[dict[type[exp.Expression], BinaryOperator]] = {
    exp.Or: BinaryOperator.OR,
    exp.And: BinaryOperator.AND,
    exp.EQ: BinaryOperator.EQ,
    exp.NEQ: BinaryOperator.NE,
    exp.Like: BinaryOperator.LIKE,
    exp.GT: BinaryOperator.GT,
    exp.GTE: BinaryOperator.GE,
    exp.LT: BinaryOperator.LT,
    exp.LTE: BinaryOperator.LE,
    exp.Add: BinaryOperator.ADD,
    exp.Sub: BinaryOperator.SUB,
    exp.Mul: BinaryOperator.MUL,
    exp.Div: BinaryOperator.DIV,
    exp.Mod: BinaryOperator.MOD,
    exp.Pow: BinaryOperator.POW,
}
"""Binary sqlglot expression classes and their operators.
Lookup is by exact class, so that, e.g., ``ILIKE`` is not mistaken for ``LIKE``.
"""

FLOAT_CONSTANTS: Final[dict[str, Float]] = {
    'INFINITY': Float(float('inf')),
    'NAN': Float(float('nan')),
}
"""Bare names that sqlglot reads as columns but that we treat as float constants.
"""

def parse_sql(expr_str: str) -> exp.Expression:
    """Parse an expression with sqlglot.
    """
    try:
        return sqlglot.parse_one(expr_str, dialect=SQL_DIALECT)
    except sqlglot.ParseError as e:
        raise DialectException('syntax error') from e

def _identifier_name(identifier: exp.Expression) -> str:
    # unquoted identifiers are case-insensitive, as with our own lexer
    if isinstance(identifier, exp.Identifier) and identifier.quoted:
        return identifier.name
    return identifier.name.lower()

NEGATED_IS: Final[dict[PostfixOperator, PostfixOperator]] = {
    PostfixOperator.IS_NULL: PostfixOperator.IS_NOT_NULL,
    PostfixOperator.IS_TRUE: PostfixOperator.IS_NOT_TRUE,
    PostfixOperator.IS_FALSE: PostfixOperator.IS_NOT_FALSE,
}

def _is_predicate(e: exp.Is, negated: bool) -> PostfixOpValExpr:
    """Convert ``e`` into an ``IS`` predicate, negated if exactly one of ``negated``
    and the ``negate`` flag sqlglot sets on ``IS NOT`` holds.
    """
    target = e.expression
    if isinstance(target, exp.Null):
        op = PostfixOperator.IS_NULL
    elif isinstance(target, exp.Boolean):
        op = PostfixOperator.IS_TRUE if target.this else PostfixOperator.IS_FALSE
    else:
        raise DialectException(f'unsupported IS predicate: {e.sql(dialect=SQL_DIALECT)}')
    if negated != bool(e.args.get('negate')):
        op = NEGATED_IS[op]
    return PostfixOpValExpr(op, _convert(e.this))

def _convert(e: exp.Expression) -> ValExpr:
    if (op := BINARY_EXPRESSIONS.get(type(e))) is not None:
        return BinaryOpValExpr(op, _convert(e.this), _convert(e.expression))
    match e:
        case exp.Paren():
            return _convert(e.this)
        case exp.Literal() if e.is_string:
            return Literal(String(e.this))
        case exp.Literal():
            text: str = e.this
            negative = text.startswith('-')
            digits = text.lstrip('-')
            try:
                if any(c in digits for c in '.eE'):
                    literal = Literal(float_literal(digits))
                else:
                    literal = Literal(integer_literal(digits))
            except (ParserException, ValueError) as err:
                raise DialectException(f'invalid number {text}') from err
            return UnaryOpValExpr(PrefixOperator.MINUS, literal) if negative else literal
        case exp.Boolean():
            return Literal(Boolean(bool(e.this)))
        case exp.Null():
            return Literal(NULL)
        case exp.Column():
            name = _identifier_name(e.this)
            table = e.args.get('table')
            if table is None and (constant := FLOAT_CONSTANTS.get(name.upper())) is not None:
                return Literal(constant)
            return ColumnRef(name, None if table is None else _identifier_name(table))
        case exp.Neg():
            return UnaryOpValExpr(PrefixOperator.MINUS, _convert(e.this))
        case exp.Not() if isinstance(e.this, exp.Is):
            return _is_predicate(e.this, True)
        case exp.Not():
            return UnaryOpValExpr(PrefixOperator.NOT, _convert(e.this))
        case exp.Is():
            return _is_predicate(e, False)
        case _:
            raise DialectException(f'unsupported expression: {e.sql(dialect=SQL_DIALECT)}')

def from_sqlglot(e: exp.Expression) -> ValExpr:
    """Convert a sqlglot expression into a :class:`.ValExpr`.
    """
    converted = _convert(e)
    logging.debug('converted sqlglot %s into %s', type(e).__name__, converted)
    return converted
