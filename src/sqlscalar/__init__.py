"""Scalar expressions for a SQL engine: parsing expression text into a tree,
and evaluating the tree against a row with SQL's three-valued logic and checked arithmetic.

Typical use is to parse once (when building a query plan) and evaluate once per row::

    e = parse('price * quantity > 100 AND name LIKE \'a%\'')
    evaluate(e, DictRowContext({'price': 2.5, 'quantity': 50, 'name': 'apple'}))  # Boolean(v=True)
"""
from .types import ValueException, ValType, Value, Null, Boolean, Integer, Float, String,\
    NULL, TRUE, FALSE, to_value
from .lexer import LexerException, Token, TokenKind, Keyword, Lexer, tokenize
from .parser import ParserException, Parser, parse
from .valexpr import ValExpr, Literal, ColumnRef, UnaryOpValExpr, PostfixOpValExpr, BinaryOpValExpr,\
    PrefixOperator, PostfixOperator, BinaryOperator
from .evaluator import ColumnLookupException, RowContext, DictRowContext, evaluate
from .like import matches
