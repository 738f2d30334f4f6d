"""The ``valexpr`` package contains classes and utility functions for
handling expressions that evaluate to a single scalar value.
"""
from .interface import ValExpr, PrefixOperator, PostfixOperator, BinaryOperator
from .leaf import Literal, ColumnRef, quote_identifier
from .unary import UnaryOpValExpr, PostfixOpValExpr
from .binary import BinaryOpValExpr
from .util import conjunctive_parts, make_conjunction, in_scope, find_column_refs, is_constant, eval_literal
