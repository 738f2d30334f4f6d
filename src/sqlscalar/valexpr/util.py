"""This module is the go-to place for useful functions for manipulating expressions,
e.g., by a query planner that embeds them into filters and joins.
"""
from typing import cast, Iterable, Iterator

from ..types import Value
from .interface import ValExpr, BinaryOperator
from .leaf import ColumnRef
from .binary import BinaryOpValExpr

def conjunctive_parts(cond: ValExpr) -> Iterable[ValExpr]:
    """Decompose ``cond`` into a conjunction of parts.
    If ``cond`` isn't an ``AND`` in the first place, ``cond`` itself will be returned.

    TODO: It stops at any node that is not an ``AND``;
    it doesn't push ``NOT`` inward or convert to a conjunctive normal form.
    """
    if isinstance(cond, BinaryOpValExpr) and cond.op == BinaryOperator.AND:
        for c in cond.children():
            yield from conjunctive_parts(c)
    else:
        yield cond
    return

def make_conjunction(conds: list[ValExpr]) -> ValExpr | None:
    """Construct a conjunction of the given conditions.
    If the list is empty, return ``None``.
    """
    if len(conds) == 0:
        return None
    elif len(conds) == 1:
        return conds[0]
    else:
        return BinaryOpValExpr(BinaryOperator.AND, conds[0], cast(ValExpr, make_conjunction(conds[1:])))

def find_column_refs(e: ValExpr) -> Iterator[ColumnRef]:
    """Enumerate all column references inside the given expression, left to right.
    """
    if isinstance(e, ColumnRef):
        yield e
    else:
        for child in e.children():
            yield from find_column_refs(child)
    return

def in_scope(e: ValExpr, table_aliases: list[str]) -> bool:
    """Check if all column references under this expression are qualified by one of the given table aliases.
    Unqualified column references are treated as NOT in scope.
    """
    return all(c.table_alias in table_aliases for c in find_column_refs(e))

def is_constant(e: ValExpr) -> bool:
    """Check if the expression can be evaluated without a row.
    """
    return next(find_column_refs(e), None) is None

def eval_literal(e: ValExpr) -> Value:
    """Assuming that the expression doesn't contain any column reference,
    evaluate it (independent of any row) and return its value.
    """
    from ..evaluator import evaluate # NOTE: imported here to avoid circular import
    return evaluate(e)
