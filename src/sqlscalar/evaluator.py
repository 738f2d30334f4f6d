"""Evaluating an expression tree against a row.

Evaluation is a post-order walk: the children of a node are evaluated before the node combines their values,
so even ``AND`` and ``OR`` evaluate both operands.
The tree is never modified, so a tree parsed once can be evaluated for every row of a scan.
"""
from typing import Any, Final, Mapping
from abc import ABC, abstractmethod

from .types import ValueException, Value, to_value
from .valexpr.interface import ValExpr, PrefixOperator, PostfixOperator, BinaryOperator
from .valexpr.leaf import Literal, ColumnRef
from .valexpr.unary import UnaryOpValExpr, PostfixOpValExpr
from .valexpr.binary import BinaryOpValExpr
from .valexpr import eval as ops

class ColumnLookupException(Exception):
    """Exceptions thrown when a column reference cannot be resolved.
    """
    pass

class RowContext(ABC):
    """The capability to resolve column references to values for one row.
    Implementations are supplied by the caller of :func:`.evaluate`.
    """

    @abstractmethod
    def resolve(self, column: ColumnRef) -> Value:
        """Return the value of ``column`` in the current row, or raise if it cannot be resolved.
        """
        pass

class DictRowContext(RowContext):
    """A row given as a mapping from column names to values.
    Keys are either plain column names or qualified ``alias.column`` names;
    values can be :class:`.Value`s or plain Python values (see :func:`.to_value`).
    A qualified reference falls back to the plain column name if the qualified name is absent.
    """

    def __init__(self, row: Mapping[str, Any]) -> None:
        self.row: Final[dict[str, Value]] = { name: to_value(v) for name, v in row.items() }
        return

    def resolve(self, column: ColumnRef) -> Value:
        if column.table_alias is not None:
            if (v := self.row.get(f'{column.table_alias}.{column.column_name}')) is not None:
                return v
        if (v := self.row.get(column.column_name)) is not None:
            return v
        raise ColumnLookupException(f'unknown column {column.to_str()}')

def evaluate(e: ValExpr, row: RowContext | None = None) -> Value:
    """Evaluate expression ``e`` against ``row``, which may be omitted if ``e`` references no column.
    A type mismatch, overflow, or division by zero raises :class:`.ValueException`,
    and so does a tree nested deeper than the interpreter's recursion limit allows.
    """
    try:
        return _evaluate(e, row)
    except RecursionError as err:
        raise ValueException('expression too deeply nested') from err

def _evaluate(e: ValExpr, row: RowContext | None) -> Value:
    match e:
        case Literal(value):
            return value
        case ColumnRef():
            if row is None:
                raise ColumnLookupException(f'no row to resolve column {e.to_str()}')
            return row.resolve(e)
        case UnaryOpValExpr(op, operand):
            v = _evaluate(operand, row)
            match op:
                case PrefixOperator.NOT:
                    return ops.logical_not(v)
                case PrefixOperator.PLUS:
                    return ops.identity(v)
                case PrefixOperator.MINUS:
                    return ops.negate(v)
        case PostfixOpValExpr(op, operand):
            v = _evaluate(operand, row)
            match op:
                case PostfixOperator.FACTORIAL:
                    return ops.factorial(v)
                case PostfixOperator.IS_NULL:
                    return ops.is_null(v)
                case PostfixOperator.IS_NOT_NULL:
                    return ops.logical_not(ops.is_null(v))
                case PostfixOperator.IS_TRUE:
                    return ops.is_true(v)
                case PostfixOperator.IS_NOT_TRUE:
                    return ops.logical_not(ops.is_true(v))
                case PostfixOperator.IS_FALSE:
                    return ops.is_false(v)
                case PostfixOperator.IS_NOT_FALSE:
                    return ops.logical_not(ops.is_false(v))
        case BinaryOpValExpr(op, left, right):
            l = _evaluate(left, row)
            r = _evaluate(right, row)
            match op:
                case BinaryOperator.OR:
                    return ops.logical_or(l, r)
                case BinaryOperator.AND:
                    return ops.logical_and(l, r)
                case BinaryOperator.EQ:
                    return ops.equal(l, r)
                case BinaryOperator.NE:
                    return ops.not_equal(l, r)
                case BinaryOperator.LIKE:
                    return ops.like(l, r)
                case BinaryOperator.GT:
                    return ops.greater_than(l, r)
                case BinaryOperator.GE:
                    return ops.greater_than_or_equal(l, r)
                case BinaryOperator.LT:
                    return ops.less_than(l, r)
                case BinaryOperator.LE:
                    return ops.less_than_or_equal(l, r)
                case BinaryOperator.ADD:
                    return ops.add(l, r)
                case BinaryOperator.SUB:
                    return ops.subtract(l, r)
                case BinaryOperator.MUL:
                    return ops.multiply(l, r)
                case BinaryOperator.DIV:
                    return ops.divide(l, r)
                case BinaryOperator.MOD:
                    return ops.modulo(l, r)
                case BinaryOperator.POW:
                    return ops.exponentiate(l, r)
    raise TypeError(f'cannot evaluate {type(e).__name__} {e!r}')
