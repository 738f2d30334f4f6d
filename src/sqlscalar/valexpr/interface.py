"""This module defines the abstract expression class and the operator tags used by the expression tree.
Operators are plain enum members rather than classes; see :mod:`.unary` and :mod:`.binary` for the nodes.
"""
from typing import Iterable
from abc import ABC, abstractmethod
from enum import Enum

from ..globals import ANSI

class PrefixOperator(Enum):
    """Operators applied before their operand.
    """
    NOT = 'NOT'
    PLUS = '+'
    MINUS = '-'

class PostfixOperator(Enum):
    """Operators applied after their operand.
    """
    FACTORIAL = '!'
    IS_NULL = 'IS NULL'
    IS_NOT_NULL = 'IS NOT NULL'
    IS_TRUE = 'IS TRUE'
    IS_NOT_TRUE = 'IS NOT TRUE'
    IS_FALSE = 'IS FALSE'
    IS_NOT_FALSE = 'IS NOT FALSE'

class BinaryOperator(Enum):
    """Operators with two operands.
    Members are listed from the loosest-binding to the tightest-binding tier.
    """
    OR = 'OR'
    AND = 'AND'
    EQ = '='
    NE = '!='
    LIKE = 'LIKE'
    GT = '>'
    GE = '>='
    LT = '<'
    LE = '<='
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'
    POW = '^'

    @property
    def precedence(self) -> int:
        """Binding strength of the operator; a larger number binds tighter.
        """
        return _PRECEDENCE[self]

    @property
    def right_associative(self) -> bool:
        return self == BinaryOperator.POW

_PRECEDENCE: dict[BinaryOperator, int] = {
    BinaryOperator.OR: 1,
    BinaryOperator.AND: 2,
    BinaryOperator.EQ: 3, BinaryOperator.NE: 3, BinaryOperator.LIKE: 3,
    BinaryOperator.GT: 4, BinaryOperator.GE: 4, BinaryOperator.LT: 4, BinaryOperator.LE: 4,
    BinaryOperator.ADD: 5, BinaryOperator.SUB: 5,
    BinaryOperator.MUL: 6, BinaryOperator.DIV: 6, BinaryOperator.MOD: 6,
    BinaryOperator.POW: 7,
}

class ValExpr(ABC):
    """An expression that evaluates to a single scalar value.
    Expression trees are immutable: nodes own their children exclusively and are never modified after construction,
    so the same tree can be evaluated repeatedly (and concurrently) against different rows.
    """

    @abstractmethod
    def children(self) -> tuple['ValExpr', ...]:
        """Return the child expressions (empty for leaves).
        """
        pass

    @abstractmethod
    def to_str(self) -> str:
        """Return SQL text for this expression, which parses back into an equal tree.
        """
        pass

    @abstractmethod
    def pstr_label(self) -> str:
        """Return a short description of this node alone, used by :meth:`.pstr`.
        """
        pass

    def to_operand_str(self) -> str:
        """Return :meth:`.to_str` in a form safe to embed as the operand of another operator.
        Anything other than a leaf is parenthesized.
        """
        if len(self.children()) == 0:
            return self.to_str()
        return f'({self.to_str()})'

    def pstr(self, indent: int = 0) -> Iterable[str]:
        """Produce a sequence of lines for pretty-printing the expression tree.
        """
        prefix = '' if indent == 0 else '    ' * (indent-1) + '\\___'
        yield f'{prefix}{ANSI.EMPH}{self.pstr_label()}{ANSI.END}'
        for child in self.children():
            yield from child.pstr(indent+1)
        return

    def __str__(self) -> str:
        return self.to_str()
