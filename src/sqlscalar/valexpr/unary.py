"""Expressions with a single operand: prefix operators (``NOT``, ``+``, ``-``) and
postfix operators (``!`` and the ``IS`` predicates).
"""
from dataclasses import dataclass

from .interface import ValExpr, PrefixOperator, PostfixOperator

@dataclass(frozen=True)
class UnaryOpValExpr(ValExpr):
    """A prefix operator applied to ``operand``.
    """
    op: PrefixOperator
    operand: ValExpr

    def children(self) -> tuple[ValExpr, ...]:
        return (self.operand, )

    def to_str(self) -> str:
        if self.op == PrefixOperator.NOT:
            return f'NOT {self.operand.to_operand_str()}'
        return f'{self.op.value}{self.operand.to_operand_str()}'

    def pstr_label(self) -> str:
        return f'{self.op.value} (prefix)'

@dataclass(frozen=True)
class PostfixOpValExpr(ValExpr):
    """A postfix operator applied to ``operand``.
    """
    op: PostfixOperator
    operand: ValExpr

    def children(self) -> tuple[ValExpr, ...]:
        return (self.operand, )

    def to_str(self) -> str:
        if self.op == PostfixOperator.FACTORIAL:
            return f'{self.operand.to_operand_str()}!'
        return f'{self.operand.to_operand_str()} {self.op.value}'

    def pstr_label(self) -> str:
        return f'{self.op.value} (postfix)'
