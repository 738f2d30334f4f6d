"""Expressions with two operands.
"""
from dataclasses import dataclass

from .interface import ValExpr, BinaryOperator

@dataclass(frozen=True)
class BinaryOpValExpr(ValExpr):
    op: BinaryOperator
    left: ValExpr
    right: ValExpr

    def children(self) -> tuple[ValExpr, ...]:
        return (self.left, self.right)

    def to_str(self) -> str:
        return f'{self.left.to_operand_str()} {self.op.value} {self.right.to_operand_str()}'

    def pstr_label(self) -> str:
        return self.op.value
