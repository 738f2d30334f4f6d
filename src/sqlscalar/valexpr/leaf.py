"""Leaf expressions: literals and column references.
"""
from dataclasses import dataclass
import re

from ..types import Value
from ..lexer import Keyword
from .interface import ValExpr

_PLAIN_IDENTIFIER = re.compile(r'[a-z_][a-z0-9_]*')
_KEYWORDS = frozenset(keyword.value.lower() for keyword in Keyword)

def quote_identifier(name: str) -> str:
    """Return ``name`` as it should appear in SQL text:
    as is if the lexer would read it back unchanged, or double-quoted otherwise.
    """
    if _PLAIN_IDENTIFIER.fullmatch(name) and name not in _KEYWORDS:
        return name
    return '"' + name.replace('"', '""') + '"'

@dataclass(frozen=True)
class Literal(ValExpr):
    value: Value

    def children(self) -> tuple[ValExpr, ...]:
        return ()

    def to_str(self) -> str:
        return self.value.to_str()

    def pstr_label(self) -> str:
        return f'{type(self.value).__name__} {self.value.to_str()}'

@dataclass(frozen=True)
class ColumnRef(ValExpr):
    """A reference to a column of the row being evaluated, optionally qualified by a table alias.
    Resolving it is up to the row context supplied at evaluation time.
    """
    column_name: str
    table_alias: str | None = None

    def children(self) -> tuple[ValExpr, ...]:
        return ()

    def to_str(self) -> str:
        if self.table_alias is None:
            return quote_identifier(self.column_name)
        return f'{quote_identifier(self.table_alias)}.{quote_identifier(self.column_name)}'

    def pstr_label(self) -> str:
        return f'ColumnRef {self.to_str()}'
