"""Scalar values handled by the expression engine.
A value is one of exactly five variants (:class:`.Null`, :class:`.Boolean`, :class:`.Integer`,
:class:`.Float`, and :class:`.String`), all immutable and compared structurally.
"""
from typing import Any, Final
from enum import Enum, auto
from dataclasses import dataclass
import math

from .globals import INTEGER_MIN, INTEGER_MAX

class ValueException(Exception):
    """Exceptions thrown when evaluating values, e.g., type mismatches, overflows, or division by zero.
    """
    pass

class ValType(Enum):
    """Types supported by the expression engine.
    Conveniently, the names are also valid SQL types (except for ``NULL``, which is the type of the ``NULL`` value).
    """
    NULL = auto()
    BOOLEAN = auto()
    INTEGER = auto()
    FLOAT = auto()
    VARCHAR = auto()

    def implicitly_casts_to(self, other: 'ValType') -> bool:
        """Check if a value of this type can be implicitly cast to a value of the ``other`` type.
        The only widening performed by arithmetic and comparisons is ``INTEGER`` to ``FLOAT``.
        """
        if self == other:
            return True
        elif self == ValType.INTEGER and other == ValType.FLOAT:
            return True
        else:
            return False

    def is_numeric(self) -> bool:
        return self in (ValType.INTEGER, ValType.FLOAT)

    def is_comparable_with(self, other: 'ValType') -> bool:
        """Check if non-null values of this type and the ``other`` type can be compared.
        ``BOOLEAN`` only compares with ``BOOLEAN`` and ``VARCHAR`` only with ``VARCHAR``.
        """
        if self == ValType.NULL or other == ValType.NULL:
            return False
        return self.implicitly_casts_to(other) or other.implicitly_casts_to(self)

class Value:
    """Base class of all scalar values.
    ``str()`` gives the canonical display form used in error messages;
    :meth:`.to_str()` gives the SQL literal form, which parses back into an equal value.
    """
    __slots__ = ()

    def valtype(self) -> ValType:
        raise NotImplementedError

    def to_str(self) -> str:
        """Return the SQL literal form of this value.
        """
        return str(self)

    def to_python(self) -> Any:
        """Return the plain Python equivalent of this value (``None`` for ``NULL``).
        """
        raise NotImplementedError

    def is_nan(self) -> bool:
        return False

@dataclass(frozen=True, slots=True)
class Null(Value):
    def valtype(self) -> ValType:
        return ValType.NULL

    def to_python(self) -> Any:
        return None

    def __str__(self) -> str:
        return 'NULL'

@dataclass(frozen=True, slots=True)
class Boolean(Value):
    v: bool

    def valtype(self) -> ValType:
        return ValType.BOOLEAN

    def to_python(self) -> Any:
        return self.v

    def __str__(self) -> str:
        return 'TRUE' if self.v else 'FALSE'

@dataclass(frozen=True, slots=True)
class Integer(Value):
    v: int

    def valtype(self) -> ValType:
        return ValType.INTEGER

    def to_python(self) -> Any:
        return self.v

    def __str__(self) -> str:
        return str(self.v)

@dataclass(frozen=True, slots=True)
class Float(Value):
    v: float

    def valtype(self) -> ValType:
        return ValType.FLOAT

    def to_python(self) -> Any:
        return self.v

    def is_nan(self) -> bool:
        return math.isnan(self.v)

    def __str__(self) -> str:
        if math.isnan(self.v):
            return 'NAN'
        elif math.isinf(self.v):
            return 'INFINITY' if self.v > 0 else '-INFINITY'
        else:
            return repr(self.v)

@dataclass(frozen=True, slots=True)
class String(Value):
    v: str

    def valtype(self) -> ValType:
        return ValType.VARCHAR

    def to_str(self) -> str:
        return "'" + self.v.replace("'", "''") + "'"

    def to_python(self) -> Any:
        return self.v

    def __str__(self) -> str:
        return self.v

NULL: Final = Null()
TRUE: Final = Boolean(True)
FALSE: Final = Boolean(False)

def checked_integer(v: int) -> Integer:
    """Wrap ``v`` into an :class:`.Integer`, failing if it does not fit in 64 bits.
    """
    if not INTEGER_MIN <= v <= INTEGER_MAX:
        raise ValueException('Integer overflow')
    return Integer(v)

def to_value(v: Any) -> Value:
    """Convert the given Python value into a :class:`.Value`.
    ``bool`` is checked before ``int`` since the former is a subclass of the latter.
    """
    match v:
        case Value():
            return v
        case None:
            return NULL
        case bool():
            return Boolean(v)
        case int():
            return checked_integer(v)
        case float():
            return Float(v)
        case str():
            return String(v)
        case _:
            raise ValueException(f'unsupported value {v!r} of type {type(v).__name__}')
