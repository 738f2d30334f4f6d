"""This module defines the semantics of every operator over :class:`.Value`s.
The evaluator dispatches to the functions here, so all rules about type combinations,
``NULL`` handling, overflow, and IEEE-754 corner cases are kept in one place.
Error messages embed the display form of the operands and are part of the contract.
"""
from typing import Callable
import math

from ..globals import INTEGER_MAX
from ..types import ValueException, Value, Null, Boolean, Integer, Float, String,\
    NULL, TRUE, FALSE, checked_integer
from ..like import matches

def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1

def float_divide(x: float, y: float) -> float:
    """IEEE-754 division: division by zero gives a signed infinity, or NaN for ``0/0`` and ``NaN/0``.
    """
    if y == 0.0:
        if x == 0.0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y

def float_modulo(x: float, y: float) -> float:
    """IEEE-754 remainder truncated toward zero (the sign follows the dividend).
    ``math.fmod`` refuses the cases where the result is NaN (infinite dividend or zero divisor).
    """
    try:
        return math.fmod(x, y)
    except ValueError:
        return math.nan

def float_power(x: float, y: float) -> float:
    """IEEE-754 ``pow``: overflow saturates to infinity, zero to a negative power is infinite,
    and a negative base with a non-integral exponent is NaN.
    """
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0.0 and _is_odd_integer(y) else math.inf
    except ValueError:
        if x == 0.0:
            return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
        return math.nan

def integer_divide(x: int, y: int) -> Integer:
    if y == 0:
        raise ValueException("Can't divide by zero")
    q = abs(x) // abs(y)
    return checked_integer(-q if (x < 0) != (y < 0) else q)

def integer_modulo(x: int, y: int) -> Integer:
    if y == 0:
        raise ValueException("Can't divide by zero")
    r = abs(x) % abs(y)
    return Integer(-r if x < 0 else r)

def integer_power(x: int, y: int) -> Value:
    """Checked integer exponentiation; a negative exponent yields a :class:`.Float` instead.
    """
    if y < 0:
        return Float(float_power(float(x), float(y)))
    if x in (0, 1):
        return Integer(1 if y == 0 else x)
    if x == -1:
        return Integer(-1 if y % 2 == 1 else 1)
    if y >= 64: # |x| >= 2, so the result cannot fit
        raise ValueException('Integer overflow')
    return checked_integer(x ** y)

def _arithmetic(verb: str, a: Value, b: Value,
                integer_op: Callable[[int, int], Value],
                float_op: Callable[[float, float], float]) -> Value:
    """Apply a binary arithmetic operator.
    ``NULL`` on either side wins without any type check;
    an :class:`.Integer` meeting a :class:`.Float` is widened first.
    """
    if isinstance(a, Null) or isinstance(b, Null):
        return NULL
    if not (a.valtype().is_numeric() and b.valtype().is_numeric()):
        raise ValueException(f"Can't {verb} {a} and {b}")
    match a, b:
        case Integer(x), Integer(y):
            return integer_op(x, y)
        case _:
            return Float(float_op(float(a.to_python()), float(b.to_python())))

def add(a: Value, b: Value) -> Value:
    return _arithmetic('add', a, b, lambda x, y: checked_integer(x + y), lambda x, y: x + y)

def subtract(a: Value, b: Value) -> Value:
    return _arithmetic('subtract', a, b, lambda x, y: checked_integer(x - y), lambda x, y: x - y)

def multiply(a: Value, b: Value) -> Value:
    return _arithmetic('multiply', a, b, lambda x, y: checked_integer(x * y), lambda x, y: x * y)

def divide(a: Value, b: Value) -> Value:
    return _arithmetic('divide', a, b, integer_divide, float_divide)

def modulo(a: Value, b: Value) -> Value:
    return _arithmetic('take modulo of', a, b, integer_modulo, float_modulo)

def exponentiate(a: Value, b: Value) -> Value:
    return _arithmetic('exponentiate', a, b, integer_power, float_power)

def identity(a: Value) -> Value:
    """Unary ``+``.
    """
    match a:
        case Null() | Integer() | Float():
            return a
        case _:
            raise ValueException(f"Can't take the positive of {a}")

def negate(a: Value) -> Value:
    """Unary ``-``.
    """
    match a:
        case Null():
            return NULL
        case Integer(x):
            return checked_integer(-x)
        case Float(x):
            return Float(-x)
        case _:
            raise ValueException(f"Can't negate {a}")

def factorial(a: Value) -> Value:
    """Postfix ``!``.
    """
    match a:
        case Null():
            return NULL
        case Integer(x) if x < 0:
            raise ValueException("Can't take factorial of negative number")
        case Integer(x):
            result = 1
            for i in range(2, x + 1):
                result *= i
                if result > INTEGER_MAX:
                    raise ValueException('Integer overflow')
            return Integer(result)
        case _:
            raise ValueException(f"Can't take factorial of {a}")

def logical_and(a: Value, b: Value) -> Value:
    """Three-valued ``AND``: ``FALSE`` dominates, then ``NULL``.
    """
    match a, b:
        case (Boolean(False), Boolean() | Null()) | (Boolean() | Null(), Boolean(False)):
            return FALSE
        case Boolean(True), Boolean(True):
            return TRUE
        case (Boolean() | Null()), (Boolean() | Null()):
            return NULL
        case _:
            raise ValueException(f"Can't and {a} and {b}")

def logical_or(a: Value, b: Value) -> Value:
    """Three-valued ``OR``: ``TRUE`` dominates, then ``NULL``.
    """
    match a, b:
        case (Boolean(True), Boolean() | Null()) | (Boolean() | Null(), Boolean(True)):
            return TRUE
        case Boolean(False), Boolean(False):
            return FALSE
        case (Boolean() | Null()), (Boolean() | Null()):
            return NULL
        case _:
            raise ValueException(f"Can't or {a} and {b}")

def logical_not(a: Value) -> Value:
    match a:
        case Boolean(x):
            return Boolean(not x)
        case Null():
            return NULL
        case _:
            raise ValueException(f"Can't negate {a}")

def compare(a: Value, b: Value) -> int | None:
    """Compare two non-null values, returning a negative number, zero, or a positive number
    (as in ``a - b``), or ``None`` if they are unordered because of a NaN.
    Which types compare is decided by :meth:`.ValType.is_comparable_with`;
    an :class:`.Integer` is widened only when compared with a :class:`.Float`.
    """
    if not a.valtype().is_comparable_with(b.valtype()):
        raise ValueException(f"Can't compare {a} and {b}")
    match a, b:
        case (Boolean(x), Boolean(y)) | (Integer(x), Integer(y)) | (String(x), String(y)):
            return (x > y) - (x < y)
        case _:
            x, y = float(a.to_python()), float(b.to_python())
            if math.isnan(x) or math.isnan(y):
                return None
            return (x > y) - (x < y)

def _comparison(a: Value, b: Value, holds: Callable[[int | None], bool]) -> Value:
    if isinstance(a, Null) or isinstance(b, Null):
        return NULL
    return Boolean(holds(compare(a, b)))

def equal(a: Value, b: Value) -> Value:
    return _comparison(a, b, lambda c: c == 0)

def not_equal(a: Value, b: Value) -> Value:
    return _comparison(a, b, lambda c: c != 0)

def greater_than(a: Value, b: Value) -> Value:
    return _comparison(a, b, lambda c: c is not None and c > 0)

def greater_than_or_equal(a: Value, b: Value) -> Value:
    return _comparison(a, b, lambda c: c is not None and c >= 0)

def less_than(a: Value, b: Value) -> Value:
    return _comparison(a, b, lambda c: c is not None and c < 0)

def less_than_or_equal(a: Value, b: Value) -> Value:
    return _comparison(a, b, lambda c: c is not None and c <= 0)

def like(a: Value, b: Value) -> Value:
    match a, b:
        case (Null(), _) | (_, Null()):
            return NULL
        case String(text), String(pattern):
            return Boolean(matches(text, pattern))
        case _:
            raise ValueException(f"Can't LIKE {a} and {b}")

def is_null(a: Value) -> Value:
    return Boolean(isinstance(a, Null))

def is_true(a: Value) -> Value:
    return Boolean(a == TRUE)

def is_false(a: Value) -> Value:
    return Boolean(a == FALSE)
