"""Global constants shared across the expression engine.
"""
from typing import Final

INTEGER_MAX: Final[int] = 2**63 - 1
"""Largest value representable by an ``INTEGER``.
"""

INTEGER_MIN: Final[int] = -2**63
"""Smallest value representable by an ``INTEGER``.
NOTE: integer literals are bounded by :data:`.INTEGER_MAX` before any unary minus is applied,
so this value can be computed but never written as a literal.
"""

INTEGER_MAX_DIGITS: Final[int] = len(str(INTEGER_MAX))
"""Number of decimal digits in :data:`.INTEGER_MAX`; longer literals (ignoring leading zeros) are out of range.
"""

LIKE_PATTERN_CACHE_SIZE: Final[int] = 256
"""Number of compiled ``LIKE`` patterns kept around for reuse.
"""

class ANSI:
    """ANSI escape sequences used when pretty-printing.
    """
    EMPH: Final = '\033[1m'
    END: Final = '\033[0m'
