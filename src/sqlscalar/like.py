"""Pattern matching for the SQL ``LIKE`` operator.

In a pattern, ``%`` matches any (possibly empty) run of characters and ``_`` matches exactly one character.
A doubled wildcard (``%%`` or ``__``) matches one literal ``%`` or ``_``.
Every other character matches itself, case-sensitively.
"""
from typing import TypeAlias
from enum import Enum
from functools import lru_cache
import logging

from .globals import LIKE_PATTERN_CACHE_SIZE

class Wildcard(Enum):
    ANY = '%'
    ONE = '_'

PatternElement: TypeAlias = Wildcard | str
"""A compiled pattern element: a wildcard, or a single character to be matched literally.
"""

@lru_cache(maxsize=LIKE_PATTERN_CACHE_SIZE)
def compile_pattern(pattern: str) -> tuple[PatternElement, ...]:
    """Compile ``pattern`` into a sequence of elements.
    Doubled wildcards are paired up left to right, and consecutive ``%`` wildcards collapse into one.
    """
    elements: list[PatternElement] = list()
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c in ('%', '_'):
            if i + 1 < len(pattern) and pattern[i+1] == c:
                elements.append(c) # escaped wildcard
                i += 2
                continue
            wildcard = Wildcard(c)
            if wildcard == Wildcard.ANY and len(elements) > 0 and elements[-1] == Wildcard.ANY:
                i += 1
                continue
            elements.append(wildcard)
        else:
            elements.append(c)
        i += 1
    logging.debug('compiled LIKE pattern %r into %d elements', pattern, len(elements))
    return tuple(elements)

def matches(text: str, pattern: str) -> bool:
    """Check if ``text`` matches ``pattern`` in its entirety.
    This is a dynamic program over text positions, one pass per pattern element:
    ``reachable[j]`` tells whether the elements seen so far can consume exactly ``text[:j]``.
    """
    reachable: list[bool] = [True] + [False] * len(text)
    for element in compile_pattern(pattern):
        if element == Wildcard.ANY:
            # once some prefix is reachable, every longer prefix is too
            seen = False
            for j in range(len(reachable)):
                seen = seen or reachable[j]
                reachable[j] = seen
        else:
            for j in range(len(text), 0, -1):
                reachable[j] = reachable[j-1] and (element == Wildcard.ONE or element == text[j-1])
            reachable[0] = False
        if not any(reachable):
            return False
    return reachable[len(text)]
