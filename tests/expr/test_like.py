import re
import pytest

from sqlscalar.like import Wildcard, compile_pattern, matches

def test_compile_pattern():
    assert compile_pattern('a%b') == ('a', Wildcard.ANY, 'b')
    assert compile_pattern('a_b') == ('a', Wildcard.ONE, 'b')
    assert compile_pattern('a%%b') == ('a', '%', 'b')
    assert compile_pattern('a__b') == ('a', '_', 'b')
    assert compile_pattern('%%%') == ('%', Wildcard.ANY)
    assert compile_pattern('___') == ('_', Wildcard.ONE)
    assert compile_pattern('%_%') == (Wildcard.ANY, Wildcard.ONE, Wildcard.ANY)
    assert compile_pattern('') == ()

def test_consecutive_any_collapses():
    assert compile_pattern('a%_%_%b') == ('a', Wildcard.ANY, Wildcard.ONE, Wildcard.ANY, Wildcard.ONE, Wildcard.ANY, 'b')
    assert compile_pattern('%%%%') == ('%', '%')
    assert compile_pattern('%%%%%') == ('%', '%', Wildcard.ANY)

@pytest.mark.parametrize('text, pattern, expected', [
    ('', '', True),
    ('', '%', True),
    ('', '_', False),
    ('a', '', False),
    ('abc', '%', True),
    ('abc', '___', False),
    ('_c', '___', True),
    ('abc', '____', False),
    ('abc', '%%', False),
    ('%', '%%', True),
    ('_', '__', True),
    ('a', '__', False),
    ('aaa', '%a%a%a%', True),
    ('aa', '%a%a%a%', False),
    ('mississippi', 'm%iss%ppi', True),
    ('mississippi', '%s_s%', True),
    ('mississippi', '%sss%', False),
    ('Hi! 👋', 'Hi! _', True),
    ('👋👋', '_%_', True),
    ('a.b', 'a.b', True),
    ('axb', 'a.b', False),
    ('a\nb', 'a_b', True),
])
def test_matches(text: str, pattern: str, expected: bool):
    assert matches(text, pattern) == expected

def _reference(text: str, pattern: str) -> bool:
    """Translate the pattern into a regular expression, pairing up doubled wildcards left to right.
    """
    parts = re.findall(r'%%|__|%|_|.', pattern, flags=re.DOTALL)
    regex = ''.join({'%': '.*', '_': '.', '%%': '%', '__': '_'}.get(p, re.escape(p)) for p in parts)
    return re.fullmatch(regex, text, flags=re.DOTALL) is not None

@pytest.mark.parametrize('pattern', ['a%', '%b%', '_a_', 'a%%b', '%_%_%', 'a__%', '%%%_', 'ab%ba', '____%'])
@pytest.mark.parametrize('text', ['', 'a', 'ab', 'aab', 'a%b', 'a_b', 'abba', 'abab', 'a__b', '%%_'])
def test_matches_regex(text: str, pattern: str):
    assert matches(text, pattern) == _reference(text, pattern)

def test_long_inputs():
    text = 'a' * 2000
    assert matches(text, '%' + 'a%' * 50)
    assert not matches(text, '%' + 'a%' * 50 + 'b')
    assert matches(text + 'b', 'a%b')
