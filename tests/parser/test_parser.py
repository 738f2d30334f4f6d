import pytest

from sqlscalar import parse, Parser, tokenize, ParserException, LexerException,\
    Literal, ColumnRef, UnaryOpValExpr, PostfixOpValExpr, BinaryOpValExpr,\
    PrefixOperator, PostfixOperator, BinaryOperator, Integer, Float, String, NULL, TRUE
from sqlscalar.globals import ANSI

def lit(v: int) -> Literal:
    return Literal(Integer(v))

def test_literals_and_columns():
    assert parse('42') == lit(42)
    assert parse('4.5') == Literal(Float(4.5))
    assert parse("'x'") == Literal(String('x'))
    assert parse('null') == Literal(NULL)
    assert parse('True') == Literal(TRUE)
    assert parse('Price') == ColumnRef('price')
    assert parse('T.Price') == ColumnRef('price', 't')
    assert parse('"T"."Price"') == ColumnRef('Price', 'T')

def test_binary_precedence():
    assert parse('1 + 2 * 3') == BinaryOpValExpr(BinaryOperator.ADD, lit(1),
                                                 BinaryOpValExpr(BinaryOperator.MUL, lit(2), lit(3)))
    assert parse('1 - 2 - 3') == BinaryOpValExpr(BinaryOperator.SUB,
                                                 BinaryOpValExpr(BinaryOperator.SUB, lit(1), lit(2)), lit(3))
    assert parse('2 ^ 3 ^ 2') == BinaryOpValExpr(BinaryOperator.POW, lit(2),
                                                 BinaryOpValExpr(BinaryOperator.POW, lit(3), lit(2)))
    assert parse('a OR b AND c') == BinaryOpValExpr(BinaryOperator.OR, ColumnRef('a'),
                                                    BinaryOpValExpr(BinaryOperator.AND, ColumnRef('b'), ColumnRef('c')))
    assert parse('a = b > c') == BinaryOpValExpr(BinaryOperator.EQ, ColumnRef('a'),
                                                 BinaryOpValExpr(BinaryOperator.GT, ColumnRef('b'), ColumnRef('c')))
    assert parse('a LIKE b = c') == BinaryOpValExpr(BinaryOperator.EQ,
                                                    BinaryOpValExpr(BinaryOperator.LIKE, ColumnRef('a'), ColumnRef('b')),
                                                    ColumnRef('c'))

def test_operator_tiers():
    tiers = [
        [BinaryOperator.OR],
        [BinaryOperator.AND],
        [BinaryOperator.EQ, BinaryOperator.NE, BinaryOperator.LIKE],
        [BinaryOperator.GT, BinaryOperator.GE, BinaryOperator.LT, BinaryOperator.LE],
        [BinaryOperator.ADD, BinaryOperator.SUB],
        [BinaryOperator.MUL, BinaryOperator.DIV, BinaryOperator.MOD],
        [BinaryOperator.POW],
    ]
    for i, tier in enumerate(tiers):
        for op in tier:
            assert op.precedence == i + 1
            assert op.right_associative == (op == BinaryOperator.POW)

def test_prefix_binds_tighter_than_binary():
    assert parse('-2 ^ 2') == BinaryOpValExpr(BinaryOperator.POW, UnaryOpValExpr(PrefixOperator.MINUS, lit(2)), lit(2))
    assert parse('NOT a AND b') == BinaryOpValExpr(BinaryOperator.AND,
                                                   UnaryOpValExpr(PrefixOperator.NOT, ColumnRef('a')), ColumnRef('b'))

def test_prefix_then_postfix():
    assert parse('-3!') == PostfixOpValExpr(PostfixOperator.FACTORIAL, UnaryOpValExpr(PrefixOperator.MINUS, lit(3)))
    assert parse('-+1') == UnaryOpValExpr(PrefixOperator.MINUS, UnaryOpValExpr(PrefixOperator.PLUS, lit(1)))
    assert parse('NOT x IS NULL') == PostfixOpValExpr(PostfixOperator.IS_NULL,
                                                      UnaryOpValExpr(PrefixOperator.NOT, ColumnRef('x')))
    assert parse('3!!') == PostfixOpValExpr(PostfixOperator.FACTORIAL, PostfixOpValExpr(PostfixOperator.FACTORIAL, lit(3)))

def test_postfix_binds_tighter_than_binary():
    assert parse('2 ^ x IS NOT NULL') == BinaryOpValExpr(BinaryOperator.POW, lit(2),
                                                         PostfixOpValExpr(PostfixOperator.IS_NOT_NULL, ColumnRef('x')))

@pytest.mark.parametrize('text, op', [
    ('x IS NULL', PostfixOperator.IS_NULL),
    ('x is not null', PostfixOperator.IS_NOT_NULL),
    ('x IS TRUE', PostfixOperator.IS_TRUE),
    ('x IS NOT TRUE', PostfixOperator.IS_NOT_TRUE),
    ('x IS FALSE', PostfixOperator.IS_FALSE),
    ('x IS NOT FALSE', PostfixOperator.IS_NOT_FALSE),
])
def test_is_predicates(text: str, op: PostfixOperator):
    assert parse(text) == PostfixOpValExpr(op, ColumnRef('x'))

@pytest.mark.parametrize('text, message', [
    ('', 'Expected expression, found end of input'),
    ('1 +', 'Expected expression, found end of input'),
    ('(1 + 2', 'Expected token ), found end of input'),
    ('1 + 2)', 'Expected token end of input, found )'),
    ('1 2', 'Expected token end of input, found 2'),
    ('* 3', 'Expected expression, found *'),
    ('x IS 3', 'Expected token NULL or TRUE or FALSE, found 3'),
    ("x IS NOT 'a'", "Expected token NULL or TRUE or FALSE, found 'a'"),
    ('t.3', 'Expected token identifier, found 3'),
    ('AND', 'Expected expression, found AND'),
    ('()', 'Expected expression, found )'),
])
def test_syntax_errors(text: str, message: str):
    with pytest.raises(ParserException) as excinfo:
        parse(text)
    assert str(excinfo.value) == message

def test_lexer_errors_propagate():
    with pytest.raises(LexerException):
        parse("1 + 'abc")

def test_parser_over_tokens():
    assert Parser(tokenize('1 + 2')).parse() == parse('1 + 2')
    # a missing end token is supplied
    assert Parser(tokenize('7')[:-1]).parse() == lit(7)

@pytest.mark.parametrize('text', [
    '1 + 2 * 3',
    '(1 + 2) * 3',
    '2 ^ 3 ^ 2',
    '(2 ^ 3) ^ 2',
    '-(3!)',
    '-3!',
    'NOT (a IS NULL)',
    "name LIKE 'it''s%' AND t.x >= 1.5e-7",
    '"Mixed Case" + "select" + "a b"',
    'x IS NOT TRUE OR y IS FALSE',
    'INFINITY > 1',
    '1 - (2 - 3)',
    '1.0 / 3',
])
def test_to_str_round_trip(text: str):
    e = parse(text)
    assert parse(e.to_str()) == e
    assert str(e) == e.to_str()

def test_to_str():
    assert parse('1+2*3').to_str() == '1 + (2 * 3)'
    assert parse('-a!').to_str() == '(-a)!'
    assert parse('not a is null').to_str() == '(NOT a) IS NULL'
    assert parse('"Col"').to_str() == '"Col"'
    assert parse('"and"').to_str() == '"and"'

def test_pstr():
    lines = list(parse('a + 2 * b IS NULL').pstr())
    assert lines == [
        f'{ANSI.EMPH}+{ANSI.END}',
        f'\\___{ANSI.EMPH}ColumnRef a{ANSI.END}',
        f'\\___{ANSI.EMPH}*{ANSI.END}',
        f'    \\___{ANSI.EMPH}Integer 2{ANSI.END}',
        f'    \\___{ANSI.EMPH}IS NULL (postfix){ANSI.END}',
        f'        \\___{ANSI.EMPH}ColumnRef b{ANSI.END}',
    ]

def test_long_expressions_parse_without_recursion():
    e = parse(' + '.join(['1'] * 5000))
    assert isinstance(e, BinaryOpValExpr) and e.right == lit(1)
    e = parse('-' * 5000 + '1')
    assert isinstance(e, UnaryOpValExpr) and e.op == PrefixOperator.MINUS

def test_too_deeply_nested():
    with pytest.raises(ParserException) as excinfo:
        parse('(' * 5000 + '1' + ')' * 5000)
    assert str(excinfo.value) == 'expression too deeply nested'
    assert parse('(' * 50 + '1' + ')' * 50) == lit(1)
