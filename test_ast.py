"""Tree tests.

Besides a few handpicked cases, random trees are generated with hypothesis,
printed with `unparse` and parsed back. The parsed tree must be identical to
the generated one, and evaluating it must give the same answer whether the
parser folds as it goes or builds the whole tree first.
"""
from math import isnan

from hypothesis import example, given, settings, strategies as st

from yard_ast import (
    BinOp,
    Call,
    Constant,
    Number,
    OpenParen,
    evaluate,
    format_number,
    kind,
    precedence,
    unparse,
)
from yard_lexer import tokenize
from yard_parser import evaluate_expression, parse, to_ast
from yard_tokens import CONSTANTS, FUNCTIONS, OPS, TokenKind


def test_unparse_handpicked():
    equiv_exprs = [
        ["1 + 2 * 3", "1 + (2 * 3)", "1+2*3"],
        ["(1 + 2) * 3", "((1 + 2)) * 3"],
        ["1 - 2 - 3", "(1 - 2) - 3"],
        ["1 - (2 - 3)"],
        ["2^3^2", "2^(3^2)"],
        ["(2^3)^2"],
        ["max(1, pi) / 2", "(max(1,pi))/2"],
        ["min(1 + 2, 3)", "min((1 + 2), 3)"],
        ["0.00001 + 2.5"],
    ]
    for canon, *equivs in equiv_exprs:
        canon_ast = to_ast(canon)
        assert unparse(canon_ast) == canon
        for equiv in equivs:
            assert to_ast(equiv) == canon_ast
            assert evaluate_expression(equiv) == evaluate(canon_ast)


def test_format_number():
    assert format_number(14.206) == "14.206"
    assert format_number(1e16) == "10000000000000000"
    assert format_number(2.0) == "2"


def test_kind_and_precedence():
    assert kind(Number(1.0)) is TokenKind.NUMBER
    assert kind(Constant("pi", CONSTANTS["pi"])) is TokenKind.CONSTANT
    assert kind(to_ast("1 ^ 2")) is TokenKind.CARET
    assert kind(to_ast("1 / 2")) is TokenKind.SLASH
    assert kind(to_ast("max(1, 2)")) is TokenKind.FUNCTION
    assert kind(OpenParen(0, 0)) is TokenKind.LPAREN
    assert precedence(to_ast("1 - 2")) == 2
    assert precedence(to_ast("1 * 2")) == 3
    assert precedence(to_ast("1 ^ 2")) == 4
    assert precedence(Number(1.0)) is None
    assert precedence(to_ast("min(1, 2)")) is None


binary_ops = st.sampled_from(list(OPS.values()))
functions = st.sampled_from(list(FUNCTIONS.values()))
numbers = st.integers(min_value=0, max_value=10 ** 6).map(lambda n: Number(n / 1000))
constants = st.sampled_from([Constant(name, v) for name, v in CONSTANTS.items()])

# An ast is either a number or constant, or, recursively, an operator or a
# function applied to two asts.
ast = st.recursive(
    numbers | constants,
    lambda child_ast: st.builds(BinOp, binary_ops, child_ast, child_ast)
    | st.builds(Call, functions, child_ast, child_ast),
)


def same(x, y):
    return x == y or isnan(x) and isnan(y)


@given(ast)
@settings(deadline=None)
@example(ast=BinOp(OPS["^"], BinOp(OPS["/"], Number(0.0), Number(0.0)), Number(0.0)))
@example(ast=Call(FUNCTIONS["min"], BinOp(OPS["-"], Number(1.0), Number(2.0)), Number(3.0)))
def test_parse_roundtrips(ast):
    as_str = unparse(ast)
    assert to_ast(as_str) == ast, "Didn't roundtrip"
    expected = evaluate(ast)
    assert same(evaluate(parse(tokenize(as_str))), expected)
    assert same(evaluate_expression(as_str, fold=False), expected)
