"""Shunting-yard parser.

Operands go on a value stack, operators, functions and open parentheses on an
operator stack. An operator is reduced (popped and applied to the two topmost
values) as soon as the incoming operator can no longer grab its right operand,
i.e. when the pending one has higher precedence, or equal precedence and the
incoming one is left-associative. `^` is right-associative:

>>> evaluate_expression("2^3^2")
512.0
>>> evaluate_expression("3 + 4 * 2 / (1 - max(5, 2)) ^ min(2,11) ^ 3")
3.0001220703125

By default every reduction is folded into a `Number` straight away; with
`fold=False` the tree is kept:

>>> from yard_ast import unparse
>>> unparse(to_ast("(1 + 2) * pi"))
'(1 + 2) * pi'
"""
import logging

from yard_ast import BinOp, Call, Constant, Number, OpenParen, evaluate
from yard_errors import (
    ArgumentCountError,
    ImbalancedParenthesisError,
    MissingOperandError,
    MissingOperatorError,
    ParseError,
)
from yard_lexer import tokenize
from yard_tokens import FUNCTIONS, OPERATOR_KINDS, Op, TokenKind

logger = logging.getLogger(__name__)


def combine(o, args, fold):
    node = BinOp(o, *args) if isinstance(o, Op) else Call(o, *args)
    if not fold:
        return node
    result = Number(evaluate(node))
    logger.debug("fold %r%r -> %r", o, tuple(args), result.value)
    return result


def floor(ops):
    """Number of values that belong to enclosing groups."""
    return next((m.depth for m in reversed(ops) if isinstance(m, OpenParen)), 0)


def pending_op(ops):
    if ops and not isinstance(ops[-1], OpenParen):
        return ops[-1].op
    return None


def reduce(exprs, ops, fold):
    tok = ops.pop()
    if len(exprs) - floor(ops) < 2:
        raise MissingOperandError(
            f"operator {tok.text!r} is missing an operand", tok.position
        )
    exprs[-2:] = [combine(tok.op, exprs[-2:], fold)]


def reduce_group(exprs, ops, fold):
    while ops and not isinstance(ops[-1], OpenParen):
        reduce(exprs, ops, fold)


def close_group(tok, exprs, ops, fold):
    reduce_group(exprs, ops, fold)
    if not ops:
        raise ImbalancedParenthesisError(
            "imbalanced parenthesis", tok.position, received="')'"
        )
    marker = ops.pop()
    count = len(exprs) - marker.depth
    if not marker.call:
        if count == 0:
            raise MissingOperandError("empty parentheses", marker.position)
        if count > 1:
            raise MissingOperatorError(
                "missing operator inside parentheses", marker.position
            )
        return
    fn_tok = ops.pop()
    fn = FUNCTIONS[fn_tok.text]
    if count != fn.arity:
        raise ArgumentCountError(
            f"{fn.name} takes {fn.arity} arguments",
            fn_tok.position,
            received=str(count),
        )
    # Arguments sit on the stack in the order they were written.
    exprs[-fn.arity:] = [combine(fn, exprs[-fn.arity:], fold)]


def parse(tokens, fold=True):
    """Build the tree for the token stream `tokens`, consuming it once.

    With `fold` (the default) the result is a single `Number` or `Constant`.
    """
    exprs = []
    ops = []
    prev = None
    for tok in tokens:
        if prev is not None and prev.kind is TokenKind.FUNCTION:
            if tok.kind is not TokenKind.LPAREN:
                raise ParseError(
                    f"{prev.text} must be followed by '('",
                    tok.position,
                    received=tok.text,
                )
        if prev is not None and prev.ends_operand and tok.starts_operand:
            # Commas and blanks leave no token, so two operands in a row
            # separate function arguments, and are an error anywhere else.
            group = next((m for m in reversed(ops) if isinstance(m, OpenParen)), None)
            if group is None or not group.call:
                raise MissingOperatorError(
                    "missing operator",
                    tok.position,
                    received=tok.text,
                    suggestion="there is no implicit multiplication, write '*'",
                )
            reduce_group(exprs, ops, fold)

        if tok.kind is TokenKind.NUMBER:
            exprs.append(Number(tok.value))
        elif tok.kind is TokenKind.CONSTANT:
            exprs.append(Constant(tok.text, tok.value))
        elif tok.kind is TokenKind.FUNCTION:
            ops.append(tok)
        elif tok.kind in OPERATOR_KINDS:
            if prev is None or not prev.ends_operand:
                raise MissingOperandError(
                    f"operator {tok.text!r} is missing its left operand", tok.position
                )
            while (top := pending_op(ops)) and top.left_first(tok.op):
                reduce(exprs, ops, fold)
            ops.append(tok)
        elif tok.kind is TokenKind.LPAREN:
            call = prev is not None and prev.kind is TokenKind.FUNCTION
            ops.append(OpenParen(tok.position, len(exprs), call))
        elif tok.kind is TokenKind.RPAREN:
            close_group(tok, exprs, ops, fold)
        else:
            raise ParseError(f"unexpected token {tok!r}", tok.position)
        prev = tok

    if prev is not None and prev.kind is TokenKind.FUNCTION:
        raise ParseError(f"{prev.text} must be followed by '('", prev.position)
    while ops:
        if isinstance(ops[-1], OpenParen):
            raise ImbalancedParenthesisError(
                "imbalanced parenthesis", ops[-1].position, expected="')'"
            )
        reduce(exprs, ops, fold)

    if not exprs:
        raise ParseError("empty expression")
    if len(exprs) > 1:
        raise MissingOperatorError("missing operator")
    (ans,) = exprs
    return ans


def to_ast(text, fold=False):
    """The unevaluated tree for `text`."""
    return parse(tokenize(text), fold)


def evaluate_expression(text, fold=True):
    return evaluate(parse(tokenize(text), fold))
