"""Expression trees.

A tree is built from a closed set of immutable nodes:

 - `Number(value)`: a literal, or the folded result of a sub-expression.
 - `Constant(name, value)`: a named constant such as `pi`.
 - `BinOp(op, left, right)`: one of `+ - * / ^` applied to two subtrees.
 - `Call(fn, left, right)`: `min` or `max` applied to two subtrees.
 - `OpenParen(position, depth, call)`: a marker the parser keeps on its
   operator stack while a parenthesised group is open. It never ends up in a
   finished tree and has no value.

`evaluate`, `kind`, `precedence` and `unparse` dispatch over all of them.
"""
from typing import NamedTuple

import numpy as np

from yard_errors import EvaluationError
from yard_tokens import SYMBOLS, Fn, Op, TokenKind


class Number(NamedTuple):
    value: float


class Constant(NamedTuple):
    name: str
    value: float


class BinOp(NamedTuple):
    op: Op
    left: tuple
    right: tuple


class Call(NamedTuple):
    fn: Fn
    left: tuple
    right: tuple


class OpenParen(NamedTuple):
    position: int
    depth: int  # size of the value stack when the group was opened
    call: bool = False  # does the group hold the arguments of a function?


class _Combine(NamedTuple):
    node: tuple


def walk(node, leaf, branch):
    """Fold `node` bottom-up: `leaf` maps literals, `branch(node, left, right)`
    combines the results of both children.

    Uses an explicit stack, so chains much longer than the recursion limit
    (e.g. `1 - 1 - ... - 1` with thousands of terms) are fine.
    """
    results = []
    todo = [node]
    while todo:
        n = todo.pop()
        if isinstance(n, _Combine):
            right = results.pop()
            left = results.pop()
            results.append(branch(n.node, left, right))
        elif isinstance(n, (BinOp, Call)):
            todo += [_Combine(n), n.right, n.left]
        else:
            results.append(leaf(n))
    (ans,) = results
    return ans


def _value(node):
    if isinstance(node, (Number, Constant)):
        return node.value
    if isinstance(node, OpenParen):
        raise EvaluationError("an open parenthesis marker has no value", node.position)
    raise TypeError(f"not an expression node: {node!r}")


def _apply(node, x, y):
    return node.op(x, y) if isinstance(node, BinOp) else node.fn(x, y)


def evaluate(node):
    """Return the float value of `node`.

    >>> evaluate(Number(2.5))
    2.5
    """
    return walk(node, _value, _apply)


def kind(node):
    if isinstance(node, Number):
        return TokenKind.NUMBER
    if isinstance(node, Constant):
        return TokenKind.CONSTANT
    if isinstance(node, BinOp):
        return SYMBOLS[node.op.op]
    if isinstance(node, Call):
        return TokenKind.FUNCTION
    if isinstance(node, OpenParen):
        return TokenKind.LPAREN
    raise TypeError(f"not an expression node: {node!r}")


def precedence(node):
    return node.op.prec if isinstance(node, BinOp) else None


def format_number(value):
    """Positional notation, since the tokenizer does not read exponents.

    >>> format_number(3.0), format_number(0.1), format_number(1e-05)
    ('3', '0.1', '0.00001')
    """
    return np.format_float_positional(value, trim="-")


def _text(node):
    if isinstance(node, Number):
        return format_number(node.value)
    if isinstance(node, Constant):
        return node.name
    raise TypeError(f"cannot unparse {node!r}")


def _join(node, x, y):
    if isinstance(node, Call):
        return f"{node.fn.name}({x}, {y})"
    if isinstance(node.left, BinOp) and not node.left.op.left_first(node.op):
        x = f"({x})"
    if isinstance(node.right, BinOp) and node.op.left_first(node.right.op):
        y = f"({y})"
    return f"{x} {node.op.op} {y}" if node.op.op != "^" else f"{x}^{y}"


def unparse(node):
    """Print `node` as infix text, parenthesising only where needed.

    >>> from yard_tokens import OPS
    >>> unparse(BinOp(OPS["-"], Number(1.0), BinOp(OPS["-"], Number(2.0), Number(3.0))))
    '1 - (2 - 3)'
    """
    return walk(node, _text, _join)
