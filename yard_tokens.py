"""Token types plus the operator, function and constant tables."""

import re
from enum import Enum
from types import MappingProxyType
from typing import Callable, Literal, NamedTuple, Optional

import numpy as np


class Op(NamedTuple):
    op: str
    prec: int
    assoc: Literal["l", "r"]  # left-associative, right-associative
    fun: Callable

    def __call__(self, x, y):
        # IEEE semantics: 1/0 -> inf, 0/0 -> nan, (-8)^0.5 -> nan, no exceptions.
        with np.errstate(all="ignore"):
            return float(self.fun(np.float64(x), np.float64(y)))

    def __repr__(self):
        return f"op({self.op!r:})"

    def left_first(self, other):
        """Does `self`, sitting left of `other`, grab the operand between them?"""
        return self.prec > other.prec or self.prec == other.prec and other.assoc == "l"


OP_GROUPS = """
add+l subtract-l
divide/l multiply*l
power^r
""".strip()
OPS = {
    o: Op(o, prec, assoc, getattr(np, fun))
    for prec, op_groups in enumerate(OP_GROUPS.split("\n"), start=2)
    for [(fun, o, assoc)] in map(
        re.compile(r"^(\w+)(\W+)(\w+)$").findall, op_groups.split()
    )
}


class Fn(NamedTuple):
    name: str
    arity: int
    fun: Callable

    def __call__(self, *args):
        assert len(args) == self.arity
        return float(self.fun(*args))

    def __repr__(self):
        return f"fn({self.name!r})"


# Written as comparisons rather than builtins.min/max so that nan handling
# only depends on argument order: min(nan, 1) == 1, min(1, nan) is nan.
FUNCTIONS = MappingProxyType(
    {
        "min": Fn("min", 2, lambda a, b: a if a < b else b),
        "max": Fn("max", 2, lambda a, b: a if a > b else b),
    }
)

CONSTANTS = MappingProxyType({"pi": 3.14159265359})


class TokenKind(Enum):
    NUMBER = "number"
    CONSTANT = "constant"
    FUNCTION = "function"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LPAREN = "("
    RPAREN = ")"


OPERATOR_KINDS = frozenset(
    [TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.CARET]
)

# Characters that form a token on their own.
SYMBOLS = MappingProxyType(
    {k.value: k for k in OPERATOR_KINDS | {TokenKind.LPAREN, TokenKind.RPAREN}}
)

IDENTIFIERS = MappingProxyType(
    {
        **{name: TokenKind.FUNCTION for name in FUNCTIONS},
        **{name: TokenKind.CONSTANT for name in CONSTANTS},
    }
)


class Token(NamedTuple):
    kind: TokenKind
    text: str
    position: int = 0
    value: Optional[float] = None

    def __repr__(self):
        val = "" if self.value is None else f", {self.value!r}"
        return f"Token({self.kind.name}, {self.text!r}{val}, pos={self.position})"

    @property
    def op(self):
        return OPS[self.text] if self.kind in OPERATOR_KINDS else None

    @property
    def precedence(self):
        return op.prec if (op := self.op) else None

    @property
    def associativity(self):
        return op.assoc if (op := self.op) else None

    @property
    def starts_operand(self):
        return self.kind in (
            TokenKind.NUMBER,
            TokenKind.CONSTANT,
            TokenKind.FUNCTION,
            TokenKind.LPAREN,
        )

    @property
    def ends_operand(self):
        return self.kind in (TokenKind.NUMBER, TokenKind.CONSTANT, TokenKind.RPAREN)
