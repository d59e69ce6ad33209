"""Exceptions raised while tokenizing, parsing and evaluating expressions."""

from typing import Optional


class YardError(Exception):
    """Base exception for all yardcalc errors."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        received: Optional[str] = None,
        expected: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        self.message = message
        self.position = position
        self.received = received
        self.expected = expected
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self):
        parts = [self.message]
        if self.position is not None:
            parts.append(f"at position {self.position}")
        if self.received:
            parts.append(f"received {self.received}")
        if self.expected:
            parts.append(f"expected {self.expected}")
        msg = ", ".join(parts)
        if self.suggestion:
            msg += f" ({self.suggestion})"
        return msg


class LexError(YardError):
    """A character that cannot appear in an expression."""


class MalformedNumberError(LexError):
    """A run of digits and dots that is not a float, e.g. `1.2.3`."""


class UnknownIdentifierError(YardError):
    """An alphabetic run that is not `min`, `max` or `pi`."""


class ParseError(YardError):
    """The token sequence does not form a single expression."""


class ImbalancedParenthesisError(ParseError):
    pass


class MissingOperandError(ParseError):
    pass


class MissingOperatorError(ParseError):
    pass


class ArgumentCountError(ParseError):
    pass


class EvaluationError(YardError):
    """Raised when a node that has no value (a paren marker) is evaluated."""
