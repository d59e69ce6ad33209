"""Turn expression text into a stream of tokens.

The scan is a single left-to-right pass with two accumulators, one for
numbers (digits and `.`) and one for identifiers (letters). At most one of
them is non-empty at a time. Operators and parentheses flush whatever has
been accumulated and produce a token of their own; commas and whitespace
only flush.

>>> [t.text for t in tokenize("max(1, 2)^pi")]
['max', '(', '1', '2', ')', '^', 'pi']
"""
import logging
import string

from yard_errors import LexError, MalformedNumberError, UnknownIdentifierError
from yard_tokens import CONSTANTS, IDENTIFIERS, SYMBOLS, Token, TokenKind

logger = logging.getLogger(__name__)

SEPARATORS = ","
DIGITS = string.digits + "."


def number_token(lexeme, position):
    try:
        value = float(lexeme)
    except ValueError:
        raise MalformedNumberError(
            f"malformed number {lexeme!r}",
            position,
            expected="digits with at most one '.'",
        ) from None
    return Token(TokenKind.NUMBER, lexeme, position, value)


def identifier_token(lexeme, position):
    kind = IDENTIFIERS.get(lexeme)
    if kind is None:
        raise UnknownIdentifierError(
            f"unknown identifier: {lexeme}",
            position,
            expected=" or ".join(map(repr, sorted(IDENTIFIERS))),
        )
    return Token(kind, lexeme, position, CONSTANTS.get(lexeme))


class _Scanner:
    def __init__(self):
        self.tokens = []
        self.number = []
        self.identifier = []
        self.start = 0

    def flush_number(self):
        if self.number:
            self.tokens.append(number_token("".join(self.number), self.start))
            self.number.clear()

    def flush_identifier(self):
        if self.identifier:
            self.tokens.append(identifier_token("".join(self.identifier), self.start))
            self.identifier.clear()

    def flush(self):
        self.flush_identifier()
        self.flush_number()

    def push(self, acc, ch, pos):
        if not acc:
            self.start = pos
        acc.append(ch)


def scan(text):
    """Return the list of tokens in `text`, raising on the first bad character."""
    s = _Scanner()
    for pos, ch in enumerate(text):
        if kind := SYMBOLS.get(ch):
            s.flush()
            s.tokens.append(Token(kind, ch, pos))
        elif ch in SEPARATORS or ch.isspace():
            s.flush()
        elif ch in DIGITS:
            s.flush_identifier()
            s.push(s.number, ch, pos)
        elif ch in string.ascii_letters:
            s.flush_number()
            s.push(s.identifier, ch, pos)
        else:
            raise LexError(f"unexpected character {ch!r}", pos)
    s.flush()
    logger.debug("scanned %d tokens from %r", len(s.tokens), text)
    return s.tokens


def tokenize(text):
    """Return a one-shot iterator over the tokens of `text`.

    The whole string is scanned up front, so an error means no tokens at all.
    """
    return iter(scan(text))
