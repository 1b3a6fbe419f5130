# -*- coding: utf-8 -*-
"""
h1parse/common/exceptions
~~~~~~~~~~~~~~~~~~~~~~~~~

Contains h1parse's exceptions.
"""
from enum import Enum


class ErrorKind(Enum):
    """
    The broad category a parse failure falls into.
    """
    UNEXPECTED_TOKEN = 'unexpected-token'
    INVALID_CHARACTER_CLASS = 'invalid-character-class'
    OUT_OF_RANGE = 'out-of-range'
    INCOMPLETE = 'incomplete'


class ParseError(Exception):
    """
    An invalid HTTP message was passed to the parser.

    Every parse error knows the name of the grammar rule that failed and the
    offset into the original buffer at which it failed. The offset counts
    characters for ``str`` input and bytes for bytes-like input.
    """
    kind = None

    def __init__(self, message, rule=None, offset=0):
        super(ParseError, self).__init__(message)
        self.message = message
        self.rule = rule
        self.offset = offset

    def __str__(self):
        return "{} at offset {} ({}): {}".format(
            self.kind.value, self.offset, self.rule, self.message
        )


class UnexpectedToken(ParseError):
    """
    The input at the current position does not match the literal or token
    the grammar expected there.
    """
    kind = ErrorKind.UNEXPECTED_TOKEN


class InvalidCharacterClass(ParseError):
    """
    A character-class rule matched fewer characters than it requires.
    """
    kind = ErrorKind.INVALID_CHARACTER_CLASS


class OutOfRange(ParseError):
    """
    A numeric token is syntactically fine but exceeds its semantic bound.
    """
    kind = ErrorKind.OUT_OF_RANGE


class Incomplete(UnexpectedToken):
    """
    The buffer ended before a rule could decide. With a complete buffer this
    is just an unexpected token at the end of the input, hence the base class.
    """
    kind = ErrorKind.INCOMPLETE


class RequestTooLargeError(Exception):
    """
    A buffer handed to the parser is larger than the configured maximum.
    """
    pass
