# -*- coding: utf-8 -*-
"""
h1parse/http11/primitives
~~~~~~~~~~~~~~~~~~~~~~~~~

The building blocks of h1parse's HTTP/1.1 grammar.

Every rule in the grammar is a callable that takes a :class:`Cursor` and
returns a ``(cursor, value)`` tuple, where the returned cursor sits just past
whatever the rule consumed. Rules signal failure by raising a
:class:`ParseError <h1parse.common.exceptions.ParseError>`. Because cursors
are immutable, a failing rule never consumes anything: the caller still
holds the cursor it started from and can try something else.
"""
import functools
import string
from collections import namedtuple

from ..common.exceptions import (
    ParseError, UnexpectedToken, InvalidCharacterClass, OutOfRange, Incomplete
)
from ..common.util import to_native_string


_ALPHA = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_ALPHANUMERIC = _ALPHA | _DIGITS
_ALPHANUMERIC_HYPHEN = _ALPHANUMERIC | frozenset('-')
_SPACE = frozenset(' \t')


def is_alpha(char):
    return char in _ALPHA


def is_digit(char):
    return char in _DIGITS


def is_alphanumeric(char):
    return char in _ALPHANUMERIC


def is_alphanumeric_hyphen(char):
    return char in _ALPHANUMERIC_HYPHEN


def is_space(char):
    return char in _SPACE


class Cursor(namedtuple('Cursor', ['text', 'pos', 'trace'])):
    """
    An immutable position in a text buffer.

    ``trace`` is the optional hook that grammar rules report to; see
    :func:`rule`.
    """
    __slots__ = ()

    @classmethod
    def start(cls, buffer, trace=None):
        return cls(to_native_string(buffer), 0, trace)

    @property
    def rest(self):
        return self.text[self.pos:]

    @property
    def at_end(self):
        return self.pos >= len(self.text)

    def peek(self, n=1):
        return self.text[self.pos:self.pos + n]

    def advance(self, n):
        return self._replace(pos=self.pos + n)


def rule(name):
    """
    Marks a function as a named grammar rule.

    If the cursor carries a trace hook, it is called as
    ``trace(event, name, offset)`` when the rule is entered (``'enter'``),
    when it succeeds (``'match'``, with the offset it stopped at) and when it
    fails (``'fail'``, with the offset of the error).
    """
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(cursor, *args, **kwargs):
            trace = cursor.trace
            if trace is None:
                return fn(cursor, *args, **kwargs)

            trace('enter', name, cursor.pos)
            try:
                result = fn(cursor, *args, **kwargs)
            except ParseError as e:
                trace('fail', name, e.offset)
                raise
            trace('match', name, result[0].pos)
            return result

        wrapper.rule_name = name
        return wrapper
    return decorator


def run(grammar_rule, buffer, trace=None):
    """
    Applies a rule to the start of a buffer. Returns ``(value, remainder)``.
    """
    cursor, value = grammar_rule(Cursor.start(buffer, trace))
    return value, cursor.rest


def _mismatch(cursor, literal, matched, rule_name, ignore_case=False):
    # A buffer that stops partway through the literal might still match.
    if ignore_case:
        literal, matched = literal.lower(), matched.lower()
    if len(matched) < len(literal) and literal.startswith(matched):
        return Incomplete(
            "buffer ended while expecting {!r}".format(literal),
            rule_name, cursor.pos
        )
    return UnexpectedToken(
        "expected {!r}, found {!r}".format(literal, matched),
        rule_name, cursor.pos
    )


def tag(cursor, literal, rule_name='tag'):
    """
    Matches ``literal`` exactly.
    """
    matched = cursor.peek(len(literal))
    if matched != literal:
        raise _mismatch(cursor, literal, matched, rule_name)
    return cursor.advance(len(literal)), matched


def tag_no_case(cursor, literal, rule_name='tag'):
    """
    Matches ``literal`` ignoring ASCII case. The matched slice is returned as
    it appeared in the input.
    """
    matched = cursor.peek(len(literal))
    if matched.lower() != literal.lower():
        raise _mismatch(cursor, literal, matched, rule_name, ignore_case=True)
    return cursor.advance(len(literal)), matched


def _span(cursor, predicate, limit=None):
    text = cursor.text
    end = len(text) if limit is None else min(len(text), cursor.pos + limit)
    pos = cursor.pos
    while pos < end and predicate(text[pos]):
        pos += 1
    return pos - cursor.pos


def take_while(cursor, predicate):
    """
    Consumes zero or more characters satisfying ``predicate``.
    """
    n = _span(cursor, predicate)
    return cursor.advance(n), cursor.peek(n)


def take_while_m_n(cursor, predicate, m, n, rule_name):
    """
    Consumes between ``m`` and ``n`` characters satisfying ``predicate``.

    Matching is greedy but stops at ``n`` characters: anything after that is
    left for the next rule, even if it would satisfy the predicate.
    """
    count = _span(cursor, predicate, limit=n)
    if count < m:
        offset = cursor.pos + count
        if cursor.advance(count).at_end:
            raise Incomplete(
                "buffer ended after {} of {} characters".format(count, m),
                rule_name, offset
            )
        raise InvalidCharacterClass(
            "expected at least {} characters, found {}".format(m, count),
            rule_name, offset
        )
    return cursor.advance(count), cursor.peek(count)


def take_while1(cursor, predicate, rule_name):
    """
    Consumes one or more characters satisfying ``predicate``.
    """
    return take_while_m_n(cursor, predicate, 1, None, rule_name)


def alpha1(cursor, rule_name='alpha'):
    return take_while1(cursor, is_alpha, rule_name)


def alphanumeric1(cursor, rule_name='alphanumeric'):
    return take_while1(cursor, is_alphanumeric, rule_name)


def alphanumeric_hyphen1(cursor, rule_name='alphanumeric-hyphen'):
    return take_while1(cursor, is_alphanumeric_hyphen, rule_name)


def space0(cursor):
    return take_while(cursor, is_space)


def newline(cursor, rule_name='newline'):
    """
    Matches a line terminator, either CRLF or a bare LF.
    """
    if cursor.peek(2) == '\r\n':
        return cursor.advance(2), '\r\n'
    if cursor.peek() == '\n':
        return cursor.advance(1), '\n'
    if cursor.at_end or cursor.rest == '\r':
        raise Incomplete("buffer ended before end of line", rule_name,
                         cursor.pos)
    raise UnexpectedToken(
        "expected end of line, found {!r}".format(cursor.peek()),
        rule_name, cursor.pos
    )


def until_newline(cursor):
    """
    Consumes everything up to the next line terminator, which is left in
    place. A CR that belongs to a CRLF is not part of the value.
    """
    end = cursor.text.find('\n', cursor.pos)
    if end == -1:
        end = len(cursor.text)
    value = cursor.text[cursor.pos:end]
    if value.endswith('\r'):
        value = value[:-1]
    return cursor.advance(len(value)), value


def alt(cursor, *rules):
    """
    Ordered choice: tries each rule against the same cursor and returns the
    first success. If every alternative fails, the error from the last one
    tried is raised.
    """
    error = None
    for alternative in rules:
        try:
            return alternative(cursor)
        except ParseError as e:
            error = e
    raise error


def opt(cursor, grammar_rule):
    """
    Makes a rule optional: on failure, nothing is consumed and the value is
    ``None``.
    """
    try:
        return grammar_rule(cursor)
    except ParseError:
        return cursor, None


def many0(cursor, grammar_rule):
    """
    Applies a rule as many times as it succeeds, collecting the values.
    """
    values = []
    while True:
        try:
            next_cursor, value = grammar_rule(cursor)
        except ParseError:
            break
        if next_cursor.pos == cursor.pos:
            break
        values.append(value)
        cursor = next_cursor
    return cursor, values


def one_to_three_digits(cursor, rule_name='digits'):
    return take_while_m_n(cursor, is_digit, 1, 3, rule_name)


def two_to_four_digits(cursor, rule_name='digits'):
    return take_while_m_n(cursor, is_digit, 2, 4, rule_name)


@rule('ipv4-octet')
def octet(cursor):
    """
    A single IPv4 octet: one to three digits with a value no greater than
    255.
    """
    start = cursor.pos
    cursor, digits = one_to_three_digits(cursor, 'ipv4-octet')
    value = int(digits)
    if value > 255:
        raise OutOfRange(
            "octet {} is greater than 255".format(digits), 'ipv4-octet', start
        )
    return cursor, value
