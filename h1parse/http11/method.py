# -*- coding: utf-8 -*-
"""
h1parse/http11/method
~~~~~~~~~~~~~~~~~~~~~

The request method token.
"""
from enum import Enum

from ..common.exceptions import ParseError, UnexpectedToken, Incomplete
from .primitives import rule, run, tag_no_case


class Method(Enum):
    GET = 'GET'
    HEAD = 'HEAD'
    POST = 'POST'
    PUT = 'PUT'
    DELETE = 'DELETE'
    CONNECT = 'CONNECT'
    OPTIONS = 'OPTIONS'
    TRACE = 'TRACE'

    @classmethod
    def from_token(cls, token, offset=0):
        """
        Looks up a method by name, ignoring case. Unknown names raise
        :class:`UnexpectedToken`.
        """
        try:
            return cls(token.upper())
        except ValueError:
            raise UnexpectedToken(
                "unknown request method {!r}".format(token), 'method', offset
            )


_METHOD_ORDER = (
    Method.GET,
    Method.HEAD,
    Method.POST,
    Method.PUT,
    Method.DELETE,
    Method.CONNECT,
    Method.OPTIONS,
    Method.TRACE,
)


@rule('method')
def request_method(cursor):
    """
    Matches a method token at the start of the cursor, ignoring case. Only
    the token is consumed; whatever follows it is left alone.
    """
    truncated = False
    for method in _METHOD_ORDER:
        try:
            cursor_after, token = tag_no_case(cursor, method.value, 'method')
        except Incomplete:
            truncated = True
        except ParseError:
            pass
        else:
            return cursor_after, Method.from_token(token, cursor.pos)

    if truncated:
        raise Incomplete(
            "buffer ended inside the request method", 'method', cursor.pos
        )
    raise UnexpectedToken(
        "unknown request method at {!r}".format(cursor.peek(8)),
        'method', cursor.pos
    )


def parse_method(buffer, trace=None):
    """
    Parses a request method from the start of ``buffer``.

    :returns: A ``(Method, remainder)`` tuple.
    :raises UnexpectedToken: if the buffer does not start with a known method.
    """
    return run(request_method, buffer, trace)
