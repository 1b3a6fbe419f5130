# -*- coding: utf-8 -*-
"""
h1parse/http11/parser
~~~~~~~~~~~~~~~~~~~~~

This module contains h1parse's pure-Python HTTP/1.1 request parser. It
assembles the method, request target, version and header rules into a single
:class:`Request`, and provides the :class:`Parser` object that server code
drives with whatever it has read so far.
"""
import logging
from collections import namedtuple

from ..common.exceptions import (
    ParseError, UnexpectedToken, Incomplete, RequestTooLargeError
)
from ..common.util import to_native_string
from .fields import header, headers
from .method import Method, request_method
from .primitives import rule, run, tag, take_while_m_n, is_digit, newline
from .uri import absolute_uri, asterisk_form, authority_form, origin_form

log = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 64 * 1024


Request = namedtuple('Request', ['method', 'uri', 'minor_version', 'headers'])


@rule('request-target')
def request_target(cursor, method):
    """
    Chooses the target form from the method and the first character of the
    target, then parses it.
    """
    if method is Method.CONNECT:
        return authority_form(cursor)

    first = cursor.peek()
    if first == '*':
        if method is not Method.OPTIONS:
            raise UnexpectedToken(
                "the asterisk form is only allowed with OPTIONS",
                'request-target', cursor.pos
            )
        return asterisk_form(cursor)
    elif first == '/':
        return origin_form(cursor)
    elif first in ('h', 'H'):
        return absolute_uri(cursor)
    elif not first:
        raise Incomplete(
            "buffer ended before the request target", 'request-target',
            cursor.pos
        )
    raise UnexpectedToken(
        "expected '*', '/' or an absolute URI, found {!r}".format(first),
        'request-target', cursor.pos
    )


@rule('version')
def version(cursor):
    cursor, _ = tag(cursor, 'HTTP/1.', 'version')
    cursor, minor = take_while_m_n(cursor, is_digit, 1, 1, 'version')
    return cursor, int(minor)


@rule('request-line')
def request_line(cursor):
    cursor, method = request_method(cursor)
    cursor, _ = tag(cursor, ' ', 'request-line')
    cursor, uri = request_target(cursor, method)
    cursor, _ = tag(cursor, ' ', 'request-line')
    cursor, minor_version = version(cursor)
    cursor, _ = newline(cursor, 'request-line')
    return cursor, (method, uri, minor_version)


def _end_of_head(cursor):
    try:
        return newline(cursor, 'end-of-head')
    except ParseError as e:
        # Whatever is here stopped the header block, so parsing it as a header
        # reports why it is not one.
        header(cursor)
        raise e


@rule('request')
def request(cursor):
    cursor, (method, uri, minor_version) = request_line(cursor)
    cursor, fields = headers(cursor)
    cursor, _ = _end_of_head(cursor)
    return cursor, Request(method, uri, minor_version, fields)


def parse_request(buffer, trace=None):
    """
    Parses the head of an HTTP/1.x request: request line, header block and
    the blank line that ends it.

    :param buffer: A ``str``, or a bytes-like object which is decoded as
        ISO-8859-1.
    :param trace: An optional callable, ``trace(event, rule, offset)``, told
        about every grammar rule as it is tried.
    :returns: A ``(Request, remainder)`` tuple, where the remainder is
        whatever follows the head (usually the start of the body).
    :raises ParseError: carrying the failing rule and its offset in
        ``buffer``.
    """
    return run(request, buffer, trace)


def render_request(request):
    """
    Renders a :class:`Request` back into the text of a request head.
    """
    lines = [
        '{} {} HTTP/1.{}'.format(
            request.method.value, request.uri.unsplit(), request.minor_version
        )
    ]
    lines.extend('{}: {}'.format(n, v) for n, v in request.headers)
    return '\r\n'.join(lines) + '\r\n\r\n'


class Parser(object):
    """
    A single HTTP request parser object.

    This object holds nothing but its configuration, so it can be shared
    freely across threads.

    :param trace: (optional) A callable passed to every grammar rule; see
        :func:`parse_request`.
    :param max_size: (optional) The largest buffer, in characters, that will
        be parsed. ``None`` removes the limit.
    """
    def __init__(self, trace=None, max_size=DEFAULT_MAX_SIZE):
        self.trace = trace
        self.max_size = max_size

    def parse_request(self, buffer):
        """
        Parses a single HTTP request head from a buffer.

        :param buffer: A ``memoryview``, ``bytes`` or ``str`` containing an
            HTTP request.
        :returns: A ``(Request, remainder)`` tuple, or ``None`` if there is
            not enough data in the buffer. The remainder has the same type as
            ``buffer``: ``str`` for ``str`` input and ``bytes`` otherwise.
        """
        text = to_native_string(buffer)
        if self.max_size is not None and len(text) > self.max_size:
            raise RequestTooLargeError(
                "Buffer of {} characters exceeds the maximum of {}".format(
                    len(text), self.max_size
                )
            )

        # Optional components can't tell a truncated buffer from a missing
        # component, so wait for the blank line that ends the head.
        if '\n\n' not in text and '\n\r\n' not in text:
            log.debug("No end of request head in %d characters", len(text))
            return None

        try:
            result = run(request, text, self.trace)
        except Incomplete as e:
            log.debug("Incomplete request head: %s", e)
            return None
        except ParseError as e:
            log.debug("Rejected request head: %s", e)
            raise

        req, remainder = result
        log.debug(
            "Parsed %s request for %s, %d headers, %d characters left over",
            req.method.value, req.uri.unsplit(), len(req.headers),
            len(remainder)
        )
        if not isinstance(buffer, str):
            remainder = remainder.encode('iso-8859-1')
        return req, remainder
