# -*- coding: utf-8 -*-
"""
h1parse/http11/fields
~~~~~~~~~~~~~~~~~~~~~

Header field lines.
"""
from ..common.headers import HTTPHeaderMap
from .primitives import (
    rule, run, tag, many0, space0, newline, until_newline,
    alphanumeric_hyphen1
)


@rule('header')
def header(cursor):
    """
    ``name [spaces] ":" [spaces] value newline``. The value is everything up
    to the end of the line and is not interpreted.
    """
    cursor, name = alphanumeric_hyphen1(cursor, 'header-name')
    cursor, _ = space0(cursor)
    cursor, _ = tag(cursor, ':', 'header-colon')
    cursor, _ = space0(cursor)
    cursor, value = until_newline(cursor)
    cursor, _ = newline(cursor, 'header-newline')
    return cursor, (name, value)


@rule('headers')
def headers(cursor):
    """
    Zero or more header lines. Stops, without failing, at the first line that
    is not a header.
    """
    cursor, items = many0(cursor, header)
    return cursor, HTTPHeaderMap(items)


def parse_header(buffer, trace=None):
    return run(header, buffer, trace)


def parse_headers(buffer, trace=None):
    """
    Parses a block of header lines from the start of ``buffer``.

    :returns: A ``(HTTPHeaderMap, remainder)`` tuple. The remainder starts at
        the first line that is not a header, typically the blank line that
        ends the header block.
    """
    return run(headers, buffer, trace)
