# -*- coding: utf-8 -*-
"""
h1parse
~~~~~~~

A parser for the head of HTTP/1.x requests: the request line and the header
block, turned into immutable, validated values.
"""
__version__ = '0.1.0'

from .common.exceptions import (
    ParseError, UnexpectedToken, InvalidCharacterClass, OutOfRange,
    Incomplete, RequestTooLargeError
)
from .common.headers import HTTPHeaderMap
from .http11.host import Host, HostKind
from .http11.method import Method
from .http11.parser import Parser, Request, parse_request, render_request
from .http11.uri import Authority, Scheme, TargetForm, Uri

__all__ = [
    'ParseError', 'UnexpectedToken', 'InvalidCharacterClass', 'OutOfRange',
    'Incomplete', 'RequestTooLargeError', 'HTTPHeaderMap', 'Host', 'HostKind',
    'Method', 'Parser', 'Request', 'parse_request', 'render_request',
    'Authority', 'Scheme', 'TargetForm', 'Uri',
]

# Set default logging handler.
import logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
