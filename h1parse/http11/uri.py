# -*- coding: utf-8 -*-
"""
h1parse/http11/uri
~~~~~~~~~~~~~~~~~~

Parsing for request targets: schemes, credentials, ports, paths, queries and
fragments, and the forms of target they are assembled into.
"""
from collections import namedtuple
from enum import Enum

import rfc3986

from ..common.exceptions import UnexpectedToken
from .host import HostKind, host, wildcard
from .primitives import (
    rule, run, tag, tag_no_case, alt, opt, take_while, alphanumeric1,
    two_to_four_digits
)


class Scheme(Enum):
    HTTP = 'http'
    HTTPS = 'https'

    @classmethod
    def from_token(cls, token, offset=0):
        """
        Looks up a scheme by name, ignoring case. Unknown names raise
        :class:`UnexpectedToken`.
        """
        try:
            return cls(token.lower())
        except ValueError:
            raise UnexpectedToken(
                "unsupported scheme {!r}".format(token), 'scheme', offset
            )


class TargetForm(Enum):
    """
    The four shapes a request target can take.
    """
    ORIGIN = 'origin'
    ABSOLUTE = 'absolute'
    AUTHORITY = 'authority'
    ASTERISK = 'asterisk'


Authority = namedtuple('Authority', ['username', 'password'])


class Uri(namedtuple('Uri', ['scheme', 'authority', 'host', 'port', 'path',
                             'query', 'fragment'])):
    """
    A parsed request target. Every field except the one the form requires is
    optional. ``query`` is either ``None`` or a tuple of ``(key, value)``
    pairs in the order they appeared.
    """
    __slots__ = ()

    def __new__(cls, scheme=None, authority=None, host=None, port=None,
                path=None, query=None, fragment=None):
        return super(Uri, cls).__new__(
            cls, scheme, authority, host, port, path, query, fragment
        )

    @property
    def form(self):
        if self.host is not None and self.host.kind is HostKind.WILDCARD:
            return TargetForm.ASTERISK
        if self.scheme is not None:
            return TargetForm.ABSOLUTE
        if self.host is not None:
            return TargetForm.AUTHORITY
        return TargetForm.ORIGIN

    @property
    def netloc(self):
        """
        The ``[user[:password]@]host[:port]`` part of the target, or ``None``
        if there is no host.
        """
        if self.host is None:
            return None

        netloc = str(self.host)
        if self.authority is not None:
            userinfo = self.authority.username
            if self.authority.password is not None:
                userinfo += ':' + self.authority.password
            netloc = userinfo + '@' + netloc
        if self.port is not None:
            netloc += ':{:02d}'.format(self.port)
        return netloc

    def unsplit(self):
        """
        Renders the target back into its canonical textual form.
        """
        form = self.form
        if form is TargetForm.ASTERISK:
            return '*'
        elif form is TargetForm.AUTHORITY:
            return self.netloc

        query = None
        if self.query is not None:
            query = '&'.join('{}={}'.format(k, v) for k, v in self.query)

        reference = rfc3986.URIReference(
            self.scheme.value if self.scheme is not None else None,
            self.netloc,
            self.path,
            query,
            self.fragment,
        )
        return reference.unsplit()

    def __str__(self):
        return self.unsplit()


_PATH_STOP = frozenset('?# \t\r\n')
_QUERY_STOP = frozenset('# \t\r\n')
_FRAGMENT_STOP = frozenset(' \t\r\n')


@rule('scheme')
def scheme(cursor):
    start = cursor.pos
    cursor, matched = alt(
        cursor,
        lambda c: tag_no_case(c, 'http://', 'scheme'),
        lambda c: tag_no_case(c, 'https://', 'scheme'),
    )
    return cursor, Scheme.from_token(matched[:-len('://')], start)


def _credentials(cursor):
    cursor, username = alphanumeric1(cursor, 'username')
    cursor, _ = opt(cursor, lambda c: tag(c, ':', 'authority'))
    cursor, password = opt(cursor, lambda c: alphanumeric1(c, 'password'))
    cursor, _ = tag(cursor, '@', 'authority')
    return cursor, Authority(username, password)


@rule('authority')
def authority(cursor):
    """
    An optional ``user[:password]@`` prefix. This never fails: when the
    prefix is not there (or is malformed) nothing is consumed and the value
    is ``None``.
    """
    return opt(cursor, _credentials)


@rule('port')
def port(cursor):
    cursor, _ = tag(cursor, ':', 'port')
    cursor, digits = two_to_four_digits(cursor, 'port')
    return cursor, int(digits)


@rule('path')
def path(cursor):
    cursor, slash = tag(cursor, '/', 'path')
    cursor, segments = take_while(cursor, lambda c: c not in _PATH_STOP)
    return cursor, slash + segments


def split_query(text):
    """
    Splits a raw query string into ``(key, value)`` pairs. Keys without an
    ``=`` get an empty value; empty segments are skipped. Nothing is
    percent-decoded.
    """
    pairs = []
    for segment in text.split('&'):
        if not segment:
            continue
        key, _, value = segment.partition('=')
        pairs.append((key, value))
    return tuple(pairs)


@rule('query')
def query(cursor):
    cursor, _ = tag(cursor, '?', 'query')
    cursor, text = take_while(cursor, lambda c: c not in _QUERY_STOP)
    return cursor, split_query(text)


@rule('fragment')
def fragment(cursor):
    cursor, _ = tag(cursor, '#', 'fragment')
    return take_while(cursor, lambda c: c not in _FRAGMENT_STOP)


@rule('absolute-uri')
def absolute_uri(cursor):
    """
    ``scheme://[user[:password]@]host[:port][/path][?query][#fragment]``
    """
    cursor, scheme_ = scheme(cursor)
    cursor, authority_ = authority(cursor)
    cursor, host_ = host(cursor)
    cursor, port_ = opt(cursor, port)
    cursor, path_ = opt(cursor, path)
    cursor, query_ = opt(cursor, query)
    cursor, fragment_ = opt(cursor, fragment)
    return cursor, Uri(scheme_, authority_, host_, port_, path_, query_,
                       fragment_)


@rule('origin-form')
def origin_form(cursor):
    cursor, path_ = path(cursor)
    cursor, query_ = opt(cursor, query)
    return cursor, Uri(path=path_, query=query_)


@rule('authority-form')
def authority_form(cursor):
    cursor, host_ = host(cursor)
    cursor, port_ = port(cursor)
    return cursor, Uri(host=host_, port=port_)


@rule('asterisk-form')
def asterisk_form(cursor):
    cursor, host_ = wildcard(cursor)
    return cursor, Uri(host=host_)


def parse_scheme(buffer, trace=None):
    return run(scheme, buffer, trace)


def parse_authority(buffer, trace=None):
    """
    Parses an optional credentials prefix.

    :returns: ``(Authority, remainder)``, or ``(None, buffer)`` when there is
        no credentials prefix.
    """
    return run(authority, buffer, trace)


def parse_port(buffer, trace=None):
    return run(port, buffer, trace)


def parse_uri(buffer, trace=None):
    """
    Parses an absolute URI from the start of ``buffer``.

    :returns: A ``(Uri, remainder)`` tuple.
    """
    return run(absolute_uri, buffer, trace)
