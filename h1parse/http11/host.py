# -*- coding: utf-8 -*-
"""
h1parse/http11/host
~~~~~~~~~~~~~~~~~~~

Parsing for the host portion of a request target.

Hosts come in three flavours: dotted-quad IPv4 addresses, DNS-style names
and the ``*`` wildcard. They are tried in that order. IPv4 goes first because
every address is also a prefix of something the name grammar would accept
(``192`` is a perfectly good single-label name), so trying names first would
misread addresses.
"""
from collections import namedtuple
from enum import Enum
import functools

from ..common.exceptions import ParseError
from ..common.util import format_ipv4
from .primitives import (
    rule, run, tag, alt, alpha1, alphanumeric_hyphen1, octet
)


class HostKind(Enum):
    NAMED = 'named'
    IPV4 = 'ipv4'
    WILDCARD = 'wildcard'


class Host(namedtuple('Host', ['kind', 'value'])):
    """
    A parsed host. ``kind`` is a :class:`HostKind`; ``value`` is the
    dot-joined name for ``NAMED``, a tuple of four ints for ``IPV4`` and
    ``None`` for ``WILDCARD``. Use the constructors rather than building
    these by hand.
    """
    __slots__ = ()

    @classmethod
    def named(cls, name):
        return cls(HostKind.NAMED, name)

    @classmethod
    def ipv4(cls, octets):
        octets = tuple(int(o) for o in octets)
        if len(octets) != 4 or not all(0 <= o <= 255 for o in octets):
            raise ValueError("Invalid IPv4 octets: {!r}".format(octets))
        return cls(HostKind.IPV4, octets)

    @classmethod
    def wildcard(cls):
        return cls(HostKind.WILDCARD, None)

    def __str__(self):
        if self.kind is HostKind.NAMED:
            return self.value
        elif self.kind is HostKind.IPV4:
            return format_ipv4(self.value)
        elif self.kind is HostKind.WILDCARD:
            return '*'
        raise ValueError("Unknown host kind: {!r}".format(self.kind))


@rule('ipv4')
def ipv4(cursor):
    octets = []
    for _ in range(3):
        cursor, value = octet(cursor)
        cursor, _ = tag(cursor, '.', 'ipv4-dot')
        octets.append(value)
    cursor, value = octet(cursor)
    octets.append(value)
    return cursor, Host.ipv4(octets)


def _dotted_name(cursor):
    # One or more "label." groups, then an alphabetic final label.
    labels = []
    while True:
        try:
            after_label, label = alphanumeric_hyphen1(cursor, 'host-label')
            after_dot, _ = tag(after_label, '.', 'host-dot')
        except ParseError:
            if not labels:
                raise
            break
        labels.append(label)
        cursor = after_dot

    cursor, last = alpha1(cursor, 'host-label')
    labels.append(last)
    return cursor, Host.named('.'.join(labels))


def _single_label(cursor):
    cursor, label = alphanumeric_hyphen1(cursor, 'host-label')
    return cursor, Host.named(label)


@rule('named-host')
def named_host(cursor):
    return alt(cursor, _dotted_name, _single_label)


@rule('wildcard')
def wildcard(cursor):
    cursor, _ = tag(cursor, '*', 'wildcard')
    return cursor, Host.wildcard()


@rule('host')
def host(cursor, allow_wildcard=False):
    """
    Parses a host. The wildcard form is only considered when the caller asks
    for it.
    """
    if allow_wildcard:
        return alt(cursor, ipv4, named_host, wildcard)
    return alt(cursor, ipv4, named_host)


def parse_ipv4(buffer, trace=None):
    return run(ipv4, buffer, trace)


def parse_host(buffer, allow_wildcard=False, trace=None):
    """
    Parses a host from the start of ``buffer``.

    :returns: A ``(Host, remainder)`` tuple.
    :raises ParseError: if no host form matches. The error is the one raised
        by the last alternative tried.
    """
    grammar_rule = functools.partial(host, allow_wildcard=allow_wildcard)
    return run(grammar_rule, buffer, trace)
