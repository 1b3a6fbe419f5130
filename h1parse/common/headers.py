# -*- coding: utf-8 -*-
"""
h1parse/common/headers
~~~~~~~~~~~~~~~~~~~~~~

Contains h1parse's structure for holding a parsed HTTP header block.
"""
from collections.abc import Mapping


class HTTPHeaderMap(Mapping):
    """
    A read-only structure that contains HTTP headers.

    HTTP headers look roughly like a name-value set, but in practice:

    - duplicate keys are allowed
    - keys are compared case-insensitively
    - they logically contain a form of ordering

    This structure preserves all of that. Headers are stored exactly as they
    were parsed, so the original header block can always be reproduced. No
    attempt is made to interpret values (comma splitting and the like belong
    to higher layers).
    """
    def __init__(self, items=()):
        self._items = tuple((k, v) for k, v in items)

    def __getitem__(self, key):
        """
        Unlike the dict __getitem__, this returns a list of values in the
        order they were parsed.
        """
        values = [v for k, v in self._items if _keys_equal(k, key)]

        if not values:
            raise KeyError("Nonexistent header key: {}".format(key))

        return values

    def __iter__(self):
        """
        This mapping iterates like the list of tuples it is.
        """
        return iter(self._items)

    def __len__(self):
        """
        The number of header lines, duplicates included.
        """
        return len(self._items)

    def __contains__(self, key):
        """
        If any header is present with this key, returns True.
        """
        return any(_keys_equal(key, k) for k, _ in self._items)

    def keys(self):
        """
        Returns an iterable of the header keys in the mapping. This explicitly
        does not filter duplicates, ensuring that it's the same length as
        len().
        """
        for n, _ in self._items:
            yield n

    def items(self):
        return self.__iter__()

    def values(self):
        for _, v in self._items:
            yield v

    def get(self, name, default=None):
        """
        Unlike the dict get, this returns a list of values in the order
        they were parsed.
        """
        try:
            return self[name]
        except KeyError:
            return default

    def __eq__(self, other):
        if not isinstance(other, HTTPHeaderMap):
            return NotImplemented
        return self._items == other._items

    def __ne__(self, other):
        if not isinstance(other, HTTPHeaderMap):
            return NotImplemented
        return self._items != other._items

    def __hash__(self):
        return hash(self._items)

    def __repr__(self):
        return 'HTTPHeaderMap({!r})'.format(list(self._items))


def _keys_equal(x, y):
    """
    Returns 'True' if the two keys are equal by the laws of HTTP headers.
    """
    return x.lower() == y.lower()
