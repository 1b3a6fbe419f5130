# -*- coding: utf-8 -*-
"""
h1parse/common/util
~~~~~~~~~~~~~~~~~~~

General utility functions for use with h1parse.
"""


def to_native_string(buffer):
    """
    Converts a buffer to a native string. Byte-like buffers are decoded as
    ISO-8859-1, which maps every byte to exactly one character, so offsets
    into the result are also byte offsets into the original buffer.
    """
    if isinstance(buffer, str):
        return buffer
    elif isinstance(buffer, memoryview):
        return buffer.tobytes().decode('iso-8859-1')
    elif isinstance(buffer, (bytes, bytearray)):
        return bytes(buffer).decode('iso-8859-1')
    else:
        raise ValueError("Non string type.")


def format_ipv4(octets):
    """
    Renders a sequence of four octets in dotted-quad notation.
    """
    if len(octets) != 4:
        raise ValueError("IPv4 addresses have exactly four octets.")
    return '.'.join(str(int(o)) for o in octets)
