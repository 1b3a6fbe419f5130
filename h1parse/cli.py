# -*- coding: utf-8 -*-
"""
h1parse/cli
~~~~~~~~~~~

Command line interface for h1parse.
"""
import argparse
import json
import logging
import sys

from h1parse import __version__
from h1parse.common.exceptions import ParseError, RequestTooLargeError
from h1parse.common.util import to_native_string
from h1parse.http11.parser import DEFAULT_MAX_SIZE, Parser, render_request

log = logging.getLogger('h1parse')

_ARGUMENT_DEFAULTS = {
    'file': '-',
    'json': False,
    'max_size': DEFAULT_MAX_SIZE,
    'verbose': False,
}


def parse_argument(argv=None):
    parser = argparse.ArgumentParser(
        description='Parse the head of an HTTP/1.x request.'
    )
    parser.set_defaults(**_ARGUMENT_DEFAULTS)

    # positional arguments
    parser.add_argument(
        'file', nargs='?',
        help='file holding the raw request (default: - for stdin)')

    # optional arguments
    parser.add_argument(
        '--version', action='version',
        version='%(prog)s {}'.format(__version__))
    parser.add_argument(
        '-j', '--json', action='store_true',
        help='print the parsed request as JSON')
    parser.add_argument(
        '-m', '--max-size', type=int,
        help='reject buffers larger than this (default: {})'.format(
            DEFAULT_MAX_SIZE))
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='set verbose mode (loglevel=DEBUG) and trace grammar rules')

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    return args


def read_buffer(args):
    if args.file == '-':
        return sys.stdin.buffer.read()
    with open(args.file, 'rb') as f:
        return f.read()


def trace_rule(event, name, offset):
    log.debug('%-5s %s at %d', event, name, offset)


def describe(request, remainder):
    """
    Turns a parsed request into a JSON-serializable dictionary.
    """
    uri = request.uri
    authority = uri.authority
    return {
        'method': request.method.value,
        'target': uri.unsplit(),
        'form': uri.form.value,
        'scheme': uri.scheme.value if uri.scheme is not None else None,
        'username': authority.username if authority is not None else None,
        'password': authority.password if authority is not None else None,
        'host': str(uri.host) if uri.host is not None else None,
        'host_kind': uri.host.kind.value if uri.host is not None else None,
        'port': uri.port,
        'path': uri.path,
        'query': [list(pair) for pair in uri.query]
        if uri.query is not None else None,
        'fragment': uri.fragment,
        'version': 'HTTP/1.{}'.format(request.minor_version),
        'headers': [[n, v] for n, v in request.headers],
        'remainder': to_native_string(remainder),
    }


def main(argv=None):
    args = parse_argument(argv)
    trace = None
    if args.verbose:
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        log.addHandler(handler)
        log.setLevel(logging.DEBUG)
        trace = trace_rule

    parser = Parser(trace=trace, max_size=args.max_size)
    try:
        result = parser.parse_request(read_buffer(args))
    except (ParseError, RequestTooLargeError) as e:
        print('error: {}'.format(e), file=sys.stderr)
        return 1

    if result is None:
        print('error: incomplete request head', file=sys.stderr)
        return 1

    request, remainder = result
    if args.json:
        print(json.dumps(describe(request, remainder), indent=2))
    else:
        sys.stdout.write(render_request(request))
    return 0


if __name__ == '__main__':
    sys.exit(main())
