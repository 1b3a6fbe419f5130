# -*- coding: utf-8 -*-
"""
test_parser.py
~~~~~~~~~~~~~~

Unit tests for h1parse's HTTP/1.1 request parser.
"""
import mock
import pytest

from h1parse.common.exceptions import (
    ParseError, UnexpectedToken, InvalidCharacterClass, Incomplete,
    RequestTooLargeError
)
from h1parse.common.headers import HTTPHeaderMap
from h1parse.http11.host import Host
from h1parse.http11.method import Method
from h1parse.http11.parser import (
    Parser, Request, parse_request, render_request
)
from h1parse.http11.uri import Authority, Scheme, TargetForm, Uri


class TestParseRequest(object):
    def test_absolute_form_request(self):
        data = (
            "GET http://example.org:8080/path?q=1 HTTP/1.1\n"
            "Host: example.org\n"
            "\n"
        )

        r, rest = parse_request(data)

        assert r == Request(
            method=Method.GET,
            uri=Uri(
                scheme=Scheme.HTTP,
                host=Host.named('example.org'),
                port=8080,
                path='/path',
                query=(('q', '1'),),
            ),
            minor_version=1,
            headers=HTTPHeaderMap([('Host', 'example.org')]),
        )
        assert rest == ''

    def test_crlf_and_lf_parse_the_same(self):
        lf = "GET /x HTTP/1.1\nHost: a\nAccept: b\n\n"
        crlf = lf.replace('\n', '\r\n')

        assert parse_request(lf) == parse_request(crlf)

    def test_origin_form_request(self, get_request):
        r, rest = parse_request(get_request)

        assert r.method is Method.GET
        assert r.uri.form is TargetForm.ORIGIN
        assert r.uri.host is None
        assert r.uri.path == '/api/users'
        assert r.uri.query == (('page', '1'), ('limit', '10'))
        assert r.headers['host'] == ['localhost:8080']
        assert list(r.headers.keys()) == ['Host', 'User-Agent', 'Accept']
        assert rest == ''

    def test_body_is_left_over(self, post_request):
        r, rest = parse_request(post_request)

        assert r.method is Method.POST
        assert r.uri.form is TargetForm.ABSOLUTE
        assert r.headers['content-type'] == ['application/json']
        assert rest == '{"name": "John"}'

    def test_credentials_and_fragment(self):
        r, _ = parse_request(
            "GET https://user:pw@10.0.0.1/a#top HTTP/1.1\r\n\r\n"
        )

        assert r.uri.scheme is Scheme.HTTPS
        assert r.uri.authority == Authority('user', 'pw')
        assert r.uri.host == Host.ipv4([10, 0, 0, 1])
        assert r.uri.fragment == 'top'

    def test_options_asterisk(self):
        r, _ = parse_request("OPTIONS * HTTP/1.1\r\nHost: x\r\n\r\n")

        assert r.method is Method.OPTIONS
        assert r.uri.form is TargetForm.ASTERISK
        assert r.uri.host == Host.wildcard()

    def test_asterisk_needs_options(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("GET * HTTP/1.1\r\n\r\n")

        assert e.value.rule == 'request-target'
        assert e.value.offset == 4

    @pytest.mark.parametrize(('target', 'host'), [
        ('example.org:443', Host.named('example.org')),
        ('10.0.0.1:8443', Host.ipv4([10, 0, 0, 1])),
    ])
    def test_connect_authority_form(self, target, host):
        r, _ = parse_request("CONNECT {} HTTP/1.1\r\n\r\n".format(target))

        assert r.method is Method.CONNECT
        assert r.uri.form is TargetForm.AUTHORITY
        assert r.uri.host == host
        assert r.uri.unsplit() == target

    def test_connect_needs_port(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("CONNECT example.org HTTP/1.1\r\n\r\n")

        assert e.value.rule == 'port'
        assert e.value.offset == 19

    def test_http_10(self):
        r, _ = parse_request("get / HTTP/1.0\r\n\r\n")

        assert r.method is Method.GET
        assert r.minor_version == 0
        assert len(r.headers) == 0

    def test_origin_and_absolute_forms_are_told_apart(self):
        origin, _ = parse_request("GET /http://x HTTP/1.1\r\n\r\n")
        absolute, _ = parse_request("GET http://x/ HTTP/1.1\r\n\r\n")

        assert origin.uri.form is TargetForm.ORIGIN
        assert origin.uri.path == '/http://x'
        assert absolute.uri.form is TargetForm.ABSOLUTE
        assert absolute.uri.path == '/'

    def test_bytes_offsets_match_characters(self):
        with pytest.raises(InvalidCharacterClass) as e:
            parse_request(b"GET http://$$$/ HTTP/1.1\r\n\r\n")

        assert e.value.offset == 11
        assert e.value.rule == 'host-label'

    def test_offsets_count_characters_for_str_and_bytes_for_bytes(self):
        data = "GET / HTTP/1.1\r\nX-Name: é\r\nBad\r\n\r\n"

        with pytest.raises(UnexpectedToken) as text_error:
            parse_request(data)
        with pytest.raises(UnexpectedToken) as bytes_error:
            parse_request(data.encode('utf-8'))

        assert text_error.value.rule == 'header-colon'
        assert text_error.value.offset == 30
        assert bytes_error.value.offset == 31


class TestParseRequestErrors(object):
    def test_unknown_method(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("FOO / HTTP/1.1\r\n\r\n")

        assert e.value.rule == 'method'
        assert e.value.offset == 0

    def test_missing_space_after_method(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("GETX / HTTP/1.1\r\n\r\n")

        assert e.value.offset == 3

    def test_unsupported_version(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("GET /x HTTP/2.0\r\n\r\n")

        assert e.value.rule == 'version'
        assert e.value.offset == 7

    def test_unknown_target_form(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("GET ftp://x HTTP/1.1\r\n\r\n")

        assert e.value.rule == 'request-target'
        assert e.value.offset == 4

    def test_bad_scheme(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("GET hxxp://x HTTP/1.1\r\n\r\n")

        assert e.value.rule == 'scheme'
        assert e.value.offset == 4

    def test_bad_header_line_is_reported(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("GET /x HTTP/1.1\r\nBad line\r\n\r\n")

        assert e.value.rule == 'header-colon'
        assert e.value.offset == 21

    def test_space_inside_target(self):
        with pytest.raises(UnexpectedToken) as e:
            parse_request("GET /a b HTTP/1.1\r\n\r\n")

        assert e.value.offset == 7

    @pytest.mark.parametrize('data', [
        '',
        'GET',
        'GET /x HTTP/1.1',
        'GET /x HTTP/1.1\r\n',
        'GET /x HTTP/1.1\r\nHost: x\r\n',
        'GET /x HTTP/1.1\r\nHost: x',
    ])
    def test_truncated_requests(self, data):
        with pytest.raises(Incomplete):
            parse_request(data)

    def test_errors_render_usefully(self):
        with pytest.raises(ParseError) as e:
            parse_request("FOO / HTTP/1.1\r\n\r\n")

        assert str(e.value).startswith('unexpected-token at offset 0 (method)')


class TestRoundTrip(object):
    @pytest.mark.parametrize('data', [
        "GET http://example.org:8080/path?q=1 HTTP/1.1\nHost: example.org\n\n",
        "GET https://user:pw@10.0.0.1/a/b?x=1&flag#frag HTTP/1.1\r\n\r\n",
        "get HTTP://user@example.org?a=b HTTP/1.0\r\n\r\n",
        "OPTIONS * HTTP/1.1\r\nHost: x\r\n\r\n",
        "CONNECT proxy.example.org:8443 HTTP/1.1\r\n\r\n",
        "GET http://example.org:05/x HTTP/1.1\r\n\r\n",
        "GET http://example.org:00 HTTP/1.1\r\n\r\n",
        "CONNECT example.org:08 HTTP/1.1\r\n\r\n",
        "POST /form?a=1&&b=2 HTTP/1.1\r\n"
        "Content-Type  :   text/plain\r\n"
        "Accept: a\r\nAccept: b\r\n\r\n",
    ])
    def test_rendering_reparses_to_same_request(self, data):
        r, _ = parse_request(data)
        text = render_request(r)

        assert parse_request(text) == (r, '')

    def test_rendering(self):
        r, _ = parse_request(
            "get http://example.org/x?q=1 HTTP/1.1\nHost  : example.org\n\n"
        )

        assert render_request(r) == (
            "GET http://example.org/x?q=1 HTTP/1.1\r\n"
            "Host: example.org\r\n"
            "\r\n"
        )


class TestParser(object):
    def test_parse_memoryview(self, get_request):
        p = Parser()
        r, rest = p.parse_request(memoryview(get_request))

        assert r.uri.path == '/api/users'
        assert rest == b''

    def test_body_is_left_over_as_bytes(self, post_request):
        p = Parser()
        _, rest = p.parse_request(bytearray(post_request))

        assert rest == b'{"name": "John"}'

    def test_body_is_left_over_as_str_for_str_input(self, post_request):
        p = Parser()
        _, rest = p.parse_request(post_request.decode('ascii'))

        assert rest == '{"name": "John"}'

    def test_short_request_returns_none(self):
        p = Parser()

        assert p.parse_request(b"GET /x HTTP/1.1\r\nHost: x\r\n") is None
        assert p.parse_request(b"GET /x HT") is None
        assert p.parse_request(b"GET http://example.org:8") is None

    def test_bad_head_with_terminator_raises(self):
        p = Parser()

        with pytest.raises(UnexpectedToken):
            p.parse_request(b"GET http://example.org:8 HTTP/1.1\r\n\r\n")

    def test_invalid_request_raises(self):
        p = Parser()

        with pytest.raises(ParseError):
            p.parse_request(b"FOO /x HTTP/1.1\r\n\r\n")

    def test_oversized_buffer_is_refused(self):
        p = Parser(max_size=10)

        with pytest.raises(RequestTooLargeError):
            p.parse_request(b"GET / HTTP/1.1\r\n\r\n")

    def test_size_limit_can_be_disabled(self):
        p = Parser(max_size=None)
        data = b"GET / HTTP/1.1\r\nX-Pad: " + b"a" * 100000 + b"\r\n\r\n"

        r, _ = p.parse_request(data)

        assert len(r.headers['x-pad'][0]) == 100000

    def test_trace_hook_sees_every_rule(self):
        trace = mock.Mock()
        p = Parser(trace=trace)
        data = b"GET / HTTP/1.1\r\n\r\n"

        p.parse_request(data)

        assert trace.call_args_list[0] == mock.call('enter', 'request', 0)
        assert trace.call_args_list[-1] == mock.call(
            'match', 'request', len(data)
        )
        rules = set(c[0][1] for c in trace.call_args_list)
        assert set(['method', 'request-target', 'origin-form', 'path',
                    'version', 'headers', 'header']) <= rules

    def test_parser_logs_at_debug(self, caplog):
        p = Parser()

        with caplog.at_level('DEBUG', logger='h1parse'):
            p.parse_request(b"GET / HTTP/1.1\r\n\r\n")

        assert 'Parsed GET request for /' in caplog.text
