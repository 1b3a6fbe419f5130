# -*- coding: utf-8 -*-
import pytest


@pytest.fixture
def get_request():
    """
    A GET request in origin form, terminated with CRLFs.
    """
    return (
        b"GET /api/users?page=1&limit=10 HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: application/json\r\n"
        b"\r\n"
    )


@pytest.fixture
def post_request():
    """
    A POST request in absolute form with a JSON body after the head.
    """
    body = b'{"name": "John"}'
    return (
        b"POST http://example.org:8080/api/users HTTP/1.1\n"
        b"Host: example.org\n"
        b"Content-Type: application/json\n"
        b"\n"
    ) + body
