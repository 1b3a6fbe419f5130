# -*- coding: utf-8 -*-
"""
h1parse/http11
~~~~~~~~~~~~~~

The HTTP/1.1 request grammar.
"""
