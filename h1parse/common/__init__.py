# -*- coding: utf-8 -*-
"""
h1parse/common
~~~~~~~~~~~~~~

Structures and helpers shared across h1parse.
"""
