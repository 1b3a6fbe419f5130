#!/usr/bin/env python
# -*- coding: utf-8 -*-
import re

from setuptools import setup

# Get the version
version_regex = r'__version__ = ["\']([^"\']*)["\']'
with open('h1parse/__init__.py', 'r') as f:
    text = f.read()
    match = re.search(version_regex, text)

    if match:
        version = match.group(1)
    else:
        raise RuntimeError("No version number found!")


packages = [
    'h1parse',
    'h1parse.common',
    'h1parse.http11',
]

setup(
    name='h1parse',
    version=version,
    description='Parser for HTTP/1.x request lines and header blocks',
    long_description=open('README.rst').read() + '\n\n' + open('HISTORY.rst').read(),
    packages=packages,
    package_data={'': ['README.rst', 'HISTORY.rst']},
    package_dir={'h1parse': 'h1parse'},
    include_package_data=True,
    license='MIT License',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    python_requires='>=3.6',
    install_requires=[
        'rfc3986>=1.1.0',
    ],
    entry_points={
        'console_scripts': [
            'h1parse = h1parse.cli:main',
        ],
    },
    extras_require={
        'test': ['pytest', 'mock'],
    }
)
