#!/usr/bin/env python3
"""
Runs the bundled example programs in-process.
"""

import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi.api import RunOptions, run_file
from bfi.executor import EofPolicy

EXAMPLES = os.path.join(os.path.dirname(__file__), '..', 'examples')


def test_hello_world():
    assert run_file(os.path.join(EXAMPLES, 'hello_world.bf')).output == b"Hello World!\n"


def test_echo():
    assert run_file(os.path.join(EXAMPLES, 'echo.bf'), b"Q").output == b"Q"


def test_cat():
    options = RunOptions(eof=EofPolicy.ZERO)
    result = run_file(os.path.join(EXAMPLES, 'cat.bf'), b"copy me\n", options=options)
    assert result.output == b"copy me\n"


def test_add_digits():
    assert run_file(os.path.join(EXAMPLES, 'add_digits.bf'), b"34").output == b"7\n"
