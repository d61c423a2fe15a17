#!/usr/bin/env python3
"""
End-to-end tests through the embedding API (source text in, bytes out).
"""

import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi.api import RunOptions, compile_file, compile_string, run_file, run_string
from bfi.errors import BFSyntaxError, InputExhaustedError
from bfi.executor import EofPolicy
from bfi.parser import Loop, Op

HELLO_WORLD = """
Prints Hello World! and a newline
++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++.
"""


def test_hello_world():
    result = run_string(HELLO_WORLD)
    assert result.output == b"Hello World!\n"


def test_increment_transfer_scenario():
    result = run_string("++>+++++[<+>-]<.")
    assert result.output == bytes([7])
    assert int(result.state.memory[0]) == 7
    assert result.pointer == 0


def test_echo_scenario():
    result = run_string(",.", bytes([65]))
    assert result.output == b"A"


def test_cat_until_zero_with_eof_zero():
    options = RunOptions(eof=EofPolicy.ZERO)
    result = run_string(",[.,]", b"hi there", options=options)
    assert result.output == b"hi there"


def test_eof_error_by_default():
    with pytest.raises(InputExhaustedError):
        run_string(",[.,]", b"abc")


def test_structural_error_prevents_execution():
    with pytest.raises(BFSyntaxError):
        run_string("+.]")


def test_compile_string():
    assert compile_string("+[-]") == (Op.INCREMENT, Loop((Op.DECREMENT,)))


def test_options_validation():
    with pytest.raises(ValueError):
        RunOptions(tape_length=0)
    with pytest.raises(ValueError):
        RunOptions(tape_length=10, start_pointer=10)
    with pytest.raises(ValueError):
        RunOptions(max_steps=-1)


def test_options_shape_the_tape():
    result = run_string("<+", options=RunOptions(tape_length=8, start_pointer=3))
    assert len(result.state.memory) == 8
    assert result.pointer == 2
    assert result.steps == 2


def test_run_file(tmp_path):
    path = tmp_path / "seven.bf"
    path.write_text("two ++ five >+++++ add [<+>-] print <.\n", encoding="utf-8")
    assert compile_file(path) == compile_string("++>+++++[<+>-]<.")
    assert run_file(path).output == b"\x07"


def test_deeply_nested_program():
    result = run_string("+" + "[" * 1200 + "-" + "]" * 1200 + ".")
    assert result.output == b"\x00"
