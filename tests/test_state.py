#!/usr/bin/env python3
"""
Tests for the tape/pointer state.
"""

import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi.errors import TapeBoundsError
from bfi.state import DEFAULT_TAPE_LENGTH, MachineState


def test_defaults():
    state = MachineState()
    assert state.tape_length == DEFAULT_TAPE_LENGTH == 30000
    assert len(state.memory) == 30000
    assert state.pointer == 0
    assert state.steps == 0
    assert not state.memory.any()


def test_invalid_config():
    with pytest.raises(ValueError):
        MachineState(tape_length=0)
    with pytest.raises(ValueError):
        MachineState(tape_length=10, start_pointer=10)
    with pytest.raises(ValueError):
        MachineState(tape_length=10, start_pointer=-1)


def test_current_masks_to_a_byte():
    state = MachineState(tape_length=2)
    state.current = 256 + 7
    assert state.current == 7
    state.current = -1
    assert state.current == 255


def test_failed_move_leaves_pointer():
    state = MachineState(tape_length=2, start_pointer=1)
    with pytest.raises(TapeBoundsError):
        state.move(1)
    assert state.pointer == 1
    state.move(-1)
    assert state.pointer == 0


def test_reset():
    state = MachineState(tape_length=4, start_pointer=2)
    state.current = 9
    state.move(1)
    state.steps = 12
    state.reset()
    assert state.pointer == 2
    assert state.steps == 0
    assert not state.memory.any()


def test_window_is_clamped():
    state = MachineState(tape_length=5, start_pointer=1)
    lo, cells = state.window(8)
    assert lo == 0
    assert len(cells) == 5

    state = MachineState(tape_length=100, start_pointer=50)
    lo, cells = state.window(4)
    assert lo == 46
    assert len(cells) == 8
