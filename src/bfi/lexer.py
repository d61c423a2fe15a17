from __future__ import annotations

from enum import Enum
from typing import List, Tuple


class Token(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    READ_BYTE = ','
    WRITE_BYTE = '.'
    LOOP_START = '['
    LOOP_END = ']'


_CHAR_TO_TOKEN = {t.value: t for t in Token}


def is_code_char(ch: str) -> bool:
    return ch in _CHAR_TO_TOKEN


def tokenize(source: str) -> List[Token]:
    """Keep the eight command characters, in order; drop everything else."""
    return [_CHAR_TO_TOKEN[ch] for ch in source if is_code_char(ch)]


def locate(source: str, token_index: int) -> Tuple[int, int]:
    """Return the 1-based (line, col) of the ``token_index``-th command char."""
    if token_index < 0:
        raise IndexError(f"token index out of range: {token_index}")

    line, col = 1, 1
    seen = 0
    for ch in source:
        if is_code_char(ch):
            if seen == token_index:
                return line, col
            seen += 1
        if ch == '\n':
            line += 1
            col = 1
        else:
            col += 1
    raise IndexError(f"token index out of range: {token_index}")
