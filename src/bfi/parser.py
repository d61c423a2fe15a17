from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .errors import BFSyntaxError, make_syntax_error, unmatched_close, unmatched_open
from .lexer import Token, tokenize


# ---------------- Instruction tree ----------------
class Op(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    READ_BYTE = ','
    WRITE_BYTE = '.'


@dataclass(frozen=True)
class Loop:
    body: Tuple["Instruction", ...] = ()


Instruction = Union[Op, Loop]
Program = Tuple[Instruction, ...]

_LEAF = {
    Token.MOVE_RIGHT: Op.MOVE_RIGHT,
    Token.MOVE_LEFT: Op.MOVE_LEFT,
    Token.INCREMENT: Op.INCREMENT,
    Token.DECREMENT: Op.DECREMENT,
    Token.READ_BYTE: Op.READ_BYTE,
    Token.WRITE_BYTE: Op.WRITE_BYTE,
}


# ---------------- Parser: tokens -> tree ----------------
def parse(tokens: Sequence[Token], start: int = 0, end: Optional[int] = None) -> Program:
    """Build the instruction tree for ``tokens[start:end]``.

    Each ``[`` opens a new body on the stack; the matching ``]`` closes it
    into a ``Loop`` appended to the enclosing body. Nesting depth is bounded
    only by memory. Indices in raised errors are absolute positions in
    ``tokens``.

    Raises UnmatchedCloseError at the first ``]`` without an opener, and
    UnmatchedOpenError at the innermost ``[`` still open once the range ends.
    """
    if end is None:
        end = len(tokens)

    program: List[Instruction] = []
    stack: List[Tuple[int, List[Instruction]]] = [(start - 1, program)]

    for i in range(start, end):
        tok = tokens[i]
        if tok is Token.LOOP_START:
            stack.append((i, []))
        elif tok is Token.LOOP_END:
            if len(stack) == 1:
                raise unmatched_close(i)
            _, body = stack.pop()
            stack[-1][1].append(Loop(tuple(body)))
        else:
            stack[-1][1].append(_LEAF[tok])

    if len(stack) > 1:
        raise unmatched_open(stack[-1][0])
    return tuple(program)


def parse_source(source: str) -> Program:
    try:
        return parse(tokenize(source))
    except BFSyntaxError as e:
        raise make_syntax_error(error=e, source=source) from None


# ---------------- Emit + counts ----------------
def _walk(program: Sequence[Instruction]) -> Iterator[Tuple[int, Optional[Instruction]]]:
    """Yield ``(depth, node)`` in source order, plus ``(depth, None)`` after
    each loop body."""
    stack: List[Tuple[int, Iterator[Instruction]]] = [(0, iter(program))]
    while stack:
        depth, nodes = stack[-1]
        n = next(nodes, None)
        if n is None:
            stack.pop()
            if stack:
                yield depth - 1, None
            continue
        yield depth, n
        if isinstance(n, Loop):
            stack.append((depth + 1, iter(n.body)))


def emit(program: Sequence[Instruction]) -> str:
    out: List[str] = []
    for _, n in _walk(program):
        if n is None:
            out.append(']')
        elif isinstance(n, Loop):
            out.append('[')
        else:
            out.append(n.value)
    return ''.join(out)


def count_leaves(program: Sequence[Instruction]) -> int:
    return sum(1 for _, n in _walk(program) if isinstance(n, Op))


def max_depth(program: Sequence[Instruction]) -> int:
    return max((d + 1 for d, n in _walk(program) if isinstance(n, Loop)), default=0)
