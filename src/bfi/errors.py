from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .lexer import locate


def _build_context(lines: List[str], line_no_1: int, col_no_1: int, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (col_no_1 - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'unmatched_close':
        return 'Remove the extra "]" or add the missing "[" before it.'
    if kind == 'unmatched_open':
        return 'Add the missing "]" or remove the extra "[".'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFSyntaxError(BFError):
    kind: str
    index: int
    line: Optional[int] = None
    col: Optional[int] = None
    context: str = ''


@dataclass
class UnmatchedCloseError(BFSyntaxError):
    pass


@dataclass
class UnmatchedOpenError(BFSyntaxError):
    pass


@dataclass
class BFRuntimeError(BFError):
    pointer: int
    step: int


@dataclass
class TapeBoundsError(BFRuntimeError):
    tape_length: int


@dataclass
class InputExhaustedError(BFRuntimeError):
    pass


@dataclass
class StepLimitExceeded(BFRuntimeError):
    limit: int


def unmatched_close(index: int) -> UnmatchedCloseError:
    return UnmatchedCloseError(
        message=f"Unmatched closing bracket at token #{index}",
        kind='unmatched_close',
        index=index,
    )


def unmatched_open(index: int) -> UnmatchedOpenError:
    return UnmatchedOpenError(
        message=f"Unmatched opening bracket: loop starting at token #{index} is never closed",
        kind='unmatched_open',
        index=index,
    )


def make_syntax_error(*, error: BFSyntaxError, source: str) -> BFSyntaxError:
    """Attach line/col and a source excerpt to a bare structural error."""
    line, col = locate(source, error.index)
    lines = source.split('\n')
    ctx = _build_context(lines, line, col)
    hint = _hint_for(error.kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return type(error)(
        message=f"SyntaxError: {error.message} (line {line}, col {col})\n{ctx}{hint_block}",
        kind=error.kind,
        index=error.index,
        line=line,
        col=col,
        context=ctx,
    )
