from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from .executor import EofPolicy, execute
from .parser import Program, parse_source
from .state import DEFAULT_TAPE_LENGTH, MachineState, check_tape_config


@dataclass(frozen=True)
class RunOptions:
    tape_length: int = DEFAULT_TAPE_LENGTH
    start_pointer: int = 0
    eof: EofPolicy = EofPolicy.ERROR
    max_steps: Optional[int] = None

    def __post_init__(self) -> None:
        check_tape_config(self.tape_length, self.start_pointer)
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max steps must be non-negative (got {self.max_steps})")

    def new_state(self) -> MachineState:
        return MachineState(tape_length=self.tape_length, start_pointer=self.start_pointer)


@dataclass(frozen=True)
class RunResult:
    output: bytes
    state: MachineState

    @property
    def pointer(self) -> int:
        return self.state.pointer

    @property
    def steps(self) -> int:
        return self.state.steps


def read_source(path: str | Path, *, encoding: str = "utf-8") -> str:
    return Path(path).read_text(encoding=encoding, errors="replace")


def compile_string(source: str) -> Program:
    return parse_source(source)


def compile_file(path: str | Path, *, encoding: str = "utf-8") -> Program:
    return compile_string(read_source(path, encoding=encoding))


def run_program(
    program: Program,
    *,
    stdin: BinaryIO,
    stdout: BinaryIO,
    options: Optional[RunOptions] = None,
) -> MachineState:
    opts = options or RunOptions()
    state = opts.new_state()
    return execute(program, state, stdin, stdout, eof=opts.eof, max_steps=opts.max_steps)


def run_string(source: str, input_data: bytes = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    """Parse and run ``source`` in memory, collecting everything it writes."""
    program = compile_string(source)
    out = io.BytesIO()
    state = run_program(program, stdin=io.BytesIO(input_data), stdout=out, options=options)
    return RunResult(output=out.getvalue(), state=state)


def run_file(path: str | Path, input_data: bytes = b"", *, options: Optional[RunOptions] = None, encoding: str = "utf-8") -> RunResult:
    return run_string(read_source(path, encoding=encoding), input_data, options=options)
