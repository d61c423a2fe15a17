from __future__ import annotations

from enum import Enum
from typing import BinaryIO, List, Optional, Sequence

from .errors import InputExhaustedError, StepLimitExceeded
from .parser import Instruction, Loop, Op
from .state import MachineState


class EofPolicy(Enum):
    ERROR = 'error'  # end of input on ',' is fatal
    ZERO = 'zero'    # store 0
    KEEP = 'keep'    # leave the cell unchanged


class Executor:
    """Tree-walking runner for one program run.

    Holds the machine state and the two byte streams; ``run`` walks a
    program depth-first, re-walking a loop body while the current cell is
    nonzero. An empty loop body over a nonzero cell never terminates unless
    a step budget is set.
    """

    def __init__(
        self,
        state: MachineState,
        stdin: BinaryIO,
        stdout: BinaryIO,
        *,
        eof: EofPolicy = EofPolicy.ERROR,
        max_steps: Optional[int] = None,
    ):
        self.state = state
        self.stdin = stdin
        self.stdout = stdout
        self.eof = eof
        self.max_steps = max_steps

    def _tick(self) -> None:
        state = self.state
        if self.max_steps is not None and state.steps >= self.max_steps:
            raise StepLimitExceeded(
                message=f"RuntimeError: step limit of {self.max_steps} exceeded",
                pointer=state.pointer,
                step=state.steps,
                limit=self.max_steps,
            )
        state.steps += 1

    def _read(self) -> None:
        state = self.state
        flush = getattr(self.stdout, 'flush', None)
        if flush is not None:
            flush()
        data = self.stdin.read(1)
        if data:
            state.current = data[0]
            return
        if self.eof is EofPolicy.ZERO:
            state.current = 0
        elif self.eof is EofPolicy.ERROR:
            raise InputExhaustedError(
                message=f"RuntimeError: input exhausted on read (step {state.steps})",
                pointer=state.pointer,
                step=state.steps,
            )

    def run(self, program: Sequence[Instruction]) -> None:
        state = self.state
        # one [body, position] frame per loop entered
        frames: List[list] = [[program, 0]]
        while frames:
            frame = frames[-1]
            body, pos = frame
            if pos == len(body):
                frames.pop()
                if not frames:
                    break
                # end of a loop body: test the cell again
                self._tick()
                if state.current != 0:
                    frame[1] = 0
                    frames.append(frame)
                else:
                    frames[-1][1] += 1
                continue

            inst = body[pos]
            self._tick()
            if isinstance(inst, Loop):
                # the tick above paid for the first test
                if state.current != 0:
                    frames.append([inst.body, 0])
                else:
                    frame[1] += 1
                continue

            if inst is Op.INCREMENT:
                state.current = state.current + 1
            elif inst is Op.DECREMENT:
                state.current = state.current - 1
            elif inst is Op.MOVE_RIGHT:
                state.move(1)
            elif inst is Op.MOVE_LEFT:
                state.move(-1)
            elif inst is Op.WRITE_BYTE:
                self.stdout.write(bytes((state.current,)))
            elif inst is Op.READ_BYTE:
                self._read()
            else:
                raise TypeError(f"Unknown instruction: {inst!r}")
            frame[1] += 1


def execute(
    program: Sequence[Instruction],
    state: MachineState,
    stdin: BinaryIO,
    stdout: BinaryIO,
    *,
    eof: EofPolicy = EofPolicy.ERROR,
    max_steps: Optional[int] = None,
) -> MachineState:
    Executor(state, stdin, stdout, eof=eof, max_steps=max_steps).run(program)
    return state
