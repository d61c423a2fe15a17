from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .api import RunOptions, compile_string, read_source
from .errors import BFError, BFRuntimeError
from .executor import EofPolicy, execute
from .parser import count_leaves, emit, max_depth
from .render import save_snapshot
from .state import DEFAULT_TAPE_LENGTH, MachineState


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Brainfuck interpreter (tree-walking, fixed byte tape).",
    )
    parser.add_argument("file", help="Brainfuck source file")
    parser.add_argument("--tape-length", type=_non_negative_int, default=DEFAULT_TAPE_LENGTH,
                        help=f"number of cells on the tape (default {DEFAULT_TAPE_LENGTH})")
    parser.add_argument("--start", type=_non_negative_int, default=0,
                        help="initial pointer position (default 0)")
    parser.add_argument("--eof", choices=[p.value for p in EofPolicy], default=EofPolicy.ERROR.value,
                        help="what ',' does at end of input: error (default), zero, or keep the cell")
    parser.add_argument("--max-steps", type=_non_negative_int, default=None,
                        help="abort after this many steps (default: unlimited)")
    parser.add_argument("--emit", action="store_true",
                        help="print the filtered program instead of running it")
    parser.add_argument("--stats", action="store_true",
                        help="print timings and a tape dump to stderr after the run")
    parser.add_argument("--snapshot", metavar="PNG", default=None,
                        help="save an image of the tape around the pointer after the run")
    return parser


def _dump(state: MachineState, radius: int = 8) -> str:
    lo, cells = state.window(radius)
    parts = []
    for i, v in enumerate(cells):
        addr = lo + i
        parts.append(f"[{int(v)}]" if addr == state.pointer else str(int(v)))
    return f"cells {lo}..{lo + len(cells) - 1}: " + " ".join(parts)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        options = RunOptions(
            tape_length=args.tape_length,
            start_pointer=args.start,
            eof=EofPolicy(args.eof),
            max_steps=args.max_steps,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        source = read_source(args.file)
    except OSError as e:
        print(f"Couldn't read file: {e}", file=sys.stderr)
        return 1

    start = time.time()
    try:
        program = compile_string(source)
    except BFError as e:
        print(e, file=sys.stderr)
        return 1
    parse_ms = (time.time() - start) * 1000

    if args.emit:
        sys.stdout.write(emit(program) + "\n")
        return 0

    state = options.new_state()
    stdout = sys.stdout.buffer
    failure: Optional[BFRuntimeError] = None
    start = time.time()
    try:
        execute(program, state, sys.stdin.buffer, stdout, eof=options.eof, max_steps=options.max_steps)
    except BFRuntimeError as e:
        failure = e
    finally:
        stdout.flush()
    run_ms = (time.time() - start) * 1000

    if failure is not None:
        print(f"\n{failure}", file=sys.stderr)

    if args.stats:
        print("\n================", file=sys.stderr)
        print(f"Parse took {parse_ms:.2f} ms ({count_leaves(program)} instructions, "
              f"loop depth {max_depth(program)})", file=sys.stderr)
        print(f"Execution took {run_ms:.2f} ms ({state.steps:,} steps)", file=sys.stderr)
        print(f"Pointer: {state.pointer}", file=sys.stderr)
        print(_dump(state), file=sys.stderr)

    if args.snapshot:
        try:
            save_snapshot(state, args.snapshot)
        except OSError as e:
            print(f"Couldn't write snapshot: {e}", file=sys.stderr)
            return 1

    return 1 if failure is not None else 0


if __name__ == "__main__":
    raise SystemExit(main())
