from .lexer import Token, tokenize
from .parser import Loop, Op, emit, parse, parse_source
from .state import MachineState
from .executor import EofPolicy, execute
from .errors import (
    BFError,
    BFRuntimeError,
    BFSyntaxError,
    InputExhaustedError,
    StepLimitExceeded,
    TapeBoundsError,
    UnmatchedCloseError,
    UnmatchedOpenError,
)
from .api import RunOptions, RunResult, compile_file, compile_string, run_file, run_string

__all__ = [
    'Token',
    'tokenize',
    'Op',
    'Loop',
    'parse',
    'parse_source',
    'emit',
    'MachineState',
    'EofPolicy',
    'execute',
    'BFError',
    'BFSyntaxError',
    'UnmatchedCloseError',
    'UnmatchedOpenError',
    'BFRuntimeError',
    'TapeBoundsError',
    'InputExhaustedError',
    'StepLimitExceeded',
    'RunOptions',
    'RunResult',
    'compile_string',
    'compile_file',
    'run_string',
    'run_file',
]
