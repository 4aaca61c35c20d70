"""dots: Option, Result, Task and State containers with do-notation.

Flat imports (preferred):
    from dots import Option, Some, Nothing, Result, Ok, Err, Task, State
    from dots import do, run_do, taskify

Submodule imports (for organization):
    from dots.option import Some, Nothing, option_of
    from dots.result import Ok, Err, result_of
    from dots.decorators import do, taskify
"""

# Configuration
from dots._config import DotsConfig, get_config, init

# Logging
from dots._logging import configure_logging

# Contract
from dots.contract import Family, Monad, Suspendable, family_of, pure

# Decorators
from dots.decorators import do, run_do, taskify

# Errors
from dots.errors import (
    AbsentValueError,
    DoNotationError,
    DotsError,
    MixedFamilyError,
    NotAContainerError,
    NullishValueError,
    TaskFailedError,
    UnwrapError,
    UnwrapOptionError,
    UnwrapResultError,
)

# Option types
from dots.option import Nothing, NothingType, Option, Some, option_of

# Result types
from dots.result import Err, Ok, Result, result_of

# Effect types
from dots.state import State
from dots.task import Task

# Trampoline
from dots.trampoline import Thunk, run_trampoline, trampoline

__all__ = [
    'AbsentValueError',
    'DoNotationError',
    'DotsConfig',
    'DotsError',
    'Err',
    'Family',
    'MixedFamilyError',
    'Monad',
    'NotAContainerError',
    'Nothing',
    'NothingType',
    'NullishValueError',
    'Ok',
    'Option',
    'Result',
    'Some',
    'State',
    'Suspendable',
    'Task',
    'TaskFailedError',
    'Thunk',
    'UnwrapError',
    'UnwrapOptionError',
    'UnwrapResultError',
    'configure_logging',
    'do',
    'family_of',
    'get_config',
    'init',
    'option_of',
    'pure',
    'result_of',
    'run_do',
    'run_trampoline',
    'taskify',
    'trampoline',
]
