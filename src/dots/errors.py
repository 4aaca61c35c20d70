"""Fault types: raised for misuse, or carried as failure payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dots.contract import Family

__all__ = [
    'AbsentValueError',
    'DoNotationError',
    'DotsError',
    'MixedFamilyError',
    'NotAContainerError',
    'NullishValueError',
    'TaskFailedError',
    'UnwrapError',
    'UnwrapOptionError',
    'UnwrapResultError',
]


class DotsError(Exception):
    """Base class for every fault raised by dots itself."""


# --- Unwrap Faults ---


class UnwrapError(DotsError):
    """Unwrapped a container that holds no value."""

    default_message = 'Unwrapped an empty container'

    def __init__(self, message: str | None = None) -> None:
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class UnwrapOptionError(UnwrapError):
    """Called unwrap/expect on Nothing."""

    default_message = 'Unwrapped an Option of Nothing'


class UnwrapResultError(UnwrapError):
    """Called unwrap/expect on Err (or unwrap_err on Ok)."""

    default_message = 'Unwrapped a Result of Err'

    def __init__(self, message: str | None = None, error: Any = None) -> None:
        self.error = error
        super().__init__(message)


# --- Do-notation Faults ---


class DoNotationError(DotsError):
    """A do-program broke the interpreter's contract."""


class NotAContainerError(DoNotationError, TypeError):
    """A do-program yielded or returned a value without a suspension hook."""

    def __init__(self, value: Any, step: int) -> None:
        self.value = value
        self.step = step
        super().__init__(
            f'Do-program step {step} produced {type(value).__name__} {value!r}, '
            'which is not an Option, Result, Task or State'
        )


class MixedFamilyError(DoNotationError, TypeError):
    """A do-program mixed container families (e.g. yielded Task, returned Option)."""

    def __init__(self, expected: Family, found: Family, step: int) -> None:
        self.expected = expected
        self.found = found
        self.step = step
        super().__init__(
            f'Do-program step {step} produced a {found.value} but the program '
            f'already works in {expected.value}'
        )


# --- Failure Payloads ---


class NullishValueError(DotsError):
    """Failure payload of result_of(None)."""

    def __init__(self) -> None:
        super().__init__('Result of nullish value')


class AbsentValueError(DotsError):
    """Failure payload of a Task converted from Nothing."""

    def __init__(self) -> None:
        super().__init__('Option was Nothing')


class TaskFailedError(DotsError):
    """Raised by Task.await_value when the failure payload is not an exception."""

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f'Task failed with {error!r}')
