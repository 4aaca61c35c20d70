"""Thunks and the trampoline loop that runs them in constant stack depth."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

__all__ = ['Bounce', 'Thunk', 'run_trampoline', 'trampoline']


class Thunk[T]:
    """A deferred, zero-argument continuation.

    Returning a Thunk instead of calling the next step directly lets an
    outer loop (`run_trampoline`) drive recursion without growing the stack.

    Example:
        ```python
        def count_down(n: int) -> int | Thunk[int]:
            if n == 0:
                return 0
            return Thunk(count_down, n - 1)

        run_trampoline(count_down(1_000_000))
        # 0
        ```
    """

    __slots__ = ('_args', '_fn')

    def __init__(self, fn: Callable[..., Bounce[T]], *args: Any) -> None:
        self._fn = fn
        self._args = args

    @classmethod
    def of(cls, value: T) -> Thunk[T]:
        """Create a thunk that returns `value` when called."""
        return cls(_constant, value)

    def __call__(self) -> Bounce[T]:
        return self._fn(*self._args)

    def __repr__(self) -> str:
        name = getattr(self._fn, '__qualname__', repr(self._fn))
        return f'Thunk({name})'


def _constant[T](value: T) -> T:
    return value


type Bounce[T] = T | Thunk[T]


def run_trampoline[T](bounce: Bounce[T]) -> T:
    """Call thunks until a concrete (non-thunk) value appears."""
    while isinstance(bounce, Thunk):
        bounce = bounce()
    return bounce


def trampoline[**P, T](func: Callable[P, Bounce[T]]) -> Callable[P, T]:
    """Decorator: run a thunk-returning function to its final value.

    Example:
        ```python
        @trampoline
        def total(n: int, acc: int = 0) -> int | Thunk[int]:
            if n == 0:
                return acc
            return Thunk(total.__wrapped__, n - 1, acc + n)

        total(100_000)
        # 5000050000
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Bounce[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> T:
        return run_trampoline(wrapped(*args, **kwargs))

    return wrapper(func)  # type: ignore[return-value]
