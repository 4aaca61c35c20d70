"""@taskify decorator: adapt async functions into Task-returning functions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import wrapt

from dots._logging import get_logger
from dots.task import Reject, Resolve, Task

__all__ = ['taskify']

logger = get_logger(__name__)


def taskify[**P, T](func: Callable[P, Awaitable[T]]) -> Callable[P, Task[T, Exception]]:
    """Decorator that makes an async function return a lazy Task.

    Calling the decorated function only builds the Task. Each run calls
    `func` with the same arguments and awaits it; a return value completes
    the Task and any exception (raised while calling or while awaiting)
    fails it.

    Args:
        func: A function returning an awaitable, typically `async def`.

    Returns:
        A function with the same parameters returning Task[T, Exception].

    Example:
        ```python
        @taskify
        async def read_config(path: str) -> bytes:
            async with await anyio.open_file(path, 'rb') as f:
                return await f.read()

        task = read_config('app.toml')   # nothing has happened yet
        result = await task              # Ok(b'...') or Err(FileNotFoundError(...))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Task[T, Exception]:
        async def initializer(resolve: Resolve[T], reject: Reject[Exception]) -> None:
            try:
                value = await wrapped(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                logger.debug('taskify.failed', function=wrapped.__qualname__, error=repr(exc))
                reject(exc)
                return
            resolve(value)

        return Task(initializer)

    return wrapper(func)  # type: ignore[return-value]
