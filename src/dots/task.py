"""Task type: a lazy, possibly asynchronous computation that succeeds or fails.

A Task wraps an initializer shaped like a promise executor:

    initializer(resolve, reject) -> None | Awaitable[None]

Building or transforming a Task never runs anything. Work happens only when
the Task is run through `to_result_async()`, `await task`, `await_value()`,
`await_value_or()` or `fire_and_forget()`, and every run invokes the
initializer afresh.

Example:
    ```python
    async def fetch_user(user_id: int) -> dict:
        ...

    task = (
        Task.of(fetch_user(1))
        .map(lambda user: user['name'])
        .map_failure(lambda exc: f'lookup failed: {exc}')
    )
    result = await task  # Ok('Ada') or Err('lookup failed: ...')
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn

import aiologic

from dots._logging import get_logger
from dots.contract import Family
from dots.errors import DotsError, TaskFailedError
from dots.result import Err, Ok, Result
from dots.trampoline import run_trampoline

if TYPE_CHECKING:
    from anyio.abc import TaskGroup

    from dots.trampoline import Bounce

__all__ = ['Reject', 'Resolve', 'Task', 'TaskInit']

logger = get_logger(__name__)

type Resolve[T] = Callable[[T], None]
type Reject[E] = Callable[[E], None]
type TaskInit[T, E] = Callable[[Resolve[T], Reject[E]], Awaitable[None] | None]
type _Step = Callable[[Result[Any, Any]], Task[Any, Any] | Result[Any, Any]]


class _Settlement[T, E]:
    """Outcome of one run: the first resolve/reject wins.

    The callbacks may be invoked from any thread; aiologic primitives keep
    the hand-off safe in both threaded and async contexts.
    """

    __slots__ = ('_event', '_lock', '_outcome')

    def __init__(self) -> None:
        self._event = aiologic.Event()
        self._lock = aiologic.Lock()
        self._outcome: Result[T, E] | None = None

    def resolve(self, value: T) -> None:
        self._settle(Ok(value))

    def reject(self, error: E) -> None:
        self._settle(Err(error))

    def _settle(self, outcome: Result[T, E]) -> None:
        with self._lock:
            if self._outcome is not None:
                logger.debug(
                    'task.settlement.ignored',
                    settled=str(self._outcome),
                    ignored=str(outcome),
                )
                return
            self._outcome = outcome
        self._event.set()

    async def wait(self) -> Result[T, E]:
        await self._event
        if self._outcome is None:
            msg = 'Task settlement signalled without an outcome'
            raise DotsError(msg)
        return self._outcome


class _SharedAwaitable[T]:
    """Awaits an awaitable at most once and replays its outcome to every run.

    Coroutines can only be awaited once, while a Task may run many times.
    """

    __slots__ = ('_awaitable', '_lock', '_outcome')

    def __init__(self, awaitable: Awaitable[T]) -> None:
        self._awaitable = awaitable
        self._lock = aiologic.Lock()
        self._outcome: Result[T, Exception] | None = None

    async def get(self) -> Result[T, Exception]:
        if self._outcome is not None:
            return self._outcome

        async with self._lock:
            if self._outcome is None:
                try:
                    value = await self._awaitable
                except Exception as exc:  # noqa: BLE001
                    self._outcome = Err(exc)
                else:
                    self._outcome = Ok(value)
            return self._outcome

    async def __call__(self, resolve: Resolve[T], reject: Reject[Exception]) -> None:
        match await self.get():
            case Ok(value):
                resolve(value)
            case Err(error):
                reject(error)

    def __repr__(self) -> str:
        return f'_SharedAwaitable({self._awaitable!r})'


async def _settle[T, E](initializer: TaskInit[T, E]) -> Result[T, E]:
    """Invoke an initializer once and wait for its first settlement."""
    settlement: _Settlement[T, E] = _Settlement()
    try:
        pending = initializer(settlement.resolve, settlement.reject)
        if inspect.isawaitable(pending):
            await pending
    except DotsError:
        raise
    except Exception as exc:  # noqa: BLE001
        settlement.reject(exc)  # type: ignore[arg-type]
    return await settlement.wait()


def _apply(step: _Step, outcome: Result[Any, Any]) -> Task[Any, Any] | Result[Any, Any]:
    """Run a continuation; ordinary exceptions become failures."""
    try:
        return step(outcome)
    except DotsError:
        raise
    except Exception as exc:  # noqa: BLE001
        return Err(exc)


class Task[T, E]:
    """Lazy computation that eventually completes with T or fails with E.

    A Task is either a leaf holding an initializer, or a node binding a
    source Task to a continuation. Nodes are evaluated by an explicit loop
    over a continuation stack, so chains of any length and nesting run in
    constant Python stack depth.

    Attributes:
        family: Always Family.TASK.
    """

    __slots__ = ('_init', '_source', '_step')

    family: ClassVar[Family] = Family.TASK

    def __init__(self, initializer: TaskInit[T, E]) -> None:
        """Create a Task from a two-callback initializer (not invoked here).

        Args:
            initializer: Called with (resolve, reject) on every run. It may
                settle synchronously, return an awaitable that settles it, or
                hand the callbacks to another thread.
        """
        object.__setattr__(self, '_init', initializer)
        object.__setattr__(self, '_source', None)
        object.__setattr__(self, '_step', None)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        msg = f'Task is immutable; cannot set {name!r}'
        raise AttributeError(msg)

    @classmethod
    def _bind(cls, source: Task[Any, Any], step: _Step) -> Task[Any, Any]:
        task = cls.__new__(cls)
        object.__setattr__(task, '_init', None)
        object.__setattr__(task, '_source', source)
        object.__setattr__(task, '_step', step)
        return task

    # --- Constructors ---

    @classmethod
    def of(cls, source: TaskInit[T, E] | Awaitable[T]) -> Task[T, E]:
        """Create a Task from an initializer or an awaitable.

        An awaitable (coroutine, future, ...) is awaited on the first run only;
        its value or exception settles that run and every later one.

        Args:
            source: A two-callback initializer, or an awaitable to adapt.

        Returns:
            A new, not yet started Task.
        """
        if inspect.isawaitable(source):
            return cls(_SharedAwaitable(source))  # type: ignore[arg-type]
        return cls(source)

    @classmethod
    def done(cls, value: T) -> Task[T, E]:
        """Create a Task that completes with `value`."""

        def initializer(resolve: Resolve[T], _reject: Reject[E]) -> None:
            resolve(value)

        return cls(initializer)

    @classmethod
    def fail(cls, error: E) -> Task[T, E]:
        """Create a Task that fails with `error`."""

        def initializer(_resolve: Resolve[T], reject: Reject[E]) -> None:
            reject(error)

        return cls(initializer)

    @classmethod
    def from_result(cls, result: Result[T, E]) -> Task[T, E]:
        """Create a Task that settles like `result`."""
        match result:
            case Ok(value):
                return cls.done(value)
            case Err(error):
                return cls.fail(error)
        msg = f'Expected Ok or Err, got {type(result).__name__}'
        raise TypeError(msg)

    @property
    def initializer(self) -> TaskInit[T, E]:
        """The two-callback initializer of this Task.

        For a composed Task this runs the whole chain and relays its outcome.
        """
        if self._init is not None:
            return self._init

        async def initializer(resolve: Resolve[T], reject: Reject[E]) -> None:
            match await self.to_result_async():
                case Ok(value):
                    resolve(value)
                case Err(error):
                    reject(error)

        return initializer

    # --- Transformations ---

    def map[U](self, f: Callable[[T], U]) -> Task[U, E]:
        """Transform the value of a successful run."""
        return Task._bind(self, lambda outcome: outcome.map(f))

    def flat_map[U](self, f: Callable[[T], Task[U, E]]) -> Task[U, E]:
        """Continue a successful run with the Task returned by `f`."""

        def step(outcome: Result[T, E]) -> Task[U, E] | Result[U, E]:
            if isinstance(outcome, Ok):
                return f(outcome.value)
            return outcome

        return Task._bind(self, step)

    def map_failure[F](self, f: Callable[[E], F]) -> Task[T, F]:
        """Transform the error of a failed run."""
        return Task._bind(self, lambda outcome: outcome.map_err(f))

    def switch[A, B](
        self, *, done: Callable[[T], A], fail: Callable[[E], B]
    ) -> Task[A | B, Any]:
        """Fold both outcomes into a value; the resulting Task only fails if a callback raises."""
        return Task._bind(self, lambda outcome: Ok(outcome.switch(ok=done, err=fail)))

    def suspend[R](
        self,
        resume: Callable[[T], Bounce[R]],
        stop: Callable[[Err[E]], Err[E]],
    ) -> Task[Any, Any]:
        """Defer the rest of a do-program until this Task settles.

        A failed run hands its Err to `stop`, which closes the program.
        """

        def step(outcome: Result[T, E]) -> Any:
            if isinstance(outcome, Ok):
                return run_trampoline(resume(outcome.value))
            return stop(outcome)

        return Task._bind(self, step)

    # --- Running ---

    async def to_result_async(self) -> Result[T, E]:
        """Run the Task and return its outcome as a Result (never raises on failure).

        Returns:
            Ok(value) on completion, Err(error) on failure.
        """
        steps: list[_Step] = []
        task: Task[Any, Any] = self
        while True:
            while task._source is not None:
                steps.append(task._step)  # type: ignore[arg-type]
                task = task._source
            outcome = await _settle(task._init)  # type: ignore[arg-type]
            while steps:
                follow = _apply(steps.pop(), outcome)
                if isinstance(follow, Task):
                    task = follow
                    break
                outcome = follow
            else:
                return outcome

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        """`await task` runs it and yields its Result."""
        return self.to_result_async().__await__()

    async def await_value(self) -> T:
        """Run the Task and return its value, raising on failure.

        Raises:
            BaseException: The failure payload, if it is an exception.
            TaskFailedError: Wrapping any other failure payload.
        """
        outcome = await self.to_result_async()
        if isinstance(outcome, Ok):
            return outcome.value
        if isinstance(outcome.error, BaseException):
            raise outcome.error
        raise TaskFailedError(outcome.error)

    async def await_value_or(self, fallback: T) -> T:
        """Run the Task and return its value, or `fallback` on failure."""
        return (await self.to_result_async()).unwrap_or(fallback)

    def fire_and_forget(self, task_group: TaskGroup) -> None:
        """Start a run in `task_group`, discarding its outcome.

        The run is not cancelled when the caller moves on; it lives as long as
        the task group does.
        """
        task_group.start_soon(self._discard)

    async def _discard(self) -> None:
        outcome = await self.to_result_async()
        logger.debug('task.fire_and_forget.settled', outcome=str(outcome))

    def __repr__(self) -> str:
        if self._init is not None:
            return f'Task({self._init!r})'
        return 'Task(<composed>)'
