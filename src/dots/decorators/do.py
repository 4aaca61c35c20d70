"""run_do and @do: generator-based do-notation over any container family."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import wrapt

from dots._config import get_config
from dots._logging import get_logger
from dots.contract import Family, family_of
from dots.errors import DoNotationError, MixedFamilyError, NotAContainerError
from dots.result import Ok
from dots.state import State
from dots.task import Reject, Resolve, Task
from dots.trampoline import Bounce, Thunk, run_trampoline

__all__ = ['do', 'run_do']

logger = get_logger(__name__)

type Program[R] = Generator[Any, Any, R]


class _Interpreter:
    """Drives one do-program through the containers it yields.

    Each yielded container's suspension hook receives `resume`, which does
    not advance the program itself but returns a Thunk that will. The outer
    `run_trampoline` loop calls those thunks, so the Python stack stays flat
    however many steps the program takes. Absent/failed containers call
    `stop` instead, which closes the generator.
    """

    __slots__ = ('_family', '_finished', '_generator', '_name', '_step', '_strict')

    def __init__(self, generator: Program[Any], name: str) -> None:
        self._generator = generator
        self._name = name
        self._family: Family | None = None
        self._finished = False
        self._step = 0
        self._strict = get_config().strict_families

    def start(self) -> Any:
        return run_trampoline(self._send(None))

    def resume(self, value: Any) -> Thunk[Any]:
        return Thunk(self._send, value)

    def stop(self, container: Any) -> Any:
        self._finished = True
        self._generator.close()
        logger.debug(
            'do.short_circuit',
            program=self._name,
            family=self._family.value if self._family else None,
            step=self._step,
            result=str(container),
        )
        return container

    def _send(self, value: Any) -> Bounce[Any]:
        if self._finished:
            msg = f'Do-program {self._name} was resumed after it finished'
            raise DoNotationError(msg)

        try:
            container = self._generator.send(value)
        except StopIteration as stop:
            self._finished = True
            self._check(stop.value)
            logger.debug(
                'do.completed',
                program=self._name,
                family=self._family.value if self._family else None,
                steps=self._step,
            )
            return stop.value

        self._check(container)
        self._step += 1
        return container.suspend(self.resume, self.stop)

    def _check(self, value: Any) -> None:
        family = family_of(value)
        if family is None:
            raise NotAContainerError(value, self._step)
        if self._family is None:
            self._family = family
        elif family is not self._family and self._strict:
            raise MixedFamilyError(self._family, family, self._step)


def _start(program: Any, name: str) -> Any:
    if not isinstance(program, Generator):
        msg = f'{name} must be a generator function, got {type(program).__name__}'
        raise TypeError(msg)
    return _Interpreter(program, name).start()


class _Reruns:
    """Gives every run of a Task/State do-program its own generator.

    The first run continues the program `run_do` already started; each
    later run calls the program function again from the top.
    """

    __slots__ = ('_factory', '_name', '_primed')

    def __init__(self, factory: Callable[[], Any], name: str, primed: Any) -> None:
        self._factory = factory
        self._name = name
        self._primed = [primed]

    def next(self) -> Any:
        try:
            return self._primed.pop()
        except IndexError:
            return _start(self._factory(), self._name)

    async def initializer(self, resolve: Resolve[Any], reject: Reject[Any]) -> None:
        outcome = await self.next().to_result_async()
        if isinstance(outcome, Ok):
            resolve(outcome.value)
        else:
            reject(outcome.error)

    def transition(self, state: Any) -> tuple[Any, Any]:
        return self.next().run(state)


def _drive(factory: Callable[[], Any], name: str) -> Any:
    outcome = _start(factory(), name)
    match family_of(outcome):
        case Family.TASK:
            return Task(_Reruns(factory, name, outcome).initializer)
        case Family.STATE:
            return State(_Reruns(factory, name, outcome).transition)
        case _:
            return outcome


def run_do[R](scope: Callable[[], Program[R]]) -> R:
    """Run a do-block: a generator function yielding containers of one family.

    Each `yield container` evaluates to the container's inner value. If a
    container is absent/failed (Nothing, Err, a failing Task), the block
    stops there and that container is the result. Otherwise the block's
    `return` value, itself a container of the same family, is the result.

    Task and State blocks run lazily: their first step executes now, the
    rest when the returned Task/State is run. Every later run calls `scope`
    again, so such a block may be run any number of times.

    Args:
        scope: Zero-argument generator function.

    Returns:
        The container returned by the block, or the one that stopped it.

    Raises:
        NotAContainerError: A step yielded/returned a non-container.
        MixedFamilyError: Containers of different families were mixed.

    Example:
        ```python
        def lookup():
            user = yield find_user(1)          # Some(user) or Nothing
            email = yield option_of(user.get('email'))
            return Some(email.lower())

        run_do(lookup)
        # Some(value='ada@example.com') or Nothing
        ```
    """
    return _drive(scope, getattr(scope, '__qualname__', repr(scope)))


def do[**P, R](func: Callable[P, Program[R]]) -> Callable[P, R]:
    """Decorator turning a do-block generator function into a plain function.

    The wrapped function takes the same arguments and returns the block's
    resulting container; callers never see the generator.

    Example:
        ```python
        @do
        def parse_pair(a: str, b: str) -> Generator[Result[int, str], int, Result[int, str]]:
            x = yield parse_int(a)   # Returns Err early if a is not a number
            y = yield parse_int(b)
            return Ok(x + y)

        parse_pair('1', '2')
        # Ok(value=3)
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Program[R]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> R:
        return _drive(lambda: wrapped(*args, **kwargs), wrapped.__qualname__)

    return wrapper(func)  # type: ignore[return-value]
