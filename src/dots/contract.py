"""Container contract shared by Option, Result, Task and State.

Every container exposes `map` and `flat_map`, plus a suspension hook used
only by the do-notation interpreter:

- present/successful containers call `resume(value)` exactly once and
  relay what it returns;
- absent/failed containers never call `resume`; they hand themselves (or,
  for Task, the failed outcome) to `stop`, which ends the program.

The interpreter is written against `Suspendable` alone and never inspects
concrete variants.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dots.trampoline import Bounce

__all__ = ['Family', 'Monad', 'Suspendable', 'family_of', 'pure']


class Family(Enum):
    """Container families; a do-program works within exactly one."""

    OPTION = 'Option'
    RESULT = 'Result'
    TASK = 'Task'
    STATE = 'State'


@runtime_checkable
class Suspendable(Protocol):
    """Capability the do-notation interpreter drives."""

    family: ClassVar[Family]

    @abstractmethod
    def suspend(
        self, resume: Callable[[Any], Bounce[Any]], stop: Callable[[Any], Any]
    ) -> Bounce[Any]:
        """Continue with the inner value, or stop the program.

        Args:
            resume: Advances the program with the inner value and returns
                the (possibly deferred) container for the rest of it.
            stop: Closes the program on absence/failure and returns the
                value it is given, which becomes the program's result.

        Returns:
            Whatever `resume` or `stop` returned.
        """
        ...


class Monad[T](Protocol):
    """Structural interface of every container type."""

    @abstractmethod
    def map[U](self, f: Callable[[T], U]) -> Any: ...

    @abstractmethod
    def flat_map[U](self, f: Callable[[T], Any]) -> Any: ...


def family_of(value: object) -> Family | None:
    """Return the container family of `value`, or None for non-containers."""
    family = getattr(type(value), 'family', None)
    if isinstance(family, Family) and callable(getattr(value, 'suspend', None)):
        return family
    return None


def pure(family: Family, value: Any) -> Any:
    """Lift `value` into the given family (Some, Ok, Task.done, State.pure).

    Example:
        ```python
        pure(Family.OPTION, 1)
        # Some(value=1)
        ```
    """
    match family:
        case Family.OPTION:
            from dots.option import Some

            return Some(value)
        case Family.RESULT:
            from dots.result import Ok

            return Ok(value)
        case Family.TASK:
            from dots.task import Task

            return Task.done(value)
        case Family.STATE:
            from dots.state import State

            return State.pure(value)

