"""Option type: Some[T] | Nothing for values that may be absent."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn, TypeIs

import msgspec

from dots.contract import Family
from dots.errors import AbsentValueError, UnwrapOptionError

if TYPE_CHECKING:
    from dots.result import Err, Ok
    from dots.task import Task
    from dots.trampoline import Bounce

__all__ = ['Nothing', 'NothingType', 'Option', 'Some', 'option_of']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some never holds None: absence is expressed only by `Nothing`.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
        >>> some.map(lambda _: None)
        NothingType()
    """

    value: T

    family: ClassVar[Family] = Family.OPTION

    def __post_init__(self) -> None:
        if self.value is None:
            msg = 'Some cannot hold None; use Nothing or option_of()'
            raise ValueError(msg)

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True since this is Some."""
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def unwrap(self, message: str | None = None) -> T:  # noqa: ARG002
        """Return the contained value."""
        return self.value

    def expect(self, _message: str) -> T:
        """Return the contained value, ignoring the message."""
        return self.value

    def unwrap_or(self, _default: T) -> T:
        """Return the contained value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[], T]) -> T:
        """Return the contained value without calling the fallback."""
        return self.value

    def switch[A, B](self, *, some: Callable[[T], A], none: Callable[[], B]) -> A | B:
        """Call `some` with the value and return its result."""
        return some(self.value)

    def map[U](self, f: Callable[[T], U | None]) -> Some[U] | NothingType:
        """Apply a function to the contained value.

        A `None` result becomes Nothing, keeping Some free of None.

        Args:
            f: Function to apply to the Some value.

        Returns:
            option_of(f(value)).
        """
        return option_of(f(self.value))

    def flat_map[U](
        self, f: Callable[[T], Some[U] | NothingType]
    ) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value.

        Also known as and_then or bind.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return self if the predicate holds for the value, else Nothing."""
        if predicate(self.value):
            return self
        return Nothing

    def zip[U](self, other: Some[U] | NothingType) -> Some[tuple[T, U]] | NothingType:
        """Pair two Some values; Nothing if `other` is Nothing."""
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing

    def to_result[E](self, _make_error: Callable[[], E]) -> Ok[T]:
        """Convert to Ok(value); the error factory is not called."""
        from dots.result import Ok

        return Ok(self.value)

    def to_task(self) -> Task[T, Any]:
        """Convert to a Task that completes with the value."""
        from dots.task import Task

        return Task.done(self.value)

    def suspend[R](
        self, resume: Callable[[T], Bounce[R]], _stop: Callable[[Any], Any]
    ) -> Bounce[R]:
        """Continue the do-program with the contained value."""
        return resume(self.value)

    def __str__(self) -> str:
        return f'Some({self.value!r})'


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    Use the `Nothing` constant instead of instantiating directly. Every
    NothingType instance compares and hashes equal to it.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.map(lambda x: x + 1) is Nothing
        True
    """

    family: ClassVar[Family] = Family.OPTION

    def is_some(self) -> TypeIs[Some[Any]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True since this is Nothing."""
        return True

    def unwrap(self, message: str | None = None) -> NoReturn:
        """Raise since there is no value.

        Args:
            message: Optional diagnostic carried by the error.

        Raises:
            UnwrapOptionError: Always.
        """
        raise UnwrapOptionError(message)

    def expect(self, message: str) -> NoReturn:
        """Raise UnwrapOptionError with a custom message."""
        raise UnwrapOptionError(message)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default since this is Nothing."""
        return f()

    def switch[A, B](self, *, some: Callable[[Any], A], none: Callable[[], B]) -> A | B:
        """Call `none` and return its result."""
        return none()

    def map(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing without calling `_f`."""
        return self

    def flat_map(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing without calling `_f`."""
        return self

    def filter(self, _predicate: Callable[[Any], bool]) -> NothingType:
        """Return Nothing without calling `_predicate`."""
        return self

    def zip(self, _other: Some[Any] | NothingType) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def to_result[E](self, make_error: Callable[[], E]) -> Err[E]:
        """Convert to Err(make_error())."""
        from dots.result import Err

        return Err(make_error())

    def to_task(self) -> Task[Any, AbsentValueError]:
        """Convert to a Task that fails with AbsentValueError."""
        from dots.task import Task

        return Task.fail(AbsentValueError())

    def suspend(
        self, _resume: Callable[[Any], Any], stop: Callable[[NothingType], NothingType]
    ) -> NothingType:
        """Stop the do-program: Nothing becomes its result."""
        return stop(self)

    def __str__(self) -> str:
        return 'Nothing'


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Option[T] = Some[T] | NothingType


def option_of[T](value: T | None) -> Some[T] | NothingType:
    """Wrap a possibly-None value.

    Examples:
        >>> option_of(3)
        Some(value=3)
        >>> option_of(None) is Nothing
        True
    """
    if value is None:
        return Nothing
    return Some(value)
