"""Result type: Ok[T] | Err[E] for explicit error handling."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn, TypeIs

import msgspec

from dots.contract import Family
from dots.errors import NullishValueError, UnwrapResultError

if TYPE_CHECKING:
    from dots.option import NothingType, Some
    from dots.task import Task
    from dots.trampoline import Bounce

__all__ = ['Err', 'Ok', 'Result', 'result_of']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    family: ClassVar[Family] = Family.RESULT

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True since this is Ok."""
        return True

    def is_err(self) -> TypeIs[Err[Any]]:
        """Return False since this is Ok."""
        return False

    def unwrap(self, message: str | None = None) -> T:  # noqa: ARG002
        """Return the contained Ok value."""
        return self.value

    def expect(self, _message: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def unwrap_err(self, message: str | None = None) -> NoReturn:
        """Raise since Ok holds no error.

        Raises:
            UnwrapResultError: Always.
        """
        raise UnwrapResultError(message or f'Called unwrap_err on Ok: {self.value!r}')

    def unwrap_or(self, _default: T) -> T:
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[], T]) -> T:
        """Return the contained Ok value without calling the fallback."""
        return self.value

    def switch[A, B](self, *, ok: Callable[[T], A], err: Callable[[Any], B]) -> A | B:
        """Call `ok` with the value and return its result."""
        return ok(self.value)

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def flat_map[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as and_then or bind.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def to_option(self) -> Some[T] | NothingType:
        """Convert to Some(value); an Ok(None) becomes Nothing."""
        from dots.option import option_of

        return option_of(self.value)

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
        return f'Ok({self.value!r})'


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    The error may be any value, None included; Err(None) is still an Err.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    family: ClassVar[Family] = Family.RESULT

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True since this is Err."""
        return True

    def unwrap(self, message: str | None = None) -> NoReturn:
        """Raise since Err has no Ok value.

        Args:
            message: Optional diagnostic carried by the error.

        Raises:
            UnwrapResultError: Always, carrying this Err's error.
        """
        raise UnwrapResultError(message, self.error)

    def expect(self, message: str) -> NoReturn:
        """Raise UnwrapResultError with a custom message."""
        raise UnwrapResultError(f'{message}: {self.error!r}', self.error)

    def unwrap_err(self, message: str | None = None) -> E:  # noqa: ARG002
        """Return the contained error."""
        return self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Err."""
        return f()

    def switch[A, B](self, *, ok: Callable[[Any], A], err: Callable[[E], B]) -> A | B:
        """Call `err` with the error and return its result."""
        return err(self.error)

    def map(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def flat_map(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def to_option(self) -> NothingType:
        """Convert to Option, discarding the error."""
        from dots.option import Nothing

        return Nothing

    def to_task(self) -> Task[Any, E]:
        """Convert to a Task that fails with the error."""
        from dots.task import Task

        return Task.fail(self.error)

    def suspend(
        self, _resume: Callable[[Any], Any], stop: Callable[[Err[E]], Err[E]]
    ) -> Err[E]:
        """Stop the do-program: this Err becomes its result."""
        return stop(self)

    def __str__(self) -> str:
        return f'Err({self.error!r})'


type Result[T, E = Exception] = Ok[T] | Err[E]


def result_of[T](value: T | None) -> Ok[T] | Err[NullishValueError]:
    """Wrap a possibly-None value, failing with NullishValueError on None.

    Examples:
        >>> result_of(1)
        Ok(value=1)
        >>> result_of(None).is_err()
        True
    """
    if value is None:
        return Err(NullishValueError())
    return Ok(value)
