"""State type: a pure computation threaded through an explicit state value."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn

from dots.contract import Family
from dots.trampoline import run_trampoline

if TYPE_CHECKING:
    from dots.trampoline import Bounce

__all__ = ['RunState', 'State']

type RunState[S, A] = Callable[[S], tuple[S, A]]


class State[S, A]:
    """A transition `S -> (S, A)`: given a state, produce a new state and a value.

    Like Task, a State is either a leaf holding a transition, or a node
    binding a source State to a continuation. `run` walks nodes with an
    explicit stack, so `flat_map` chains of any length need no recursion.

    Example:
        ```python
        counter = State.read().flat_map(lambda n: State.write(n + 1).map(lambda _: n))
        counter.run(41)
        # (42, 41)
        ```
    """

    __slots__ = ('_continue', '_source', '_transition')

    family: ClassVar[Family] = Family.STATE

    def __init__(self, transition: RunState[S, A]) -> None:
        object.__setattr__(self, '_transition', transition)
        object.__setattr__(self, '_source', None)
        object.__setattr__(self, '_continue', None)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        msg = f'State is immutable; cannot set {name!r}'
        raise AttributeError(msg)

    @classmethod
    def _bind(
        cls, source: State[S, Any], cont: Callable[[Any], State[S, Any]]
    ) -> State[S, Any]:
        state = cls.__new__(cls)
        object.__setattr__(state, '_transition', None)
        object.__setattr__(state, '_source', source)
        object.__setattr__(state, '_continue', cont)
        return state

    # --- Primitives ---

    @classmethod
    def pure(cls, value: A) -> State[Any, A]:
        """Return `value`, leaving the state unchanged."""
        return cls(lambda s: (s, value))

    @classmethod
    def read(cls) -> State[S, S]:
        """Return the current state as the value."""
        return cls(lambda s: (s, s))

    @classmethod
    def write(cls, new_state: S) -> State[S, None]:
        """Replace the state; the value is None."""
        return cls(lambda _: (new_state, None))

    @classmethod
    def modify(cls, f: Callable[[S], S]) -> State[S, None]:
        """Replace the state with f(state); the value is None."""
        return cls(lambda s: (f(s), None))

    # --- Transformations ---

    def map[B](self, f: Callable[[A], B]) -> State[S, B]:
        """Apply `f` to the value, threading the state unchanged."""
        return State._bind(self, lambda a: State.pure(f(a)))

    def flat_map[B](self, f: Callable[[A], State[S, B]]) -> State[S, B]:
        """Run this transition, then the one `f` builds from its value."""
        return State._bind(self, f)

    def suspend[R](
        self, resume: Callable[[A], Bounce[R]], _stop: Callable[[Any], Any]
    ) -> State[S, Any]:
        """Defer the rest of a do-program until this transition has run.

        A transition cannot fail, so `_stop` is never called.
        """
        return State._bind(self, lambda a: run_trampoline(resume(a)))

    # --- Running ---

    def run(self, state: S) -> tuple[S, A]:
        """Run the computation from `state`.

        Returns:
            The final state and value.
        """
        conts: list[Callable[[Any], State[S, Any]]] = []
        current: State[S, Any] = self
        while True:
            while current._source is not None:
                conts.append(current._continue)  # type: ignore[arg-type]
                current = current._source
            state, value = current._transition(state)  # type: ignore[misc]
            if not conts:
                return state, value
            current = conts.pop()(value)

    def eval(self, state: S) -> A:
        """Run from `state` and return only the value."""
        return self.run(state)[1]

    def exec(self, state: S) -> S:
        """Run from `state` and return only the final state."""
        return self.run(state)[0]

    def __repr__(self) -> str:
        if self._transition is not None:
            return f'State({self._transition!r})'
        return 'State(<composed>)'
