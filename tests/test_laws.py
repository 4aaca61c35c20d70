"""Property-based tests: monad laws for every container family."""

import anyio
from dots import Family, Nothing, Some, State, Task, pure
from hypothesis import given, settings
from hypothesis import strategies as st

from strategies import (
    integers,
    option_arrows,
    options,
    result_arrows,
    results,
    state_arrows,
    states,
    task_arrows,
    tasks,
)


def run_task(task):
    return anyio.run(task.to_result_async)


def run_states(left, right):
    """States are equal when they agree on a range of initial states."""
    return [left.run(s) for s in range(-3, 4)] == [right.run(s) for s in range(-3, 4)]


class TestOptionLaws:
    """Monad laws for Option."""

    @given(integers, option_arrows())
    def test_left_identity(self, x, f):
        assert pure(Family.OPTION, x).flat_map(f) == f(x)

    @given(options)
    def test_right_identity(self, option):
        assert option.flat_map(Some) == option

    @given(options, option_arrows(), option_arrows())
    def test_associativity(self, option, f, g):
        assert option.flat_map(f).flat_map(g) == option.flat_map(lambda x: f(x).flat_map(g))

    @given(integers)
    def test_round_trip(self, x):
        assert Some(x).to_result(lambda: 'missing').to_option() == Some(x)
        assert Nothing.to_result(lambda: 'missing').to_option() is Nothing


class TestResultLaws:
    """Monad laws for Result."""

    @given(integers, result_arrows())
    def test_left_identity(self, x, f):
        assert pure(Family.RESULT, x).flat_map(f) == f(x)

    @given(results)
    def test_right_identity(self, result):
        assert result.flat_map(lambda x: pure(Family.RESULT, x)) == result

    @given(results, result_arrows(), result_arrows())
    def test_associativity(self, result, f, g):
        assert result.flat_map(f).flat_map(g) == result.flat_map(lambda x: f(x).flat_map(g))


class TestTaskLaws:
    """Monad laws for Task, compared by the outcome of a run."""

    @settings(max_examples=50)
    @given(integers, task_arrows())
    def test_left_identity(self, x, f):
        assert run_task(pure(Family.TASK, x).flat_map(f)) == run_task(f(x))

    @settings(max_examples=50)
    @given(tasks)
    def test_right_identity(self, task):
        assert run_task(task.flat_map(Task.done)) == run_task(task)

    @settings(max_examples=50)
    @given(tasks, task_arrows(), task_arrows())
    def test_associativity(self, task, f, g):
        left = task.flat_map(f).flat_map(g)
        right = task.flat_map(lambda x: f(x).flat_map(g))
        assert run_task(left) == run_task(right)

    @settings(max_examples=50)
    @given(tasks, st.integers())
    def test_map_is_flat_map_of_done(self, task, k):
        left = task.map(lambda x: x + k)
        right = task.flat_map(lambda x: Task.done(x + k))
        assert run_task(left) == run_task(right)


class TestStateLaws:
    """Monad laws for State, compared by running from several states."""

    @given(integers, state_arrows())
    def test_left_identity(self, x, f):
        assert run_states(pure(Family.STATE, x).flat_map(f), f(x))

    @given(states())
    def test_right_identity(self, state):
        assert run_states(state.flat_map(State.pure), state)

    @given(states(), state_arrows(), state_arrows())
    def test_associativity(self, state, f, g):
        left = state.flat_map(f).flat_map(g)
        right = state.flat_map(lambda x: f(x).flat_map(g))
        assert run_states(left, right)
