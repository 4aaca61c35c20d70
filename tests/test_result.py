"""Tests for Result type (Ok and Err)."""

import pytest
from dots import (
    Err,
    Family,
    Nothing,
    NullishValueError,
    Ok,
    Some,
    Suspendable,
    UnwrapResultError,
    result_of,
)
from hypothesis import given
from hypothesis import strategies as st


class TestOkCreation:
    """Tests for Ok instantiation and basic properties."""

    def test_ok_creation(self):
        """Ok wraps a value."""
        assert Ok(42).value == 42

    def test_ok_of_none_is_allowed(self):
        """Ok(None) is a success carrying None."""
        ok = Ok(None)
        assert ok.is_ok()
        assert ok.unwrap() is None

    def test_ok_is_frozen(self):
        """Ok instances are immutable."""
        ok = Ok(1)
        with pytest.raises(AttributeError):
            ok.value = 2  # type: ignore[misc]

    def test_ok_equality_and_hash(self):
        """Ok compares by value."""
        assert Ok(1) == Ok(1)
        assert Ok(1) != Ok(2)
        assert hash(Ok(1)) == hash(Ok(1))

    def test_ok_pattern_matching(self):
        """Ok and Err support structural pattern matching."""
        match Ok(3):
            case Ok(value):
                assert value == 3
            case Err():
                pytest.fail('Ok(3) matched Err')

    def test_str(self):
        assert str(Ok(1)) == 'Ok(1)'
        assert str(Err('bad')) == "Err('bad')"


class TestErrCreation:
    """Tests for Err instantiation and basic properties."""

    def test_err_creation(self, sample_err):
        """Err wraps an error value."""
        assert sample_err.is_err()
        assert isinstance(sample_err.error, ValueError)

    def test_err_of_none_is_allowed(self):
        """Err(None) is still a failure."""
        err = Err(None)
        assert err.is_err()
        assert err.error is None

    def test_ok_not_equal_to_err(self):
        """Ok and Err holding the same payload differ."""
        assert Ok(1) != Err(1)


class TestResultOf:
    """Tests for result_of."""

    def test_value_becomes_ok(self):
        assert result_of(0) == Ok(0)

    def test_none_becomes_nullish_error(self):
        """result_of(None) fails with NullishValueError."""
        result = result_of(None)
        assert result.is_err()
        assert isinstance(result.error, NullishValueError)
        assert str(result.error) == 'Result of nullish value'


class TestResultUnwrap:
    """Tests for the unwrap family."""

    def test_ok_unwrap(self):
        assert Ok(1).unwrap() == 1
        assert Ok(1).expect('ignored') == 1

    def test_err_unwrap_raises_with_error(self):
        """Err.unwrap() raises UnwrapResultError carrying the error."""
        with pytest.raises(UnwrapResultError, match='Unwrapped a Result of Err') as exc_info:
            Err('bad').unwrap()
        assert exc_info.value.error == 'bad'

    def test_err_unwrap_with_message(self):
        with pytest.raises(UnwrapResultError, match='config missing'):
            Err('bad').unwrap('config missing')

    def test_err_expect_includes_error(self):
        """Err.expect() includes the message and the error."""
        with pytest.raises(UnwrapResultError, match="loading: 'bad'"):
            Err('bad').expect('loading')

    def test_unwrap_err(self):
        """unwrap_err() is the mirror image of unwrap()."""
        assert Err('bad').unwrap_err() == 'bad'
        with pytest.raises(UnwrapResultError):
            Ok(1).unwrap_err()

    def test_unwrap_or(self):
        assert Ok(1).unwrap_or(0) == 1
        assert Err('bad').unwrap_or(0) == 0

    def test_unwrap_or_else_is_lazy(self):
        """Ok.unwrap_or_else() never calls the fallback."""

        def fallback():
            raise AssertionError('unreachable')

        assert Ok(1).unwrap_or_else(fallback) == 1
        assert Err('bad').unwrap_or_else(lambda: 7) == 7

    def test_switch(self):
        """switch() folds both variants."""
        cases = {'ok': lambda v: v * 2, 'err': lambda e: f'error: {e}'}
        assert Ok(2).switch(**cases) == 4
        assert Err('bad').switch(**cases) == 'error: bad'


class TestResultTransform:
    """Tests for map, map_err and flat_map."""

    def test_ok_map(self):
        assert Ok(2).map(lambda v: v + 1) == Ok(3)

    def test_ok_map_to_none(self):
        """Mapping to None stays Ok; Result has no notion of absence."""
        assert Ok(2).map(lambda _: None) == Ok(None)

    def test_err_map_does_not_call(self):
        def boom(_):
            raise AssertionError('unreachable')

        err = Err('bad')
        assert err.map(boom) is err

    def test_map_err(self):
        """map_err() transforms only failures."""
        assert Err('bad').map_err(str.upper) == Err('BAD')
        ok = Ok(1)
        assert ok.map_err(str.upper) is ok

    def test_flat_map(self):
        """flat_map() returns the function's Result directly."""
        assert Ok(2).flat_map(lambda v: Ok(v * 10)) == Ok(20)
        assert Ok(2).flat_map(lambda _: Err('no')) == Err('no')

    def test_err_flat_map_short_circuits(self):
        def boom(_):
            raise AssertionError('unreachable')

        assert Err('bad').flat_map(boom) == Err('bad')

    @given(st.integers())
    def test_map_composition(self, value):
        """map(f).map(g) == map(g . f)."""

        def f(x):
            return x + 1

        def g(x):
            return x * 3

        assert Ok(value).map(f).map(g) == Ok(value).map(lambda x: g(f(x)))


class TestResultConversion:
    """Tests for to_option and to_task."""

    def test_ok_to_option(self):
        assert Ok(1).to_option() == Some(1)

    def test_ok_none_to_option_is_nothing(self):
        """Ok(None) converts to Nothing since Some cannot hold None."""
        assert Ok(None).to_option() is Nothing

    def test_err_to_option(self):
        assert Err('bad').to_option() is Nothing

    async def test_ok_to_task(self):
        assert await Ok(1).to_task() == Ok(1)

    async def test_err_to_task(self):
        assert await Err('bad').to_task() == Err('bad')


class TestResultSuspension:
    """Tests for the suspension hook used by do-notation."""

    def test_is_suspendable(self):
        assert isinstance(Ok(1), Suspendable)
        assert isinstance(Err('bad'), Suspendable)
        assert Ok.family is Family.RESULT
        assert Err.family is Family.RESULT

    def test_ok_resumes_once(self):
        calls = []

        def resume(value):
            calls.append(value)
            return Ok(value + 1)

        assert Ok(1).suspend(resume, lambda _: None) == Ok(2)
        assert calls == [1]

    def test_err_stops(self):
        """Err never calls resume and hands itself to stop."""
        stopped = []

        def resume(_):
            raise AssertionError('unreachable')

        def stop(container):
            stopped.append(container)
            return container

        err = Err('bad')
        assert err.suspend(resume, stop) is err
        assert stopped == [err]
