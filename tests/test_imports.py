"""Smoke tests for the public import surface."""

import dots


def test_all_exports_resolve():
    for name in dots.__all__:
        assert hasattr(dots, name), name


def test_submodule_imports():
    from dots.decorators import do, run_do, taskify
    from dots.option import Nothing, Some, option_of
    from dots.result import Err, Ok, result_of

    assert dots.do is do
    assert dots.run_do is run_do
    assert dots.taskify is taskify
    assert dots.Some is Some
    assert dots.Nothing is Nothing
    assert dots.option_of is option_of
    assert dots.Ok is Ok
    assert dots.Err is Err
    assert dots.result_of is result_of


def test_errors_share_base():
    for name in [
        'UnwrapOptionError',
        'UnwrapResultError',
        'DoNotationError',
        'MixedFamilyError',
        'NotAContainerError',
        'TaskFailedError',
    ]:
        assert issubclass(getattr(dots, name), dots.DotsError)
