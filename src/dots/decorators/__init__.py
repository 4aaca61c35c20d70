"""Decorators: @do and @taskify."""

from dots.decorators.do import do, run_do
from dots.decorators.taskify import taskify

__all__ = [
    'do',
    'run_do',
    'taskify',
]
