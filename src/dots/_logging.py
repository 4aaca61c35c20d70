"""Structured logging for dots.

Uses structlog's ProcessorFormatter to unify structlog and stdlib logging
output. Library loggers wrap stdlib loggers, so dots stays silent until the
application (or `dots.init(log_level=...)`) configures logging.
"""

from __future__ import annotations

import logging
import sys
import warnings
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]


def _get_shared_processors() -> list[Any]:
    """Get processors shared between structlog and stdlib foreign logs."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        _run_log_hooks,
    ]


def _get_renderer(json_output: bool = True) -> Any:
    """Get the appropriate renderer based on output format."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Configure structlog with ProcessorFormatter for unified output.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use colored console output.
    """
    structlog.configure(
        processors=[
            *_get_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    dots_logger = logging.getLogger('dots')
    dots_logger.handlers.clear()
    dots_logger.addHandler(handler)
    dots_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    dots_logger.propagate = False


def get_logger(name: str) -> Any:
    """Get a structlog logger backed by the stdlib logger `name`.

    Args:
        name: Logger name, normally the caller's `__name__`.

    Returns:
        A structlog stdlib BoundLogger.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


# --- Logging Hooks ---

type LogHook = Callable[[dict[str, Any]], None]

# Replaced, never mutated: Task callbacks may log from other threads while
# hooks are being registered.
_log_hooks: tuple[LogHook, ...] = ()


def add_log_hook(hook: LogHook) -> None:
    """Call `hook` with a copy of every dots log entry.

    Hooks run for every event the `dots` loggers produce once logging is
    configured, whatever its level.

    Example:
        ```python
        events = []
        add_log_hook(events.append)
        run_do(program)
        [e['event'] for e in events]
        # ['do.short_circuit']
        ```
    """
    global _log_hooks  # noqa: PLW0603
    _log_hooks = (*_log_hooks, hook)


def remove_log_hook(hook: LogHook) -> None:
    """Unregister `hook`; unknown hooks are ignored."""
    global _log_hooks  # noqa: PLW0603
    _log_hooks = tuple(h for h in _log_hooks if h != hook)


def clear_log_hooks() -> None:
    global _log_hooks  # noqa: PLW0603
    _log_hooks = ()


def _run_log_hooks(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor feeding each entry to the registered hooks."""
    for hook in _log_hooks:
        try:
            hook(dict(event_dict))
        except Exception as exc:  # noqa: BLE001
            # Reported outside logging: the handler would rerun this hook.
            warnings.warn(f'log hook {hook!r} failed: {exc!r}', RuntimeWarning, stacklevel=2)
    return event_dict
