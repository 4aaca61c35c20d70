"""Library configuration: DotsConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dots._logging import configure_logging

__all__ = [
    'DotsConfig',
    'get_config',
    'init',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class DotsConfig:
    """Configuration for dots.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Render logs as JSON (True) or for the console (False).
        strict_families: Reject do-programs that mix container families.
    """

    log_level: str | None = None
    json_logs: bool = True
    strict_families: bool = True


_DEFAULT_CONFIG = DotsConfig()

# Global configuration (set by init())
_config: DotsConfig | None = None


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable, warning on unknown values."""
    raw = os.environ.get(name, '').strip().lower()
    if not raw:
        return default
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    logging.getLogger(__name__).warning(
        "Unknown %s value '%s', defaulting to %s", name, raw, default
    )
    return default


def _env_log_level() -> str | None:
    raw = os.environ.get('DOTS_LOG_LEVEL', '').strip()
    return raw.upper() or None


def init(
    log_level: str | None = None,
    *,
    json_logs: bool | None = None,
    strict_families: bool | None = None,
) -> DotsConfig:
    """Initialize dots with the given configuration.

    Unset arguments are read from DOTS_LOG_LEVEL, DOTS_JSON_LOGS and
    DOTS_STRICT_FAMILIES, then fall back to the DotsConfig defaults.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_logs: Emit JSON logs instead of console output.
        strict_families: Raise MixedFamilyError on mixed do-programs.

    Returns:
        The DotsConfig that was set.

    Example:
        ```python
        import dots

        dots.init(log_level='DEBUG', json_logs=False)
        ```
    """
    global _config  # noqa: PLW0603

    _config = DotsConfig(
        log_level=log_level.upper() if log_level is not None else _env_log_level(),
        json_logs=json_logs if json_logs is not None else _env_flag('DOTS_JSON_LOGS', True),
        strict_families=(
            strict_families
            if strict_families is not None
            else _env_flag('DOTS_STRICT_FAMILIES', True)
        ),
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    return _config


def get_config() -> DotsConfig:
    """Get the current configuration, or the defaults if init() was never called."""
    if _config is None:
        return _DEFAULT_CONFIG
    return _config


def reset() -> None:
    """Forget the configuration set by init()."""
    global _config  # noqa: PLW0603
    _config = None
