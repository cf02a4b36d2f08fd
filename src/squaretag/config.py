"""ContextVar-based process configuration for squaretag.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is read when definitions are validated and while text is expanded.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from squaretag.config import set_config, reset_config, ProcessConfig

    set_config(ProcessConfig(strict=True))
    try:
        registry = StaticRegistry(definitions)
    finally:
        reset_config()

    # Or use the context manager
    with config_context(ProcessConfig(max_depth=8)):
        html = shortcodes(text)

"""

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True, slots=True)
class ProcessConfig:
    """Immutable process configuration.

    Attributes:
        strict: Validate definitions when they are created and raise on
            problems. Turn on in development; production skips the checks.
        max_depth: Maximum nesting depth of recursive expansion. None
            disables the guard.
        string_resolver: Optional callback ``(identifier, component) -> bool``
            telling whether a description reference resolves.

    """

    strict: bool = False
    max_depth: int | None = DEFAULT_MAX_DEPTH
    string_resolver: Callable[[str, str], bool] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ProcessConfig":
        """Create ProcessConfig from dictionary.

        Only includes keys that are valid ProcessConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ProcessConfig.from_dict({"strict": True, "colour": "red"})
            >>> config.strict
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ProcessConfig = ProcessConfig()

_process_config: ContextVar[ProcessConfig] = ContextVar(
    "squaretag_process_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> ProcessConfig:
    """Get current process configuration (thread-local)."""
    return _process_config.get()


def set_config(config: ProcessConfig) -> None:
    """Set process configuration for current context.

    Args:
        config: ProcessConfig instance to use for this context.
    """
    _process_config.set(config)


def reset_config() -> None:
    """Reset to default configuration."""
    _process_config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: ProcessConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with config_context(ProcessConfig(strict=True)):
        ...     definition = definition_from_data("abc", data)
    """
    previous = _process_config.get()
    _process_config.set(config)
    try:
        yield
    finally:
        _process_config.set(previous)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ProcessConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
]
