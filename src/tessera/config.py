"""ContextVar-based parse configuration for Tessera.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Compiler instance, read by every lex/parse in the context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # In Compiler class
    compiler = Compiler(extended_numbers=True)
    program = compiler("{{ 1_000 }}")  # Sets config internally via ContextVar

    # Direct usage (advanced)
    from tessera.config import set_parse_config, reset_parse_config, ParseConfig

    set_parse_config(ParseConfig(extended_numbers=True))
    try:
        tokens = lex(source)
    finally:
        reset_parse_config()

    # Or use the context manager
    with parse_config_context(ParseConfig(extended_numbers=True)):
        tokens = lex(source)

"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: source_file is intentionally excluded; it is per-call state,
    not configuration.

    Attributes:
        extended_numbers: Accept exponents (``1e3``) and digit separators
            (``1_000``) in number literals
        text_transformer: Optional callback applied to every literal text
            chunk (e.g. trimming edge whitespace)

    """

    extended_numbers: bool = False
    text_transformer: Callable[[str], str] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "extended_numbers": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.extended_numbers
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Useful for tests and isolated compilations. Restores the previous
    config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(extended_numbers=True)):
        ...     tokens = lex("{{ 1e3 }}")
        >>> # Automatically reset to previous config

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
