"""ContextVar-based buffer configuration for printbuf.

Holds the defaults a new Printbuf picks up when it is constructed without
an explicit config: tabstops, unit settings and the growth ceiling.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    buf = Printbuf(config=PrintbufConfig(tabstops=(8, 16)))

    # Or set the default for everything rendered in a block
    with printbuf_config_context(PrintbufConfig(si_units=UnitSystem.DECIMAL)):
        text = render_to_str(obj.to_text)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from printbuf.errors import ConfigError
from printbuf.units import OutputUnits, UnitSystem

MAX_TABSTOPS = 4
MAX_TABSTOP_COLUMN = 255

# 64 MiB; a ceiling for geometric growth, not a preallocation.
DEFAULT_MAX_CAPACITY = 64 << 20


def validate_tabstops(columns: tuple[int, ...]) -> tuple[int, ...]:
    """Check a tabstop tuple, returning it unchanged.

    Raises:
        ConfigError: more than MAX_TABSTOPS columns, or a column outside
            0..MAX_TABSTOP_COLUMN
    """
    if len(columns) > MAX_TABSTOPS:
        raise ConfigError(f"at most {MAX_TABSTOPS} tabstops, got {len(columns)}")
    for column in columns:
        if not isinstance(column, int) or not 0 <= column <= MAX_TABSTOP_COLUMN:
            raise ConfigError(f"tabstop column out of range: {column!r}")
    return columns


@dataclass(frozen=True, slots=True)
class PrintbufConfig:
    """Immutable buffer configuration.

    Copied into each Printbuf at construction; later changes to a buffer's
    tabstops or units never touch the config it came from.

    Attributes:
        tabstops: Up to 4 column offsets from line start
        si_units: Binary (1024) or decimal (1000) powers for human-readable output
        units: How units() renders numbers
        max_capacity: Largest size a heap buffer will grow to
        initial_capacity: Bytes to allocate up front (0 = grow on first write)

    """

    tabstops: tuple[int, ...] = ()
    si_units: UnitSystem = UnitSystem.BINARY
    units: OutputUnits = OutputUnits.RAW
    max_capacity: int = DEFAULT_MAX_CAPACITY
    initial_capacity: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "tabstops", validate_tabstops(tuple(self.tabstops)))
        if self.max_capacity < 1:
            raise ConfigError(f"max_capacity must be positive, got {self.max_capacity}")
        if not 0 <= self.initial_capacity <= self.max_capacity:
            raise ConfigError(
                f"initial_capacity must be within 0..{self.max_capacity}, "
                f"got {self.initial_capacity}"
            )

    @property
    def human_readable_units(self) -> bool:
        return self.units is OutputUnits.HUMAN_READABLE

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "PrintbufConfig":
        """Create PrintbufConfig from dictionary.

        Only includes keys that are valid PrintbufConfig fields; unknown keys
        are silently ignored. Enum fields accept member names or values
        ("decimal", "DECIMAL"), and ``human_readable_units: true`` is
        accepted as shorthand for ``units: "human_readable"``.

        Args:
            config_dict: Dictionary with config values (e.g. loaded from TOML)

        Returns:
            New PrintbufConfig instance with values from dict.

        Example:
            >>> config = PrintbufConfig.from_dict({
            ...     "tabstops": [8, 16],
            ...     "si_units": "decimal",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.tabstops
            (8, 16)

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        if config_dict.get("human_readable_units") and "units" not in filtered:
            filtered["units"] = OutputUnits.HUMAN_READABLE
        if "tabstops" in filtered:
            filtered["tabstops"] = tuple(filtered["tabstops"])
        if "si_units" in filtered:
            filtered["si_units"] = _coerce_enum(UnitSystem, filtered["si_units"])
        if "units" in filtered:
            filtered["units"] = _coerce_enum(OutputUnits, filtered["units"])
        return cls(**filtered)


def _coerce_enum(enum_cls: type[Enum], value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        pass
    try:
        return enum_cls[str(value).upper()]
    except KeyError:
        raise ConfigError(f"invalid {enum_cls.__name__}: {value!r}") from None


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PrintbufConfig = PrintbufConfig()

# Thread-local configuration via ContextVar
_printbuf_config: ContextVar[PrintbufConfig] = ContextVar(
    "printbuf_config",
    default=_DEFAULT_CONFIG,
)


def get_printbuf_config() -> PrintbufConfig:
    """Get current default buffer configuration (thread-local)."""
    return _printbuf_config.get()


def set_printbuf_config(config: PrintbufConfig) -> None:
    """Set the default buffer configuration for the current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _printbuf_config.set(config)


def reset_printbuf_config() -> None:
    """Reset to the module-level default configuration."""
    _printbuf_config.set(_DEFAULT_CONFIG)


@contextmanager
def printbuf_config_context(config: PrintbufConfig) -> Iterator[None]:
    """Context manager for temporary default config changes.

    Args:
        config: PrintbufConfig to use within the context.

    Example:
        >>> with printbuf_config_context(PrintbufConfig(tabstops=(10,))):
        ...     buf = Printbuf()
        >>> buf.tabstops
        (10,)

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _printbuf_config.get()
    _printbuf_config.set(config)
    try:
        yield
    finally:
        _printbuf_config.set(previous)


__all__ = [
    "DEFAULT_MAX_CAPACITY",
    "MAX_TABSTOPS",
    "PrintbufConfig",
    "get_printbuf_config",
    "printbuf_config_context",
    "reset_printbuf_config",
    "set_printbuf_config",
    "validate_tabstops",
]
