"""\
Configurations
==============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module provides the configurations that are used throughout this
library. Rendering of error chains, call-site qualification, logging
and telemetry are all driven by the process-wide `settings` object.
"""

from __future__ import annotations

import threading
import typing as t

from errchain.core.exceptions import ConfigValidationError

if t.TYPE_CHECKING:
    from collections.abc import Iterable

__all__: tuple[str, ...] = (
    "Config",
    "ConsoleLoggerConfig",
    "FileLoggerConfig",
    "LoggerConfig",
    "RenderConfig",
    "TTYLoggerConfig",
    "TelemetryConfig",
    "config_property",
    "settings",
)

_ALLOWED_LOG_LEVELS: tuple[str, ...] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)
# NOTE(xames3): `qualName` is filled in by the coloured formatter and
# `extra` by the chain formatter; plain `logging.Formatter` instances
# must not be given this format.
_DEFAULT_LOG_FMT: t.Final[str] = (
    "%(asctime)s %(levelname)s %(qualName)s:%(lineno)d %(extra)s: %(message)s"
)
_DEFAULT_LOG_DATEFMT: t.Final[str] = "%Y-%m-%dT%H:%M:%SZ"
_DEFAULT_SITE_FMT: t.Final[str] = "[{function}@{file}:{line}]"
_SITE_FIELDS: tuple[str, ...] = ("{function}", "{file}", "{line}")


T = t.TypeVar("T")


class config_property(t.Generic[T]):  # noqa: N801
    """Descriptor for configuration properties.

    This descriptor class behaves like Python's built-in `property`
    decorator, with additional features for configuration management:
    default values, immutability, and validation against an allowed
    set, a numeric range or an arbitrary predicate.

    Validation rules are compiled once at class creation time and the
    default value is validated eagerly, so a misconfigured class fails
    on import rather than on first use.
    """

    __slots__: tuple[str, ...] = (
        "allowed",
        "between",
        "check",
        "default",
        "description",
        "frozen",
        "locks",
        "property",
        "validate",
    )

    _global_lock: threading.RLock = threading.RLock()

    def __init__(
        self,
        default: T,
        *,
        frozen: bool = False,
        description: str | None = None,
        allowed: Iterable[T] | None = None,
        check: t.Callable[[T], bool] | None = None,
        between: tuple[int | float, ...] | None = None,
    ) -> None:
        """Initialise configuration property."""
        self.default = default
        self.frozen = frozen
        self.description = description
        self.allowed = allowed
        self.check = check
        self.between = between
        self.property: str = ""
        self.validate: bool = any([self.between, self.check, self.allowed])
        self.locks: dict[int, threading.RLock] = {}

    def __set_name__(self, instance: type, value: str) -> None:
        """Configure and set the property value on the owner class.

        This method records the private attribute name for the property
        and stores the validated default on the owner class.

        :param instance: The class where the property is being set.
        :param value: The name of the property to be set.
        :raises ConfigValidationError: If the default value does not
            satisfy the property's own constraints.
        """
        self.property = f"_{value}"
        if self.default is not None and self.validate:
            try:
                self.__validate__(self.default)
            except ConfigValidationError as error:
                raise ConfigValidationError(
                    f"got invalid value for {value!r}: {error}"
                ) from error
        setattr(instance, self.property, self.default)

    @t.overload
    def __get__(self, instance: None, owner: type) -> config_property[T]: ...

    @t.overload
    def __get__(self, instance: object, owner: type) -> T: ...

    def __get__(
        self,
        instance: object | None,
        owner: type,
    ) -> config_property[T] | T:
        """Get and return the property value from the instance.

        :param instance: The instance where the property is being
            accessed, `None` when accessed on the class.
        :param owner: The owner class of the property (not used).
        :return: The descriptor itself for class access, otherwise the
            value of the property.
        """
        if instance is None:
            return self
        return getattr(instance, self.property, self.default)

    def __set__(self, instance: object, value: T) -> None:
        """Set the property with validation & immutability checks.

        :param instance: The instance where the property is being set.
        :param value: The value to be set for the property.
        :raises ConfigValidationError: If the property is frozen or the
            value fails validation.
        """
        if self.frozen:
            raise ConfigValidationError(
                f"cannot modify frozen property: {self.property[1:]!r}",
            )
        if self.validate:
            with self._acquire_lock(instance):
                self.__validate__(value)
                setattr(instance, self.property, value)
            return
        setattr(instance, self.property, value)

    def __validate__(self, value: t.Any) -> None:
        """Validate the property value based on constraints.

        The constraints are checked in order: `allowed`, `check` and
        finally `between`.

        :param value: The value to be validated.
        :raises ConfigValidationError: If the value does not meet the
            validation criteria.
        """
        if self.allowed is not None and value not in self.allowed:
            raise ConfigValidationError(
                f"{value!r} is not one of the allowed values "
                f"({', '.join(str(item) for item in self.allowed)})"
            )
        if self.check is not None:
            try:
                if not self.check(value):
                    raise ConfigValidationError("property validation failed")
            except ConfigValidationError:
                raise
            except Exception as error:
                raise ConfigValidationError(
                    f"property validation failed for {value!r} with "
                    f"message: {error}"
                ) from error
        if self.between is not None and len(self.between) == 2:
            minimum, maximum = self.between
            if not all(
                isinstance(num, int | float) for num in (minimum, maximum)
            ):
                raise ConfigValidationError("must be a tuple of two numbers")
            if not (minimum <= value <= maximum):
                raise ConfigValidationError(
                    f"{value} is not between {minimum} and {maximum}"
                )

    def _acquire_lock(self, instance: object) -> threading.RLock:
        """Return the lock guarding writes to this property on instance.

        Locks are created lazily under a class-wide lock so that two
        threads writing to the same instance for the first time end up
        sharing one lock.

        :param instance: The instance where the property is being set.
        :return: A re-entrant lock for the instance.
        """
        instance_id = id(instance)
        lock = self.locks.get(instance_id)
        if lock is not None:
            return lock
        with self._global_lock:
            return self.locks.setdefault(instance_id, threading.RLock())


def _is_site_format(value: str) -> bool:
    """Check that a site format names every call-site field."""
    return all(field in value for field in _SITE_FIELDS)


class RenderConfig:
    """Rendering configuration.

    This class controls how error chains are turned into text. The
    short rendering joins messages with `separator` and the detailed
    rendering prefixes every line with a call-site formatted through
    `site_format`.
    """

    separator: config_property[str] = config_property(": ")
    line_separator: config_property[str] = config_property("\n", frozen=True)
    site_format: config_property[str] = config_property(
        _DEFAULT_SITE_FMT,
        check=_is_site_format,
    )
    qualified: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )


class FileLoggerConfig:
    """File logger configuration.

    This class provides configuration options for logging to a file
    with log rotation and backup retention.
    """

    enable: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "INFO",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    path: config_property[str] = config_property(
        "logs/errchain.log",
        check=lambda x: isinstance(x, str) and bool(x.strip()),
    )
    encoding: config_property[str] = config_property("utf-8", frozen=True)
    max_bytes: config_property[int] = config_property(
        10485760,
        check=lambda x: x >= 0,
    )
    backups: config_property[int] = config_property(5, check=lambda x: x >= 0)
    traceback: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )


class ConsoleLoggerConfig:
    """Console logger configuration.

    This class provides configuration options for logging to the console
    or the tty, where error details are usually wanted without the
    accompanying traceback.
    """

    enable: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    colour: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )
    traceback: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )


TTYLoggerConfig = ConsoleLoggerConfig


class LoggerConfig:
    """Logger configuration.

    This class combines the console and file logger configurations into
    a single logging setup. Every instance owns its nested
    configurations, so changing one logger setup never leaks into
    another.
    """

    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    as_json: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )

    def __init__(self) -> None:
        """Initialise the nested logger configurations."""
        self.file: FileLoggerConfig = FileLoggerConfig()
        self.tty: TTYLoggerConfig = TTYLoggerConfig()


class TelemetryConfig:
    """OpenTelemetry configuration."""

    enabled: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    name: config_property[str] = config_property("errchain")


class Config:
    """Configuration.

    This class serves as the main configuration object for the library.
    It provides a centralised place to manage rendering, logging and
    telemetry settings.
    """

    name: config_property[str] = config_property("errchain", frozen=True)
    version: config_property[str] = config_property("18.10.2026", frozen=True)
    debug: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )

    def __init__(self) -> None:
        """Initialise the nested configurations."""
        self.render: RenderConfig = RenderConfig()
        self.logger: LoggerConfig = LoggerConfig()
        self.telemetry: TelemetryConfig = TelemetryConfig()


settings: Config = Config()
