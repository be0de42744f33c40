"""Logging interfaces used throughout the package, and a no-op logger.

Info messages are gated by an integer verbosity level: level 0 is for
normal user facing messages, higher levels for increasingly detailed
debug output.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class InfoLogger(Protocol):
    """Writes info messages at one verbosity level."""

    def info(self, message: str) -> None:
        """Write a user facing status message."""

    def infof(self, format: str, *args: object) -> None:
        """Write a %-style formatted status message."""

    def enabled(self) -> bool:
        """Return whether this verbosity level is enabled."""


@runtime_checkable
class Logger(Protocol):
    """Writes warnings and errors, and hands out leveled info loggers."""

    def warn(self, message: str) -> None:
        """Write a user facing warning."""

    def warnf(self, format: str, *args: object) -> None:
        """Write a %-style formatted warning."""

    def error(self, message: str) -> None:
        """Write an error message."""

    def errorf(self, format: str, *args: object) -> None:
        """Write a %-style formatted error message."""

    def v(self, level: int) -> InfoLogger:
        """Return an info logger for the given verbosity level."""


class NoopInfoLogger:
    """An info logger that is never enabled and so writes nothing."""

    def enabled(self) -> bool:
        return False

    def info(self, message: str) -> None:
        if self.enabled():
            self.infof("%s", message)

    def infof(self, format: str, *args: object) -> None:
        if self.enabled():
            _ = format % args if args else format


class NoopLogger:
    """A logger that discards everything by routing it to a disabled info logger."""

    def warn(self, message: str) -> None:
        self.v(0).info(message)

    def warnf(self, format: str, *args: object) -> None:
        self.v(0).infof(format, *args)

    def error(self, message: str) -> None:
        self.v(0).info(message)

    def errorf(self, format: str, *args: object) -> None:
        self.v(0).infof(format, *args)

    def v(self, level: int) -> InfoLogger:
        return NoopInfoLogger()