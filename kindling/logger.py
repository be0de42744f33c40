"""The command line logger: leveled info output with debug headers."""

from __future__ import annotations

import threading
from pathlib import PurePath
from types import FrameType
from typing import TextIO

from kindling.log import InfoLogger


def _format(format: str, args: tuple[object, ...]) -> str:
    return format % args if args else format


def _debug_header(frame: FrameType | None) -> str:
    """Return the "DEBUG: dir/file.py:line] " header for the given caller frame."""
    if frame is None:
        location, line = "???", 1
    else:
        parts = PurePath(frame.f_code.co_filename).parts
        location = "/".join(parts[-2:]) if parts else "???"
        line = frame.f_lineno
    return f"DEBUG: {location}:{line}] "


class Logger:
    """Writes log messages to a text writer, filtering info by verbosity.

    Every message is written as a whole, with a trailing newline added
    when missing; writes are serialised so concurrent messages never mix.
    """

    def __init__(self, writer: TextIO, verbosity: int = 0) -> None:
        self._writer = writer
        self._verbosity = verbosity
        self._lock = threading.Lock()

    @property
    def writer(self) -> TextIO:
        """The writer messages are written to."""
        return self._writer

    @property
    def verbosity(self) -> int:
        """The highest info level that is written."""
        return self._verbosity

    def _write(self, text: str) -> None:
        if not text.endswith("\n"):
            text += "\n"
        with self._lock:
            self._writer.write(text)

    def _debug(self, frame: FrameType | None, text: str) -> None:
        self._write(_debug_header(frame) + text)

    def warn(self, message: str) -> None:
        self._write(message)

    def warnf(self, format: str, *args: object) -> None:
        self._write(_format(format, args))

    def error(self, message: str) -> None:
        self._write(message)

    def errorf(self, format: str, *args: object) -> None:
        self._write(_format(format, args))

    def v(self, level: int) -> InfoLogger:
        return _InfoLogger(self, level, level <= self._verbosity)


class _InfoLogger:
    """Info logger bound to one level of a Logger."""

    __slots__ = ("_logger", "_level", "_enabled")

    def __init__(self, logger: Logger, level: int, enabled: bool) -> None:
        self._logger = logger
        self._level = level
        self._enabled = enabled

    def enabled(self) -> bool:
        return self._enabled

    def _emit(self, text: str, caller: FrameType | None) -> None:
        # levels above 0 are debug messages and carry the caller location
        if self._level > 0:
            self._logger._debug(caller, text)
        else:
            self._logger._write(text)

    def info(self, message: str) -> None:
        if not self._enabled:
            return
        frame = _caller_frame()
        try:
            self._emit(message, frame)
        finally:
            del frame

    def infof(self, format: str, *args: object) -> None:
        if not self._enabled:
            return
        frame = _caller_frame()
        try:
            self._emit(_format(format, args), frame)
        finally:
            del frame


def _caller_frame() -> FrameType | None:
    """Return the frame that called the info logger method."""
    import inspect

    here = inspect.currentframe()
    try:
        if here is None or here.f_back is None:
            return None
        return here.f_back.f_back
    finally:
        del here