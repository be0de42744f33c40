"""Progress status lines for the command line, with an optional spinner."""

from __future__ import annotations

from kindling.log import Logger as LoggerProtocol
from kindling.logger import Logger
from kindling.spinner import Spinner


class Status:
    """Tracks the current phase of an operation and reports its outcome.

    When logger is the command line Logger writing through a Spinner,
    the spinner shows the running phase; otherwise the phase is logged.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self.logger = logger
        self.status = ""
        self.spinner: Spinner | None = None
        if isinstance(logger, Logger) and isinstance(logger.writer, Spinner):
            self.spinner = logger.writer

    def start(self, status: str) -> None:
        """End any previous phase successfully and begin a new one."""
        self.end(True)
        self.status = status
        if self.spinner is not None:
            self.spinner.suffix = f" {status} "
            self.spinner.start()
        else:
            self.logger.v(0).infof(" • %s  ...\n", status)

    def end(self, success: bool) -> None:
        """Finish the current phase, marking it as success or failure."""
        if not self.status:
            return
        if self.spinner is not None:
            self.spinner.stop()
            self.spinner.writer.write("\r")
        mark = "✓" if success else "✗"
        self.logger.v(0).infof(f" {mark} %s\n", self.status)
        self.status = ""


def status_for_logger(logger: LoggerProtocol) -> Status:
    """Return a Status reporting through logger, using its spinner if any."""
    return Status(logger)