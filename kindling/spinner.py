"""A small terminal loading spinner that doubles as a text writer."""

from __future__ import annotations

import itertools
import threading
from typing import TextIO

SPINNER_FRAMES = (
    "⠈⠁",
    "⠈⠑",
    "⠈⠱",
    "⠈⡱",
    "⢀⡱",
    "⢄⡱",
    "⢄⡱",
    "⢆⡱",
    "⢎⡱",
    "⢎⡰",
    "⢎⡠",
    "⢎⡀",
    "⢎⠁",
    "⠎⠁",
    "⠊⠁",
)


class Spinner:
    """Draws spinner frames on one line of writer in a background thread.

    Writing through the spinner while it runs first returns the cursor to
    the start of the line. It assumes the line length does not change.
    """

    interval = 0.1

    def __init__(self, writer: TextIO) -> None:
        self.writer = writer
        self.prefix = ""
        self.suffix = ""
        self._lock = threading.Lock()
        self._running = False
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        """Whether the spinner is currently drawing."""
        with self._lock:
            return self._running

    def start(self) -> None:
        """Start drawing frames; does nothing if already running."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._spin, args=(self._stop_event,), daemon=True
            )
            self._thread.start()

    def _spin(self, stop_event: threading.Event) -> None:
        for frame in itertools.cycle(SPINNER_FRAMES):
            if stop_event.wait(self.interval):
                return
            with self._lock:
                if stop_event.is_set():
                    return
                self.writer.write(f"\r{self.prefix}{frame}{self.suffix}")

    def stop(self) -> None:
        """Stop drawing and wait for the background thread to finish."""
        with self._lock:
            if not self._running:
                return
            thread = self._thread
            self._stop_event.set()
        if thread is not None:
            thread.join()
        with self._lock:
            self._running = False
            self._thread = None

    def write(self, data: str) -> int:
        """Write data to the inner writer, interrupting the spinner line."""
        with self._lock:
            if self._running:
                self.writer.write("\r")
            self.writer.write(data)
        return len(data)

    def flush(self) -> None:
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()