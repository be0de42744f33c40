"""Small assertion helpers that report through a test object's errorf."""

from __future__ import annotations

from typing import Protocol


class _ErrorReporter(Protocol):
    def errorf(self, format: str, *args: object) -> None: ...


def expect_error(t: _ErrorReporter, expect_error: bool, err: BaseException | None) -> None:
    """Report through t when the presence of err does not match expect_error."""
    if err is not None and not expect_error:
        t.errorf("Did not expect error: %s", err)
    if err is None and expect_error:
        t.errorf("Expected error but got none")


def string_equal(t: _ErrorReporter, expected: str, result: str) -> None:
    """Report through t when expected and result differ."""
    if expected != result:
        t.errorf("Strings did not match!")
        t.errorf("Expected: %r", expected)
        t.errorf("But got: %r", result)