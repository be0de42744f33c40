import io

from kindling.log import NoopLogger
from kindling.logger import Logger
from kindling.spinner import Spinner
from kindling.status import Status, status_for_logger


def plain():
    out = io.StringIO()
    return out, status_for_logger(Logger(out, 0))


def test_start_logs_phase_without_spinner():
    out, status = plain()
    assert status.spinner is None
    status.start("Preparing nodes")
    assert out.getvalue() == " • Preparing nodes  ...\n"
    assert status.status == "Preparing nodes"


def test_end_success_and_failure_marks():
    out, status = plain()
    status.start("a")
    status.end(True)
    status.start("b")
    status.end(False)
    assert out.getvalue() == " • a  ...\n ✓ a\n • b  ...\n ✗ b\n"
    assert status.status == ""


def test_end_without_status_does_nothing():
    out, status = plain()
    status.end(False)
    assert out.getvalue() == ""


def test_start_ends_previous_phase_successfully():
    out, status = plain()
    status.start("first")
    status.start("second")
    assert out.getvalue().splitlines() == [" • first  ...", " ✓ first", " • second  ..."]


def test_noop_logger_keeps_state():
    status = Status(NoopLogger())
    assert status.spinner is None
    status.start("phase")
    assert status.status == "phase"
    status.end(True)
    assert status.status == ""


def test_spinner_is_used_when_logger_writes_through_one():
    out = io.StringIO()
    spinner = Spinner(out)
    spinner.interval = 10
    status = status_for_logger(Logger(spinner, 0))
    assert status.spinner is spinner
    status.start("Ensuring node image")
    assert spinner.running is True
    assert spinner.suffix == " Ensuring node image "
    status.end(True)
    assert spinner.running is False
    assert out.getvalue() == "\r ✓ Ensuring node image\n"


def test_spinner_failure_mark():
    out = io.StringIO()
    spinner = Spinner(out)
    spinner.interval = 10
    status = Status(Logger(spinner, 0))
    status.start("x")
    status.end(False)
    assert out.getvalue().endswith(" ✗ x\n")
    assert spinner.running is False