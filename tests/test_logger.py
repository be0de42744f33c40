import inspect
import io
import re
import threading

from kindling.logger import Logger


def make(verbosity=0):
    out = io.StringIO()
    return out, Logger(out, verbosity)


def test_warn_adds_trailing_newline():
    out, logger = make()
    logger.warn("careful")
    assert out.getvalue() == "careful\n"


def test_warn_keeps_single_newline():
    out, logger = make()
    logger.warn("careful\n")
    assert out.getvalue() == "careful\n"


def test_warnf_and_errorf_format():
    out, logger = make()
    logger.warnf("%s has %d nodes", "kind", 3)
    logger.errorf("failed: %s", "boom")
    assert out.getvalue() == "kind has 3 nodes\nfailed: boom\n"


def test_error_writes_message():
    out, logger = make()
    logger.error("bad")
    assert out.getvalue() == "bad\n"


def test_level_zero_enabled_and_plain():
    out, logger = make(0)
    info = logger.v(0)
    assert info.enabled() is True
    info.info("hello")
    info.infof(" • %s  ...\n", "step")
    assert out.getvalue() == "hello\n • step  ...\n"


def test_higher_level_disabled_writes_nothing():
    out, logger = make(0)
    info = logger.v(1)
    assert info.enabled() is False
    info.info("hidden")
    info.infof("hidden %s", "too")
    assert out.getvalue() == ""


def test_debug_header_names_caller():
    out, logger = make(2)
    line = inspect.currentframe().f_lineno
    logger.v(1).info("hello")
    assert out.getvalue() == f"DEBUG: tests/test_logger.py:{line + 1}] hello\n"


def test_debugf_header_and_format():
    out, logger = make(3)
    line = inspect.currentframe().f_lineno
    logger.v(2).infof("value=%d", 7)
    assert out.getvalue() == f"DEBUG: tests/test_logger.py:{line + 1}] value=7\n"


def test_writer_and_verbosity_exposed():
    out, logger = make(4)
    assert logger.writer is out
    assert logger.verbosity == 4


def test_concurrent_messages_do_not_interleave():
    out, logger = make()

    def worker(n):
        for _ in range(50):
            logger.warnf("message from %d", n)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    lines = out.getvalue().splitlines()
    assert len(lines) == 400
    assert all(re.fullmatch(r"message from \d", line) for line in lines)