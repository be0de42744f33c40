import pytest

from kindling.log import InfoLogger, Logger, NoopInfoLogger, NoopLogger


@pytest.mark.parametrize("level", [0, 1, 5])
def test_noop_v_is_disabled(level):
    info = NoopLogger().v(level)
    assert isinstance(info, NoopInfoLogger)
    assert info.enabled() is False


def test_noop_satisfies_protocols():
    assert isinstance(NoopLogger(), Logger)
    assert isinstance(NoopInfoLogger(), InfoLogger)
    assert NoopLogger().v(0).enabled() is False


def test_noop_writes_nothing(capsys):
    logger = NoopLogger()
    logger.warn("warning")
    logger.warnf("%s %d", "warning", 1)
    logger.error("error")
    logger.errorf("%s", "error")
    logger.v(0).info("info")
    logger.v(3).infof("%s", "info")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""