import io
import subprocess
import sys
from unittest import mock

import pytest

from kindling.dockercli import (
    CommandError,
    combined_output_lines,
    output_lines,
    run,
    uses_userns_remap,
)


def python(code):
    return [sys.executable, "-c", code]


class FakeDocker:
    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        returncode, out = self.handler(list(cmd))
        stderr = b"" if kwargs.get("stderr") is subprocess.PIPE else None
        return subprocess.CompletedProcess(cmd, returncode, stdout=out.encode(), stderr=stderr)


def test_output_lines_returns_stdout_lines():
    assert output_lines(python("print('a'); print('b')")) == ["a", "b"]


def test_output_lines_excludes_stderr():
    lines = output_lines(python("import sys; print('out'); sys.stderr.write('err\\n')"))
    assert lines == ["out"]


def test_combined_output_lines_includes_stderr():
    lines = combined_output_lines(
        python("import sys; sys.stdout.write('out\\n'); sys.stdout.flush(); sys.stderr.write('err\\n')")
    )
    assert sorted(lines) == ["err", "out"]


def test_run_copies_stdout_to_writer():
    buf = io.StringIO()
    run(python("print('hello')"), stdout=buf)
    assert buf.getvalue().splitlines() == ["hello"]


def test_run_passes_stdin_text():
    buf = io.StringIO()
    run(python("import sys; sys.stdout.write(sys.stdin.read())"), stdin="piped", stdout=buf)
    assert buf.getvalue() == "piped"


def test_run_copies_stdout_to_binary_writer():
    buf = io.BytesIO()
    run(python("import sys; sys.stdout.write('bin')"), stdout=buf)
    assert buf.getvalue() == b"bin"


def test_nonzero_exit_raises_with_code():
    with pytest.raises(CommandError) as info:
        run(python("import sys; sys.exit(3)"))
    assert info.value.returncode == 3


def test_error_carries_output():
    with pytest.raises(CommandError) as info:
        output_lines(python("import sys; print('boom'); sys.exit(1)"))
    assert "boom" in info.value.output


def test_missing_executable_raises():
    with pytest.raises(CommandError) as info:
        run(["definitely-not-a-real-command-kindling"])
    assert info.value.returncode is None


def test_userns_remap_detected():
    fake = FakeDocker(lambda cmd: (0, '\'["name=seccomp","name=userns"]\'\n'))
    with mock.patch("subprocess.run", side_effect=fake):
        assert uses_userns_remap() is True
    assert fake.calls[0][:2] == ["docker", "info"]


def test_userns_remap_absent():
    fake = FakeDocker(lambda cmd: (0, '\'["name=seccomp"]\'\n'))
    with mock.patch("subprocess.run", side_effect=fake):
        assert uses_userns_remap() is False


def test_userns_remap_false_on_failure():
    fake = FakeDocker(lambda cmd: (1, "name=userns\n"))
    with mock.patch("subprocess.run", side_effect=fake):
        assert uses_userns_remap() is False


def test_userns_remap_false_on_empty_output():
    fake = FakeDocker(lambda cmd: (0, ""))
    with mock.patch("subprocess.run", side_effect=fake):
        assert uses_userns_remap() is False