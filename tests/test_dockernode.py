import io
import subprocess
from unittest import mock

import pytest

from kindling.dockercli import CommandError
from kindling.dockernode import Node, NodeCommand


class FakeDocker:
    def __init__(self, returncode=0, out=""):
        self.returncode = returncode
        self.out = out
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((list(cmd), kwargs))
        stderr = b"" if kwargs.get("stderr") is subprocess.PIPE else None
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=self.out.encode(), stderr=stderr)


def test_str_is_name():
    assert str(Node("kind-worker")) == "kind-worker"


def test_ip_parses_addresses():
    fake = FakeDocker(out="172.18.0.2,fc00::2\n")
    with mock.patch("subprocess.run", side_effect=fake):
        assert Node("n1").ip() == ("172.18.0.2", "fc00::2")
    cmd = fake.calls[0][0]
    assert cmd[:3] == ["docker", "inspect", "-f"]
    assert cmd[-1] == "n1"


def test_ip_rejects_multiple_lines():
    fake = FakeDocker(out="a,b\nc,d\n")
    with mock.patch("subprocess.run", side_effect=fake):
        with pytest.raises(RuntimeError, match="2 lines"):
            Node("n1").ip()


def test_ip_rejects_wrong_value_count():
    fake = FakeDocker(out="172.18.0.2\n")
    with mock.patch("subprocess.run", side_effect=fake):
        with pytest.raises(RuntimeError, match="got 1 values"):
            Node("n1").ip()


def test_ip_propagates_command_failure():
    fake = FakeDocker(returncode=1, out="no such container")
    with mock.patch("subprocess.run", side_effect=fake):
        with pytest.raises(CommandError):
            Node("n1").ip()


def test_command_builds_node_command():
    cmd = Node("kind-worker").command("ls", "-la", "/")
    assert cmd == NodeCommand("kind-worker", "ls", ["-la", "/"])


def test_docker_args_minimal():
    cmd = Node("kind-worker").command("ls")
    assert cmd.docker_args() == ["exec", "--privileged", "kind-worker", "ls"]


def test_docker_args_with_stdin_and_env():
    cmd = Node("kind-worker").command("cat", "-")
    cmd.env = ["A=1", "B=2"]
    cmd.stdin = "data"
    assert cmd.docker_args() == [
        "exec", "--privileged", "-i", "-e", "A=1", "-e", "B=2", "kind-worker", "cat", "-",
    ]


def test_run_invokes_docker_and_copies_output():
    fake = FakeDocker(out="listing\n")
    out = io.StringIO()
    cmd = Node("kind-worker").command("ls")
    cmd.stdout = out
    with mock.patch("subprocess.run", side_effect=fake):
        cmd.run()
    assert fake.calls[0][0] == ["docker", "exec", "--privileged", "kind-worker", "ls"]
    assert out.getvalue() == "listing\n"


def test_run_passes_stdin():
    fake = FakeDocker()
    cmd = Node("kind-worker").command("cat")
    cmd.stdin = "payload"
    expected = ["exec", "--privileged", "-i", "kind-worker", "cat"]
    assert cmd.docker_args() == expected
    with mock.patch("subprocess.run", side_effect=fake):
        cmd.run()
    args, kwargs = fake.calls[0]
    assert args == ["docker", *expected]
    assert kwargs["input"] == b"payload"


def test_run_raises_on_failure():
    fake = FakeDocker(returncode=2)
    with mock.patch("subprocess.run", side_effect=fake):
        with pytest.raises(CommandError) as info:
            Node("kind-worker").command("false").run()
    assert info.value.returncode == 2