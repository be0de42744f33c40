"""Running docker commands and collecting their output."""

from __future__ import annotations

import io
import subprocess
from collections.abc import Sequence
from typing import IO, Any


class CommandError(RuntimeError):
    """Raised when a command cannot be started or exits unsuccessfully."""

    def __init__(self, command: Sequence[str], returncode: int | None, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        joined = " ".join(self.command)
        if returncode is None:
            message = f"command {joined!r} could not be started"
        else:
            message = f"command {joined!r} failed with exit code {returncode}"
        if output:
            message = f"{message}: {output.strip()}"
        super().__init__(message)


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", "replace")


def _stdin_kwargs(stdin: Any) -> dict[str, Any]:
    if stdin is None:
        return {}
    if isinstance(stdin, bytes):
        return {"input": stdin}
    if isinstance(stdin, str):
        return {"input": stdin.encode("utf-8")}
    try:
        stdin.fileno()
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        data = stdin.read()
        return {"input": data.encode("utf-8") if isinstance(data, str) else data}
    return {"stdin": stdin}


def _invoke(args: Sequence[str], *, combine: bool = False, stdin: Any = None) -> subprocess.CompletedProcess:
    command = [str(arg) for arg in args]
    try:
        return subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if combine else subprocess.PIPE,
            check=False,
            **_stdin_kwargs(stdin),
        )
    except OSError as exc:
        raise CommandError(command, None, str(exc)) from exc


def _check(args: Sequence[str], completed: subprocess.CompletedProcess) -> None:
    if completed.returncode != 0:
        output = _decode(completed.stdout) + _decode(completed.stderr)
        raise CommandError([str(arg) for arg in args], completed.returncode, output)


def _copy(sink: IO[Any] | None, data: bytes | None) -> None:
    if sink is None or not data:
        return
    if isinstance(sink, io.TextIOBase):
        sink.write(_decode(data))
    else:
        sink.write(data)


def _run_attached(
    args: Sequence[str],
    *,
    stdin: Any = None,
    stdout: IO[Any] | None = None,
    stderr: IO[Any] | None = None,
) -> None:
    """Run a command, feeding it stdin and copying its output to the given writers.

    stdin may be bytes, text or a readable file object. Raises CommandError
    when the command cannot be started or exits with a non-zero status.
    """
    completed = _invoke(args, stdin=stdin)
    _copy(stdout, completed.stdout)
    _copy(stderr, completed.stderr)
    _check(args, completed)


def run(args: Sequence[str]) -> None:
    """Run a command to completion, discarding its output.

    Raises CommandError when the command cannot be started or exits with a
    non-zero status.
    """
    _check(args, _invoke(args))


def output_lines(args: Sequence[str]) -> list[str]:
    """Run a command and return the lines it wrote to standard output."""
    completed = _invoke(args)
    _check(args, completed)
    return _decode(completed.stdout).splitlines()


def combined_output_lines(args: Sequence[str]) -> list[str]:
    """Run a command and return the lines of its standard output and error."""
    completed = _invoke(args, combine=True)
    _check(args, completed)
    return _decode(completed.stdout).splitlines()


def uses_userns_remap() -> bool:
    """Return True if the docker daemon has user namespace remapping enabled."""
    try:
        lines = combined_output_lines(
            ["docker", "info", "--format", "'{{json .SecurityOptions}}'"]
        )
    except CommandError:
        return False
    return bool(lines) and "name=userns" in lines[0]