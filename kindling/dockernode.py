"""Node handles for nodes running as docker containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any

from kindling import dockercli


class Node:
    """A cluster node backed by a docker container of the same name."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Node({self.name!r})"

    def ip(self) -> tuple[str, str]:
        """Return the node's IPv4 and IPv6 addresses.

        Raises CommandError if docker fails and RuntimeError when its
        output has an unexpected shape.
        """
        lines = dockercli.combined_output_lines(
            [
                "docker",
                "inspect",
                "-f",
                "{{range .NetworkSettings.Networks}}{{.IPAddress}},{{.GlobalIPv6Address}}{{end}}",
                self.name,
            ]
        )
        if len(lines) != 1:
            raise RuntimeError(f"file should only be one line, got {len(lines)} lines")
        ips = lines[0].split(",")
        if len(ips) != 2:
            raise RuntimeError(f"container addresses should have 2 values, got {len(ips)} values")
        return ips[0], ips[1]

    def command(self, command: str, *args: str) -> NodeCommand:
        """Return a command that runs inside the node container."""
        return NodeCommand(self.name, command, list(args))


@dataclass
class NodeCommand:
    """A command to run inside a node container with docker exec."""

    name_or_id: str
    command: str
    args: list[str] = field(default_factory=list)
    env: list[str] = field(default_factory=list)
    stdin: Any = None
    stdout: IO[Any] | None = None
    stderr: IO[Any] | None = None

    def docker_args(self) -> list[str]:
        """Return the arguments passed to docker to run this command."""
        args = ["exec", "--privileged"]
        if self.stdin is not None:
            args.append("-i")
        for variable in self.env:
            args += ["-e", variable]
        return [*args, self.name_or_id, self.command, *self.args]

    def run(self) -> None:
        """Run the command; raises CommandError if it fails."""
        dockercli.run(
            ["docker", *self.docker_args()],
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
        )