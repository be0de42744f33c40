"""Helpers shared by node provider implementations."""

from __future__ import annotations

import os
import socket
from collections.abc import Callable

from kindling.config import Cluster

API_SERVER_INTERNAL_PORT = 6443
"""Port the control plane listens on inside the node network."""

HTTP_PROXY = "HTTP_PROXY"
HTTPS_PROXY = "HTTPS_PROXY"
NO_PROXY = "NO_PROXY"


def port_or_get_free_port(port: int, listen_addr: str) -> int:
    """Return port if it is positive, otherwise a free port on listen_addr."""
    if port > 0:
        return port
    return get_free_port(listen_addr)


def get_free_port(listen_addr: str) -> int:
    """Return a free TCP port on the host at listen_addr.

    Raises OSError when the address cannot be resolved or bound.
    """
    host = listen_addr or None
    flags = socket.AI_PASSIVE
    if listen_addr and ":" in listen_addr:
        flags |= socket.AI_NUMERICHOST
    infos = socket.getaddrinfo(host, 0, type=socket.SOCK_STREAM, flags=flags)
    last_error: OSError | None = None
    for family, socktype, proto, _, sockaddr in infos:
        try:
            with socket.socket(family, socktype, proto) as sock:
                sock.bind(sockaddr)
                sock.listen(1)
                return sock.getsockname()[1]
        except OSError as exc:
            last_error = exc
    raise last_error or OSError(f"no usable address for {listen_addr!r}")


def required_node_images(cfg: Cluster) -> set[str]:
    """Return the set of node images named by the config."""
    return {node.image for node in cfg.nodes}


def make_node_namer(cluster_name: str) -> Callable[[str], str]:
    """Return a function naming nodes by role, numbering repeats from 2."""
    counter: dict[str, int] = {}

    def name_node(role: str) -> str:
        count = counter.get(role, 0) + 1
        counter[role] = count
        suffix = str(count) if count > 1 else ""
        return f"{cluster_name}-{role}{suffix}"

    return name_node


def get_proxy_envs(
    cfg: Cluster, getenv: Callable[[str], str | None] | None = None
) -> dict[str, str]:
    """Return proxy variables to pass to nodes, in upper and lower case.

    When any proxy is set, the cluster service and pod subnets are
    appended to NO_PROXY.
    """
    lookup = getenv if getenv is not None else os.environ.get
    envs: dict[str, str] = {}
    for name in (HTTP_PROXY, HTTPS_PROXY, NO_PROXY):
        value = lookup(name) or lookup(name.lower()) or ""
        if value:
            envs[name] = value
            envs[name.lower()] = value
    if envs:
        no_proxy = envs.get(NO_PROXY, "")
        if no_proxy:
            no_proxy += ","
        no_proxy += f"{cfg.networking.service_subnet},{cfg.networking.pod_subnet}"
        envs[NO_PROXY] = no_proxy
        envs[NO_PROXY.lower()] = no_proxy
    return envs