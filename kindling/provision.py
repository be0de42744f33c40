"""Docker run arguments for provisioning cluster node containers."""

from __future__ import annotations

from collections.abc import Iterable

from kindling import dockercli
from kindling.common import NO_PROXY, get_proxy_envs
from kindling.config import (
    Cluster,
    Mount,
    MountPropagation,
    NodeRole,
    PortMapping,
    PortMappingProtocol,
)


def cluster_is_ipv6(cfg: Cluster) -> bool:
    """Return True if the cluster uses the IPv6 family."""
    return cfg.networking.ip_family == "ipv6"


def cluster_has_implicit_load_balancer(cfg: Cluster) -> bool:
    """Return True if the cluster has more than one control plane node."""
    control_planes = sum(1 for node in cfg.nodes if str(node.role) == NodeRole.CONTROL_PLANE.value)
    return control_planes > 1


def get_subnets(network_name: str) -> list[str]:
    """Return the subnets of a docker network."""
    template = '{{range (index (index . "IPAM") "Config")}}{{index . "Subnet"}} {{end}}'
    lines = dockercli.combined_output_lines(
        ["docker", "network", "inspect", "-f", template, network_name]
    )
    if not lines:
        raise RuntimeError(f"failed to get subnets: no output for network {network_name!r}")
    return lines[0].strip().split(" ")


def get_proxy_env(cfg: Cluster) -> dict[str, str]:
    """Return the proxy variables for nodes, with docker bridge subnets in NO_PROXY."""
    envs = get_proxy_envs(cfg)
    if envs:
        subnets = get_subnets("bridge")
        no_proxy = ",".join([*subnets, envs[NO_PROXY]])
        envs[NO_PROXY] = no_proxy
        envs[NO_PROXY.lower()] = no_proxy
    return envs


_PROPAGATION_ATTRS = {
    MountPropagation.BIDIRECTIONAL: "rshared",
    MountPropagation.HOST_TO_CONTAINER: "rslave",
}


def generate_mount_bindings(mounts: Iterable[Mount]) -> list[str]:
    """Convert mounts to docker "--volume=host:container[:options]" arguments."""
    args = []
    for mount in mounts:
        bind = f"{mount.host_path}:{mount.container_path}"
        attrs = []
        if mount.readonly:
            attrs.append("ro")
        if mount.selinux_relabel:
            attrs.append("Z")
        propagation = _PROPAGATION_ATTRS.get(mount.propagation)
        if propagation is not None:
            attrs.append(propagation)
        if attrs:
            bind = f"{bind}:{','.join(attrs)}"
        args.append(f"--volume={bind}")
    return args


def _join_host_port(host: str, port: object) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


_PROTOCOLS = {
    PortMappingProtocol.UDP: "UDP",
    PortMappingProtocol.SCTP: "SCTP",
}


def generate_port_mappings(port_mappings: Iterable[PortMapping]) -> list[str]:
    """Convert port mappings to docker "--publish=" arguments."""
    args = []
    for mapping in port_mappings:
        if mapping.listen_address:
            binding = _join_host_port(mapping.listen_address, mapping.host_port)
        else:
            binding = str(mapping.host_port)
        protocol = _PROTOCOLS.get(mapping.protocol, "TCP")
        args.append(f"--publish={binding}:{mapping.container_port}/{protocol}")
    return args