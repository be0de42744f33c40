"""Cluster configuration types consumed by the node providers."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum


class NodeRole(str, Enum):
    """The role a node plays in the cluster."""

    CONTROL_PLANE = "control-plane"
    WORKER = "worker"

    def __str__(self) -> str:
        return self.value


class MountPropagation(str, Enum):
    """How mounts propagate between host and container."""

    NONE = "None"
    HOST_TO_CONTAINER = "HostToContainer"
    BIDIRECTIONAL = "Bidirectional"

    def __str__(self) -> str:
        return self.value


class PortMappingProtocol(str, Enum):
    """Transport protocol of a port mapping."""

    TCP = "TCP"
    UDP = "UDP"
    SCTP = "SCTP"

    def __str__(self) -> str:
        return self.value


@dataclass
class Mount:
    """A host path mounted into a node container."""

    container_path: str = ""
    host_path: str = ""
    readonly: bool = False
    selinux_relabel: bool = False
    propagation: MountPropagation = MountPropagation.NONE


@dataclass
class PortMapping:
    """A container port published on the host."""

    container_port: int = 0
    host_port: int = 0
    listen_address: str = ""
    protocol: PortMappingProtocol = PortMappingProtocol.TCP


@dataclass
class Node:
    """A single node of the cluster."""

    role: NodeRole = NodeRole.CONTROL_PLANE
    image: str = ""
    extra_mounts: list[Mount] = field(default_factory=list)
    extra_port_mappings: list[PortMapping] = field(default_factory=list)

    def deep_copy(self) -> Node:
        """Return an independent copy of this node."""
        return copy.deepcopy(self)


@dataclass
class Networking:
    """Cluster-wide network settings."""

    ip_family: str = ""
    api_server_port: int = 0
    api_server_address: str = ""
    pod_subnet: str = ""
    service_subnet: str = ""


@dataclass
class Cluster:
    """The full cluster configuration."""

    nodes: list[Node] = field(default_factory=list)
    networking: Networking = field(default_factory=Networking)


@dataclass
class PatchJSON6902:
    """An RFC 6902 JSON patch targeted at resources of one kind."""

    group: str = ""
    version: str = ""
    kind: str = ""
    patch: str = ""