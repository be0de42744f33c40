"""Cluster configuration, docker helpers, YAML patching and terminal logging for container-based Kubernetes clusters."""

__version__ = "0.1.0"