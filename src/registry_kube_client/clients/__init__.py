"""Client construction for cluster API access."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from registry_kube_client.clients.builder import BuildResult, ClientBuilder, load_cluster_configuration
from registry_kube_client.clients.handle import ClusterClient
from registry_kube_client.models import ClusterConfiguration

__all__ = [
    "BuildResult",
    "ClientBuilder",
    "ClusterClient",
    "build_from_path",
    "build_from_structured",
    "load_cluster_configuration",
]


def build_from_path(path: str | os.PathLike[str] | None = None) -> BuildResult:
    """Resolve ``path`` and return a fresh (Configuration, ClusterClient) pair."""
    return ClientBuilder().build_from_path(path)


def build_from_structured(config: ClusterConfiguration | Mapping[str, Any]) -> BuildResult:
    """Return a fresh (Configuration, ClusterClient) pair for an in-memory kubeconfig."""
    return ClientBuilder().build_from_structured(config)
