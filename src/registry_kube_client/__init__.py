"""Resolve cluster configuration and build authenticated Kubernetes clients."""

from registry_kube_client.clients import (
    ClientBuilder,
    ClusterClient,
    build_from_path,
    build_from_structured,
)
from registry_kube_client.config import ResolverSettings, get_settings
from registry_kube_client.errors import (
    ClientConstructionError,
    ClusterUnreachableError,
    ConfigAccessError,
    ConfigInvalidError,
    ConfigNotFoundError,
    ConfigParseError,
    KubeClientError,
)
from registry_kube_client.models import ClusterConfiguration, ConfigurationSource, ExplicitPath, InCluster
from registry_kube_client.resolver import ConfigResolver, resolve_config

__all__ = [
    "ClientBuilder",
    "ClientConstructionError",
    "ClusterClient",
    "ClusterConfiguration",
    "ClusterUnreachableError",
    "ConfigAccessError",
    "ConfigInvalidError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigResolver",
    "ConfigurationSource",
    "ExplicitPath",
    "InCluster",
    "KubeClientError",
    "ResolverSettings",
    "build_from_path",
    "build_from_structured",
    "get_settings",
    "resolve_config",
]
