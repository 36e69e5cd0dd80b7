"""Resolver settings and environment variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from kubernetes.config.incluster_config import SERVICE_CERT_FILENAME, SERVICE_TOKEN_FILENAME

KUBECONFIG_ENV_VAR = "KUBECONFIG"


@dataclass(frozen=True)
class ResolverSettings:
    """Where to look for cluster configuration, with environment variable overrides."""

    kubeconfig_env_var: str = KUBECONFIG_ENV_VAR
    default_config_path: str = field(
        default_factory=lambda: os.environ.get("REGISTRY_KUBE_DEFAULT_CONFIG", os.path.join(".kube", "config"))
    )
    token_file: str = field(default_factory=lambda: os.environ.get("REGISTRY_KUBE_TOKEN_FILE", SERVICE_TOKEN_FILENAME))
    cert_file: str = field(default_factory=lambda: os.environ.get("REGISTRY_KUBE_CA_FILE", SERVICE_CERT_FILENAME))


def get_settings() -> ResolverSettings:
    """Return resolver settings with environment variable overrides applied."""
    return ResolverSettings()
