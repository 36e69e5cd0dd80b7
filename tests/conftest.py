"""Shared test fixtures for all test modules."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from registry_kube_client.config import ResolverSettings


def build_kubeconfig(
    server: str = "https://127.0.0.1:6443",
    context: str = "registry",
    cluster: str = "registry-cluster",
    user: str = "registry-user",
    token: str = "abc123",
    current_context: str | None = "registry",
) -> dict[str, Any]:
    """Create a minimal token-authenticated kubeconfig mapping."""
    config: dict[str, Any] = {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [
            {"name": cluster, "cluster": {"server": server, "insecure-skip-tls-verify": True}},
        ],
        "users": [
            {"name": user, "user": {"token": token}},
        ],
        "contexts": [
            {"name": context, "context": {"cluster": cluster, "user": user}},
        ],
    }
    if current_context is not None:
        config["current-context"] = current_context
    return config


@pytest.fixture
def settings(tmp_path: Path) -> ResolverSettings:
    """Settings whose in-cluster files live under tmp_path."""
    return ResolverSettings(
        default_config_path=".kube/config",
        token_file=str(tmp_path / "sa" / "token"),
        cert_file=str(tmp_path / "sa" / "ca.crt"),
    )


@pytest.fixture
def write_kubeconfig(tmp_path: Path) -> Callable[..., Path]:
    """Factory that writes a kubeconfig (mapping or raw text) and returns its path."""

    def _write(content: dict[str, Any] | str | None = None, name: str = "config") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if content is None:
            content = build_kubeconfig()
        if isinstance(content, dict):
            content = yaml.safe_dump(content)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def in_cluster_environ(settings: ResolverSettings) -> dict[str, str]:
    """Write service-account token and CA files and return the matching environment."""
    token = Path(settings.token_file)
    token.parent.mkdir(parents=True, exist_ok=True)
    token.write_text("sa-token")
    Path(settings.cert_file).write_text("-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n")
    return {"KUBERNETES_SERVICE_HOST": "10.96.0.1", "KUBERNETES_SERVICE_PORT": "443"}


@pytest.fixture
def make_kubeconfig() -> Callable[..., dict[str, Any]]:
    """Factory for kubeconfig mappings; see build_kubeconfig for the defaults."""
    return build_kubeconfig
