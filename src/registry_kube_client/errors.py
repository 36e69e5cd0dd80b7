"""Error hierarchy for configuration resolution and client construction."""

from __future__ import annotations

from pathlib import Path


class KubeClientError(Exception):
    """Base class for every failure raised while resolving config or building a client."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class ConfigNotFoundError(KubeClientError):
    """The explicit or derived kubeconfig path does not exist."""


class ConfigAccessError(KubeClientError):
    """The kubeconfig path could not be inspected (permissions, I/O)."""


class ConfigParseError(KubeClientError):
    """The kubeconfig file exists but is not a readable kubeconfig document."""


class ConfigInvalidError(KubeClientError):
    """The kubeconfig lacks a usable current context or a referenced entry."""


class ClusterUnreachableError(KubeClientError):
    """In-cluster identity material is missing or malformed."""


class ClientConstructionError(KubeClientError):
    """A client handle could not be built from the derived connection settings."""
