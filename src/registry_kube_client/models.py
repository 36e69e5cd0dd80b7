"""Configuration sources, the kubeconfig document model, and log scrubbing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from registry_kube_client.errors import ConfigInvalidError

# --- Configuration sources ---


@dataclass(frozen=True)
class ExplicitPath:
    """A kubeconfig file that exists and is non-empty."""

    path: str

    def __post_init__(self) -> None:
        if not self.path:
            msg = "ExplicitPath requires a non-empty path; use InCluster for in-cluster mode."
            raise ValueError(msg)


@dataclass(frozen=True)
class InCluster:
    """Use the service-account identity mounted into the running pod."""


ConfigurationSource = ExplicitPath | InCluster


# --- Kubeconfig document ---


class NamedCluster(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    cluster: dict[str, Any] | None = None


class NamedUser(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    user: dict[str, Any] | None = None


class NamedContext(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    context: dict[str, Any] | None = None


class ClusterConfiguration(BaseModel):
    """In-memory kubeconfig: clusters, users, contexts and the current context.

    Entry bodies are kept as plain mappings; interpreting them (auth plugins,
    certificate data, exec credentials) is left to the kubernetes client loader.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    clusters: list[NamedCluster] = Field(default_factory=list)
    users: list[NamedUser] = Field(default_factory=list)
    contexts: list[NamedContext] = Field(default_factory=list)
    current_context: str | None = Field(default=None, alias="current-context")
    preferences: dict[str, Any] | None = None

    @field_validator("clusters", "users", "contexts", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        # kubectl writes `users: null` for configs that have never held credentials
        return [] if value is None else value

    def to_dict(self) -> dict[str, Any]:
        """Return the kubeconfig mapping in its on-disk key layout."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def active_cluster(self) -> dict[str, Any]:
        """Return the cluster entry selected by the current context.

        Raises:
            ConfigInvalidError: If the current context, its context entry, the
                referenced cluster entry, or the cluster's server is missing.
        """
        if not self.current_context:
            msg = "kubeconfig has no current-context set"
            raise ConfigInvalidError(msg)

        context = next((c for c in self.contexts if c.name == self.current_context), None)
        if context is None:
            msg = f"current-context {self.current_context!r} has no matching context entry"
            raise ConfigInvalidError(msg)

        cluster_name = (context.context or {}).get("cluster")
        if not cluster_name:
            msg = f"context {context.name!r} does not reference a cluster"
            raise ConfigInvalidError(msg)

        cluster = next((c for c in self.clusters if c.name == cluster_name), None)
        if cluster is None:
            msg = f"context {context.name!r} references unknown cluster {cluster_name!r}"
            raise ConfigInvalidError(msg)

        body = cluster.cluster or {}
        server = body.get("server")
        if not server:
            msg = f"cluster {cluster_name!r} has no server address"
            raise ConfigInvalidError(msg)
        if not isinstance(server, str):
            msg = f"cluster {cluster_name!r} server must be a string, got {type(server).__name__}"
            raise ConfigInvalidError(msg)
        return body


# --- Log scrubbing ---

_IP_PATTERN = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")
_BEARER_PATTERN = re.compile(r"\bbearer\s+[\w.~+/=-]+", re.IGNORECASE)
_SECRET_FIELD_PATTERN = re.compile(
    r"\b((?:client-key|client-certificate|certificate-authority)-data|token|password)"
    r"(['\"]?\s*[:=]\s*['\"]?)[^\s'\",}]+",
    re.IGNORECASE,
)


def scrub_sensitive_values(text: str) -> str:
    """Remove bearer tokens, embedded credential data, and internal IPs from text."""
    if not text:
        return text
    result = _BEARER_PATTERN.sub("Bearer [REDACTED]", text)
    result = _SECRET_FIELD_PATTERN.sub(r"\1\2[REDACTED]", result)
    result = _IP_PATTERN.sub("[REDACTED_IP]", result)
    return result
