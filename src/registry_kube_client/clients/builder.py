"""Build a Configuration and ClusterClient from a resolved configuration source."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from kubernetes import client as k8s_client
from kubernetes.config.config_exception import ConfigException
from kubernetes.config.incluster_config import InClusterConfigLoader
from kubernetes.config.kube_config import KubeConfigLoader
from pydantic import ValidationError

from registry_kube_client.clients.handle import ClusterClient
from registry_kube_client.config import ResolverSettings, get_settings
from registry_kube_client.errors import (
    ClientConstructionError,
    ClusterUnreachableError,
    ConfigInvalidError,
    ConfigParseError,
)
from registry_kube_client.models import ClusterConfiguration, InCluster, scrub_sensitive_values
from registry_kube_client.resolver import ConfigResolver

log = structlog.get_logger()

BuildResult = tuple[k8s_client.Configuration, ClusterClient]


def load_cluster_configuration(path: str | Path) -> ClusterConfiguration:
    """Parse the kubeconfig file at ``path``.

    Raises:
        ConfigParseError: If the file cannot be read, is not YAML, or is not a
            kubeconfig mapping.
    """
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        log.error("kubeconfig_parse_failed", path=str(path), error=scrub_sensitive_values(str(e)))
        msg = f"Failed to read kubernetes configuration file {str(path)!r}: {e}"
        raise ConfigParseError(msg, path=path) from e

    if not isinstance(raw, dict):
        log.error("kubeconfig_parse_failed", path=str(path), error=f"document is a {type(raw).__name__}")
        msg = f"Kubernetes configuration file {str(path)!r} must contain a mapping, got {type(raw).__name__}."
        raise ConfigParseError(msg, path=path)

    try:
        return ClusterConfiguration.model_validate(raw)
    except ValidationError as e:
        log.error("kubeconfig_parse_failed", path=str(path), error=scrub_sensitive_values(str(e)))
        msg = f"Kubernetes configuration file {str(path)!r} is malformed: {e}"
        raise ConfigParseError(msg, path=path) from e


def _check_certificate_authority(cluster: Mapping[str, Any], base_path: str) -> None:
    # Inline certificate-authority-data takes precedence over the file reference.
    ca_file = cluster.get("certificate-authority")
    if not ca_file or cluster.get("certificate-authority-data"):
        return
    if not isinstance(ca_file, str):
        msg = f"certificate-authority must be a file path, got {type(ca_file).__name__}"
        raise ConfigInvalidError(msg)
    resolved = os.path.join(base_path, ca_file)
    if not os.path.isfile(resolved):
        msg = f"certificate-authority file {resolved!r} does not exist"
        raise ConfigInvalidError(msg, path=resolved)


class ClientBuilder:
    """Turn a kubeconfig path, an in-memory kubeconfig, or in-cluster identity into a client.

    Every build creates a fresh Configuration and ApiClient; nothing is cached
    between calls and the process-wide default Configuration is never touched.
    """

    def __init__(
        self,
        resolver: ConfigResolver | None = None,
        settings: ResolverSettings | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._environ = os.environ if environ is None else environ
        self._resolver = resolver or ConfigResolver(settings=self._settings, environ=self._environ)

    def build_from_path(self, path: str | os.PathLike[str] | None = None) -> BuildResult:
        """Resolve ``path`` and build a client from the file or from in-cluster identity."""
        source = self._resolver.resolve(path)

        if isinstance(source, InCluster):
            return self._construct(self._load_in_cluster())

        config = load_cluster_configuration(source.path)
        return self.build_from_structured(config, base_path=os.path.dirname(os.path.abspath(source.path)))

    def build_from_structured(
        self,
        config: ClusterConfiguration | Mapping[str, Any],
        base_path: str = "",
    ) -> BuildResult:
        """Build a client from an in-memory kubeconfig using its current context.

        ``base_path`` anchors relative certificate and key file references.
        """
        if not isinstance(config, ClusterConfiguration):
            try:
                config = ClusterConfiguration.model_validate(config)
            except ValidationError as e:
                log.error("kubeconfig_invalid", error=scrub_sensitive_values(str(e)))
                msg = f"Invalid kubeconfig structure: {e}"
                raise ConfigInvalidError(msg) from e

        try:
            _check_certificate_authority(config.active_cluster(), base_path)
        except ConfigInvalidError as e:
            log.error("kubeconfig_invalid", error=scrub_sensitive_values(str(e)))
            raise

        rest_config = k8s_client.Configuration()
        try:
            # No context override: the configuration's own current-context is used.
            loader = KubeConfigLoader(config_dict=config.to_dict(), config_base_path=base_path)
            loader.load_and_set(rest_config)
        except (ConfigException, ValueError, TypeError, AttributeError, KeyError) as e:
            log.error("kubeconfig_invalid", error=scrub_sensitive_values(str(e)))
            msg = f"Invalid kubeconfig for context {config.current_context!r}: {e}"
            raise ConfigInvalidError(msg) from e

        return self._construct(rest_config)

    def _load_in_cluster(self) -> k8s_client.Configuration:
        rest_config = k8s_client.Configuration()
        try:
            loader = InClusterConfigLoader(
                token_filename=self._settings.token_file,
                cert_filename=self._settings.cert_file,
                environ=self._environ,
            )
            loader.load_and_set(rest_config)
        except (ConfigException, OSError) as e:
            log.error("in_cluster_configuration_failed", error=scrub_sensitive_values(str(e)))
            msg = f"Unable to load in-cluster configuration: {e}"
            raise ClusterUnreachableError(msg) from e
        log.info("using_in_cluster_identity", host=scrub_sensitive_values(rest_config.host))
        return rest_config

    def _construct(self, rest_config: k8s_client.Configuration) -> BuildResult:
        try:
            client = ClusterClient(rest_config)
        except (ValueError, TypeError, OSError) as e:
            log.error("cluster_client_construction_failed", error=scrub_sensitive_values(str(e)))
            msg = f"Unable to construct cluster client: {e}"
            raise ClientConstructionError(msg) from e
        log.info("cluster_client_built", host=scrub_sensitive_values(rest_config.host))
        return rest_config, client
