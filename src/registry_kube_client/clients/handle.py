"""Client handle bound to a single cluster's connection settings."""

from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Any
from urllib.parse import urlparse

import structlog
from kubernetes import client as k8s_client

from registry_kube_client.models import scrub_sensitive_values

log = structlog.get_logger()

_SUPPORTED_SCHEMES = {"http", "https"}


def _validate_host(host: str | None) -> None:
    parsed = urlparse(host or "")
    if parsed.scheme not in _SUPPORTED_SCHEMES or not parsed.netloc:
        msg = f"Invalid API server address: {host!r}. Must be an http or https URL."
        raise ValueError(msg)


class ClusterClient:
    """Authenticated interface for issuing cluster API calls.

    Owns one ApiClient built from the given Configuration. Typed API groups
    are created on first use and cached for the life of the handle.
    """

    def __init__(self, configuration: k8s_client.Configuration) -> None:
        _validate_host(configuration.host)
        self._configuration = configuration
        self.api_client = k8s_client.ApiClient(configuration=configuration)
        self._core_v1: k8s_client.CoreV1Api | None = None
        self._version_api: k8s_client.VersionApi | None = None

    @property
    def configuration(self) -> k8s_client.Configuration:
        return self._configuration

    @property
    def host(self) -> str:
        return self._configuration.host

    def core_v1(self) -> k8s_client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = k8s_client.CoreV1Api(self.api_client)
        return self._core_v1

    def version_api(self) -> k8s_client.VersionApi:
        if self._version_api is None:
            self._version_api = k8s_client.VersionApi(self.api_client)
        return self._version_api

    async def get_server_version(self) -> dict[str, Any]:
        """Fetch the API server version.

        Returns a dict with keys: git_version, major, minor, platform.
        """
        api = self.version_api()
        try:
            info = await asyncio.to_thread(api.get_code)
        except Exception:
            log.error("failed_to_get_server_version", host=scrub_sensitive_values(self.host))
            raise
        return {
            "git_version": info.git_version,
            "major": info.major,
            "minor": info.minor,
            "platform": info.platform,
        }

    def close(self) -> None:
        self.api_client.close()

    def __enter__(self) -> ClusterClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
