"""Tests for ClusterClient: host validation, lazy API groups, and version lookups."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from kubernetes import client as k8s_client

from registry_kube_client.clients.handle import ClusterClient


def _configuration(host: str = "https://api.registry.test:6443") -> k8s_client.Configuration:
    configuration = k8s_client.Configuration()
    configuration.host = host
    return configuration


class TestClusterClientInit:
    def test_binds_api_client_to_configuration(self) -> None:
        configuration = _configuration()
        client = ClusterClient(configuration)
        assert client.api_client.configuration is configuration
        assert client.host == "https://api.registry.test:6443"
        client.close()

    def test_lazy_api_creation(self) -> None:
        client = ClusterClient(_configuration())
        assert client._core_v1 is None
        assert client._version_api is None
        client.close()

    @pytest.mark.parametrize("host", ["", "api.registry.test", "ftp://api.registry.test", "https://"])
    def test_rejects_invalid_host(self, host: str) -> None:
        with pytest.raises(ValueError, match="Invalid API server address"):
            ClusterClient(_configuration(host))

    def test_plain_http_allowed(self) -> None:
        client = ClusterClient(_configuration("http://127.0.0.1:8080"))
        assert client.host == "http://127.0.0.1:8080"
        client.close()


class TestLazyApis:
    def test_core_v1_created_once(self) -> None:
        client = ClusterClient(_configuration())
        api1 = client.core_v1()
        api2 = client.core_v1()
        assert api1 is api2
        assert api1.api_client is client.api_client
        client.close()

    def test_version_api_created_once(self) -> None:
        client = ClusterClient(_configuration())
        with patch("registry_kube_client.clients.handle.k8s_client.VersionApi") as mock_version:
            mock_version.return_value = MagicMock()
            api1 = client.version_api()
            api2 = client.version_api()
        assert api1 is api2
        mock_version.assert_called_once_with(client.api_client)
        client.close()


class TestGetServerVersion:
    async def test_returns_version_fields(self) -> None:
        client = ClusterClient(_configuration())
        mock_api = MagicMock()
        mock_api.get_code.return_value = MagicMock(git_version="v1.29.8", major="1", minor="29", platform="linux/amd64")
        client._version_api = mock_api
        result = await client.get_server_version()
        assert result == {"git_version": "v1.29.8", "major": "1", "minor": "29", "platform": "linux/amd64"}
        client.close()

    async def test_errors_propagate(self) -> None:
        client = ClusterClient(_configuration())
        mock_api = MagicMock()
        mock_api.get_code.side_effect = k8s_client.ApiException(status=503, reason="Service Unavailable")
        client._version_api = mock_api
        with patch("registry_kube_client.clients.handle.log") as mock_log:
            with pytest.raises(k8s_client.ApiException):
                await client.get_server_version()
        mock_log.error.assert_called_once()
        client.close()


class TestClose:
    def test_context_manager_closes(self) -> None:
        with patch.object(ClusterClient, "close") as mock_close:
            with ClusterClient(_configuration()) as client:
                assert isinstance(client, ClusterClient)
        mock_close.assert_called_once()

    def test_close_closes_api_client(self) -> None:
        client = ClusterClient(_configuration())
        with patch.object(client.api_client, "close") as mock_close:
            client.close()
        mock_close.assert_called_once()
