"""Decide whether to use a kubeconfig file or the in-cluster service account."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path, PurePath

import structlog

from registry_kube_client.config import ResolverSettings, get_settings
from registry_kube_client.errors import ConfigAccessError, ConfigNotFoundError
from registry_kube_client.models import ConfigurationSource, ExplicitPath, InCluster

log = structlog.get_logger()


def current_user_home() -> str | None:
    """Return the current user's home directory, or None if it cannot be determined.

    On POSIX the password database is consulted so an empty or stale $HOME
    does not change the default kubeconfig location.
    """
    if os.name == "posix":
        import pwd

        try:
            return pwd.getpwuid(os.getuid()).pw_dir or None
        except KeyError:
            return None
    try:
        return str(Path.home())
    except RuntimeError:
        return None


class ConfigResolver:
    """Resolve the authoritative cluster configuration source.

    Lookup order matches kubectl: explicit path, then the KUBECONFIG
    environment variable, then ``~/.kube/config``. An empty candidate or a
    zero-byte file selects in-cluster mode.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        environ: Mapping[str, str] | None = None,
        home_dir: Callable[[], str | None] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._environ = os.environ if environ is None else environ
        self._home_dir = home_dir or current_user_home

    def resolve(self, explicit_path: str | os.PathLike[str] | None = None) -> ConfigurationSource:
        """Resolve the configuration source for ``explicit_path``.

        Raises:
            ConfigNotFoundError: If the candidate file does not exist.
            ConfigAccessError: If the candidate file cannot be inspected.
        """
        candidate = os.fspath(explicit_path) if explicit_path is not None else ""
        if isinstance(explicit_path, PurePath) and candidate == ".":
            # Path("") normalises to "."; an empty path never means the working directory.
            candidate = ""
        origin = "explicit"

        if not candidate:
            candidate = self._environ.get(self._settings.kubeconfig_env_var, "")
            origin = "environment"

        if not candidate:
            home = self._home_dir()
            if home:
                # The upstream guard stats the still-empty candidate before adopting
                # the default, so it always succeeds; only the effective behaviour is kept.
                candidate = os.path.join(home, self._settings.default_config_path)
                origin = "default"

        if not candidate:
            log.debug("kubeconfig_not_configured")
            return InCluster()

        log.debug("kubeconfig_candidate", path=candidate, origin=origin)
        try:
            info = os.stat(candidate)
        except FileNotFoundError as e:
            log.error("kubeconfig_not_found", path=candidate, origin=origin)
            msg = f"kubernetes configuration file {candidate!r} does not exist"
            raise ConfigNotFoundError(msg, path=candidate) from e
        except OSError as e:
            log.error("kubeconfig_access_failed", path=candidate, origin=origin, error=str(e))
            msg = f"kubernetes configuration file {candidate!r}: {e}"
            raise ConfigAccessError(msg, path=candidate) from e

        if info.st_size == 0:
            log.info("using_in_cluster_configuration", path=candidate, origin=origin)
            return InCluster()

        return ExplicitPath(candidate)


def resolve_config(kubeconfig: str | os.PathLike[str] | None = None, resolver: ConfigResolver | None = None) -> str:
    """Resolve ``kubeconfig`` to a usable path, or ``""`` for in-cluster mode."""
    source = (resolver or ConfigResolver()).resolve(kubeconfig)
    if isinstance(source, ExplicitPath):
        return source.path
    return ""
