"""Cluster connection: kubeconfig resolution and API client construction."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from kube_inventory.errors import AuthError, QueryError

logger = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"
DEFAULT_KUBECONFIG = Path("~/.kube/config")


@dataclass(frozen=True)
class ClusterConnection:
    """Read-only handle on the API groups the inventory queries."""

    core: client.CoreV1Api
    networking: client.NetworkingV1Api
    version: client.VersionApi


def resolve_kubeconfig_path(kubeconfig: str | os.PathLike[str] | None = None) -> str:
    """Pick the kubeconfig: explicit path, then $KUBECONFIG, then ~/.kube/config."""
    if kubeconfig:
        return str(kubeconfig)
    from_env = os.environ.get(KUBECONFIG_ENV)
    if from_env:
        return from_env
    return str(DEFAULT_KUBECONFIG.expanduser())


def _load_kube_config(kubeconfig: str | os.PathLike[str] | None, context: str | None) -> client.Configuration:
    """Load in-cluster or kubeconfig-based configuration."""
    try:
        config.load_incluster_config()
        logger.debug("Using in-cluster service account configuration")
        return client.Configuration.get_default_copy()
    except config.ConfigException:
        pass
    path = resolve_kubeconfig_path(kubeconfig)
    kwargs: dict[str, Any] = {"config_file": path}
    if context:
        kwargs["context"] = context
    logger.debug("Loading kubeconfig from %s (context=%s)", path, context or "current")
    config.load_kube_config(**kwargs)
    return client.Configuration.get_default_copy()


def obtain_connection(
    kubeconfig: str | os.PathLike[str] | None = None,
    context: str | None = None,
) -> ClusterConnection:
    """Build a ClusterConnection, raising AuthError when no usable config is found."""
    try:
        cfg = _load_kube_config(kubeconfig, context)
    except (config.ConfigException, OSError, yaml.YAMLError) as e:
        raise AuthError(f"failed to load Kubernetes configuration: {e}") from e
    api = client.ApiClient(cfg)
    return ClusterConnection(
        core=client.CoreV1Api(api),
        networking=client.NetworkingV1Api(api),
        version=client.VersionApi(api),
    )


@contextmanager
def translate_api_errors(action: str) -> Iterator[None]:
    """Re-raise API and transport failures inside the block as QueryError."""
    try:
        yield
    except ApiException as e:
        logger.warning("Failed to %s: %s", action, e.reason)
        raise QueryError(f"failed to {action}: {e.reason}") from e
    except HTTPError as e:
        logger.warning("Failed to %s: %s", action, e)
        raise QueryError(f"failed to {action}: {e}") from e
