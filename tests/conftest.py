"""Shared pytest fixtures for kube-inventory tests."""

import pytest
from kubernetes.client.rest import ApiException

from factories import make_connection


@pytest.fixture
def empty_connection():
    """A reachable cluster with no pods, nodes, services or ingresses."""
    return make_connection()


@pytest.fixture
def forbidden():
    """An API error as raised by the client on a 403."""
    return ApiException(status=403, reason="Forbidden")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep host kubeconfig, in-cluster detection and settings out of tests."""
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
    monkeypatch.delenv("KUBERNETES_SERVICE_PORT", raising=False)
    for var in (
        "KUBE_INVENTORY_KUBECONFIG",
        "KUBE_INVENTORY_CONTEXT",
        "KUBE_INVENTORY_SYSTEM_NAMESPACE",
        "KUBE_INVENTORY_ETCD_LABEL_SELECTOR",
        "KUBE_INVENTORY_ETCD_IMAGE_MARKER",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
