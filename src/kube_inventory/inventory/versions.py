"""Version extraction for the API server, etcd and kubelets."""

from __future__ import annotations

import logging

from kube_inventory.connection import ClusterConnection, translate_api_errors
from kube_inventory.errors import MalformedImageError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_NAMESPACE = "kube-system"
DEFAULT_ETCD_LABEL_SELECTOR = "component=etcd"
DEFAULT_ETCD_IMAGE_MARKER = "etcd"


def get_control_plane_version(connection: ClusterConnection) -> str:
    """Return the API server's self-reported git version, verbatim."""
    with translate_api_errors("get server version"):
        info = connection.version.get_code()
    return info.git_version


def parse_image_version(image: str) -> str:
    """Return the tag after the last ':' of an image reference.

    The tag is returned as-is, build suffixes included
    (``registry.k8s.io/etcd:3.5.1-0`` gives ``3.5.1-0``).
    """
    _, sep, tag = image.rpartition(":")
    if not sep:
        raise MalformedImageError(image)
    return tag


def get_etcd_version(
    connection: ClusterConnection,
    namespace: str = DEFAULT_SYSTEM_NAMESPACE,
    label_selector: str = DEFAULT_ETCD_LABEL_SELECTOR,
    image_marker: str = DEFAULT_ETCD_IMAGE_MARKER,
) -> str:
    """Infer the etcd version from the image tag of the first etcd pod.

    All etcd replicas are assumed to run the same version, so only the first
    pod in listing order is inspected. Only a container whose image contains
    ``image_marker`` is considered; no version is guessed from other containers.
    """
    with translate_api_errors("list etcd pods"):
        pods = connection.core.list_namespaced_pod(namespace=namespace, label_selector=label_selector)
    if not pods.items:
        raise NotFoundError(f"no etcd pods found in {namespace} namespace")

    pod = pods.items[0]
    for container in getattr(pod.spec, "containers", []) or []:
        image = container.image or ""
        if image_marker in image:
            logger.debug("Using image %s of container %s in pod %s", image, container.name, pod.metadata.name)
            return parse_image_version(image)
    raise NotFoundError(f"could not find etcd container in pod {pod.metadata.name}")


def list_node_versions(connection: ClusterConnection) -> list[str]:
    """Return the distinct kubelet versions reported by all nodes, sorted."""
    with translate_api_errors("list nodes"):
        nodes = connection.core.list_node()
    if not nodes.items:
        raise NotFoundError("no nodes found in the cluster")

    versions = set()
    for node in nodes.items:
        node_info = getattr(node.status, "node_info", None) if node.status else None
        version = getattr(node_info, "kubelet_version", None)
        if not version:
            logger.debug("Node %s has not reported a kubelet version", node.metadata.name)
            continue
        versions.add(version)
    if not versions:
        raise NotFoundError("no node in the cluster reports a kubelet version")
    logger.debug("Found %d distinct kubelet version(s) across %d node(s)", len(versions), len(nodes.items))
    return sorted(versions)


def get_node_versions(connection: ClusterConnection) -> str:
    """Return the distinct kubelet versions as a comma-separated string."""
    return ", ".join(list_node_versions(connection))
