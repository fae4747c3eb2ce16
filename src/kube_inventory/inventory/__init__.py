"""Inventory layer: query cluster versions and exposed endpoints."""

from kube_inventory.inventory.endpoints import get_exposed_endpoints, list_exposed_endpoints
from kube_inventory.inventory.models import ExposureKind, ExposureRecord
from kube_inventory.inventory.versions import (
    get_control_plane_version,
    get_etcd_version,
    get_node_versions,
    list_node_versions,
    parse_image_version,
)

__all__ = [
    "ExposureKind",
    "ExposureRecord",
    "get_control_plane_version",
    "get_etcd_version",
    "get_exposed_endpoints",
    "get_node_versions",
    "list_exposed_endpoints",
    "list_node_versions",
    "parse_image_version",
]
