"""Aggregate externally reachable services and ingress routes."""

from __future__ import annotations

import logging
from typing import Any

from kube_inventory.connection import ClusterConnection, translate_api_errors
from kube_inventory.inventory.models import ExposureKind, ExposureRecord

logger = logging.getLogger(__name__)

SERVICE_TYPE_LOAD_BALANCER = "LoadBalancer"
SERVICE_TYPE_NODE_PORT = "NodePort"
WILDCARD_HOST = "*"


def _external_addresses(status: Any) -> list[str]:
    """Collect load balancer addresses, IP preferred over hostname per entry."""
    lb = getattr(status, "load_balancer", None) if status else None
    addresses: list[str] = []
    for ingress in getattr(lb, "ingress", None) or []:
        if ingress.ip:
            addresses.append(ingress.ip)
        elif ingress.hostname:
            # ELB-style balancers only publish a DNS name
            addresses.append(ingress.hostname)
    return addresses


def _build_load_balancer_record(svc: Any) -> ExposureRecord | None:
    """Build a record for a LoadBalancer service, or None while no address is assigned."""
    addresses = _external_addresses(svc.status)
    if not addresses:
        logger.debug("Skipping LoadBalancer %s/%s: no external address yet", svc.metadata.namespace, svc.metadata.name)
        return None
    return ExposureRecord(
        kind=ExposureKind.LOAD_BALANCER,
        namespace=svc.metadata.namespace,
        name=svc.metadata.name,
        external_addresses=addresses,
        ports=[f"{p.port}/{p.protocol}" for p in svc.spec.ports or []],
    )


def _build_node_port_record(svc: Any) -> ExposureRecord:
    """Build a record for a NodePort service."""
    return ExposureRecord(
        kind=ExposureKind.NODE_PORT,
        namespace=svc.metadata.namespace,
        name=svc.metadata.name,
        ports=[f"{p.port}:{p.node_port}/{p.protocol}" for p in svc.spec.ports or []],
    )


def _format_backend(backend: Any) -> str:
    """Render an ingress backend as service:port."""
    service = getattr(backend, "service", None)
    if service is None:
        resource = getattr(backend, "resource", None)
        return f"{resource.kind}/{resource.name}" if resource else ""
    port = service.port
    port_ref = (port.number if port.number is not None else port.name) if port else ""
    return f"{service.name}:{port_ref}"


def _build_ingress_records(ing: Any) -> list[ExposureRecord]:
    """Build one record per rule path of an ingress."""
    addresses = _external_addresses(ing.status)
    records: list[ExposureRecord] = []
    for rule in getattr(ing.spec, "rules", None) or []:
        if rule.http is None:
            continue
        host = rule.host or WILDCARD_HOST
        for path in rule.http.paths or []:
            records.append(
                ExposureRecord(
                    kind=ExposureKind.INGRESS,
                    namespace=ing.metadata.namespace,
                    name=ing.metadata.name,
                    external_addresses=addresses,
                    host=host,
                    path=path.path or "",
                    backend=_format_backend(path.backend),
                )
            )
    return records


def list_exposed_endpoints(connection: ClusterConnection) -> list[ExposureRecord]:
    """Return LoadBalancer and NodePort services, then ingress paths, in API order."""
    with translate_api_errors("list services"):
        services = connection.core.list_service_for_all_namespaces()
    with translate_api_errors("list ingresses"):
        ingresses = connection.networking.list_ingress_for_all_namespaces()

    records: list[ExposureRecord] = []
    for svc in services.items:
        svc_type = svc.spec.type
        if svc_type == SERVICE_TYPE_LOAD_BALANCER:
            record = _build_load_balancer_record(svc)
            if record is not None:
                records.append(record)
        elif svc_type == SERVICE_TYPE_NODE_PORT:
            records.append(_build_node_port_record(svc))

    for ing in ingresses.items:
        records.extend(_build_ingress_records(ing))
    logger.debug(
        "Found %d exposed endpoint(s) from %d service(s) and %d ingress(es)",
        len(records),
        len(services.items),
        len(ingresses.items),
    )
    return records


def get_exposed_endpoints(connection: ClusterConnection) -> list[str]:
    """Return the rendered exposure lines."""
    return [record.render() for record in list_exposed_endpoints(connection)]
