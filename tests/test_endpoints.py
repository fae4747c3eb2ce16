"""
Unit tests for the endpoint aggregator.

Tests cover:
- LoadBalancer address selection and pending-address omission
- NodePort port formatting
- Ingress host wildcard, per-path records and status addresses
- Ordering and failure of either listing
"""

import pytest

from factories import make_connection, make_ingress, make_service
from kube_inventory.errors import QueryError
from kube_inventory.inventory import ExposureKind, get_exposed_endpoints, list_exposed_endpoints


# =============================================================================
# Services
# =============================================================================


def test_load_balancer_with_ip_is_reported():
    svc = make_service("web", "LoadBalancer", ports=[(80, "TCP", 31080)], lb_ingress=[("1.2.3.4", None)])
    conn = make_connection(services=[svc])

    assert get_exposed_endpoints(conn) == [
        "Service (LoadBalancer): default/web - External Endpoint(s): [1.2.3.4], Port(s): [80/TCP]"
    ]


def test_load_balancer_prefers_ip_and_falls_back_to_hostname():
    svc = make_service(
        "web",
        "LoadBalancer",
        ports=[(80, "TCP", None), (443, "TCP", None)],
        lb_ingress=[("10.0.0.1", "ignored.example.com"), (None, "abc.elb.amazonaws.com")],
    )
    [record] = list_exposed_endpoints(make_connection(services=[svc]))

    assert record.kind == ExposureKind.LOAD_BALANCER
    assert record.external_addresses == ["10.0.0.1", "abc.elb.amazonaws.com"]
    assert record.ports == ["80/TCP", "443/TCP"]


def test_pending_load_balancer_is_omitted_until_address_assigned():
    pending = make_service("web", "LoadBalancer", ports=[(80, "TCP", 31080)])
    assert list_exposed_endpoints(make_connection(services=[pending])) == []

    assigned = make_service("web", "LoadBalancer", ports=[(80, "TCP", 31080)], lb_ingress=[("1.2.3.4", None)])
    records = list_exposed_endpoints(make_connection(services=[assigned]))
    assert len(records) == 1
    assert records[0].name == "web"


def test_node_port_always_reported_with_joined_ports():
    svc = make_service(
        "api",
        "NodePort",
        namespace="prod",
        ports=[(80, "TCP", 30080), (53, "UDP", 30053)],
    )
    assert get_exposed_endpoints(make_connection(services=[svc])) == [
        "Service (NodePort): prod/api - NodePort(s): [80:30080/TCP, 53:30053/UDP] (exposed on all node IPs)"
    ]


def test_other_service_types_are_skipped():
    services = [
        make_service("internal", "ClusterIP", ports=[(80, "TCP", None)]),
        make_service("alias", "ExternalName"),
    ]
    assert list_exposed_endpoints(make_connection(services=services)) == []


# =============================================================================
# Ingresses
# =============================================================================


def test_ingress_empty_host_is_wildcard_and_paths_are_separate_records():
    ing = make_ingress(
        "routes",
        rules=[
            ("", [("/", "frontend", 80)]),
            ("api.example.com", [("/v1", "api-v1", 8080), ("/v2", "api-v2", 8080)]),
        ],
    )
    assert get_exposed_endpoints(make_connection(ingresses=[ing])) == [
        "Ingress: default/routes - Host: *, Path: / -> frontend:80",
        "Ingress: default/routes - Host: api.example.com, Path: /v1 -> api-v1:8080",
        "Ingress: default/routes - Host: api.example.com, Path: /v2 -> api-v2:8080",
    ]


def test_ingress_status_addresses_are_appended():
    ing = make_ingress(
        "routes",
        rules=[("shop.example.com", [("/", "shop", 443)])],
        lb_ingress=[("5.6.7.8", None), (None, "lb.example.net")],
    )
    assert get_exposed_endpoints(make_connection(ingresses=[ing])) == [
        "Ingress: default/routes - Host: shop.example.com, Path: / -> shop:443, "
        "External Endpoint(s): [5.6.7.8, lb.example.net]"
    ]


def test_ingress_named_backend_port():
    ing = make_ingress("routes", rules=[("a.example.com", [("/", "web", "http")])])
    [record] = list_exposed_endpoints(make_connection(ingresses=[ing]))
    assert record.backend == "web:http"


def test_ingress_rule_without_http_block_is_skipped():
    ing = make_ingress("routes", rules=[("a.example.com", None), ("b.example.com", [("/", "web", 80)])])
    [record] = list_exposed_endpoints(make_connection(ingresses=[ing]))
    assert record.host == "b.example.com"


# =============================================================================
# Aggregation
# =============================================================================


def test_services_precede_ingresses_in_api_order():
    services = [
        make_service("np", "NodePort", ports=[(80, "TCP", 30080)]),
        make_service("lb", "LoadBalancer", ports=[(80, "TCP", 30081)], lb_ingress=[("1.1.1.1", None)]),
    ]
    ingresses = [
        make_ingress("ing-b", rules=[("b.example.com", [("/", "b", 80)])]),
        make_ingress("ing-a", rules=[("a.example.com", [("/", "a", 80)])]),
    ]
    records = list_exposed_endpoints(make_connection(services=services, ingresses=ingresses))

    assert [(r.kind, r.name) for r in records] == [
        (ExposureKind.NODE_PORT, "np"),
        (ExposureKind.LOAD_BALANCER, "lb"),
        (ExposureKind.INGRESS, "ing-b"),
        (ExposureKind.INGRESS, "ing-a"),
    ]


def test_service_list_failure_aborts_aggregation(forbidden):
    conn = make_connection(ingresses=[make_ingress("routes", rules=[("", [("/", "web", 80)])])])
    conn.core.list_service_for_all_namespaces.side_effect = forbidden

    with pytest.raises(QueryError, match="list services"):
        list_exposed_endpoints(conn)


def test_ingress_list_failure_aborts_aggregation(forbidden):
    conn = make_connection(services=[make_service("np", "NodePort", ports=[(80, "TCP", 30080)])])
    conn.networking.list_ingress_for_all_namespaces.side_effect = forbidden

    with pytest.raises(QueryError, match="list ingresses"):
        list_exposed_endpoints(conn)


def test_empty_cluster_has_no_endpoints(empty_connection):
    assert get_exposed_endpoints(empty_connection) == []


def test_ingress_path_without_value_renders_empty():
    ing = make_ingress("routes", rules=[("a.example.com", [(None, "web", 80)])])
    assert get_exposed_endpoints(make_connection(ingresses=[ing])) == [
        "Ingress: default/routes - Host: a.example.com, Path:  -> web:80"
    ]
