"""Structured records for externally reachable cluster resources."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ExposureKind(str, Enum):
    """How a resource is reachable from outside the cluster."""

    LOAD_BALANCER = "load_balancer"
    NODE_PORT = "node_port"
    INGRESS = "ingress"


class ExposureRecord(BaseModel):
    """One externally reachable service or ingress path."""

    kind: ExposureKind
    namespace: str
    name: str
    external_addresses: list[str] = Field(
        default_factory=list,
        description="Status-reported IPs or hostnames, IP preferred per ingress point",
    )
    ports: list[str] = Field(
        default_factory=list,
        description="port/protocol (LoadBalancer) or port:nodePort/protocol (NodePort)",
    )
    host: str | None = None
    path: str | None = None
    backend: str | None = None

    def render(self) -> str:
        """Render the record as a single human-readable line."""
        ref = f"{self.namespace}/{self.name}"
        if self.kind == ExposureKind.LOAD_BALANCER:
            return (
                f"Service (LoadBalancer): {ref} - External Endpoint(s): "
                f"[{', '.join(self.external_addresses)}], Port(s): [{', '.join(self.ports)}]"
            )
        if self.kind == ExposureKind.NODE_PORT:
            return f"Service (NodePort): {ref} - NodePort(s): [{', '.join(self.ports)}] (exposed on all node IPs)"
        line = f"Ingress: {ref} - Host: {self.host}, Path: {self.path} -> {self.backend}"
        if self.external_addresses:
            line += f", External Endpoint(s): [{', '.join(self.external_addresses)}]"
        return line
