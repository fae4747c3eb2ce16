"""Orchestrator: run each inventory operation and tag its outcome."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from functools import partial
from typing import Protocol

from pydantic import BaseModel, Field

from kube_inventory.config import Settings, get_settings
from kube_inventory.connection import ClusterConnection
from kube_inventory.errors import InventoryError
from kube_inventory.inventory import (
    get_control_plane_version,
    get_etcd_version,
    get_exposed_endpoints,
    get_node_versions,
)
from kube_inventory.report.templates import ENDPOINTS_TITLE, FATAL_FAILURE, RECOVERABLE_FAILURE

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Result tag for a single operation."""

    SUCCESS = "success"
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class OperationResult(BaseModel):
    """Value or failure of one inventory operation."""

    operation: str
    label: str
    outcome: Outcome
    heading: str = ""
    value: str | list[str] | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def message(self) -> str:
        """Informational message for a failed operation."""
        template = FATAL_FAILURE if self.outcome == Outcome.FATAL else RECOVERABLE_FAILURE
        return template.format(label=self.label, error=self.error)


class InventoryResult(BaseModel):
    """All operation results of one run, in execution order."""

    operations: list[OperationResult] = Field(default_factory=list)
    collected_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def aborted(self) -> bool:
        return any(op.outcome == Outcome.FATAL for op in self.operations)

    def get(self, operation: str) -> OperationResult | None:
        return next((op for op in self.operations if op.operation == operation), None)


@dataclass(frozen=True)
class Operation:
    """A named query against the cluster and whether its failure ends the run."""

    name: str
    label: str
    func: Callable[[ClusterConnection], str | list[str]]
    fatal: bool = False
    heading: str = ""


def default_operations(settings: Settings) -> list[Operation]:
    """Control-plane version first; it is the only operation whose failure is fatal."""
    return [
        Operation(
            "control_plane_version",
            "Kubernetes version",
            get_control_plane_version,
            fatal=True,
            heading="Kubernetes API server version",
        ),
        Operation(
            "etcd_version",
            "etcd version",
            heading="Detected etcd version",
            func=partial(
                get_etcd_version,
                namespace=settings.system_namespace,
                label_selector=settings.etcd_label_selector,
                image_marker=settings.etcd_image_marker,
            ),
        ),
        Operation("node_versions", "node versions", get_node_versions, heading="Detected node versions"),
        Operation("exposed_endpoints", "exposed endpoints", get_exposed_endpoints, heading=ENDPOINTS_TITLE),
    ]


def run_operation(operation: Operation, connection: ClusterConnection) -> OperationResult:
    """Run one operation, converting inventory errors into a tagged result."""
    try:
        value = operation.func(connection)
    except InventoryError as e:
        outcome = Outcome.FATAL if operation.fatal else Outcome.RECOVERABLE
        logger.info("Operation %s failed (%s): %s", operation.name, outcome.value, e)
        return OperationResult(
            operation=operation.name,
            label=operation.label,
            outcome=outcome,
            heading=operation.heading or operation.label,
            error=str(e),
            error_type=type(e).__name__,
        )
    return OperationResult(
        operation=operation.name,
        label=operation.label,
        outcome=Outcome.SUCCESS,
        heading=operation.heading or operation.label,
        value=value,
    )


def run_inventory(
    connection: ClusterConnection,
    settings: Settings | None = None,
    operations: Sequence[Operation] | None = None,
) -> InventoryResult:
    """
    Run each operation in order against one connection.

    A fatal failure stops the run; recoverable failures are recorded and the
    next operation runs.
    """
    opts = settings or get_settings()
    result = InventoryResult()
    for operation in operations if operations is not None else default_operations(opts):
        op_result = run_operation(operation, connection)
        result.operations.append(op_result)
        if op_result.outcome == Outcome.FATAL:
            logger.warning("Stopping inventory after fatal failure in %s", operation.name)
            break
    return result


class ReportSink(Protocol):
    """Receives tagged operation results for display."""

    def on_success(self, result: OperationResult) -> None: ...

    def on_failure(self, result: OperationResult) -> None: ...

    def on_fatal(self, result: OperationResult) -> None: ...


def dispatch(result: OperationResult, sink: ReportSink) -> None:
    """Route one tagged result to the matching sink handler."""
    if result.outcome == Outcome.SUCCESS:
        sink.on_success(result)
    elif result.outcome == Outcome.RECOVERABLE:
        sink.on_failure(result)
    else:
        sink.on_fatal(result)


def report(result: InventoryResult, sink: ReportSink) -> None:
    """Dispatch every operation result of a run, in order."""
    for op_result in result.operations:
        dispatch(op_result, sink)
