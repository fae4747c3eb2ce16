"""Report: orchestrate inventory operations and render their results."""

from kube_inventory.report.console import ConsoleSink, print_result
from kube_inventory.report.orchestrator import (
    InventoryResult,
    Operation,
    OperationResult,
    Outcome,
    dispatch,
    run_inventory,
)

__all__ = [
    "ConsoleSink",
    "InventoryResult",
    "Operation",
    "OperationResult",
    "Outcome",
    "dispatch",
    "print_result",
    "run_inventory",
]
