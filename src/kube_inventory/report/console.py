"""Console rendering of inventory results using Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from kube_inventory.report.orchestrator import InventoryResult, OperationResult, report
from kube_inventory.report.templates import ENDPOINTS_TITLE, NO_ENDPOINTS, VERSION_LINE


class ConsoleSink:
    """Print each operation result as it is dispatched."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def on_success(self, result: OperationResult) -> None:
        if isinstance(result.value, list):
            self._print_endpoints(result.value)
            return
        self.console.print(VERSION_LINE.format(label=result.heading or result.label, value=escape(str(result.value))))

    def on_failure(self, result: OperationResult) -> None:
        self.console.print(f"[yellow]{escape(result.message)}[/yellow]")

    def on_fatal(self, result: OperationResult) -> None:
        self.console.print(f"[bold red]{escape(result.message)}[/bold red]")

    def _print_endpoints(self, lines: list[str]) -> None:
        body = "\n".join(f"- {escape(line)}" for line in lines) if lines else NO_ENDPOINTS
        self.console.print(Panel(body, title=ENDPOINTS_TITLE, border_style="blue"))


def print_result(result: InventoryResult, console: Console | None = None) -> None:
    """Print an inventory result to the console."""
    report(result, ConsoleSink(console))
