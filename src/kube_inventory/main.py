"""CLI entrypoint for kube-inventory."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from kube_inventory import __version__
from kube_inventory.config import get_settings
from kube_inventory.connection import obtain_connection
from kube_inventory.errors import AuthError
from kube_inventory.report import print_result, run_inventory
from kube_inventory.report.templates import CONNECTED, CONNECTING


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report Kubernetes control-plane, etcd and kubelet versions and externally exposed endpoints.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to kubeconfig (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubernetes context to use",
    )
    parser.add_argument(
        "--output",
        "-o",
        choices=("text", "json"),
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for kube-inventory CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=Console(stderr=True))],
    )
    logger = logging.getLogger("kube_inventory")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    console = Console()
    text_output = args.output == "text"
    settings = get_settings()
    if args.kubeconfig:
        settings.kubeconfig = args.kubeconfig
    if args.context:
        settings.context = args.context

    if text_output:
        console.print(CONNECTING)
    try:
        connection = obtain_connection(settings.kubeconfig, settings.context)
    except AuthError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    if text_output:
        console.print(CONNECTED)

    result = run_inventory(connection, settings)
    if text_output:
        print_result(result, console)
    else:
        print(result.model_dump_json(indent=2))
    return 1 if result.aborted else 0


if __name__ == "__main__":
    sys.exit(main())
