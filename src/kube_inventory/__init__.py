"""Read-only Kubernetes cluster inventory: versions and exposed endpoints."""

__version__ = "0.1.0"
