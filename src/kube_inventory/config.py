"""Configuration and environment for kube-inventory."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Inventory settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="KUBE_INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; uses KUBECONFIG env or default location if unset",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")

    # etcd detection
    system_namespace: str = Field(
        default="kube-system",
        description="Namespace holding the control-plane static pods",
    )
    etcd_label_selector: str = Field(
        default="component=etcd",
        description="Label selector matching etcd pods",
    )
    etcd_image_marker: str = Field(
        default="etcd",
        min_length=1,
        description="Substring identifying the etcd container image",
    )


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()
