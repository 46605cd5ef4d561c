"""External identity provider provisioning adapters."""

from src.infrastructure.provisioning.http_provisioning_client import (
    HttpProvisioningClient,
)

__all__ = ["HttpProvisioningClient"]
