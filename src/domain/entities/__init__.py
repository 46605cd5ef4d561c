"""Domain entities and value objects."""

from src.domain.entities.database_credential import DatabaseCredential
from src.domain.entities.migration import (
    BaselineMetrics,
    BulkProvisionSummary,
    MigrationMetrics,
    ProvisioningResult,
    SampleVerification,
    SchemaVerification,
)
from src.domain.entities.token_family import (
    TokenFamilyRegistration,
    TokenFamilyRevocation,
)

__all__ = [
    "BaselineMetrics",
    "BulkProvisionSummary",
    "DatabaseCredential",
    "MigrationMetrics",
    "ProvisioningResult",
    "SampleVerification",
    "SchemaVerification",
    "TokenFamilyRegistration",
    "TokenFamilyRevocation",
]
