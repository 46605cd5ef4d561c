"""Migration run error types.

Only failures that abort a whole run are errors. Per-user provisioning
failures are counted in BulkProvisionSummary instead.
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class MigrationError(DomainError):
    """Run-level migration failure (e.g. USER_ENUMERATION_FAILED).

    Attributes:
        provisioned: Users provisioned before the failure.
        failed: Users failed before the failure.
    """

    provisioned: int = 0
    failed: int = 0
