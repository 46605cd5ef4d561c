"""Migration run results.

Ephemeral values recomputed on every call; nothing here is persisted.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class SchemaVerification:
    """Outcome of the required-structure check.

    Attributes:
        ok: True when nothing is missing.
        missing: Human-readable entries for missing tables or inspection errors.
    """

    ok: bool
    missing: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True, kw_only=True)
class BaselineMetrics:
    """Authentication baseline captured before a cutover.

    Attributes:
        auth_p95_ms: 95th percentile authentication latency in milliseconds.
        success_rate: Authentication success rate in percent.
    """

    auth_p95_ms: float
    success_rate: float


@dataclass(frozen=True, slots=True, kw_only=True)
class ProvisioningResult:
    """Answer of the per-user provisioning collaborator.

    Attributes:
        success: Whether the user now exists in the external provider.
        errors: Error messages reported by the collaborator.
    """

    success: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True, kw_only=True)
class BulkProvisionSummary:
    """Counts for one bulk provisioning run.

    Attributes:
        provisioned: Users provisioned (always 0 for a dry run).
        failed: Users whose provisioning failed.
        scanned: Users enumerated.
        dry_run: Effective mode (True when forced because provisioning is
            unavailable).
        cancelled: True when the run stopped before the population ended.
        errors: One ``"{user_id}: {message}"`` entry per failure.
    """

    provisioned: int
    failed: int
    scanned: int
    dry_run: bool
    cancelled: bool = False
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True, kw_only=True)
class SampleVerification:
    """Outcome of sampled provisioning verification.

    Attributes:
        sampled: Users checked.
        matched: Users confirmed present in the external provider.
        mismatches: User ids that were not confirmed.
    """

    sampled: int
    matched: int
    mismatches: list[str] = field(default_factory=list)

    @property
    def match_rate(self) -> float:
        """Matched share of the sample in percent (0.0 for an empty sample)."""
        if self.sampled == 0:
            return 0.0
        return round(self.matched * 100.0 / self.sampled, 2)


@dataclass(frozen=True, slots=True, kw_only=True)
class MigrationMetrics:
    """Migration-window dashboard figures.

    Attributes:
        success_rate: Authentication success rate in percent.
        legacy_count: Authentications carrying legacy tokens.
        external_count: Authentications carrying external provider tokens.
        unknown_count: Authentications with unclassifiable tokens.
    """

    success_rate: float
    legacy_count: int
    external_count: int
    unknown_count: int = 0
