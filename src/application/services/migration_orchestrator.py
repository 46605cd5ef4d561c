"""Migration orchestrator.

Drives the batch cutover of the user population to the external identity
provider.

Operations:
    - verify_schema: required identity tables exist in the live store
    - capture_baseline: authentication latency and success before cutover
    - bulk_provision: page through users and provision each (or dry run)
    - verify_sample: check a random sample really exists in the provider
    - current_metrics: dashboard figures during the migration window

Failure granularity:
    - One user's provisioning failure is counted and the run continues
    - Enumeration failure aborts the run (Failure USER_ENUMERATION_FAILED)
    - Schema inspection failure is reported in the result, never raised

Architecture:
    - Application service; collaborators are injected via domain protocols
    - Batches are strictly sequential (one page in flight at a time)
"""

import asyncio
import random

from src.core.constants import REQUIRED_IDENTITY_TABLES
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.migration import (
    BaselineMetrics,
    BulkProvisionSummary,
    MigrationMetrics,
    SampleVerification,
    SchemaVerification,
)
from src.domain.enums import TokenIssuerType
from src.domain.errors import MigrationError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.migration_telemetry_protocol import (
    MigrationTelemetryProtocol,
)
from src.domain.protocols.schema_inspector_protocol import SchemaInspectorProtocol
from src.domain.protocols.user_directory_protocol import UserDirectoryProtocol
from src.domain.protocols.user_provisioning_protocol import (
    UserProvisioningProtocol,
)

DEFAULT_BATCH_SIZE = 100
MIN_SAMPLE_SIZE = 10


class MigrationOrchestrator:
    """Batch migration of users to the external identity provider.

    Usage:
        orchestrator = get_migration_orchestrator()
        schema = await orchestrator.verify_schema()
        baseline = await orchestrator.capture_baseline()
        result = await orchestrator.bulk_provision(batch_size=100, dry_run=True)
        sample = await orchestrator.verify_sample(sample_size=50)
    """

    def __init__(
        self,
        *,
        directory: UserDirectoryProtocol,
        schema_inspector: SchemaInspectorProtocol,
        telemetry: MigrationTelemetryProtocol,
        logger: LoggerProtocol,
        provisioner: UserProvisioningProtocol | None = None,
        default_batch_size: int = DEFAULT_BATCH_SIZE,
        min_sample_size: int = MIN_SAMPLE_SIZE,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            directory: Stable-order user enumeration.
            schema_inspector: Live store structure.
            telemetry: Authentication telemetry.
            logger: Structured logger.
            provisioner: External provider provisioning; None forces dry runs.
            default_batch_size: Page size used when the caller passes <= 0.
            min_sample_size: Floor for sampled verification. Values below
                MIN_SAMPLE_SIZE are raised to it.
            rng: Random source for sampling (seedable in tests).
        """
        self._directory = directory
        self._schema_inspector = schema_inspector
        self._telemetry = telemetry
        self._logger = logger
        self._provisioner = provisioner
        self._default_batch_size = default_batch_size
        self._min_sample_size = max(MIN_SAMPLE_SIZE, min_sample_size)
        self._rng = rng or random.SystemRandom()

    @property
    def provisioning_available(self) -> bool:
        return self._provisioner is not None

    async def verify_schema(self) -> SchemaVerification:
        """Check that every required identity table exists (case-insensitive).

        Returns:
            SchemaVerification; an inspection error is reported as a missing
            entry so the operator sees why the check failed.
        """
        try:
            present = {name.casefold() for name in await self._schema_inspector.table_names()}
        except Exception as e:
            self._logger.error("schema_verification_failed", error=e)
            return SchemaVerification(
                ok=False, missing=[f"schema inspection failed: {e}"]
            )

        missing = [
            table for table in REQUIRED_IDENTITY_TABLES if table.casefold() not in present
        ]
        self._logger.info(
            "schema_verified", ok=not missing, missing_count=len(missing)
        )
        return SchemaVerification(ok=not missing, missing=missing)

    async def capture_baseline(self) -> BaselineMetrics:
        """Authentication baseline to compare the cutover against."""
        baseline = BaselineMetrics(
            auth_p95_ms=await self._telemetry.auth_latency_p95_ms(),
            success_rate=await self._telemetry.auth_success_rate(),
        )
        self._logger.info(
            "migration_baseline_captured",
            auth_p95_ms=baseline.auth_p95_ms,
            success_rate=baseline.success_rate,
        )
        return baseline

    async def bulk_provision(
        self,
        batch_size: int,
        dry_run: bool,
        cancel_event: asyncio.Event | None = None,
    ) -> Result[BulkProvisionSummary, MigrationError]:
        """Provision the whole user population page by page.

        Args:
            batch_size: Users per page (<= 0 uses the default of 100).
            dry_run: Enumerate only; the provisioner is never called and
                provisioned stays 0.
            cancel_event: When set, the run stops before the next page fetch.
                Users already processed stay counted.

        Returns:
            Success(BulkProvisionSummary) with counts and per-user errors.
            Failure(MigrationError) with USER_ENUMERATION_FAILED when paging
            fails.
        """
        page_size = batch_size if batch_size > 0 else self._default_batch_size
        provisioner = self._provisioner
        effective_dry_run = dry_run or provisioner is None
        if provisioner is None and not dry_run:
            self._logger.warning("provisioner_unavailable_forcing_dry_run")

        run_logger = self._logger.bind(dry_run=effective_dry_run, batch_size=page_size)
        run_logger.info("bulk_provision_started")

        provisioned = 0
        failed = 0
        scanned = 0
        errors: list[str] = []
        cancelled = False
        skip = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                cancelled = True
                run_logger.warning("bulk_provision_cancelled", scanned=scanned)
                break

            try:
                user_ids = await self._directory.list_user_ids(skip=skip, take=page_size)
            except Exception as e:
                run_logger.error(
                    "user_enumeration_failed", error=e, skip=skip, scanned=scanned
                )
                return Failure(
                    error=MigrationError(
                        code=ErrorCode.USER_ENUMERATION_FAILED,
                        message="User enumeration failed",
                        provisioned=provisioned,
                        failed=failed,
                        details={"skip": skip, "cause": str(e)},
                    )
                )

            if not user_ids:
                break

            for user_id in user_ids:
                scanned += 1
                if effective_dry_run or provisioner is None:
                    continue
                try:
                    outcome = await provisioner.provision_user(user_id)
                except Exception as e:
                    failed += 1
                    errors.append(f"{user_id}: {e}")
                    run_logger.warning("user_provisioning_raised", user_id=user_id)
                    continue
                if outcome.success:
                    provisioned += 1
                else:
                    failed += 1
                    reason = "; ".join(outcome.errors) or "provisioning failed"
                    errors.append(f"{user_id}: {reason}")

            run_logger.debug(
                "bulk_provision_page_done",
                skip=skip,
                page_count=len(user_ids),
                provisioned=provisioned,
                failed=failed,
            )
            skip += len(user_ids)
            if len(user_ids) < page_size:
                break

        summary = BulkProvisionSummary(
            provisioned=provisioned,
            failed=failed,
            scanned=scanned,
            dry_run=effective_dry_run,
            cancelled=cancelled,
            errors=errors,
        )
        run_logger.info(
            "bulk_provision_finished",
            provisioned=provisioned,
            failed=failed,
            scanned=scanned,
            cancelled=cancelled,
        )
        return Success(value=summary)

    async def verify_sample(
        self, sample_size: int
    ) -> Result[SampleVerification, MigrationError]:
        """Check that randomly sampled users exist in the external provider.

        Args:
            sample_size: Requested sample (raised to the floor of 10, capped
                at the population size).

        Returns:
            Success(SampleVerification). With no provisioner every sampled
            user counts as unmatched. Failure(MigrationError) with
            USER_ENUMERATION_FAILED when the population cannot be read.
        """
        requested = max(self._min_sample_size, sample_size)
        try:
            population = await self._directory.count_users()
        except Exception as e:
            self._logger.error("user_enumeration_failed", error=e)
            return Failure(
                error=MigrationError(
                    code=ErrorCode.USER_ENUMERATION_FAILED,
                    message="User enumeration failed",
                    details={"cause": str(e)},
                )
            )

        positions = sorted(self._rng.sample(range(population), min(requested, population)))
        provisioner = self._provisioner
        if provisioner is None:
            self._logger.warning("sample_verification_without_provisioner")

        sampled = 0
        matched = 0
        mismatches: list[str] = []
        for position in positions:
            try:
                user_ids = await self._directory.list_user_ids(skip=position, take=1)
            except Exception as e:
                self._logger.error("user_enumeration_failed", error=e, skip=position)
                return Failure(
                    error=MigrationError(
                        code=ErrorCode.USER_ENUMERATION_FAILED,
                        message="User enumeration failed",
                        details={"skip": position, "cause": str(e)},
                    )
                )
            if not user_ids:
                # Population shrank since it was counted
                continue

            user_id = user_ids[0]
            sampled += 1
            confirmed = False
            if provisioner is not None:
                try:
                    confirmed = await provisioner.is_provisioned(user_id)
                except Exception as e:
                    self._logger.warning(
                        "sample_lookup_failed", user_id=user_id, error_message=str(e)
                    )
            if confirmed:
                matched += 1
            else:
                mismatches.append(user_id)

        self._logger.info(
            "sample_verified", sampled=sampled, matched=matched, population=population
        )
        return Success(
            value=SampleVerification(
                sampled=sampled, matched=matched, mismatches=mismatches
            )
        )

    async def current_metrics(self) -> MigrationMetrics:
        """Success rate and per-issuer authentication counts."""
        counts = await self._telemetry.issuer_counts()
        return MigrationMetrics(
            success_rate=await self._telemetry.auth_success_rate(),
            legacy_count=counts.get(TokenIssuerType.LEGACY, 0),
            external_count=counts.get(TokenIssuerType.EXTERNAL, 0),
            unknown_count=counts.get(TokenIssuerType.UNKNOWN, 0),
        )
