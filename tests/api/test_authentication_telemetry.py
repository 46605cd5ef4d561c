"""API tests for per-request issuer classification and telemetry.

Requests with bearer tokens from each trust domain go through the
middleware; the admin metrics and baseline endpoints, backed by a real
MigrationOrchestrator, then report the recorded populations.
"""

from collections import Counter
from unittest.mock import Mock

import jwt
import pytest
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.testclient import TestClient

from src.application.services.migration_orchestrator import MigrationOrchestrator
from src.core.config import Settings, get_settings
from src.core.container import get_migration_orchestrator
from src.domain.enums import TokenIssuerType
from src.infrastructure.security.issuer_classifier import IssuerClassifier
from src.infrastructure.telemetry.redis_telemetry import percentile
from src.presentation.api.middleware.authentication_telemetry import (
    AuthenticationTelemetryMiddleware,
)
from src.presentation.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.api.v1 import v1_router
from src.presentation.api.v1.errors import register_exception_handlers

ADMIN_KEY = "test-admin-key"
HEADERS = {"X-Admin-Key": ADMIN_KEY}
EXTERNAL_ISSUER = "https://idp.example.com/realms/identity"
LEGACY_ISSUER = "trustshift-identity"
SIGNING_KEY = "telemetry-test-signing-key-0123456789"


class InMemoryTelemetry:
    """Counts outcomes the way the Redis telemetry does, in process."""

    def __init__(self) -> None:
        self.outcomes: Counter[tuple[TokenIssuerType, bool]] = Counter()
        self.latencies: list[float] = []

    async def record_authentication(
        self, *, issuer: TokenIssuerType, success: bool, latency_ms: float
    ) -> None:
        self.outcomes[(issuer, success)] += 1
        self.latencies.append(latency_ms)

    async def auth_latency_p95_ms(self) -> float:
        return round(percentile(self.latencies, 0.95), 3)

    async def auth_success_rate(self) -> float:
        total = sum(self.outcomes.values())
        if total == 0:
            return 100.0
        successes = sum(n for (_, ok), n in self.outcomes.items() if ok)
        return round(successes * 100.0 / total, 2)

    async def issuer_counts(self) -> dict[TokenIssuerType, int]:
        counts = {issuer: 0 for issuer in TokenIssuerType}
        for (issuer, _), n in self.outcomes.items():
            counts[issuer] += n
        return counts


def _bearer(**claims) -> dict[str, str]:
    token = jwt.encode(claims, SIGNING_KEY, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def telemetry() -> InMemoryTelemetry:
    return InMemoryTelemetry()


@pytest.fixture
def classifier() -> IssuerClassifier:
    return IssuerClassifier(external_issuer=EXTERNAL_ISSUER, legacy_issuer=LEGACY_ISSUER)


@pytest.fixture
def client(telemetry, classifier, mock_logger):
    app = FastAPI(title="Test Telemetry App")
    app.add_middleware(
        AuthenticationTelemetryMiddleware,
        classifier_factory=lambda: classifier,
        telemetry_factory=lambda: telemetry,
    )
    app.add_middleware(TraceMiddleware)
    register_exception_handlers(app)
    app.include_router(v1_router)

    @app.get("/resource")
    async def resource(request: Request) -> dict[str, str | None]:
        issuer = getattr(request.state, "issuer_type", None)
        return {"issuer": issuer.value if issuer else None}

    @app.get("/forbidden")
    async def forbidden() -> None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No")

    orchestrator = MigrationOrchestrator(
        directory=Mock(),
        schema_inspector=Mock(),
        telemetry=telemetry,
        logger=mock_logger,
    )
    app.dependency_overrides[get_settings] = lambda: Settings(admin_api_key=ADMIN_KEY)
    app.dependency_overrides[get_migration_orchestrator] = lambda: orchestrator
    return TestClient(app)


@pytest.mark.api
class TestAuthenticationTelemetry:
    def test_classification_is_visible_to_routes(self, client):
        response = client.get("/resource", headers=_bearer(iss=EXTERNAL_ISSUER))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"issuer": "external"}

    def test_metrics_count_each_issuer(self, client):
        client.get("/resource", headers=_bearer(iss=LEGACY_ISSUER))
        client.get("/resource", headers=_bearer(iss=LEGACY_ISSUER))
        client.get("/resource", headers=_bearer(iss=EXTERNAL_ISSUER))
        client.get("/resource", headers={"Authorization": "Bearer not-a-jwt"})

        response = client.get("/api/v1/admin/migration/metrics", headers=HEADERS)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success_rate": 100.0,
            "legacy_count": 2,
            "external_count": 1,
            "unknown_count": 1,
        }

    def test_error_status_counts_as_failure(self, client, telemetry):
        client.get("/resource", headers=_bearer(iss=EXTERNAL_ISSUER))
        client.get("/forbidden", headers=_bearer(iss=EXTERNAL_ISSUER))

        assert telemetry.outcomes[(TokenIssuerType.EXTERNAL, True)] == 1
        assert telemetry.outcomes[(TokenIssuerType.EXTERNAL, False)] == 1
        metrics = client.get("/api/v1/admin/migration/metrics", headers=HEADERS)
        assert metrics.json()["success_rate"] == 50.0

    def test_baseline_reports_recorded_latency(self, client):
        client.get("/resource", headers=_bearer(azp="web-client"))

        response = client.get("/api/v1/admin/migration/baseline", headers=HEADERS)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["auth_p95_ms"] > 0.0

    def test_requests_without_credentials_are_not_recorded(self, client, telemetry):
        client.get("/resource")
        client.get("/api/v1/admin/migration/metrics", headers=HEADERS)

        assert sum(telemetry.outcomes.values()) == 0
