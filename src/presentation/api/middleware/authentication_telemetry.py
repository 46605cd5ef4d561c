"""Issuer classification and authentication telemetry per request.

Every request carrying an ``Authorization`` header is classified by issuer
(legacy, external, unknown) before it reaches a route, and its outcome is
recorded once the response is known:

- ``request.state.issuer_type`` holds the classification for handlers
- success means a status below 400
- latency is measured around the downstream call, in milliseconds

Requests without the header are not authentications and are not recorded.
Recording never changes the response.
"""

import time
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.core.container import get_issuer_classifier, get_migration_telemetry
from src.domain.enums import TokenIssuerType
from src.domain.protocols.migration_telemetry_protocol import (
    MigrationTelemetryProtocol,
)
from src.infrastructure.security.issuer_classifier import IssuerClassifier

AUTHORIZATION_HEADER = "Authorization"


class AuthenticationTelemetryMiddleware(BaseHTTPMiddleware):
    """Classify bearer tokens and feed the migration telemetry.

    Collaborators are resolved through factories on first use, so requests
    without credentials never touch Redis.
    """

    def __init__(
        self,
        app: ASGIApp,
        classifier_factory: Callable[[], IssuerClassifier] = get_issuer_classifier,
        telemetry_factory: Callable[
            [], MigrationTelemetryProtocol
        ] = get_migration_telemetry,
    ) -> None:
        super().__init__(app)
        self._classifier_factory = classifier_factory
        self._telemetry_factory = telemetry_factory

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        authorization = request.headers.get(AUTHORIZATION_HEADER)
        if not authorization:
            return await call_next(request)

        issuer = self._classifier_factory().classify(authorization)
        request.state.issuer_type = issuer
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            await self._record(issuer, False, started)
            raise
        await self._record(issuer, response.status_code < 400, started)
        return response

    async def _record(
        self, issuer: TokenIssuerType, success: bool, started: float
    ) -> None:
        await self._telemetry_factory().record_authentication(
            issuer=issuer,
            success=success,
            latency_ms=(time.perf_counter() - started) * 1000.0,
        )
