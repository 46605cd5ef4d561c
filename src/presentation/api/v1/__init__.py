"""API v1 routers.

Admin Resources:
    /api/v1/admin/migration/schema                - Required tables check
    /api/v1/admin/migration/baseline              - Authentication baseline
    /api/v1/admin/migration/provisioning          - Bulk provisioning runs
    /api/v1/admin/migration/sample-verifications  - Sampled verification
    /api/v1/admin/migration/metrics               - Migration window metrics
    /api/v1/admin/database-credentials            - Current credential
    /api/v1/admin/database-credentials/drains     - Manual connection drains
    /api/v1/admin/token-families/revocations      - Token family revocation
"""

from fastapi import APIRouter

from src.presentation.api.v1.admin import admin_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(admin_router)

__all__ = [
    "v1_router",
    "admin_router",
]
