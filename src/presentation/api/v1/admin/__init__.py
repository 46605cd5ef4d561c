"""Admin API routers.

Every admin endpoint requires the X-Admin-Key header.

Resources:
    /api/v1/admin/migration/*                   - Migration orchestration
    /api/v1/admin/database-credentials          - Credential metadata and drains
    /api/v1/admin/token-families/revocations    - Token family revocation
"""

from fastapi import APIRouter, Depends

from src.presentation.api.middleware.admin_auth import require_admin_key
from src.presentation.api.v1.admin.database_credentials import (
    router as database_credentials_router,
)
from src.presentation.api.v1.admin.migration import router as migration_router
from src.presentation.api.v1.admin.token_families import (
    router as token_families_router,
)

admin_router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin_key)],
)

admin_router.include_router(migration_router)
admin_router.include_router(database_credentials_router)
admin_router.include_router(token_families_router)

__all__ = [
    "admin_router",
    "database_credentials_router",
    "migration_router",
    "token_families_router",
]
