"""Token family and issuer classification factories.

Application-scoped singletons for the refresh token services, plus
request-scoped command handlers.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_cache, get_cache_keys, get_logger

if TYPE_CHECKING:
    from src.application.commands.handlers.issue_refresh_token_handler import (
        IssueRefreshTokenHandler,
    )
    from src.application.commands.handlers.revoke_token_family_handler import (
        RevokeTokenFamilyHandler,
    )
    from src.application.commands.handlers.rotate_refresh_token_handler import (
        RotateRefreshTokenHandler,
    )
    from src.domain.protocols.token_family_protocol import TokenFamilyTrackerProtocol
    from src.infrastructure.security.issuer_classifier import IssuerClassifier
    from src.infrastructure.security.refresh_token_service import RefreshTokenService


@lru_cache()
def get_token_family_tracker() -> "TokenFamilyTrackerProtocol":
    """Get token family tracker singleton (Redis-backed)."""
    from src.infrastructure.security.token_family_tracker import (
        RedisTokenFamilyTracker,
    )

    return RedisTokenFamilyTracker(
        redis_adapter=get_cache(),
        keys=get_cache_keys(),
        logger=get_logger(),
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenService":
    from src.infrastructure.security.refresh_token_service import RefreshTokenService

    return RefreshTokenService(expiration_days=settings.refresh_token_expire_days)


@lru_cache()
def get_issuer_classifier() -> "IssuerClassifier":
    """Get issuer classifier singleton (external + legacy issuer from settings)."""
    from src.infrastructure.security.issuer_classifier import IssuerClassifier

    return IssuerClassifier(
        external_issuer=settings.external_issuer,
        legacy_issuer=settings.legacy_jwt_issuer,
    )


def get_issue_refresh_token_handler() -> "IssueRefreshTokenHandler":
    """Get IssueRefreshToken handler (request-scoped)."""
    from src.application.commands.handlers.issue_refresh_token_handler import (
        IssueRefreshTokenHandler,
    )

    return IssueRefreshTokenHandler(
        tracker=get_token_family_tracker(),
        refresh_token_service=get_refresh_token_service(),
        logger=get_logger(),
        family_ttl_seconds=settings.token_family_ttl_seconds,
    )


def get_rotate_refresh_token_handler() -> "RotateRefreshTokenHandler":
    """Get RotateRefreshToken handler (request-scoped)."""
    from src.application.commands.handlers.rotate_refresh_token_handler import (
        RotateRefreshTokenHandler,
    )

    return RotateRefreshTokenHandler(
        tracker=get_token_family_tracker(),
        refresh_token_service=get_refresh_token_service(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        family_ttl_seconds=settings.token_family_ttl_seconds,
    )


def get_revoke_token_family_handler() -> "RevokeTokenFamilyHandler":
    """Get RevokeTokenFamily handler (request-scoped)."""
    from src.application.commands.handlers.revoke_token_family_handler import (
        RevokeTokenFamilyHandler,
    )

    return RevokeTokenFamilyHandler(
        tracker=get_token_family_tracker(),
        refresh_token_service=get_refresh_token_service(),
        event_bus=get_event_bus(),
        family_ttl_seconds=settings.token_family_ttl_seconds,
    )
