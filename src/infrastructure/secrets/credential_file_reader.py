"""Secret file reader for database credentials.

The secret-delivery agent renders a JSON document:

    {"username": "...", "password": "...", "lease_id": "...",
     "lease_duration": 3600, "renewable": true}

Field names are matched case-insensitively (``Username`` and ``LEASE_ID``
are accepted). Blocking I/O: callers in async code run it in a worker thread.
"""

import json
from pathlib import Path
from typing import Any

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.database_credential import DatabaseCredential
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import SecretSourceError


def _malformed(path: Path, message: str, **details: Any) -> Failure[SecretSourceError]:
    return Failure(
        error=SecretSourceError(
            code=ErrorCode.CREDENTIALS_INVALID,
            infrastructure_code=InfrastructureErrorCode.SECRET_MALFORMED,
            message=message,
            path=str(path),
            details=details or None,
        )
    )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def parse_credential_document(
    document: Any, path: Path
) -> Result[DatabaseCredential, SecretSourceError]:
    """Build a DatabaseCredential from a decoded JSON document.

    Args:
        document: Decoded JSON value.
        path: Source path (for error reporting only).

    Returns:
        Success(DatabaseCredential), or Failure(SecretSourceError) with
        SECRET_MALFORMED when the document is not an object or misses the
        username or password.
    """
    if not isinstance(document, dict):
        return _malformed(path, "Credential document is not a JSON object")

    fields = {str(key).casefold(): value for key, value in document.items()}
    username = fields.get("username")
    password = fields.get("password")
    if not isinstance(username, str) or not username.strip():
        return _malformed(path, "Credential document has no username")
    if not isinstance(password, str) or not password:
        return _malformed(path, "Credential document has no password")

    lease_id = fields.get("lease_id")
    try:
        lease_duration = int(fields.get("lease_duration") or 0)
    except (TypeError, ValueError, OverflowError):
        return _malformed(
            path,
            "Credential lease_duration is not an integer",
            lease_duration=str(fields.get("lease_duration")),
        )

    return Success(
        value=DatabaseCredential(
            username=username.strip(),
            password=password,
            lease_id=str(lease_id) if lease_id is not None else None,
            lease_duration=lease_duration,
            renewable=_as_bool(fields.get("renewable", False)),
        )
    )


def read_credential_file(path: Path) -> Result[DatabaseCredential, SecretSourceError]:
    """Read and parse the credential file.

    Returns:
        Success(DatabaseCredential), or Failure(SecretSourceError):
            - SECRET_NOT_FOUND (CREDENTIALS_UNAVAILABLE): file absent
            - SECRET_READ_ERROR (CREDENTIALS_UNAVAILABLE): unreadable file
            - SECRET_MALFORMED (CREDENTIALS_INVALID): invalid JSON or fields
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Failure(
            error=SecretSourceError(
                code=ErrorCode.CREDENTIALS_UNAVAILABLE,
                infrastructure_code=InfrastructureErrorCode.SECRET_NOT_FOUND,
                message="Credential file not found",
                path=str(path),
            )
        )
    except (OSError, UnicodeDecodeError) as e:
        return Failure(
            error=SecretSourceError(
                code=ErrorCode.CREDENTIALS_UNAVAILABLE,
                infrastructure_code=InfrastructureErrorCode.SECRET_READ_ERROR,
                message="Credential file could not be read",
                path=str(path),
                details={"error": str(e), "type": type(e).__name__},
            )
        )

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        return _malformed(path, "Credential file is not valid JSON", error=str(e))
    except RecursionError:
        return _malformed(path, "Credential file nests too deeply")

    return parse_credential_document(document, path)
