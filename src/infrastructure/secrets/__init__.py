"""Secrets infrastructure package.

Architecture:
- FileCredentialStore: Current database credential, hot-swapped on rotation
- CredentialFileWatcher: Native (watchfiles) or polling change detection
- read_credential_file: JSON secret document parsing
- Use src.core.container.get_credential_store() for dependency injection

The secret-delivery agent (a sidecar) owns the file; the application only
reads it.
"""

from src.infrastructure.secrets.credential_file_reader import (
    parse_credential_document,
    read_credential_file,
)
from src.infrastructure.secrets.credential_watcher import CredentialFileWatcher
from src.infrastructure.secrets.file_credential_store import FileCredentialStore

__all__ = [
    "CredentialFileWatcher",
    "FileCredentialStore",
    "parse_credential_document",
    "read_credential_file",
]
