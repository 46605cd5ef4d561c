"""Domain enums.

Available Enums:
    - TokenIssuerType: Trust domain of a bearer token
    - CredentialStoreState: Credential store lifecycle
"""

from src.domain.enums.credential_store_state import CredentialStoreState
from src.domain.enums.token_issuer_type import TokenIssuerType

__all__ = ["CredentialStoreState", "TokenIssuerType"]
