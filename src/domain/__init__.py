"""Domain layer - pure business logic.

Structure:
- entities/: Value objects and results (DatabaseCredential, token family records)
- enums/: TokenIssuerType, CredentialStoreState
- errors/: Errors returned inside Failure
- events/: Domain events published on the event bus
- protocols/: Ports implemented by infrastructure adapters

The domain layer has NO dependencies on frameworks or infrastructure.
"""
