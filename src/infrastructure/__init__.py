"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- cache/: Redis primitives and key layout
- security/: Token family tracking, issuer classification, refresh tokens
- secrets/: File-backed database credential store and watcher
- persistence/: Credential-aware database, pool drainer, SQL read adapters
- provisioning/: External identity provider provisioning API client
- telemetry/: Authentication telemetry for the migration window
- events/: In-memory event bus and logging handlers
- logging/: structlog console adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
