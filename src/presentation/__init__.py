"""Presentation layer - API endpoints and HTTP concerns.

This layer contains FastAPI routers and endpoint definitions. The presentation
layer is thin - it dispatches commands to the application layer and
translates results to HTTP responses.

Structure:
- api/v1/admin/: Operator endpoints (migration, credentials, token families)
- api/v1/errors/: RFC 7807 problem details
- api/middleware/: Trace IDs and admin key authentication

The presentation layer contains NO business logic.
"""
