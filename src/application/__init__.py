"""Application layer - Use cases and orchestration.

Structure:
- commands/: Refresh token commands and their handlers (write operations)
- services/: Migration orchestrator (operator-driven batch cutover)

The application layer orchestrates domain logic but contains no business rules.
"""
