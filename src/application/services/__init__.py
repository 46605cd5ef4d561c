"""Application services."""

from src.application.services.migration_orchestrator import MigrationOrchestrator

__all__ = ["MigrationOrchestrator"]
