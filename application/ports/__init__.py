"""
Repository Interfaces (Ports) for the Program Conversion Engine.

This package defines abstract interfaces that decouple the conversion
pipeline from infrastructure (database, external services). Implementations
are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import RoutineRepository, ProgramRepository

    class ScheduleWriter:
        def __init__(self, routine_repo: RoutineRepository, program_repo: ProgramRepository):
            self.routine_repo = routine_repo
            self.program_repo = program_repo
"""

# Trainer -> client user linking
from application.ports.client_link_repository import ClientLinkRepository

# Global and custom exercise catalogs
from application.ports.exercise_catalog_repository import ExerciseCatalogRepository

# Client routine documents
from application.ports.routine_repository import RoutineRepository

# Program envelopes
from application.ports.program_repository import ProgramRepository

# Idempotency ledger
from application.ports.conversion_ledger_repository import (
    ConversionLedgerRepository,
    LEDGER_COMPLETED,
    LEDGER_FAILED,
    LEDGER_PENDING,
)

__all__ = [
    "ClientLinkRepository",
    "ExerciseCatalogRepository",
    "RoutineRepository",
    "ProgramRepository",
    "ConversionLedgerRepository",
    "LEDGER_PENDING",
    "LEDGER_COMPLETED",
    "LEDGER_FAILED",
]
