"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations are injected into the
conversion use cases and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseClientLinkRepository,
        SupabaseExerciseCatalogRepository,
        SupabaseRoutineRepository,
        SupabaseProgramRepository,
        SupabaseConversionLedgerRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    client_repo = SupabaseClientLinkRepository(client)
    exercise_repo = SupabaseExerciseCatalogRepository(client)
    routine_repo = SupabaseRoutineRepository(client)
    program_repo = SupabaseProgramRepository(client)
    ledger_repo = SupabaseConversionLedgerRepository(client)
"""

from infrastructure.db.client_link_repository import SupabaseClientLinkRepository
from infrastructure.db.exercise_catalog_repository import SupabaseExerciseCatalogRepository
from infrastructure.db.routine_repository import SupabaseRoutineRepository
from infrastructure.db.program_repository import SupabaseProgramRepository
from infrastructure.db.conversion_ledger_repository import SupabaseConversionLedgerRepository

__all__ = [
    # Trainer -> client linking
    "SupabaseClientLinkRepository",

    # Global and custom exercise catalogs
    "SupabaseExerciseCatalogRepository",

    # Client routines and program envelopes
    "SupabaseRoutineRepository",
    "SupabaseProgramRepository",

    # Idempotency ledger
    "SupabaseConversionLedgerRepository",
]
