"""
Infrastructure Layer for the Program Conversion API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseClientLinkRepository,
    SupabaseExerciseCatalogRepository,
    SupabaseRoutineRepository,
    SupabaseProgramRepository,
    SupabaseConversionLedgerRepository,
)

__all__ = [
    "SupabaseClientLinkRepository",
    "SupabaseExerciseCatalogRepository",
    "SupabaseRoutineRepository",
    "SupabaseProgramRepository",
    "SupabaseConversionLedgerRepository",
]
