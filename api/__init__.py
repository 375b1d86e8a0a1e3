"""
API package for the Program Conversion API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- schemas/: Request/response models
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_client_link_repo,
    get_exercise_catalog_repo,
    get_routine_repo,
    get_program_repo,
    get_conversion_ledger_repo,
    get_convert_program_use_case,
    get_reconcile_conversions_use_case,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_client_link_repo",
    "get_exercise_catalog_repo",
    "get_routine_repo",
    "get_program_repo",
    "get_conversion_ledger_repo",
    # Use cases
    "get_convert_program_use_case",
    "get_reconcile_conversions_use_case",
    # Authentication
    "get_current_user",
]
