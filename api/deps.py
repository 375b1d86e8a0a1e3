"""
FastAPI Dependency Providers for the Program Conversion API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with in-memory fakes.

Architecture:
- Settings, Supabase client and the conversion thread pool are cached
  per-process (lru_cache)
- Repository and use case providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_client_link_repo, get_current_user
    from application.ports import ClientLinkRepository

    @router.get("/clients/linked")
    def list_linked(
        user_id: str = Depends(get_current_user),
        client_repo: ClientLinkRepository = Depends(get_client_link_repo),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_routine_repo] = lambda: FakeRoutineRepository()
"""

from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ClientLinkRepository,
    ConversionLedgerRepository,
    ExerciseCatalogRepository,
    ProgramRepository,
    RoutineRepository,
)
from application.use_cases import (
    ConvertAndSendProgramUseCase,
    ReconcileConversionsUseCase,
)

# Concrete implementations
from infrastructure import (
    SupabaseClientLinkRepository,
    SupabaseConversionLedgerRepository,
    SupabaseExerciseCatalogRepository,
    SupabaseProgramRepository,
    SupabaseRoutineRepository,
)

from backend.settings import Settings, get_settings as _get_settings

# Auth from backend module (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns None if credentials are not configured.
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_client_link_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ClientLinkRepository:
    """Get ClientLinkRepository implementation."""
    return SupabaseClientLinkRepository(client)


def get_exercise_catalog_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseCatalogRepository:
    """Get ExerciseCatalogRepository implementation."""
    return SupabaseExerciseCatalogRepository(client)


def get_routine_repo(
    client: Client = Depends(get_supabase_client_required),
) -> RoutineRepository:
    """Get RoutineRepository implementation."""
    return SupabaseRoutineRepository(client)


def get_program_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgramRepository:
    """Get ProgramRepository implementation."""
    return SupabaseProgramRepository(client)


def get_conversion_ledger_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ConversionLedgerRepository:
    """Get ConversionLedgerRepository implementation."""
    return SupabaseConversionLedgerRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


@lru_cache
def get_conversion_executor() -> ThreadPoolExecutor:
    """
    Process-wide thread pool for conversion repository calls.

    Sized by ``CONVERSION_MAX_WORKERS``.
    """
    settings = _get_settings()
    return ThreadPoolExecutor(
        max_workers=settings.conversion_max_workers,
        thread_name_prefix="program_convert_",
    )


def get_convert_program_use_case(
    settings: Settings = Depends(get_settings),
    client_repo: ClientLinkRepository = Depends(get_client_link_repo),
    exercise_repo: ExerciseCatalogRepository = Depends(get_exercise_catalog_repo),
    routine_repo: RoutineRepository = Depends(get_routine_repo),
    program_repo: ProgramRepository = Depends(get_program_repo),
    ledger_repo: ConversionLedgerRepository = Depends(get_conversion_ledger_repo),
) -> ConvertAndSendProgramUseCase:
    """
    Get ConvertAndSendProgramUseCase with injected repositories.

    The ledger is left out when ``CONVERSION_IDEMPOTENCY_ENABLED`` is false.
    """
    return ConvertAndSendProgramUseCase(
        client_repo=client_repo,
        exercise_repo=exercise_repo,
        routine_repo=routine_repo,
        program_repo=program_repo,
        ledger_repo=ledger_repo if settings.conversion_idempotency_enabled else None,
        executor=get_conversion_executor(),
    )


def get_reconcile_conversions_use_case(
    ledger_repo: ConversionLedgerRepository = Depends(get_conversion_ledger_repo),
    routine_repo: RoutineRepository = Depends(get_routine_repo),
) -> ReconcileConversionsUseCase:
    """Get ReconcileConversionsUseCase with injected repositories."""
    return ReconcileConversionsUseCase(ledger_repo, routine_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Get the current authenticated user ID (the trainer).

    Wraps backend.auth.get_current_user for dependency injection.
    Supports:
    - Clerk JWT (RS256 via JWKS)
    - API key authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
        settings=settings,
    )
