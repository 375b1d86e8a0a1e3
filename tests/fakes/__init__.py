"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure injection for persistence error paths
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeRoutineRepository, create_client_link_repo

    # Direct instantiation
    repo = FakeRoutineRepository()

    # Factory function with a linked client
    repo = create_client_link_repo(trainer_id="t1", client_id="c1", user_id="u1")
"""
from typing import List, Optional

from tests.fakes.client_link_repository import FakeClientLinkRepository
from tests.fakes.exercise_catalog_repository import FakeExerciseCatalogRepository
from tests.fakes.routine_repository import FakeRoutineRepository
from tests.fakes.program_repository import FakeProgramRepository
from tests.fakes.conversion_ledger_repository import FakeConversionLedgerRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_client_link_repo(
    *,
    trainer_id: str = "trainer-1",
    client_id: str = "client-doc-1",
    user_id: Optional[str] = "client-user-1",
    status: str = "active",
) -> FakeClientLinkRepository:
    """
    Create a FakeClientLinkRepository with one client of ``trainer_id``.

    Pass ``user_id=None`` for a client who never signed up.
    """
    repo = FakeClientLinkRepository()
    repo.seed([{
        "id": client_id,
        "trainer_id": trainer_id,
        "user_id": user_id,
        "name": "Jordan Client",
        "email": "jordan@example.com",
        "status": status,
    }])
    return repo


def create_exercise_catalog_repo(
    *,
    global_names: Optional[List[str]] = None,
) -> FakeExerciseCatalogRepository:
    """Create a FakeExerciseCatalogRepository with a seeded global catalog."""
    repo = FakeExerciseCatalogRepository()
    if global_names is None:
        global_names = ["Back Squat", "Bench Press", "Deadlift", "Overhead Press", "Barbell Row"]
    repo.seed_global(global_names)
    return repo


__all__ = [
    # Fakes
    "FakeClientLinkRepository",
    "FakeExerciseCatalogRepository",
    "FakeRoutineRepository",
    "FakeProgramRepository",
    "FakeConversionLedgerRepository",
    # Factories
    "create_client_link_repo",
    "create_exercise_catalog_repo",
]
