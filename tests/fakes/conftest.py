"""
Test Fixtures and Helpers for Fake Repositories.

This module provides helper functions for overriding FastAPI dependencies with
fake repository implementations on an app built by ``create_app``.

Usage:
    from tests.fakes.conftest import override_conversion_deps

    app = create_app(settings=Settings(environment="test", _env_file=None))
    fakes = override_conversion_deps(app, trainer_id="trainer-1")
    client = TestClient(app)
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from fastapi import FastAPI

from api import deps
from backend.settings import Settings
from tests.fakes import (
    FakeClientLinkRepository,
    FakeConversionLedgerRepository,
    FakeExerciseCatalogRepository,
    FakeProgramRepository,
    FakeRoutineRepository,
    create_client_link_repo,
    create_exercise_catalog_repo,
)

RepoGetter = Callable[..., Any]


@dataclass
class ConversionFakes:
    """The five fakes wired into an app."""

    clients: FakeClientLinkRepository
    exercises: FakeExerciseCatalogRepository
    routines: FakeRoutineRepository
    programs: FakeProgramRepository
    ledger: FakeConversionLedgerRepository


def override_dependency(app: FastAPI, getter: RepoGetter, implementation: Any) -> None:
    """
    Override a FastAPI dependency with a fake implementation.

    Example:
        repo = FakeRoutineRepository()
        override_dependency(app, deps.get_routine_repo, repo)
    """
    app.dependency_overrides[getter] = lambda: implementation


def override_conversion_deps(
    app: FastAPI,
    *,
    trainer_id: str = "trainer-1",
    settings: Optional[Settings] = None,
) -> ConversionFakes:
    """
    Replace auth, settings and every repository provider of ``app`` with fakes.

    Returns:
        The fakes, for seeding and assertions
    """
    fakes = ConversionFakes(
        clients=create_client_link_repo(trainer_id=trainer_id),
        exercises=create_exercise_catalog_repo(),
        routines=FakeRoutineRepository(),
        programs=FakeProgramRepository(),
        ledger=FakeConversionLedgerRepository(),
    )

    async def _current_user() -> str:
        return trainer_id

    settings = settings or Settings(environment="test", _env_file=None)
    app.dependency_overrides[deps.get_current_user] = _current_user
    app.dependency_overrides[deps.get_settings] = lambda: settings
    override_dependency(app, deps.get_client_link_repo, fakes.clients)
    override_dependency(app, deps.get_exercise_catalog_repo, fakes.exercises)
    override_dependency(app, deps.get_routine_repo, fakes.routines)
    override_dependency(app, deps.get_program_repo, fakes.programs)
    override_dependency(app, deps.get_conversion_ledger_repo, fakes.ledger)
    return fakes
