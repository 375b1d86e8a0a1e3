"""Verify all modules can be imported without errors."""
import pytest

# All tests in this module are pure import checks - mark as unit tests
pytestmark = pytest.mark.unit


def test_core_module_imports():
    """Import core backend modules to catch bad import paths."""
    import backend.auth
    import backend.main
    import backend.settings


def test_engine_imports():
    """Import the conversion engine layers."""
    import application.exceptions
    import application.services.client_directory
    import application.services.exercise_resolver
    import application.services.program_normalizer
    import application.services.routine_materializer
    import application.services.schedule_writer
    import application.use_cases.convert_and_send_program
    import application.use_cases.reconcile_conversions
    import domain.models.envelope
    import domain.models.exercise
    import domain.models.program
    import domain.models.routine


def test_adapter_imports():
    """Import infrastructure and HTTP adapters."""
    import api.deps
    import api.routers.clients
    import api.routers.health
    import api.routers.programs
    import infrastructure.db.client_link_repository
    import infrastructure.db.conversion_ledger_repository
    import infrastructure.db.exercise_catalog_repository
    import infrastructure.db.program_repository
    import infrastructure.db.routine_repository


def test_app_starts():
    """Verify FastAPI app can be instantiated."""
    from backend.main import app
    assert app is not None
    assert hasattr(app, 'routes')
