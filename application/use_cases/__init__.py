"""
Application Use Cases for the Program Conversion Engine.

This package contains application-level use cases that orchestrate domain
logic and coordinate between ports/adapters. Use cases are the entry points
for business operations.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate services and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result objects, not API responses

Usage:
    from application.use_cases import (
        ConvertAndSendProgramUseCase,
        ConversionResult,
        ReconcileConversionsUseCase,
    )

    use_case = ConvertAndSendProgramUseCase(
        client_repo=client_repo,
        exercise_repo=exercise_repo,
        routine_repo=routine_repo,
        program_repo=program_repo,
        ledger_repo=ledger_repo,
    )
    result = await use_case.execute(
        trainer_id="trainer-1",
        client_id="client-doc-1",
        program_payload=payload,
    )
"""

from application.use_cases.convert_and_send_program import (
    ConversionResult,
    ConvertAndSendProgramUseCase,
    compute_idempotency_key,
)
from application.use_cases.reconcile_conversions import (
    OrphanedRoutine,
    ReconcileConversionsUseCase,
    ReconciliationReport,
)

__all__ = [
    # ConvertAndSendProgram
    "ConvertAndSendProgramUseCase",
    "ConversionResult",
    "compute_idempotency_key",
    # ReconcileConversions
    "ReconcileConversionsUseCase",
    "ReconciliationReport",
    "OrphanedRoutine",
]
