"""
Application-layer exceptions.

These exceptions are used across the domain, application and infrastructure
layers of the program conversion engine.

Taxonomy:
- ValidationError: malformed input, raised before any write
- NotFoundError: client has no linked account
- ResolutionError: a single exercise could not be resolved
- WriteError: persistence failure on a routine or the envelope
- PersistenceError: raw adapter failure, wrapped by the services above
"""

from typing import Optional


class ConversionError(Exception):
    """Base class for program conversion errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ConversionError):
    """Program payload is malformed.

    Always raised before the engine issues any write, so the caller can
    correct the input and resend.
    """

    pass


class NotFoundError(ConversionError):
    """A referenced record (client, linked user) does not exist."""

    pass


class ResolutionError(ConversionError):
    """An exercise name could not be resolved to an exercise id."""

    def __init__(self, exercise_name: str, reason: str):
        super().__init__(f"Exercise '{exercise_name}' could not be resolved: {reason}")
        self.exercise_name = exercise_name
        self.reason = reason


class PersistenceError(ConversionError):
    """A repository call against the backing store failed."""

    pass


class WriteError(ConversionError):
    """Writing a routine or the program envelope failed.

    Carries partial-progress counts so the caller can decide whether to
    retry. Routines written before the failure are kept.
    """

    def __init__(
        self,
        message: str,
        *,
        routines_created: int = 0,
        routines_failed: int = 0,
        program_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.routines_created = routines_created
        self.routines_failed = routines_failed
        self.program_id = program_id
