"""
Trainer-authored program payload models.

A program arrives in one of two shapes:
- FlatProgram: one routine list reused for every week of the program
- PeriodizedProgram: an explicit list of weeks, each with its own routines

Wire keys are camelCase. Keys produced by the legacy spreadsheet import
(``program_title``, ``routine_name``, ``week_number``, ``warmup`` ...) are
accepted as input aliases.

Usage:
    >>> from domain.models import FlatProgram, Routine

    >>> program = FlatProgram(
    ...     title="Beginner Strength",
    ...     durationWeeks=4,
    ...     routines=[Routine(name="Day A", exercises=[])],
    ... )
    >>> program.duration_weeks
    4
"""

from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


DEFAULT_PROGRAM_TITLE = "Imported Program"


def _to_text(value: Any) -> Optional[str]:
    """Coerce spreadsheet cell values to trimmed strings (8.0 -> "8")."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


class _AuthoringModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SetPrescription(_AuthoringModel):
    """A single prescribed set as authored by the trainer."""

    reps: Optional[str] = Field(default=None, description="Reps target (e.g. '8', '8-12', 'AMRAP')")
    weight: Optional[str] = Field(default=None, description="Load prescription")
    rpe: Optional[str] = Field(default=None, description="Rate of perceived exertion")
    rest: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("rest", "restTime", "rest_time"),
        description="Rest after the set (e.g. '90s')",
    )
    notes: Optional[str] = None
    is_warmup: bool = Field(
        default=False,
        validation_alias=AliasChoices("isWarmup", "is_warmup", "warmup"),
        serialization_alias="isWarmup",
    )

    @field_validator("reps", "weight", "rpe", "rest", "notes", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        return _to_text(v)

    @field_validator("is_warmup", mode="before")
    @classmethod
    def coerce_warmup(cls, v: Any) -> bool:
        return bool(v) if v is not None else False


class WeekSets(_AuthoringModel):
    """Per-week set override for one exercise."""

    week_number: int = Field(
        ...,
        ge=1,
        validation_alias=AliasChoices("weekNumber", "week_number"),
        serialization_alias="weekNumber",
    )
    sets: List[SetPrescription] = Field(default_factory=list)


class ExerciseEntry(_AuthoringModel):
    """
    An exercise inside an authored routine.

    ``sets`` is the default prescription. ``weeks`` optionally overrides it
    for specific week numbers of a periodized schedule.
    """

    name: str = Field(default="", description="Exercise name as typed by the trainer")
    notes: Optional[str] = None
    sets: List[SetPrescription] = Field(default_factory=list)
    weeks: List[WeekSets] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        return "" if v is None else str(v)

    def sets_for_week(self, week_number: int) -> List[SetPrescription]:
        """Return the week override if one exists, else the default sets."""
        for override in self.weeks:
            if override.week_number == week_number:
                return override.sets
        return self.sets


class Routine(_AuthoringModel):
    """An authored routine. ``exercises`` is required; an empty list is a rest day."""

    name: str = Field(
        default="",
        validation_alias=AliasChoices("name", "routine_name", "routineName"),
    )
    notes: Optional[str] = None
    exercises: List[ExerciseEntry]

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()


class ProgramWeek(_AuthoringModel):
    """One week of a periodized program."""

    week_number: Optional[int] = Field(
        default=None,
        ge=1,
        validation_alias=AliasChoices("weekNumber", "week_number"),
        serialization_alias="weekNumber",
    )
    notes: Optional[str] = None
    routines: List[Routine] = Field(default_factory=list)


class _ProgramBase(_AuthoringModel):
    title: str = Field(
        default=DEFAULT_PROGRAM_TITLE,
        validation_alias=AliasChoices("title", "program_title", "programTitle", "name"),
    )
    notes: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("notes", "program_notes", "programNotes", "description"),
    )

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v: Any) -> str:
        text = _to_text(v)
        return text or DEFAULT_PROGRAM_TITLE


class FlatProgram(_ProgramBase):
    """Non-periodized program: the same routines repeat every week."""

    duration_weeks: int = Field(
        default=1,
        ge=1,
        le=104,
        validation_alias=AliasChoices("durationWeeks", "duration_weeks", "program_weeks"),
        serialization_alias="durationWeeks",
    )
    routines: List[Routine] = Field(..., min_length=1)

    @field_validator("duration_weeks", mode="before")
    @classmethod
    def default_duration(cls, v: Any) -> Any:
        # null, 0 and "" all mean a single week
        return v or 1


class PeriodizedProgram(_ProgramBase):
    """Periodized program: each week carries its own routine list."""

    weeks: List[ProgramWeek] = Field(..., min_length=1)


ProgramPayload = Union[FlatProgram, PeriodizedProgram]
