"""
Program normalizer: both payload shapes -> one ordered (week, routine) list.

This module is the only place that looks at the shape of a trainer-authored
program. Downstream components only ever see NormalizedEntry values.

Functions:
    parse_program_payload: raw JSON -> FlatProgram | PeriodizedProgram
    normalize_program: program -> ordered NormalizedEntry list
    program_duration_weeks: number of weeks the schedule spans
    toggle_periodization: flat <-> periodized conversion for the editor
    serialize_program: program -> camelCase JSON dict

All functions are pure (no side effects) and fully unit testable.
Shape errors are raised as ValidationError before the engine writes anything.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pydantic

from application.exceptions import ValidationError
from domain.models.program import (
    FlatProgram,
    PeriodizedProgram,
    ProgramPayload,
    ProgramWeek,
    Routine,
)


MISSING_SCHEDULE = "missing schedule"
MALFORMED_ROUTINE = "malformed routine"
EMPTY_WEEKS = "malformed program: weeks contain no routines"


@dataclass(frozen=True)
class NormalizedEntry:
    """One routine placed in one week.

    ``position`` is the routine's 1-based order within its week.
    ``sets_week`` selects the per-week set overrides; flat programs pin it to
    week 1 so every week repeats the same content.
    """

    week_number: int
    position: int
    routine: Routine
    sets_week: Optional[int] = None

    @property
    def prescription_week(self) -> int:
        return self.sets_week or self.week_number


def _non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def _check_routines(routines: Sequence[Any]) -> None:
    for routine in routines:
        if not isinstance(routine, Mapping) or not isinstance(routine.get("exercises"), list):
            raise ValidationError(MALFORMED_ROUTINE)


def _summarize(error: pydantic.ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def parse_program_payload(raw: Union[Mapping[str, Any], ProgramPayload]) -> ProgramPayload:
    """
    Parse a raw payload into exactly one of the two program shapes.

    A non-empty ``weeks`` list takes precedence over ``routines``.

    Args:
        raw: Decoded JSON object, or an already parsed program

    Returns:
        FlatProgram or PeriodizedProgram

    Raises:
        ValidationError: "missing schedule" if neither ``weeks`` nor
            ``routines`` is a non-empty list, "malformed routine" if a routine
            has no ``exercises`` list, "malformed program: weeks contain no
            routines" if a non-empty ``weeks`` list holds no routine at all,
            "malformed program: ..." otherwise
    """
    if isinstance(raw, (FlatProgram, PeriodizedProgram)):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationError("malformed program: payload must be an object")

    weeks = raw.get("weeks")
    routines = raw.get("routines")

    if _non_empty_list(weeks):
        total = 0
        for week in weeks:
            if not isinstance(week, Mapping):
                raise ValidationError("malformed program: each week must be an object")
            week_routines = week.get("routines") or []
            if not isinstance(week_routines, list):
                raise ValidationError(MALFORMED_ROUTINE)
            _check_routines(week_routines)
            total += len(week_routines)
        if total == 0:
            raise ValidationError(EMPTY_WEEKS)
        model = PeriodizedProgram
    elif _non_empty_list(routines):
        _check_routines(routines)
        model = FlatProgram
    else:
        raise ValidationError(MISSING_SCHEDULE)

    try:
        return model.model_validate(dict(raw))
    except pydantic.ValidationError as e:
        raise ValidationError(f"malformed program: {_summarize(e)}") from e


def normalize_program(program: Union[Mapping[str, Any], ProgramPayload]) -> List[NormalizedEntry]:
    """
    Flatten a program into (week, routine) entries.

    Periodized programs emit their weeks as given, stable-sorted by week
    number; weeks without a number take their 1-based list position.
    Flat programs repeat the routine list for weeks 1..duration_weeks, with
    the week 1 sets in every week.

    Args:
        program: Parsed program or raw payload

    Returns:
        Entries sorted by week number, then by routine order
    """
    program = parse_program_payload(program)
    entries: List[NormalizedEntry] = []

    if isinstance(program, PeriodizedProgram):
        numbered = sorted(
            ((week.week_number or index + 1, week) for index, week in enumerate(program.weeks)),
            key=lambda item: item[0],
        )
        positions: Dict[int, int] = defaultdict(int)
        for week_number, week in numbered:
            for routine in week.routines:
                positions[week_number] += 1
                entries.append(NormalizedEntry(week_number, positions[week_number], routine))
    elif isinstance(program, FlatProgram):
        for week_number in range(1, program.duration_weeks + 1):
            for position, routine in enumerate(program.routines, start=1):
                entries.append(NormalizedEntry(week_number, position, routine, sets_week=1))
    else:
        raise TypeError(f"Unsupported program type: {type(program).__name__}")

    return entries


def program_duration_weeks(program: ProgramPayload) -> int:
    """Number of weeks the schedule spans (highest week number when periodized)."""
    if isinstance(program, PeriodizedProgram):
        return max(week.week_number or index + 1 for index, week in enumerate(program.weeks))
    return program.duration_weeks


def toggle_periodization(program: Union[Mapping[str, Any], ProgramPayload]) -> ProgramPayload:
    """
    Switch a program between the flat and periodized shapes.

    Flat -> periodized copies the routine list into every week so each week
    can then be edited independently. Periodized -> flat keeps the routines
    of the earliest week and the overall duration.
    """
    program = parse_program_payload(program)

    if isinstance(program, FlatProgram):
        return PeriodizedProgram(
            title=program.title,
            notes=program.notes,
            weeks=[
                ProgramWeek(
                    week_number=week_number,
                    routines=[routine.model_copy(deep=True) for routine in program.routines],
                )
                for week_number in range(1, program.duration_weeks + 1)
            ],
        )

    first_week = _first_week_number(program)
    earliest = [
        entry.routine
        for entry in normalize_program(program)
        if entry.week_number == first_week
    ]
    return FlatProgram(
        title=program.title,
        notes=program.notes,
        duration_weeks=program_duration_weeks(program),
        routines=[routine.model_copy(deep=True) for routine in earliest],
    )


def _first_week_number(program: PeriodizedProgram) -> int:
    return min(
        week.week_number or index + 1
        for index, week in enumerate(program.weeks)
        if week.routines
    )


def serialize_program(program: ProgramPayload) -> Dict[str, Any]:
    """Dump a program back to its camelCase wire form."""
    return program.model_dump(mode="json", by_alias=True, exclude_none=True)
