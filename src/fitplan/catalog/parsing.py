"""Normalisation of user-submitted plan bodies.

Workout exercises arrive as newline-delimited ``name, sets, reps[, rest]``
lines; meal lists arrive as JSON text. Anything that does not parse cleanly
is rejected with ``InvalidFormat`` rather than stored half-parsed.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter, ValidationError

from fitplan.catalog.schemas import Exercise, Meal
from fitplan.errors import InvalidFormat

_EXERCISES = TypeAdapter(list[Exercise])
_MEALS = TypeAdapter(list[Meal])


def _parse_exercise_line(line: str, line_no: int) -> Exercise:
    parts = [p.strip() for p in line.split(",")]
    if len(parts) < 3:
        msg = f"Exercise line {line_no}: expected 'name, sets, reps[, rest]', got {line!r}"
        raise InvalidFormat(msg)

    name, sets_raw, reps_raw = parts[0], parts[1], parts[2]
    if not name:
        msg = f"Exercise line {line_no}: name is empty"
        raise InvalidFormat(msg)
    try:
        sets = int(sets_raw)
    except ValueError:
        msg = f"Exercise line {line_no}: sets must be a whole number, got {sets_raw!r}"
        raise InvalidFormat(msg) from None
    if sets < 0:
        msg = f"Exercise line {line_no}: sets must not be negative"
        raise InvalidFormat(msg)
    if not reps_raw:
        msg = f"Exercise line {line_no}: reps is empty"
        raise InvalidFormat(msg)

    reps: int | str = int(reps_raw) if reps_raw.isdigit() else reps_raw
    rest = ", ".join(p for p in parts[3:] if p) or None
    return Exercise(name=name, sets=sets, reps=reps, rest=rest)


def parse_exercises(raw: str | list[dict[str, Any]] | None) -> list[Exercise]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [
            _parse_exercise_line(line.strip(), line_no)
            for line_no, line in enumerate(raw.splitlines(), start=1)
            if line.strip()
        ]
    try:
        return _EXERCISES.validate_python(raw)
    except ValidationError as exc:
        msg = f"Invalid exercise list: {exc.error_count()} error(s)"
        raise InvalidFormat(msg) from exc


def parse_meals(raw: str | list[dict[str, Any]] | None) -> list[Meal]:
    if raw is None:
        return []
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            msg = f"Meals must be a JSON list: {exc.msg} at line {exc.lineno} column {exc.colno}"
            raise InvalidFormat(msg) from exc
    if not isinstance(raw, list):
        msg = "Meals must be a JSON list of meal objects"
        raise InvalidFormat(msg)
    try:
        return _MEALS.validate_python(raw)
    except ValidationError as exc:
        msg = f"Invalid meal list: {exc.error_count()} error(s)"
        raise InvalidFormat(msg) from exc
