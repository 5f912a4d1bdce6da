"""Scenario construction: the built-in demo fleet and CSV loaders.

CSV files need a header row. Units use the columns
``id,variant,capacity,location`` and missions use
``id,kind,origin,destination,payload``; extra columns are ignored, column
order is free and blank rows are skipped.
"""

from collections.abc import Callable, Iterator
import csv
import logging
from typing import TypeVar

from fleetsim.errors import ValidationError
from fleetsim.mission import Mission
from fleetsim.simulator import Environment
from fleetsim.vehicles import TransportUnit

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNIT_COLUMNS = ("id", "variant", "capacity", "location")
MISSION_COLUMNS = ("id", "kind", "origin", "destination", "payload")


def default_units() -> list[TransportUnit]:
    return [
        TransportUnit.ground("AUTO-001", 500, "Base Central"),
        TransportUnit.air("DRON-001", 10, "Hangar Norte"),
        TransportUnit.water("SUB-001", 2000, "Puerto Este"),
        TransportUnit.amphibious("ANF-001", 800, "Base Mixta"),
    ]


def default_missions() -> list[Mission]:
    return [
        Mission.urgent_delivery("M001", "Base Central", "Centro de Distribución", 300),
        Mission.rescue("M002", "Hangar Norte", "Zona de Desastre", 0),
        Mission.urgent_delivery("M003", "Puerto Este", "Isla Remota", 1500),
        Mission.rescue("M004", "Base Mixta", "Playa Accidentada", 5),
    ]


def default_scenario() -> Environment:
    """Four units of different variants, each with one mission at its base."""
    return Environment(units=default_units(), missions=default_missions())


def _parse_rows(
    path: str,
    required: tuple[str, ...],
    make: Callable[[dict[str, str]], T],
) -> Iterator[T]:
    with open(path, encoding="utf-8", newline="") as f:
        try:
            rows = list(csv.reader(f))
        except (UnicodeDecodeError, csv.Error) as exc:
            msg = f"{path}: {exc}"
            raise ValidationError(msg) from exc
    if not rows:
        return

    columns = [c.strip().lower() for c in rows[0]]
    missing = [c for c in required if c not in columns]
    if missing:
        msg = f"{path}: missing columns {', '.join(missing)}"
        raise ValidationError(msg)

    for line_no, row in enumerate(rows[1:], start=2):
        row = [cell.strip() for cell in row]
        if not any(row):
            continue
        if len(row) < len(columns):
            row += [""] * (len(columns) - len(row))
        record = dict(zip(columns, row))
        try:
            item = make(record)
        except ValueError as exc:
            msg = f"{path}:{line_no}: {exc}"
            raise ValidationError(msg) from exc
        yield item


def _parse_number(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError:
        msg = f"{name} must be a number, got {value!r}"
        raise ValidationError(msg) from None


def _make_unit(record: dict[str, str]) -> TransportUnit:
    return TransportUnit(
        record["variant"],
        record["id"],
        _parse_number(record["capacity"], "capacity"),
        record["location"],
    )


def _make_mission(record: dict[str, str]) -> Mission:
    payload = record["payload"] or "0"
    return Mission(
        record["kind"],
        record["id"],
        record["origin"],
        record["destination"],
        _parse_number(payload, "payload"),
    )


def load_units_csv(path: str) -> list[TransportUnit]:
    """Parse units from a CSV file.

    Raises:
        ValidationError: If a column is missing or a row is invalid; the
            message names the file and line.
    """
    units = list(_parse_rows(path, UNIT_COLUMNS, _make_unit))
    logger.info("Loaded %d units from %s", len(units), path)
    return units


def load_missions_csv(path: str) -> list[Mission]:
    """Parse missions from a CSV file.

    Raises:
        ValidationError: If a column is missing or a row is invalid; the
            message names the file and line.
    """
    missions = list(_parse_rows(path, MISSION_COLUMNS, _make_mission))
    logger.info("Loaded %d missions from %s", len(missions), path)
    return missions


def load_scenario(units_path: str, missions_path: str) -> Environment:
    return Environment(units=load_units_csv(units_path), missions=load_missions_csv(missions_path))
