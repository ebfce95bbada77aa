"""GTFS record types consumed by the adapter hooks."""
from dataclasses import dataclass
from typing import Any, Mapping

import pandas as pd


def _cell(row: Mapping[str, Any], column: str) -> str:
    """Read a CSV cell as a stripped string; missing and NaN become ""."""
    value = row.get(column, "")
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class Route:
    """A routes.txt row."""

    route_id: str = ""
    agency_id: str = ""
    short_name: str = ""
    long_name: str = ""
    color: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Route":
        return cls(
            route_id=_cell(row, "route_id"),
            agency_id=_cell(row, "agency_id"),
            short_name=_cell(row, "route_short_name"),
            long_name=_cell(row, "route_long_name"),
            color=_cell(row, "route_color"),
        )


@dataclass(frozen=True)
class Stop:
    """A stops.txt row. An empty or "0" stop code means the stop has none."""

    stop_id: str = ""
    stop_code: str = ""
    name: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Stop":
        return cls(
            stop_id=_cell(row, "stop_id"),
            stop_code=_cell(row, "stop_code"),
            name=_cell(row, "stop_name"),
        )


@dataclass(frozen=True)
class Trip:
    """A trips.txt row."""

    trip_id: str = ""
    route_id: str = ""
    service_id: str = ""
    headsign: str = ""
    direction_id: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Trip":
        direction = _cell(row, "direction_id")
        return cls(
            trip_id=_cell(row, "trip_id"),
            route_id=_cell(row, "route_id"),
            service_id=_cell(row, "service_id"),
            headsign=_cell(row, "trip_headsign"),
            direction_id=1 if direction == "1" else 0,
        )


@dataclass(frozen=True)
class CalendarEntry:
    """A calendar.txt row; dates stay in GTFS YYYYMMDD form."""

    service_id: str = ""
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CalendarEntry":
        return cls(
            service_id=_cell(row, "service_id"),
            start_date=_cell(row, "start_date"),
            end_date=_cell(row, "end_date"),
        )


@dataclass(frozen=True)
class CalendarDate:
    """A calendar_dates.txt row."""

    service_id: str = ""
    date: str = ""
    exception_type: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CalendarDate":
        return cls(
            service_id=_cell(row, "service_id"),
            date=_cell(row, "date"),
            exception_type=_cell(row, "exception_type"),
        )
