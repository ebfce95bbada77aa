"""Route, trip and calendar exclusion rules for the Niagara Falls Transit feed."""
from datetime import date, datetime
from typing import Iterable, Optional

from nft_pipeline.constants import (
    AGENCY_NAME,
    CALENDAR_DATE_ADDED,
    COMBINED_FEED_AGENCY_PREFIX,
    COMBINED_FEED_AGENCY_SENTINEL,
    COMBINED_FEED_ROUTE_MAX,
    COMBINED_FEED_ROUTE_MIN,
    DIGITS_PATTERN,
    EXCLUDED_BRAND,
    EXCLUDED_LONG_NAME,
    EXCLUDED_LONG_NAME_KEYWORD,
    EXCLUDED_ROUTE_SHORT_NAME,
    GTFS_DATE_FORMAT,
)
from nft_pipeline.logging_config import get_logger
from nft_pipeline.models import CalendarDate, CalendarEntry, Route, Trip

logger = get_logger(__name__)


def is_combined_feed_agency(agency_id: str) -> bool:
    """Return True if the agency id marks the combined Niagara Region feed."""
    return (
        agency_id.startswith(COMBINED_FEED_AGENCY_PREFIX)
        or agency_id == COMBINED_FEED_AGENCY_SENTINEL
    )


def in_combined_feed_band(short_name: str) -> bool:
    """Return True for purely numeric short names within the agency's band."""
    if not DIGITS_PATTERN.fullmatch(short_name):
        return False
    return COMBINED_FEED_ROUTE_MIN <= int(short_name) <= COMBINED_FEED_ROUTE_MAX


def exclude_route(route: Route) -> bool:
    """
    Decide whether a route belongs to another agency or product line.

    Rules apply in order and the first match wins:
    1. the reserved short name, or a Fort Erie long name
    2. the WEGO brand in either name
    3. one known foreign long name
    4. an agency id that is neither ours nor the combined feed's; in the
       combined feed only numeric short names in [100, 299] are ours

    Args:
        route: Route record from routes.txt

    Returns:
        True if the route must be dropped
    """
    if (
        route.short_name == EXCLUDED_ROUTE_SHORT_NAME
        or EXCLUDED_LONG_NAME_KEYWORD in route.long_name.lower()
    ):
        return True
    if EXCLUDED_BRAND in route.short_name or EXCLUDED_BRAND in route.long_name:
        return True
    if route.long_name == EXCLUDED_LONG_NAME:
        return True
    if AGENCY_NAME in route.agency_id:
        return False
    if is_combined_feed_agency(route.agency_id):
        return not in_combined_feed_band(route.short_name)
    return True


def _parse_gtfs_date(value: str) -> Optional[date]:
    try:
        return datetime.strptime(value, GTFS_DATE_FORMAT).date()
    except ValueError:
        logger.warning("gtfs_date_invalid", value=value)
        return None


def extract_useful_service_ids(
    calendars: Iterable[CalendarEntry],
    calendar_dates: Iterable[CalendarDate],
    today: Optional[date] = None,
) -> set:
    """
    Collect the service ids that still run on or after today.

    A service is kept if its calendar period has not ended, or if a
    calendar date adds it on a day that has not passed yet.

    Args:
        calendars: calendar.txt records
        calendar_dates: calendar_dates.txt records
        today: Reference day (defaults to the current date)

    Returns:
        Set of service ids worth keeping
    """
    today = today or date.today()
    service_ids = set()

    for entry in calendars:
        end = _parse_gtfs_date(entry.end_date)
        if end is not None and end >= today:
            service_ids.add(entry.service_id)

    for entry in calendar_dates:
        if entry.exception_type != CALENDAR_DATE_ADDED:
            continue
        day = _parse_gtfs_date(entry.date)
        if day is not None and day >= today:
            service_ids.add(entry.service_id)

    logger.info("useful_service_ids_extracted", count=len(service_ids), today=today.isoformat())
    return service_ids


def excluding_all(service_ids: Optional[set]) -> bool:
    """Return True when the feed is known to have no current service."""
    return service_ids is not None and not service_ids


def _exclude_service(service_id: str, service_ids: Optional[set]) -> bool:
    return service_ids is not None and service_id not in service_ids


def exclude_calendar(entry: CalendarEntry, service_ids: Optional[set]) -> bool:
    """Drop calendar rows for services that are over."""
    return _exclude_service(entry.service_id, service_ids)


def exclude_calendar_date(entry: CalendarDate, service_ids: Optional[set]) -> bool:
    """Drop calendar_dates rows for services that are over."""
    return _exclude_service(entry.service_id, service_ids)


def exclude_trip(trip: Trip, service_ids: Optional[set]) -> bool:
    """Drop trips that run on services that are over."""
    return _exclude_service(trip.service_id, service_ids)
