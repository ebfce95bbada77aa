"""Niagara Falls Transit hooks for the GTFS normalization framework."""
from typing import Optional, Tuple

from nft_pipeline import feed_filter, headsign_merge, route_labeler, stop_ids, text_processing
from nft_pipeline.constants import ROUTE_TYPE_BUS
from nft_pipeline.logging_config import get_logger
from nft_pipeline.models import CalendarDate, CalendarEntry, Route, Stop, Trip

logger = get_logger(__name__)


class NiagaraFallsTransitAgencyTools:
    """
    Agency-specific overrides, one method per framework hook.

    Every hook is a pure function of its record, except the calendar and
    trip filters which also read the service ids captured at construction.

    Args:
        service_ids: Service ids still in use, or None to keep every service
    """

    def __init__(self, service_ids: Optional[set] = None):
        self.service_ids = service_ids

    # Feed filter

    def excluding_all(self) -> bool:
        return feed_filter.excluding_all(self.service_ids)

    def exclude_route(self, route: Route) -> bool:
        excluded = feed_filter.exclude_route(route)
        if excluded:
            logger.debug("route_excluded", short_name=route.short_name, agency_id=route.agency_id)
        return excluded

    def exclude_trip(self, trip: Trip) -> bool:
        return feed_filter.exclude_trip(trip, self.service_ids)

    def exclude_calendar(self, entry: CalendarEntry) -> bool:
        return feed_filter.exclude_calendar(entry, self.service_ids)

    def exclude_calendar_date(self, entry: CalendarDate) -> bool:
        return feed_filter.exclude_calendar_date(entry, self.service_ids)

    # Routes

    def agency_route_type(self) -> int:
        return ROUTE_TYPE_BUS

    def agency_color(self) -> str:
        return route_labeler.agency_color()

    def route_id(self, route: Route) -> int:
        return route_labeler.route_id(route)

    def route_color(self, route: Route) -> str:
        return route_labeler.route_color(route)

    def route_long_name(self, route: Route) -> str:
        return route_labeler.route_long_name(route)

    # Trips

    def clean_trip_headsign(self, headsign: str) -> str:
        return text_processing.clean_trip_headsign(headsign)

    def trip_headsign(self, trip: Trip) -> Tuple[str, int]:
        """Cleaned headsign paired with the trip's direction."""
        return self.clean_trip_headsign(trip.headsign), trip.direction_id

    def merge_headsigns(self, route_id: int, headsign: str, other: str) -> str:
        return headsign_merge.merge_headsigns(route_id, headsign, other)

    # Stops

    def clean_stop_name(self, stop_name: str) -> str:
        return text_processing.clean_stop_name(stop_name)

    def stop_code(self, stop: Stop) -> str:
        return stop_ids.stop_code(stop)

    def clean_stop_original_id(self, raw_id: str) -> str:
        return stop_ids.clean_stop_original_id(raw_id)

    def stop_id(self, stop: Stop) -> int:
        return stop_ids.stop_id(stop)
