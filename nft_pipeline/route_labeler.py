"""Route ids, colors and long names."""
from typing import Mapping

from nft_pipeline.constants import (
    AGENCY_COLOR,
    ROUTE_COLORS,
    ROUTE_LONG_NAME_PREFIX_PATTERN,
    ROUTE_LONG_NAMES,
)
from nft_pipeline.errors import UnknownRouteError
from nft_pipeline.logging_config import get_logger
from nft_pipeline.models import Route

logger = get_logger(__name__)


def route_id(route: Route) -> int:
    """Use the numeric short name as the route ID."""
    try:
        return int(route.short_name)
    except ValueError as e:
        raise UnknownRouteError(
            f"Route short name is not numeric: {route.short_name!r}", record=route
        ) from e


def agency_color() -> str:
    return AGENCY_COLOR


def _lookup(route: Route, table: Mapping[int, str], label: str) -> str:
    """Look a route up in a static label table; a miss is fatal."""
    try:
        rsn = int(route.short_name)
    except ValueError:
        rsn = None

    value = table.get(rsn) if rsn is not None else None
    if value is None:
        logger.error(f"route_{label}_unknown", route=route)
        raise UnknownRouteError(f"Unexpected route {label} for {route}", record=route)
    return value


def route_color(route: Route) -> str:
    """
    Return the route color, falling back to the static table.

    Raises:
        UnknownRouteError: If the feed has no color and the route is not in the table
    """
    if route.color:
        return route.color
    return _lookup(route, ROUTE_COLORS, "color")


def clean_route_long_name(long_name: str) -> str:
    """Strip a leading "Route 104" / "Rte 104 -" label."""
    return ROUTE_LONG_NAME_PREFIX_PATTERN.sub("", long_name).strip()


def route_long_name(route: Route) -> str:
    """
    Return the cleaned feed long name, falling back to the static table.

    Raises:
        UnknownRouteError: If nothing is left after cleaning and the route
            is not in the table
    """
    long_name = clean_route_long_name(route.long_name)
    if long_name:
        return long_name
    return _lookup(route, ROUTE_LONG_NAMES, "long_name")
