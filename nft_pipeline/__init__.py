"""Niagara Falls Transit GTFS adapter package."""

# Core modules
from nft_pipeline import constants, errors, logging_config, models, metrics

# Adapter hooks
from nft_pipeline import (
    agency_tools,
    feed_filter,
    gtfs_loader,
    headsign_merge,
    route_labeler,
    stop_ids,
    text_processing,
)

# Initialize logging when package is imported
logging_config.configure_logging()

__all__ = [
    # Core
    "constants",
    "errors",
    "logging_config",
    "models",
    "metrics",
    # Adapter hooks
    "agency_tools",
    "feed_filter",
    "gtfs_loader",
    "headsign_merge",
    "route_labeler",
    "stop_ids",
    "text_processing",
]
