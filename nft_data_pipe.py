"""Niagara Falls Transit GTFS feed pipeline orchestrator."""

import os
import sys
from datetime import date
from typing import Callable, Optional

import pandas as pd

from nft_pipeline.agency_tools import NiagaraFallsTransitAgencyTools
from nft_pipeline.constants import (
    DEFAULT_ERROR_POLICY,
    DEFAULT_FILE_PREFIX,
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_DIR,
    ERROR_POLICY_ABORT,
    ERROR_POLICY_SKIP,
)
from nft_pipeline.errors import ConfigurationError, FeedLoadingError, TransformError
from nft_pipeline.feed_filter import extract_useful_service_ids
from nft_pipeline.gtfs_loader import iter_records, load_gtfs_tables
from nft_pipeline.logging_config import bind_feed_context, configure_logging, get_logger
from nft_pipeline.metrics import PipelineMetrics, StageMetrics, StageTimer
from nft_pipeline.models import CalendarDate, CalendarEntry, Route, Stop, Trip

configure_logging()
logger = get_logger(__name__)


def parse_args(argv: Optional[list] = None) -> tuple:
    """
    Read (input feed, output dir, file prefix), falling back to the defaults.

    Raises:
        ValueError: If some but not all three arguments are given
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        return DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_DIR, DEFAULT_FILE_PREFIX
    if len(argv) != 3:
        raise ValueError(
            f"Expected 3 arguments (input feed, output dir, file prefix), got {len(argv)}"
        )
    return argv[0], argv[1], argv[2]


def _guarded(fn: Callable, record, timer: StageMetrics, on_error: str):
    """
    Run one hook on one record under the error policy.

    Returns None when the record is skipped.
    """
    try:
        return fn(record)
    except ConfigurationError as e:
        if on_error == ERROR_POLICY_ABORT:
            raise
        timer.skipped += 1
        logger.warning("record_skipped", stage=timer.stage_name, record=str(e.record), error=str(e))
        return None


def label_routes(tools, routes: list, timer: StageMetrics, on_error: str) -> pd.DataFrame:
    """Drop other agencies' routes and label the rest."""
    rows = []
    for route in routes:
        if tools.exclude_route(route):
            continue
        row = _guarded(
            lambda r: {
                "gtfs_route_id": r.route_id,
                "route_id": tools.route_id(r),
                "short_name": r.short_name,
                "long_name": tools.route_long_name(r),
                "color": tools.route_color(r),
            },
            route,
            timer,
            on_error,
        )
        if row is not None:
            rows.append(row)
    timer.extras["excluded"] = len(routes) - len(rows) - timer.skipped
    return pd.DataFrame(rows, columns=["gtfs_route_id", "route_id", "short_name", "long_name", "color"])


def assign_stop_ids(tools, stops: list, timer: StageMetrics, on_error: str) -> pd.DataFrame:
    """Synthesize integer ids and clean names for every stop."""
    rows = []
    for stop in stops:
        row = _guarded(
            lambda s: {
                "gtfs_stop_id": s.stop_id,
                "stop_id": tools.stop_id(s),
                "stop_code": tools.stop_code(s),
                "name": tools.clean_stop_name(s.name),
            },
            stop,
            timer,
            on_error,
        )
        if row is not None:
            rows.append(row)
    return pd.DataFrame(rows, columns=["gtfs_stop_id", "stop_id", "stop_code", "name"])


def clean_headsigns(
    tools, trips: list, routes_df: pd.DataFrame, timer: StageMetrics, on_error: str
) -> pd.DataFrame:
    """
    Clean headsigns of the kept trips, then merge differing headsigns
    within each route and direction.
    """
    route_ids = dict(zip(routes_df["gtfs_route_id"], routes_df["route_id"]))
    rows = []
    for trip in trips:
        if trip.route_id not in route_ids or tools.exclude_trip(trip):
            continue
        headsign, direction_id = tools.trip_headsign(trip)
        rows.append(
            {
                "trip_id": trip.trip_id,
                "route_id": route_ids[trip.route_id],
                "direction_id": direction_id,
                "headsign": headsign,
            }
        )
    trips_df = pd.DataFrame(rows, columns=["trip_id", "route_id", "direction_id", "headsign"])

    for (route_id, direction_id), group in trips_df.groupby(["route_id", "direction_id"]):
        headsigns = list(dict.fromkeys(group["headsign"]))
        if len(headsigns) < 2:
            continue

        def merge_all(values, route_id=route_id):
            merged = values[0]
            for other in values[1:]:
                merged = tools.merge_headsigns(int(route_id), merged, other)
            return merged

        merged = _guarded(merge_all, headsigns, timer, on_error)
        if merged is not None:
            trips_df.loc[group.index, "headsign"] = merged
            logger.debug(
                "headsigns_merged", route_id=route_id, direction_id=direction_id, headsign=merged
            )
    return trips_df


def write_outputs(output_dir: str, prefix: str, frames: dict) -> list:
    """
    Write each frame to <output_dir>/<prefix><name>.csv.

    Raises:
        TransformError: If the output directory or a file cannot be written
    """
    paths = []
    try:
        os.makedirs(output_dir, exist_ok=True)
        for name, df in frames.items():
            path = os.path.join(output_dir, f"{prefix}{name}.csv")
            df.to_csv(path, index=False)
            paths.append(path)
    except OSError as e:
        logger.error("output_writing_failed", output_dir=output_dir, error=str(e), exc_info=True)
        raise TransformError(f"Failed to write outputs: {e}") from e
    return paths


def run(
    input_path: str,
    output_dir: str,
    file_prefix: str,
    on_error: str = DEFAULT_ERROR_POLICY,
    today: Optional[date] = None,
) -> PipelineMetrics:
    """
    Run the adapter over one feed and write routes, stops and trips CSVs.

    Nothing is written if a stage aborts or no service is current.

    Raises:
        FeedLoadingError: If the feed cannot be read
        ConfigurationError: If on_error is "abort" and a record is not covered
            by the static tables
    """
    if on_error not in (ERROR_POLICY_ABORT, ERROR_POLICY_SKIP):
        raise ValueError(f"Unknown error policy: {on_error!r}")

    bind_feed_context(input_path=input_path, file_prefix=file_prefix)
    pipeline_metrics = PipelineMetrics()

    # Stage 1: Load feed
    with StageTimer("data_loading", rows_in=0) as timer:
        tables = load_gtfs_tables(input_path)
        timer.rows_out = sum(len(df) for df in tables.values())
    pipeline_metrics.stages.append(timer)

    # Stage 2: Service ids still in use
    with StageTimer("service_filtering", rows_in=len(tables["calendar"])) as timer:
        service_ids = extract_useful_service_ids(
            iter_records(tables["calendar"], CalendarEntry),
            iter_records(tables["calendar_dates"], CalendarDate),
            today=today,
        )
        tools = NiagaraFallsTransitAgencyTools(service_ids)
        timer.rows_out = len(service_ids)
    pipeline_metrics.stages.append(timer)

    if tools.excluding_all():
        # Nothing in the feed is still running, so no tables are produced
        logger.warning("no_current_service", input_path=input_path)
        pipeline_metrics.log_summary()
        return pipeline_metrics

    # Stage 3: Routes
    routes = list(iter_records(tables["routes"], Route))
    with StageTimer("route_labeling", rows_in=len(routes)) as timer:
        routes_df = label_routes(tools, routes, timer, on_error)
        timer.rows_out = len(routes_df)
    pipeline_metrics.stages.append(timer)

    # Stage 4: Stops
    stops = list(iter_records(tables["stops"], Stop))
    with StageTimer("stop_ids", rows_in=len(stops)) as timer:
        stops_df = assign_stop_ids(tools, stops, timer, on_error)
        timer.rows_out = len(stops_df)
    pipeline_metrics.stages.append(timer)

    # Stage 5: Trip headsigns
    trips = list(iter_records(tables["trips"], Trip))
    with StageTimer("headsigns", rows_in=len(trips)) as timer:
        trips_df = clean_headsigns(tools, trips, routes_df, timer, on_error)
        timer.rows_out = len(trips_df)
    pipeline_metrics.stages.append(timer)

    # Stage 6: Write
    with StageTimer("writing", rows_in=len(routes_df) + len(stops_df) + len(trips_df)) as timer:
        paths = write_outputs(
            output_dir,
            file_prefix,
            {"routes": routes_df, "stops": stops_df, "trips": trips_df},
        )
        timer.rows_out = timer.rows_in
        timer.extras["files"] = paths
    pipeline_metrics.stages.append(timer)

    pipeline_metrics.log_summary()
    return pipeline_metrics


def main(argv: Optional[list] = None) -> int:
    """Main pipeline orchestrator."""
    print("=" * 60)
    print("NIAGARA FALLS TRANSIT GTFS PIPELINE")
    print("=" * 60)

    try:
        input_path, output_dir, file_prefix = parse_args(argv)
    except ValueError as e:
        logger.error("invalid_arguments", error=str(e))
        return 2

    try:
        run(input_path, output_dir, file_prefix)
    except FeedLoadingError as e:
        logger.error("feed_loading_failed", error=str(e))
        return 1
    except TransformError as e:
        logger.error("pipeline_failed", error=str(e))
        return 1
    except ConfigurationError as e:
        # Route or stop tables need updating for this feed
        logger.error("static_tables_out_of_date", record=str(e.record), error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
