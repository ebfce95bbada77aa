from __future__ import annotations

import zipfile
from typing import Iterable

import pandas as pd
import pytest
from nft_pipeline.errors import FeedLoadingError
from nft_pipeline.gtfs_loader import iter_records, load_gtfs_tables
from nft_pipeline.models import Route, Stop


def _write(path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


def _mk_gtfs_dir(tmp_path, files: Iterable[tuple[str, str]]) -> str:
    """Create a minimal GTFS folder with (name, contents) pairs."""
    base = tmp_path / "gtfs"
    base.mkdir()
    for name, contents in files:
        _write(base / name, contents)
    return str(base)


STOPS = "stop_id,stop_code,stop_name\n001,0042,Main\n"
ROUTES = (
    "route_id,agency_id,route_short_name,route_long_name,route_color\n"
    "R1,Niagara Falls Transit,101,,\n"
)


def test_load_from_directory_keeps_strings(tmp_path) -> None:
    """Keys are file stems; leading zeros survive."""
    folder = _mk_gtfs_dir(tmp_path, [("stops.txt", STOPS), ("routes.txt", ROUTES)])

    tables = load_gtfs_tables(folder, files=("stops.txt", "routes.txt"))

    assert set(tables) == {"stops", "routes"}
    assert isinstance(tables["stops"], pd.DataFrame)
    assert tables["stops"].loc[0, "stop_id"] == "001"
    assert tables["stops"].loc[0, "stop_code"] == "0042"


def test_load_from_zip_with_nested_folder(tmp_path) -> None:
    archive = tmp_path / "gtfs.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("feed/stops.txt", STOPS)

    tables = load_gtfs_tables(str(archive), files=("stops.txt",))

    assert len(tables["stops"]) == 1
    assert tables["stops"].loc[0, "stop_name"] == "Main"


def test_missing_feed_raises(tmp_path) -> None:
    missing = tmp_path / "no_such_feed.zip"
    with pytest.raises(FeedLoadingError) as excinfo:
        load_gtfs_tables(str(missing))
    assert str(missing) in str(excinfo.value)


def test_missing_file_is_listed(tmp_path) -> None:
    folder = _mk_gtfs_dir(tmp_path, [("stops.txt", STOPS)])
    with pytest.raises(FeedLoadingError) as excinfo:
        load_gtfs_tables(folder, files=("stops.txt", "trips.txt"))
    msg = str(excinfo.value)
    assert "Missing GTFS files" in msg and "trips.txt" in msg


def test_empty_file_raises(tmp_path) -> None:
    folder = _mk_gtfs_dir(tmp_path, [("stops.txt", "")])
    with pytest.raises(FeedLoadingError):
        load_gtfs_tables(folder, files=("stops.txt",))


def test_iter_records_builds_models(tmp_path) -> None:
    folder = _mk_gtfs_dir(tmp_path, [("stops.txt", STOPS), ("routes.txt", ROUTES)])
    tables = load_gtfs_tables(folder, files=("stops.txt", "routes.txt"))

    routes = list(iter_records(tables["routes"], Route))
    stops = list(iter_records(tables["stops"], Stop))

    assert routes == [
        Route(route_id="R1", agency_id="Niagara Falls Transit", short_name="101")
    ]
    assert stops == [Stop(stop_id="001", stop_code="0042", name="Main")]


def test_invalid_utf8_raises_feed_error(tmp_path) -> None:
    """Latin-1 bytes in a table fail as a FeedLoadingError, not a decode error."""
    folder = tmp_path / "gtfs"
    folder.mkdir()
    (folder / "stops.txt").write_bytes(b"stop_id,stop_code,stop_name\n1,1,Caf\xe9 Rd\n")
    with pytest.raises(FeedLoadingError):
        load_gtfs_tables(str(folder), files=("stops.txt",))


def test_calendar_dates_only_feed(tmp_path) -> None:
    """A feed without calendar.txt gets an empty calendar with the usual columns."""
    folder = _mk_gtfs_dir(
        tmp_path,
        [
            ("stops.txt", STOPS),
            ("calendar_dates.txt", "service_id,date,exception_type\nSA,20240704,1\n"),
        ],
    )

    tables = load_gtfs_tables(folder, files=("stops.txt", "calendar.txt", "calendar_dates.txt"))

    assert tables["calendar"].empty
    assert list(tables["calendar"].columns) == ["service_id", "start_date", "end_date"]
    assert tables["calendar_dates"].loc[0, "service_id"] == "SA"


def test_zip_without_any_calendar_raises(tmp_path) -> None:
    archive = tmp_path / "gtfs.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("stops.txt", STOPS)

    with pytest.raises(FeedLoadingError) as excinfo:
        load_gtfs_tables(str(archive), files=("stops.txt", "calendar.txt", "calendar_dates.txt"))
    msg = str(excinfo.value)
    assert "calendar.txt" in msg and "calendar_dates.txt" in msg
