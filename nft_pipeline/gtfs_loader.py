"""GTFS table loading from a zip archive or an extracted directory."""
import os
import zipfile
from typing import Container, Iterable, Iterator, Optional

import pandas as pd

from nft_pipeline.constants import GTFS_FILES, OPTIONAL_GTFS_FILES
from nft_pipeline.errors import FeedLoadingError
from nft_pipeline.logging_config import get_logger

logger = get_logger(__name__)


def _read_table(source) -> pd.DataFrame:
    # dtype=str keeps leading zeros in ids and stop codes
    return pd.read_csv(source, dtype=str, keep_default_na=False, encoding="utf-8-sig")


def _files_to_read(path: str, files: list, available: Container[str]) -> list:
    """
    Return the requested files present in the feed.

    Raises:
        FeedLoadingError: If a required file is missing, or none of the
            requested calendar tables is present
    """
    missing = [name for name in files if name not in available]
    required_missing = [name for name in missing if name not in OPTIONAL_GTFS_FILES]
    calendars = [name for name in files if name in OPTIONAL_GTFS_FILES]
    if calendars and all(name in missing for name in calendars):
        required_missing += calendars
    if required_missing:
        raise FeedLoadingError(f"Missing GTFS files in '{path}': {', '.join(required_missing)}")
    return [name for name in files if name in available]


def _load_from_zip(path: str, files: list) -> dict:
    tables = {}
    with zipfile.ZipFile(path) as archive:
        # Some exports nest the tables in a top-level folder
        members = {os.path.basename(name): name for name in archive.namelist()}
        for file_name in _files_to_read(path, files, members):
            with archive.open(members[file_name]) as handle:
                tables[file_name] = _read_table(handle)
    return tables


def _load_from_dir(path: str, files: list) -> dict:
    available = {name for name in files if os.path.exists(os.path.join(path, name))}
    return {
        name: _read_table(os.path.join(path, name))
        for name in _files_to_read(path, files, available)
    }


def load_gtfs_tables(path: str, files: Optional[Iterable[str]] = None) -> dict:
    """
    Load GTFS text files into DataFrames keyed by file stem.

    Args:
        path: GTFS zip archive or directory holding the text files
        files: File names to read (defaults to the tables the adapter uses)

    Returns:
        dict of stem -> DataFrame, e.g. tables["stops"]; every column is str

    Raises:
        FeedLoadingError: If the feed or one of the required files is missing
            or unreadable. An absent calendar table is returned empty when
            the other one is present.
    """
    files = list(files) if files is not None else list(GTFS_FILES)

    if not os.path.exists(path):
        raise FeedLoadingError(f"GTFS feed '{path}' does not exist.")

    logger.info("loading_gtfs_feed", path=path, files=files)
    try:
        if zipfile.is_zipfile(path):
            tables = _load_from_zip(path, files)
        elif os.path.isdir(path):
            tables = _load_from_dir(path, files)
        else:
            raise FeedLoadingError(f"GTFS feed '{path}' is neither a zip archive nor a directory.")
    except FeedLoadingError:
        raise
    except pd.errors.EmptyDataError as e:
        raise FeedLoadingError(f"Empty GTFS file in '{path}': {e}") from e
    except (OSError, UnicodeDecodeError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        logger.error("gtfs_loading_failed", path=path, error=str(e), exc_info=True)
        raise FeedLoadingError(f"Failed to load GTFS data: {e}") from e

    for file_name, df in tables.items():
        logger.info("gtfs_table_loaded", file=file_name, records=len(df))

    for file_name in files:
        if file_name not in tables:
            logger.info("gtfs_table_absent", file=file_name)
            tables[file_name] = pd.DataFrame(columns=list(OPTIONAL_GTFS_FILES[file_name]), dtype=str)

    return {name.replace(".txt", ""): df for name, df in tables.items()}


def iter_records(df: pd.DataFrame, model) -> Iterator:
    """Yield one record of type model per DataFrame row."""
    for row in df.to_dict(orient="records"):
        yield model.from_row(row)
