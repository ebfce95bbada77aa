"""Constants used throughout the Niagara Falls Transit adapter."""

import re
from types import MappingProxyType

# Entry point defaults: input feed, output directory, output file prefix
DEFAULT_INPUT_PATH = "input/gtfs.zip"
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_FILE_PREFIX = ""

# GTFS tables read by the host pipeline
GTFS_FILES = (
    "routes.txt",
    "stops.txt",
    "trips.txt",
    "calendar.txt",
    "calendar_dates.txt",
)
# Either calendar table may be absent, but not both; columns for the empty stand-in
OPTIONAL_GTFS_FILES = MappingProxyType(
    {
        "calendar.txt": ("service_id", "start_date", "end_date"),
        "calendar_dates.txt": ("service_id", "date", "exception_type"),
    }
)
GTFS_DATE_FORMAT = "%Y%m%d"
CALENDAR_DATE_ADDED = "1"

# Agency
AGENCY_NAME = "Niagara Falls Transit"
AGENCY_COLOR_GREEN = "B2DA18"  # from the PDF service schedule
AGENCY_COLOR_BLUE = "233E76"  # from the corporate graphic standards
AGENCY_COLOR = AGENCY_COLOR_GREEN
ROUTE_TYPE_BUS = 3

# Combined Niagara Region feed: agency id prefix or sentinel value
COMBINED_FEED_AGENCY_PREFIX = "AllNRT_"
COMBINED_FEED_AGENCY_SENTINEL = "1"
COMBINED_FEED_ROUTE_MIN = 100
COMBINED_FEED_ROUTE_MAX = 299

# Feed filter
EXCLUDED_ROUTE_SHORT_NAME = "22"
EXCLUDED_LONG_NAME_KEYWORD = "erie"  # Fort Erie routes
EXCLUDED_BRAND = "WEGO"  # visitor shuttle sharing the feed
EXCLUDED_LONG_NAME = "604 - Orange - NOTL"

# Route labels, keyed by route short name (100s and 200s series)
ROUTE_COLORS = MappingProxyType(
    {
        101: "F57215",
        102: "2E3192",
        103: "EC008C",
        104: "19B5F1",
        105: "ED1C24",
        106: "BAA202",
        107: "A05843",
        108: "008940",
        109: "66E530",
        110: "4372C2",
        111: "F24D3E",
        112: "9E50AE",
        113: "724A36",
        114: "B30E8E",
        203: "EC008C",
        204: "19B5F1",
        205: "ED1C24",
        206: "BAA202",
        209: "66C530",
        210: "4372C2",
        211: "F24D3E",
        213: "724A36",
        214: "B30E8E",
    }
)

ROUTE_LONG_NAMES = MappingProxyType(
    {
        101: "Dunn St",
        102: "Morrison & Dorchester",
        103: "Drummond Rd",
        104: "Victoria Ave",
        105: "Kalar Rd",
        106: "Ailanthus Ave",
        107: "Town & County Plz",
        108: "Thorold Stone Rd",
        109: "Thorold Stone Rd",
        110: "Drummond Rd",
        111: "Dorchester Rd",
        112: "McLeod Rd",
        113: "Montrose Rd",
        114: "Town & County Plz",
        203: "Drummond Rd",
        204: "Victoria Ave",
        205: "Kalar Rd",
        206: "Ailanthus Ave",
        209: "Thorold Stone Rd",
        210: "Hospital",
        211: "Dorchester Rd",
        213: "Montrose Rd",
        214: "Town & County Plz",
    }
)

# "Route 104" / "Rte 104 -" prefix on feed long names
ROUTE_LONG_NAME_PREFIX_PATTERN = re.compile(
    r"^(?:rte|route)\s+\d+\s*[-:]?\s*", re.IGNORECASE
)

# Stop ids
STOP_CODE_ABSENT = "0"

# Agency prefix on stop codes, e.g. "nf_A12_", "nf_B123_nf_C45_MAIstop"
STOP_CODE_PREFIX_PATTERN = re.compile(
    r"^(?:nf_[A-Z]{1,3}\d{2,4}_?)+(?:[A-Z]{3}stop)?(?:stop|sto)?",
    re.IGNORECASE,
)
DIGITS_PATTERN = re.compile(r"[0-9]+")

# Codes without any digits
STOP_ID_EXCEPTIONS = MappingProxyType(
    {
        "Por&Burn": 1_000_001,
        "Por&Mlnd": 1_000_002,
        "Temp": 6_200_000,
    }
)

# Suffix -> offset, most specific first
STOP_ID_SUFFIX_OFFSETS = (
    ("temp10", 6_100_000),
    ("out", 5_100_000),
    ("in", 5_000_000),
    ("c", 300_000),
    ("b", 200_000),
    ("a", 100_000),
)

# Text normalizer: street type abbreviations, canonical -> variants
STREET_TYPES = MappingProxyType(
    {
        "St": ("street", "str", "st"),
        "Ave": ("avenue", "av", "ave"),
        "Rd": ("road", "rd"),
        "Blvd": ("boulevard", "boul", "blvd"),
        "Dr": ("drive", "dr"),
        "Plz": ("plaza", "plz"),
        "Sq": ("square", "sq"),
        "Cres": ("crescent", "cres"),
        "Crt": ("court", "crt"),
        "Hwy": ("highway", "hwy"),
        "Pkwy": ("parkway", "pkwy"),
        "Ln": ("lane", "ln"),
        "Terr": ("terrace", "terr"),
    }
)

# Restored after title-casing
KNOWN_ACRONYMS = ("NF", "NOTL", "GO", "NRT", "YMCA", "QEW", "WEGO", "VIA")

TERMINAL_LABEL = "Bus Terminal"

# What the host pipeline does with a record the static tables cannot cover
ERROR_POLICY_ABORT = "abort"
ERROR_POLICY_SKIP = "skip"
DEFAULT_ERROR_POLICY = ERROR_POLICY_ABORT
