"""Stop name and trip headsign cleanup.

Both cleaners fold an ordered tuple of regex substitutions over the raw
text. Later steps assume the earlier ones already ran, so the order of
HEADSIGN_STEPS and STOP_NAME_STEPS matters.
"""
import re
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterable, Union

from nft_pipeline.constants import KNOWN_ACRONYMS, STREET_TYPES, TERMINAL_LABEL
from nft_pipeline.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CleanStep:
    """One named substitution; replacement is a template or a match callable."""

    name: str
    pattern: re.Pattern
    replacement: Union[str, Callable[[re.Match], str]]

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def apply_steps(text: str, steps: Iterable[CleanStep]) -> str:
    """Run text through each step in order."""
    return reduce(lambda acc, step: step.apply(acc), steps, text)


def _title_word(m: re.Match) -> str:
    return m.group(1).upper() + m.group(2).lower()


_STREET_TYPE_CANONICAL = {
    variant: canonical
    for canonical, variants in STREET_TYPES.items()
    for variant in variants
}
_STREET_TYPE_VARIANTS = sorted(_STREET_TYPE_CANONICAL, key=len, reverse=True)

CONNECTOR_SPACING = CleanStep(
    "connector_spacing", re.compile(r"(?<=\S)([&@])(?=\S)"), r" \1 "
)
TERMINAL_ARROW = CleanStep(
    "terminal_arrow",
    re.compile(r"^.*->\s*(?:bus\s+)?term(?:inal)?\.?\s*$", re.IGNORECASE),
    TERMINAL_LABEL,
)
TITLE_CASE = CleanStep(
    "title_case", re.compile(r"\b([A-Za-z0-9])([A-Za-z0-9']*)"), _title_word
)
ROUTE_NUMBER_PREFIX = CleanStep("route_number_prefix", re.compile(r"^\d+\s+"), "")
# A spaced label before the only dash, e.g. "NF Bus Terminal-Main St"
DASH_PREFIX = CleanStep(
    "dash_prefix", re.compile(r"^[^-]*\s[^-]*-\s*(?=[^-]*$)"), ""
)
SQUARE_TYPO = CleanStep(
    "square_typo", re.compile(r"\bsqaure\b", re.IGNORECASE), "Square"
)
KEEP_TO_REMOVE_VIA = CleanStep(
    "keep_to_remove_via",
    re.compile(r"^(?:.*\bto\s+)?(.*?)(?:\s+via\b.*)?$", re.IGNORECASE),
    r"\1",
)
ARROW_MARKER = CleanStep("arrow_marker", re.compile(r"^\s*(?:>+|<+)\s*"), "")
AND_SPACING = CleanStep(
    "and_spacing", re.compile(r"\s*&\s*|\s+and\s+", re.IGNORECASE), " & "
)
BOUND_QUALIFIER = CleanStep(
    "bound_qualifier",
    re.compile(
        r"\s*\(\s*(?:(?:north|south|east|west)bound|[nsew]b)\s*\)"
        r"|\s+(?:north|south|east|west)bound\b",
        re.IGNORECASE,
    ),
    "",
)
STREET_TYPE = CleanStep(
    "street_types",
    re.compile(r"\b(" + "|".join(_STREET_TYPE_VARIANTS) + r")\b\.?", re.IGNORECASE),
    lambda m: _STREET_TYPE_CANONICAL[m.group(1).lower()],
)
SLASHES = CleanStep("slashes", re.compile(r"\s*/\s*"), " / ")
NUMERIC_NOISE = CleanStep(
    "numeric_noise",
    re.compile(r"^#?\d+\s*[-:]\s+|^#\d+\s+|\s+#\d+$|\s*\(\d+\)$"),
    "",
)

# Final label cleanup
LABEL_STEPS = (
    CleanStep("collapse_spaces", re.compile(r"\s+"), " "),
    CleanStep("open_paren", re.compile(r"\s*\(\s*"), " ("),
    CleanStep("close_paren", re.compile(r"\s+\)"), ")"),
    CleanStep("edge_punctuation", re.compile(r"^[\s\-,.:;/&]+|[\s\-,.:;/&]+$"), ""),
    CleanStep(
        "acronyms",
        re.compile(r"\b(" + "|".join(KNOWN_ACRONYMS) + r")\b", re.IGNORECASE),
        lambda m: m.group(1).upper(),
    ),
    CleanStep("mc_names", re.compile(r"\bMc([a-z])"), lambda m: "Mc" + m.group(1).upper()),
    CleanStep("o_names", re.compile(r"\bO'([a-z])"), lambda m: "O'" + m.group(1).upper()),
    CleanStep("first_letter", re.compile(r"^([a-z])"), lambda m: m.group(1).upper()),
)

HEADSIGN_STEPS = (
    CONNECTOR_SPACING,
    TERMINAL_ARROW,
    TITLE_CASE,
    ROUTE_NUMBER_PREFIX,
    DASH_PREFIX,
    SQUARE_TYPO,
    KEEP_TO_REMOVE_VIA,
    ARROW_MARKER,
    AND_SPACING,
    BOUND_QUALIFIER,
    STREET_TYPE,
    SLASHES,
    NUMERIC_NOISE,
) + LABEL_STEPS

# Stop names keep their leading numbers, dash-separated parts and "to"/"via" words
STOP_NAME_STEPS = tuple(
    step
    for step in HEADSIGN_STEPS
    if step not in (ROUTE_NUMBER_PREFIX, DASH_PREFIX, KEEP_TO_REMOVE_VIA)
)


def _clean(raw: str, steps: Iterable[CleanStep], kind: str) -> str:
    if not isinstance(raw, str):
        return ""

    try:
        return apply_steps(raw, steps)
    except Exception as e:
        logger.warning(f"{kind}_cleaning_failed", error=str(e), text_preview=raw[:50])
        return raw.strip()


def clean_trip_headsign(headsign: str) -> str:
    """
    Clean a trip headsign down to the destination riders read.

    Args:
        headsign: Raw trip_headsign value

    Returns:
        Cleaned headsign, e.g. "104 NF Bus Terminal-Main&Ferry via Victoria"
        becomes "Main & Ferry"
    """
    return _clean(headsign, HEADSIGN_STEPS, "headsign")


def clean_stop_name(stop_name: str) -> str:
    """Clean a raw stop_name value."""
    return _clean(stop_name, STOP_NAME_STEPS, "stop_name")
