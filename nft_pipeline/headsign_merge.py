"""Headsign merge rules for trips that share a route and direction."""
from types import MappingProxyType

from nft_pipeline.errors import HeadsignMergeError
from nft_pipeline.logging_config import get_logger

logger = get_logger(__name__)


def _rule(a: str, b: str, merged: str):
    return frozenset((a, b)), merged


_MAIN_FERRY_HUB = _rule("NF Bus Terminal", "Main & Ferry Hub", "Main & Ferry Hub")
_MAIN_FERRY = _rule("Bus Terminal", "Main & Ferry", "Main & Ferry")

# Route id -> {unordered pair of cleaned headsigns: merged headsign}
MERGE_RULES = MappingProxyType(
    {
        102: dict([_MAIN_FERRY_HUB]),
        104: dict([_MAIN_FERRY, _MAIN_FERRY_HUB]),
        106: dict(
            [
                _rule("Inb1", "Main & Ferry", "Main & Ferry"),
                _rule("Gunning & Willloughby", "Main & Ferry Hub", "Main & Ferry Hub"),
                _rule("Aillanthus Ave", "Main & Ferr", "Main & Ferr"),
            ]
        ),
        108: dict([_rule("Bus Term", "Bus Terminal", "Bus Terminal")]),
        112: dict(
            [
                _rule("McLeod Rd", "Niagara Sq", "Niagara Sq"),
                _rule("Gunning & Willloughby", "Niagara Sq A", "Niagara Sq A"),
            ]
        ),
        113: dict([_rule("Brown Rd Loop", "Niagara Squar", "Niagara Squar")]),
        203: dict([_MAIN_FERRY_HUB]),
        204: dict([_MAIN_FERRY_HUB]),
        206: dict(
            [
                _rule("Main & Ferry", "Chippawa", "Chippawa"),
                _MAIN_FERRY,
                _rule("W Corner", "Portage Rd & Front St (Tims)", "Portage Rd & Front St (Tims)"),
                _MAIN_FERRY_HUB,
            ]
        ),
    }
)


def merge_headsigns(route_id: int, headsign: str, other: str) -> str:
    """
    Pick the single headsign to show for two merged trips.

    Args:
        route_id: Numeric route id
        headsign: Cleaned headsign of the kept trip
        other: Cleaned headsign of the trip merged into it

    Returns:
        The merged headsign

    Raises:
        HeadsignMergeError: If no rule covers this pair on this route
    """
    if headsign == other:
        return headsign

    merged = MERGE_RULES.get(route_id, {}).get(frozenset((headsign, other)))
    if merged is None:
        logger.error(
            "headsign_merge_unknown", route_id=route_id, headsign=headsign, other=other
        )
        raise HeadsignMergeError(
            f"Unexpected trips to merge on route {route_id}: {headsign!r} & {other!r}",
            record=(route_id, headsign, other),
        )
    return merged
