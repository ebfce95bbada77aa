"""Integer stop IDs synthesized from alphanumeric stop codes."""
from nft_pipeline.constants import (
    DIGITS_PATTERN,
    STOP_CODE_ABSENT,
    STOP_CODE_PREFIX_PATTERN,
    STOP_ID_EXCEPTIONS,
    STOP_ID_SUFFIX_OFFSETS,
)
from nft_pipeline.errors import UnresolvableStopError
from nft_pipeline.logging_config import get_logger
from nft_pipeline.models import Stop

logger = get_logger(__name__)


def stop_code(stop: Stop) -> str:
    """Return the rider-facing stop code; the "0" placeholder means none."""
    if stop.stop_code == STOP_CODE_ABSENT:
        return ""
    return stop.stop_code


def clean_stop_original_id(raw_id: str) -> str:
    """Strip the agency prefix ("nf_A12_", "nf_B123_MAIstop", ...) from a code."""
    return STOP_CODE_PREFIX_PATTERN.sub("", raw_id)


def _suffix_offset(code: str):
    code_lc = code.lower()
    for suffix, offset in STOP_ID_SUFFIX_OFFSETS:
        if code_lc.endswith(suffix):
            return offset
    return None


def _unresolvable(stop: Stop, code: str, reason: str) -> UnresolvableStopError:
    logger.error("stop_id_unresolvable", stop=stop, stop_code=code, reason=reason)
    return UnresolvableStopError(
        f"Stop doesn't have an ID ({reason})! {stop} (stop code: {code!r})",
        record=stop,
    )


def stop_id(stop: Stop) -> int:
    """
    Synthesize a stable positive integer ID for a stop.

    Plain numeric codes are used as is. Codes that differ only by a
    platform/direction suffix land in separate buckets ("12a" -> 100012,
    "12b" -> 200012, "12in" -> 5000012) so IDs stay unique and roughly
    sorted by the printed stop number.

    Args:
        stop: Stop record; its stop_id is used when the code is empty or "0"

    Returns:
        Positive integer stop ID

    Raises:
        UnresolvableStopError: If no rule maps the code to an ID
    """
    code = stop.stop_code
    if not code or code == STOP_CODE_ABSENT:
        code = stop.stop_id
    code = clean_stop_original_id(code)

    if DIGITS_PATTERN.fullmatch(code):
        value = int(code)
        if value <= 0:
            raise _unresolvable(stop, code, "not positive")
        return value

    match = DIGITS_PATTERN.search(code)
    if match is None:
        if code in STOP_ID_EXCEPTIONS:
            return STOP_ID_EXCEPTIONS[code]
        raise _unresolvable(stop, code, "no digits")

    offset = _suffix_offset(code)
    if offset is None:
        raise _unresolvable(stop, code, "ends with")
    return offset + int(match.group())
