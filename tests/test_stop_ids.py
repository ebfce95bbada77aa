from __future__ import annotations

import pytest
from nft_pipeline.errors import UnresolvableStopError
from nft_pipeline.models import Stop
from nft_pipeline.stop_ids import clean_stop_original_id, stop_code, stop_id


@pytest.mark.parametrize(
    "code, expected",
    [
        ("1234", 1234),
        ("0042", 42),
        ("nf_A12_1234", 1234),
        ("nf_A12_12a", 100_012),
        ("12a", 100_012),
        ("12B", 200_012),
        ("12c", 300_012),
        ("12in", 5_000_012),
        ("12out", 5_100_012),
        ("Temp10", 6_100_010),
    ],
)
def test_stop_id_from_code(code: str, expected: int) -> None:
    assert stop_id(Stop(stop_id="ignored", stop_code=code)) == expected


@pytest.mark.parametrize(
    "code, expected",
    [("Por&Burn", 1_000_001), ("Por&Mlnd", 1_000_002), ("Temp", 6_200_000)],
)
def test_stop_id_exception_table(code: str, expected: int) -> None:
    assert stop_id(Stop(stop_code=code)) == expected


@pytest.mark.parametrize("code", ["", "0"])
def test_absent_code_falls_back_to_stop_id(code: str) -> None:
    assert stop_id(Stop(stop_id="nf_B123_5678", stop_code=code)) == 5678


def test_suffix_buckets_differ_by_one_hundred_thousand() -> None:
    a = stop_id(Stop(stop_code="nf_C45_12a"))
    b = stop_id(Stop(stop_code="nf_C45_12b"))
    assert b - a == 100_000


def test_stop_id_is_pure() -> None:
    stop = Stop(stop_id="S1", stop_code="77out")
    assert stop_id(stop) == stop_id(stop) == 5_100_077


@pytest.mark.parametrize("code", ["Main", "12x", "nf_A12_"])
def test_unresolvable_codes_raise_with_record(code: str) -> None:
    stop = Stop(stop_id="S9", stop_code=code)
    with pytest.raises(UnresolvableStopError) as excinfo:
        stop_id(stop)
    assert excinfo.value.record == stop


def test_zero_id_is_not_a_valid_result() -> None:
    with pytest.raises(UnresolvableStopError):
        stop_id(Stop(stop_id="0", stop_code="0"))


def test_stop_code_hides_zero_placeholder() -> None:
    assert stop_code(Stop(stop_code="0")) == ""
    assert stop_code(Stop(stop_code="1234")) == "1234"


def test_clean_stop_original_id_strips_agency_prefix() -> None:
    assert clean_stop_original_id("nf_B123_MAIstop45") == "45"
    assert clean_stop_original_id("NF_A12_nf_BC345_99") == "99"
    assert clean_stop_original_id("1234") == "1234"
