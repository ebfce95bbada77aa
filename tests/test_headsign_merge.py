from __future__ import annotations

import pytest
from nft_pipeline.errors import HeadsignMergeError
from nft_pipeline.headsign_merge import merge_headsigns


@pytest.mark.parametrize(
    "route_id, a, b, merged",
    [
        (104, "Bus Terminal", "Main & Ferry", "Main & Ferry"),
        (104, "Main & Ferry", "Bus Terminal", "Main & Ferry"),
        (102, "NF Bus Terminal", "Main & Ferry Hub", "Main & Ferry Hub"),
        (112, "McLeod Rd", "Niagara Sq", "Niagara Sq"),
        (206, "Main & Ferry", "Chippawa", "Chippawa"),
    ],
)
def test_known_pairs_merge(route_id: int, a: str, b: str, merged: str) -> None:
    assert merge_headsigns(route_id, a, b) == merged


def test_identical_headsigns_need_no_rule() -> None:
    assert merge_headsigns(101, "Dunn St", "Dunn St") == "Dunn St"


@pytest.mark.parametrize("route_id", [101, 104])
def test_unknown_pair_is_fatal(route_id: int) -> None:
    with pytest.raises(HeadsignMergeError) as excinfo:
        merge_headsigns(route_id, "Dunn St", "Chippawa")
    assert excinfo.value.record == (route_id, "Dunn St", "Chippawa")
