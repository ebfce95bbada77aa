from __future__ import annotations

from nft_pipeline.agency_tools import NiagaraFallsTransitAgencyTools
from nft_pipeline.models import CalendarEntry, Route, Stop, Trip


def test_hooks_delegate_to_components() -> None:
    tools = NiagaraFallsTransitAgencyTools()
    route = Route(agency_id="Niagara Falls Transit", short_name="104", long_name="Route 104")

    assert not tools.exclude_route(route)
    assert tools.route_id(route) == 104
    assert tools.route_color(route) == "19B5F1"
    assert tools.route_long_name(route) == "Victoria Ave"
    assert tools.agency_color() == "B2DA18"
    assert tools.agency_route_type() == 3
    assert tools.stop_id(Stop(stop_code="12a")) == 100_012
    assert tools.stop_code(Stop(stop_code="0")) == ""
    assert tools.clean_stop_original_id("nf_A12_99") == "99"
    assert tools.clean_stop_name("MAIN&FERRY") == "Main & Ferry"


def test_trip_headsign_keeps_direction() -> None:
    tools = NiagaraFallsTransitAgencyTools()
    trip = Trip(headsign="104 NF Bus Terminal-Main&Ferry via Victoria", direction_id=1)
    assert tools.trip_headsign(trip) == ("Main & Ferry", 1)


def test_service_ids_drive_calendar_hooks() -> None:
    tools = NiagaraFallsTransitAgencyTools(service_ids={"SA"})
    assert tools.exclude_trip(Trip(service_id="WK"))
    assert not tools.exclude_calendar(CalendarEntry(service_id="SA"))
    assert not tools.excluding_all()
    assert NiagaraFallsTransitAgencyTools(service_ids=set()).excluding_all()
