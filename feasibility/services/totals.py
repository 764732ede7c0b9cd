# feasibility/services/totals.py
from dataclasses import dataclass
from typing import Iterable

from feasibility.services.oneshot import OneShotMetrics
from feasibility.services.milestone import MilestoneMetrics
from feasibility.utils.math import safe_div


@dataclass(frozen=True)
class OneShotTotals:
    campaign_audience: float = 0.0
    budget: float = 0.0
    incremental_passengers: float = 0.0
    total_trips: float = 0.0
    incremental_trips: float = 0.0
    cost_per_inc_passenger: float = 0.0
    cost_per_inc_trip: float = 0.0


@dataclass(frozen=True)
class MilestoneTotals:
    campaign_audience: float = 0.0
    spend: float = 0.0
    incremental_passengers: float = 0.0
    trip_fc: float = 0.0
    inc_trip_fc: float = 0.0
    cost_inc_passenger: float = 0.0
    cost_inc_trip: float = 0.0


def oneshot_totals(rows: Iterable[OneShotMetrics]) -> OneShotTotals:
    """Sum the rows; unit costs come from the sums, never from averaging row costs."""
    audience = budget = inc_pass = trips = inc_trips = 0.0
    for m in rows:
        audience += m.campaign_audience
        budget += m.budget
        inc_pass += m.incremental_passengers
        trips += m.total_trips
        inc_trips += m.incremental_trips
    return OneShotTotals(
        campaign_audience=audience,
        budget=budget,
        incremental_passengers=inc_pass,
        total_trips=trips,
        incremental_trips=inc_trips,
        cost_per_inc_passenger=safe_div(budget, inc_pass),
        cost_per_inc_trip=safe_div(budget, inc_trips),
    )


def milestone_totals(rows: Iterable[MilestoneMetrics]) -> MilestoneTotals:
    audience = spend = inc_pass = trip_fc = inc_trip_fc = 0.0
    for m in rows:
        audience += m.campaign_audience
        spend += m.spend
        inc_pass += m.incremental_passengers
        trip_fc += m.trip_fc
        inc_trip_fc += m.inc_trip_fc
    return MilestoneTotals(
        campaign_audience=audience,
        spend=spend,
        incremental_passengers=inc_pass,
        trip_fc=trip_fc,
        inc_trip_fc=inc_trip_fc,
        cost_inc_passenger=safe_div(spend, inc_pass),
        cost_inc_trip=safe_div(spend, inc_trip_fc),
    )
