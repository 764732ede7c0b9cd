# feasibility/services/oneshot.py
from dataclasses import dataclass

from feasibility.models.io import OneShotParameters, OneShotRow
from feasibility.utils.math import parse_number, safe_div, growth_factor


@dataclass(frozen=True)
class OneShotMetrics:
    campaign_audience: float
    budget: float
    incremental_passengers: float
    cost_per_inc_passenger: float
    total_trips: float
    incremental_trips: float
    cost_per_inc_trip: float


def compute_oneshot_row(row: OneShotRow, params: OneShotParameters) -> OneShotMetrics:
    """
    Single reward tier. Share and weekly CR are plain percentages (10 -> 0.10).
    Incremental passengers are the growth on top of the baseline converters;
    incremental trips add the trip-growth effect on the baseline converters.
    """
    base_audience = parse_number(row.base_audience)
    cr = parse_number(row.weekly_conversion_rate_percent) / 100.0
    share = parse_number(row.audience_share_percent) / 100.0
    avg_trips = parse_number(row.avg_trips_per_passenger)
    reward = parse_number(params.incentive_per_passenger)

    g_p = growth_factor(params.passenger_growth_percent)
    g_t = growth_factor(params.trip_growth_percent)

    audience = share * base_audience
    converters = audience * cr

    budget = audience * (cr * g_p) * reward
    incremental_passengers = audience * (cr * g_p) - converters
    total_trips = audience * (cr * g_p * (avg_trips * g_t))
    incremental_trips = (
        incremental_passengers * avg_trips * g_t
        + converters * avg_trips * (g_t - 1)
    )

    return OneShotMetrics(
        campaign_audience=audience,
        budget=budget,
        incremental_passengers=incremental_passengers,
        cost_per_inc_passenger=safe_div(budget, incremental_passengers),
        total_trips=total_trips,
        incremental_trips=incremental_trips,
        cost_per_inc_trip=safe_div(budget, incremental_trips),
    )
