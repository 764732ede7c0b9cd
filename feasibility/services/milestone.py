# feasibility/services/milestone.py
from dataclasses import dataclass
from itertools import accumulate
from typing import List

from feasibility.models.io import MilestoneParameters, MilestoneRow
from feasibility.utils.math import parse_number, parse_rate, safe_div, growth_factor


@dataclass(frozen=True)
class MilestoneMetrics:
    reward_tier_count: int
    cr_combined: float
    campaign_audience: float
    spend: float
    incremental_passengers: float
    cost_inc_passenger: float
    trip_fc: float
    inc_trip_fc: float
    cost_inc_trip: float


def _tier_values(values: List[str], n: int) -> List[str]:
    return [values[i] if i < len(values) else "" for i in range(n)]


def cumulative_rewards(params: MilestoneParameters) -> List[float]:
    """Reward paid to someone who reaches tier i: the sum of rewards 1..i."""
    n = params.reward_tier_count
    return list(accumulate(parse_number(v) for v in _tier_values(params.reward_amounts, n)))


def compute_milestone_row(row: MilestoneRow, params: MilestoneParameters) -> MilestoneMetrics:
    """
    Metrics for one segment of a tiered campaign.

    cr_combined is the plain sum of the tier rates. The share is read as a
    rate and applied twice in spend (once in the audience, once in the
    formula); both are kept as-is pending product confirmation.
    """
    n = params.reward_tier_count
    crs = [parse_rate(v) for v in _tier_values(row.conversion_rates, n)]
    cr_combined = sum(crs)
    cum = cumulative_rewards(params)

    base_audience = parse_number(row.base_audience)
    share = parse_rate(row.audience_share_percent)
    avg_trips = parse_number(row.avg_trips_per_two_weeks)

    g_p = growth_factor(params.passenger_growth_percent)
    g_t = growth_factor(params.trip_growth_percent)

    campaign_audience = share * base_audience

    spend_factor = 0.0
    for cr_i, reward_cum in zip(crs, cum):
        spend_factor += cr_i * reward_cum
    spend = campaign_audience * share * spend_factor

    incremental_passengers = campaign_audience * cr_combined * (g_p - 1)
    trip_fc = campaign_audience * (cr_combined * g_p) * (avg_trips * g_t)
    inc_trip_fc = (
        incremental_passengers * avg_trips * g_t
        + campaign_audience * cr_combined * avg_trips * (g_t - 1)
    )

    return MilestoneMetrics(
        reward_tier_count=n,
        cr_combined=cr_combined,
        campaign_audience=campaign_audience,
        spend=spend,
        incremental_passengers=incremental_passengers,
        cost_inc_passenger=safe_div(spend, incremental_passengers),
        trip_fc=trip_fc,
        inc_trip_fc=inc_trip_fc,
        cost_inc_trip=safe_div(spend, inc_trip_fc),
    )
