"""
Field-level edits on a single campaign card.

Each operation touches exactly one field (or, for the tier count, the tier
sized sequences that depend on it) and leaves every other row and parameter
as it was. Values are stored as the raw text the user typed.
"""
from __future__ import annotations
import uuid
from typing import Any, Optional

from feasibility.models.io import (
    CARD_TYPES, CampaignCard, Kind, MilestoneCard, MilestoneRow, OneShotCard, OneShotRow,
    fit_tiers, raw_text,
)
from feasibility.utils.math import parse_tier_count


class CardFieldError(ValueError):
    """Unknown field, row or tier on a card."""


ONESHOT_PARAMS = {"incentive_per_passenger", "passenger_growth_percent", "trip_growth_percent"}
MILESTONE_PARAMS = {"passenger_growth_percent", "trip_growth_percent"}
ONESHOT_ROW_FIELDS = {
    "segment_name", "base_audience", "weekly_conversion_rate_percent",
    "audience_share_percent", "avg_trips_per_passenger",
}
MILESTONE_ROW_FIELDS = {
    "segment_name", "base_audience", "audience_share_percent", "avg_trips_per_two_weeks",
}


def new_card_id() -> str:
    return uuid.uuid4().hex[:12]


def new_card(kind: Kind, card_id: Optional[str] = None) -> CampaignCard:
    """Blank card: default title, empty parameters, one blank row."""
    try:
        card_type = CARD_TYPES[kind]
    except KeyError:
        raise CardFieldError(f"Unknown campaign kind: {kind}") from None
    return card_type(id=card_id or new_card_id())


def _text(value: Any) -> str:
    return str(raw_text(value))


def _tier_index(card: MilestoneCard, tier: Optional[int]) -> int:
    n = card.parameters.reward_tier_count
    if tier is None or not 1 <= tier <= n:
        raise CardFieldError(f"Tier must be between 1 and {n}, got {tier}")
    return tier - 1


def set_title(card: CampaignCard, text: str) -> CampaignCard:
    card.title = _text(text)
    return card


def set_reward_tier_count(card: MilestoneCard, value: Any) -> MilestoneCard:
    n = parse_tier_count(value)
    params = card.parameters
    params.reward_tier_count = n
    params.reward_amounts = fit_tiers(params.reward_amounts, n)
    for row in card.rows:
        row.conversion_rates = fit_tiers(row.conversion_rates, n)
    return card


def set_parameter(card: CampaignCard, field: str, text: Any, tier: Optional[int] = None) -> CampaignCard:
    if isinstance(card, OneShotCard):
        if field not in ONESHOT_PARAMS:
            raise CardFieldError(f"Unknown one-shot parameter: {field}")
        setattr(card.parameters, field, _text(text))
        return card

    if field == "reward_tier_count":
        return set_reward_tier_count(card, text)
    if field == "reward_amount":
        card.parameters.reward_amounts[_tier_index(card, tier)] = _text(text)
        return card
    if field not in MILESTONE_PARAMS:
        raise CardFieldError(f"Unknown milestone parameter: {field}")
    setattr(card.parameters, field, _text(text))
    return card


def find_row(card: CampaignCard, row_id: int):
    for row in card.rows:
        if row.id == row_id:
            return row
    raise CardFieldError(f"Unknown row {row_id} on card {card.id}")


def set_row_field(card: CampaignCard, row_id: int, field: str, text: Any,
                  tier: Optional[int] = None) -> CampaignCard:
    row = find_row(card, row_id)
    if isinstance(card, OneShotCard):
        if field not in ONESHOT_ROW_FIELDS:
            raise CardFieldError(f"Unknown one-shot row field: {field}")
    elif field == "conversion_rate":
        row.conversion_rates[_tier_index(card, tier)] = _text(text)
        return card
    elif field not in MILESTONE_ROW_FIELDS:
        raise CardFieldError(f"Unknown milestone row field: {field}")
    setattr(row, field, _text(text))
    return card


def add_row(card: CampaignCard) -> CampaignCard:
    next_id = max(row.id for row in card.rows) + 1
    if isinstance(card, MilestoneCard):
        n = card.parameters.reward_tier_count
        card.rows.append(MilestoneRow(id=next_id, conversion_rates=[""] * n))
    else:
        card.rows.append(OneShotRow(id=next_id))
    return card


def remove_last_row(card: CampaignCard) -> CampaignCard:
    if len(card.rows) > 1:
        card.rows.pop()
    return card
