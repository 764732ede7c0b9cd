# feasibility/campaigns/legacy.py
"""
Import of the browser tool's stored cards.

The old tool kept one JSON blob per card, e.g.
  {"title": ..., "params": {"incPassengerFC": "50", ...}, "rows": [{"id": 1, "crPerWeek": "5", ...}]}
with per-tier fields spread over reward1..reward5 and cr1..cr5.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from feasibility.campaigns.cards import CardFieldError, new_card_id
from feasibility.config import DEFAULT_TITLES, MAX_REWARD_TIERS
from feasibility.models.io import CampaignCard, Kind, card_from_snapshot

ONESHOT_PARAM_RENAMES = {
    "incPassengerFC": "incentive_per_passenger",
    "passGrowth": "passenger_growth_percent",
    "tripGrowth": "trip_growth_percent",
}
MILESTONE_PARAM_RENAMES = {
    "rewardCount": "reward_tier_count",
    "passGrowth": "passenger_growth_percent",
    "tripGrowth": "trip_growth_percent",
}
ONESHOT_ROW_RENAMES = {
    "segment": "segment_name",
    "baseAudience": "base_audience",
    "crPerWeek": "weekly_conversion_rate_percent",
    "share": "audience_share_percent",
    "avgTrips": "avg_trips_per_passenger",
}
MILESTONE_ROW_RENAMES = {
    "segment": "segment_name",
    "baseAudience": "base_audience",
    "sharePercent": "audience_share_percent",
    "avgTrips2w": "avg_trips_per_two_weeks",
}


def _rename(src: Dict[str, Any], renames: Dict[str, str]) -> Dict[str, Any]:
    return {new: src[old] for old, new in renames.items() if old in src}


def _tiers(src: Dict[str, Any], prefix: str) -> List[Any]:
    return [src.get(f"{prefix}{i}", "") for i in range(1, MAX_REWARD_TIERS + 1)]


def _row_ids(rows: List[Dict[str, Any]]) -> List[int]:
    ids = []
    for r in rows:
        try:
            ids.append(int(r.get("id")))
        except (TypeError, ValueError):
            ids.append(None)
    if None in ids or len(set(ids)) != len(ids):
        return list(range(1, len(rows) + 1))
    return ids


def from_legacy(kind: Kind, payload: Dict[str, Any], card_id: Optional[str] = None) -> CampaignCard:
    if kind not in DEFAULT_TITLES:
        raise CardFieldError(f"Unknown campaign kind: {kind}")
    payload = payload or {}
    params_src = payload.get("params") or {}
    rows_src = [r for r in (payload.get("rows") or []) if isinstance(r, dict)]

    if kind == "oneshot":
        params = _rename(params_src, ONESHOT_PARAM_RENAMES)
        rows = [_rename(r, ONESHOT_ROW_RENAMES) for r in rows_src]
    else:
        params = _rename(params_src, MILESTONE_PARAM_RENAMES)
        params["reward_amounts"] = _tiers(params_src, "reward")
        rows = [{**_rename(r, MILESTONE_ROW_RENAMES), "conversion_rates": _tiers(r, "cr")} for r in rows_src]

    for row, rid in zip(rows, _row_ids(rows_src)):
        row["id"] = rid

    data = {
        "title": payload.get("title") or DEFAULT_TITLES[kind],
        "parameters": params,
        "rows": rows,
    }
    return card_from_snapshot(card_id or new_card_id(), kind, data)
