from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter, model_validator

from feasibility.config import DECIMAL_MARK, DEFAULT_REWARD_TIERS, DEFAULT_TITLES
from feasibility.utils.math import parse_tier_count

Kind = Literal["oneshot", "milestone"]


def raw_text(v: Any) -> Any:
    """Keep user text as typed; numbers coming back from JSON become text again."""
    if v is None:
        return ""
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, int):
        return str(v)
    if isinstance(v, float):
        if v.is_integer():
            return str(int(v))
        return repr(v).replace(".", DECIMAL_MARK)
    return v


RawText = Annotated[str, BeforeValidator(raw_text)]
RawNumber = RawText
TierCount = Annotated[int, BeforeValidator(parse_tier_count)]


def fit_tiers(values: List[str], n: int) -> List[str]:
    """Truncate or pad a per-tier list to n entries."""
    return list(values[:n]) + [""] * max(0, n - len(values))


# ---------- One shot ----------

class OneShotParameters(BaseModel):
    incentive_per_passenger: RawNumber = ""
    passenger_growth_percent: RawNumber = ""
    trip_growth_percent: RawNumber = ""


class OneShotRow(BaseModel):
    id: int
    segment_name: RawText = ""
    base_audience: RawNumber = ""
    weekly_conversion_rate_percent: RawNumber = ""
    audience_share_percent: RawNumber = ""
    avg_trips_per_passenger: RawNumber = ""


class OneShotCard(BaseModel):
    id: str
    kind: Literal["oneshot"] = "oneshot"
    title: RawText = DEFAULT_TITLES["oneshot"]
    parameters: OneShotParameters = Field(default_factory=OneShotParameters)
    rows: List[OneShotRow] = Field(default_factory=lambda: [OneShotRow(id=1)])

    @model_validator(mode="after")
    def at_least_one_row(self):
        if not self.rows:
            self.rows = [OneShotRow(id=1)]
        return self


# ---------- Milestone ----------

class MilestoneParameters(BaseModel):
    reward_tier_count: TierCount = DEFAULT_REWARD_TIERS
    reward_amounts: List[RawNumber] = Field(default_factory=lambda: [""] * DEFAULT_REWARD_TIERS)
    passenger_growth_percent: RawNumber = ""
    trip_growth_percent: RawNumber = ""

    @model_validator(mode="after")
    def fit_rewards(self):
        self.reward_amounts = fit_tiers(self.reward_amounts, self.reward_tier_count)
        return self


class MilestoneRow(BaseModel):
    id: int
    segment_name: RawText = ""
    base_audience: RawNumber = ""
    conversion_rates: List[RawNumber] = Field(default_factory=lambda: [""] * DEFAULT_REWARD_TIERS)
    audience_share_percent: RawNumber = ""
    avg_trips_per_two_weeks: RawNumber = ""


class MilestoneCard(BaseModel):
    id: str
    kind: Literal["milestone"] = "milestone"
    title: RawText = DEFAULT_TITLES["milestone"]
    parameters: MilestoneParameters = Field(default_factory=MilestoneParameters)
    rows: List[MilestoneRow] = Field(default_factory=lambda: [MilestoneRow(id=1)])

    @model_validator(mode="after")
    def fit_rows(self):
        if not self.rows:
            self.rows = [MilestoneRow(id=1)]
        n = self.parameters.reward_tier_count
        for row in self.rows:
            row.conversion_rates = fit_tiers(row.conversion_rates, n)
        return self


CampaignCard = Annotated[Union[OneShotCard, MilestoneCard], Field(discriminator="kind")]
card_adapter = TypeAdapter(CampaignCard)

CARD_TYPES = {"oneshot": OneShotCard, "milestone": MilestoneCard}


def snapshot(card: CampaignCard) -> Dict[str, Any]:
    """Persisted shape of a card: {title, parameters, rows}."""
    return card.model_dump(include={"title", "parameters", "rows"})


def card_from_snapshot(card_id: str, kind: Kind, data: Dict[str, Any]) -> CampaignCard:
    return card_adapter.validate_python({**data, "id": card_id, "kind": kind})


# ---------- API bodies ----------

class CardSummary(BaseModel):
    id: str
    kind: Kind
    title: str


class NewCardIn(BaseModel):
    kind: Kind = "oneshot"


class TitleIn(BaseModel):
    text: str = ""


class FieldIn(BaseModel):
    field: str = Field(..., min_length=1)
    value: RawNumber = ""
    tier: Optional[int] = None  # 1-based, for reward_amount / conversion_rate


class LegacyImportIn(BaseModel):
    kind: Kind
    snapshot: Dict[str, Any] = Field(default_factory=dict)
