# feasibility/campaigns/workspace.py
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Optional

from feasibility.campaigns import cards as ops
from feasibility.campaigns.state import CampaignStore
from feasibility.models.io import CARD_TYPES, CampaignCard, Kind
from feasibility.services.engine import compute_card

log = logging.getLogger("workspace")


class Workspace:
    """
    Ordered list of campaign cards backed by a CampaignStore.

    Every edit saves the edited card; adding or deleting a card also saves the
    index. Storage failures are logged and ignored, the in-memory cards stay
    authoritative.
    """

    def __init__(self, store: CampaignStore):
        self.store = store
        self._cards: List[CampaignCard] = []
        self._restore()

    # ---------- persistence ----------

    def _guard(self, what: str, fn: Callable[..., Any], *args) -> Any:
        try:
            return fn(*args)
        except Exception:
            log.exception("Storage %s failed", what)
            return None

    def _restore(self) -> None:
        entries = self._guard("index load", self.store.load_index)
        if entries is None:
            # nothing ever stored: start with one blank card
            self._cards.append(ops.new_card("oneshot"))
            self._save_index()
            self._save(self._cards[0])
            log.info("Workspace started fresh")
            return
        for e in entries:
            card_id, kind = str(e["id"]), e["kind"]
            if kind not in CARD_TYPES:
                log.warning("Skipping card %s of unknown kind %r", card_id, kind)
                continue
            if any(c.id == card_id for c in self._cards):
                log.warning("Duplicate card id %s in index; keeping the first", card_id)
                continue
            card = self._guard(f"load of {card_id}", self.store.load, card_id)
            if card is None or card.kind != kind:
                card = ops.new_card(kind, card_id)
            self._cards.append(card)
        log.info("Workspace ready with %d card(s)", len(self._cards))

    def _save(self, card: CampaignCard) -> None:
        self._guard(f"save of {card.id}", self.store.save, card.id, card)

    def _save_index(self) -> None:
        self._guard("index save", self.store.save_index, [{"id": c.id, "kind": c.kind} for c in self._cards])

    # ---------- cards ----------

    @property
    def cards(self) -> List[CampaignCard]:
        return list(self._cards)

    def get(self, card_id: str) -> CampaignCard:
        for card in self._cards:
            if card.id == card_id:
                return card
        raise KeyError(card_id)

    def add_card(self, kind: Kind = "oneshot") -> CampaignCard:
        card = ops.new_card(kind)
        while any(c.id == card.id for c in self._cards):
            card = ops.new_card(kind)
        self._cards.append(card)
        self._save_index()
        self._save(card)
        return card

    def add_existing(self, card: CampaignCard) -> CampaignCard:
        """Append an already built card (e.g. an imported one) under a fresh id if needed."""
        if any(c.id == card.id for c in self._cards):
            card = card.model_copy(update={"id": ops.new_card_id()})
        self._cards.append(card)
        self._save_index()
        self._save(card)
        return card

    def delete_card(self, card_id: str) -> None:
        card = self.get(card_id)
        self._cards.remove(card)
        self._save_index()
        self._guard(f"delete of {card_id}", self.store.delete, card_id)

    # ---------- edits ----------

    def _edit(self, card_id: str, op: Callable[..., CampaignCard], *args) -> CampaignCard:
        card = op(self.get(card_id), *args)
        self._save(card)
        return card

    def set_title(self, card_id: str, text: str) -> CampaignCard:
        return self._edit(card_id, ops.set_title, text)

    def set_parameter(self, card_id: str, field: str, text: Any, tier: Optional[int] = None) -> CampaignCard:
        return self._edit(card_id, ops.set_parameter, field, text, tier)

    def set_row_field(self, card_id: str, row_id: int, field: str, text: Any,
                      tier: Optional[int] = None) -> CampaignCard:
        return self._edit(card_id, ops.set_row_field, row_id, field, text, tier)

    def add_row(self, card_id: str) -> CampaignCard:
        return self._edit(card_id, ops.add_row)

    def remove_last_row(self, card_id: str) -> CampaignCard:
        return self._edit(card_id, ops.remove_last_row)

    def view(self, card_id: str) -> Dict[str, Any]:
        return compute_card(self.get(card_id))
