# feasibility/campaigns/state.py
from __future__ import annotations
import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from feasibility.config import STATE_FILE
from feasibility.models.io import CampaignCard, card_from_snapshot, snapshot

log = logging.getLogger("state")

IndexEntry = Dict[str, str]  # {"id": ..., "kind": ...}


class CampaignStore(Protocol):
    """Where card snapshots live. The workspace never touches storage directly."""

    def load_index(self) -> Optional[List[IndexEntry]]: ...
    def save_index(self, entries: List[IndexEntry]) -> None: ...
    def load(self, card_id: str) -> Optional[CampaignCard]: ...
    def save(self, card_id: str, card: CampaignCard) -> None: ...
    def delete(self, card_id: str) -> None: ...


def _restore(card_id: str, record: Optional[Dict[str, Any]]) -> Optional[CampaignCard]:
    if not record:
        return None
    try:
        return card_from_snapshot(card_id, record["kind"], record.get("snapshot") or {})
    except (AttributeError, KeyError, TypeError, ValidationError):
        log.exception("Discarding unreadable snapshot for card %s", card_id)
        return None


class JsonFileStore:
    """
    All cards in one JSON document:
      {"cards": [{"id", "kind"}, ...],
       "snapshots": {"<id>": {"kind", "saved_at", "snapshot": {title, parameters, rows}}}}

    Every read-modify-write runs under one lock and the file is replaced
    atomically. An unreadable file is moved aside to "<name>.corrupt" before
    anything new is written.
    """

    def __init__(self, path: Path = STATE_FILE):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        txt = self.path.read_text(encoding="utf-8")
        try:
            doc = json.loads(txt)
        except json.JSONDecodeError:
            doc = None
        if isinstance(doc, dict):
            return doc
        aside = self.path.with_name(self.path.name + ".corrupt")
        os.replace(self.path, aside)
        log.error("State file %s is not a JSON object; moved to %s, starting empty", self.path, aside)
        return {}

    def _save(self, doc: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=self.path.name + ".", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def load_index(self) -> Optional[List[IndexEntry]]:
        """None when no index was ever saved; [] when every card was deleted."""
        with self._lock:
            entries = self._load().get("cards")
        if not isinstance(entries, list):
            return None
        return [e for e in entries if isinstance(e, dict) and e.get("id") and e.get("kind")]

    def save_index(self, entries: List[IndexEntry]) -> None:
        with self._lock:
            doc = self._load()
            doc["cards"] = [{"id": str(e["id"]), "kind": e["kind"]} for e in entries]
            self._save(doc)

    def load(self, card_id: str) -> Optional[CampaignCard]:
        with self._lock:
            record = self._load().get("snapshots", {}).get(str(card_id))
        return _restore(card_id, record)

    def save(self, card_id: str, card: CampaignCard) -> None:
        with self._lock:
            doc = self._load()
            doc.setdefault("snapshots", {})[str(card_id)] = {
                "kind": card.kind,
                "saved_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
                "snapshot": snapshot(card),
            }
            self._save(doc)

    def delete(self, card_id: str) -> None:
        with self._lock:
            doc = self._load()
            if doc.get("snapshots", {}).pop(str(card_id), None) is not None:
                self._save(doc)


class MemoryStore:
    """Process-local store; snapshots are copied in and out."""

    def __init__(self):
        self.index: Optional[List[IndexEntry]] = None
        self.records: Dict[str, Dict[str, Any]] = {}

    def load_index(self) -> Optional[List[IndexEntry]]:
        if self.index is None:
            return None
        return [dict(e) for e in self.index]

    def save_index(self, entries: List[IndexEntry]) -> None:
        self.index = [{"id": str(e["id"]), "kind": e["kind"]} for e in entries]

    def load(self, card_id: str) -> Optional[CampaignCard]:
        return _restore(card_id, self.records.get(str(card_id)))

    def save(self, card_id: str, card: CampaignCard) -> None:
        self.records[str(card_id)] = {"kind": card.kind, "snapshot": snapshot(card)}

    def delete(self, card_id: str) -> None:
        self.records.pop(str(card_id), None)
