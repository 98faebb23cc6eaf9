# src/orders_backend/models.py
"""
Data models for the order assistant.

Two groups of small, focused containers live here:

- Order data: DisciplinaryAction, Person, OrderItem, AutocompletePreset and
  the Dataset that bundles everything the store holds.
- Suggestion data: SuggestionBank (derived candidates), SuggestionKind and
  Suggestion (one ranked completion).

These classes carry no business logic beyond (de)serialization. Decoding is
permissive: missing or malformed fields fall back to empty strings and
defaults instead of raising.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, List

from .config import DEFAULT_STATUTES
from .normalize import as_text


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class DisciplinaryAction(str, Enum):
    REMARK = "зауваження"
    REPRIMAND = "догана"
    SEVERE_REPRIMAND = "сувора догана"

    @classmethod
    def parse(cls, value: Any) -> "DisciplinaryAction":
        text = as_text(value)
        for member in cls:
            if text in (member.value, member.name):
                return member
        return cls.REPRIMAND


@dataclass(frozen=True, slots=True)
class Person:
    """
    One person named in an order item.

    Attributes
    ----------
    id : str
        Stable identifier inside its order item.
    position : str
        Position in the genitive case, e.g. "інструктора відділення".
    rank : str
        Military rank in the genitive case, e.g. "капітана".
    name : str
        Full name as typed; formatting happens at text generation.
    """
    id: str
    position: str = ""
    rank: str = ""
    name: str = ""

    @classmethod
    def new(cls) -> "Person":
        return cls(id=new_id())

    @classmethod
    def from_dict(cls, raw: Any) -> "Person":
        raw = raw if isinstance(raw, dict) else {}
        return cls(
            id=as_text(raw.get("id")) or new_id(),
            position=as_text(raw.get("position")),
            rank=as_text(raw.get("rank")),
            name=as_text(raw.get("name")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "position": self.position, "rank": self.rank, "name": self.name}


@dataclass(frozen=True, slots=True)
class OrderItem:
    """
    A single disciplinary order item.

    Attributes
    ----------
    order_type : str
        "single" (one person) or "multiple".
    report_author_position : str
        Who filed the report, genitive case. A free-text field.
    reason : str
        What happened. Inserted after "який"/"які". A free-text field.
    persons : list of Person
        At least one person for a fresh item; "single" keeps only the first.
    """
    id: str
    order_type: str = "single"
    report_date: str = ""
    report_number: str = ""
    report_author_position: str = ""
    disciplinary_action: DisciplinaryAction = DisciplinaryAction.REPRIMAND
    violated_statutes: str = DEFAULT_STATUTES
    persons: List[Person] = field(default_factory=list)
    reason: str = ""

    @classmethod
    def new(cls) -> "OrderItem":
        return cls(id=new_id(), persons=[Person.new()])

    @classmethod
    def from_dict(cls, raw: Any) -> "OrderItem":
        raw = raw if isinstance(raw, dict) else {}
        persons_raw = raw.get("persons")
        persons = [Person.from_dict(p) for p in persons_raw] if isinstance(persons_raw, list) else []
        order_type = "multiple" if as_text(raw.get("order_type")) == "multiple" else "single"
        statutes = raw.get("violated_statutes")
        return cls(
            id=as_text(raw.get("id")) or new_id(),
            order_type=order_type,
            report_date=as_text(raw.get("report_date")),
            report_number=as_text(raw.get("report_number")),
            report_author_position=as_text(raw.get("report_author_position")),
            disciplinary_action=DisciplinaryAction.parse(raw.get("disciplinary_action")),
            violated_statutes=DEFAULT_STATUTES if statutes is None else as_text(statutes),
            persons=persons or [Person.new()],
            reason=as_text(raw.get("reason")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "order_type": self.order_type,
            "report_date": self.report_date,
            "report_number": self.report_number,
            "report_author_position": self.report_author_position,
            "disciplinary_action": self.disciplinary_action.value,
            "violated_statutes": self.violated_statutes,
            "persons": [p.to_dict() for p in self.persons],
            "reason": self.reason,
        }

    def with_order_type(self, order_type: str) -> "OrderItem":
        if order_type == "single" and len(self.persons) > 1:
            return replace(self, order_type="single", persons=[self.persons[0]])
        return replace(self, order_type="multiple" if order_type == "multiple" else "single")


@dataclass(frozen=True, slots=True)
class AutocompletePreset:
    id: str
    text: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> "AutocompletePreset":
        raw = raw if isinstance(raw, dict) else {}
        return cls(id=as_text(raw.get("id")) or new_id(), text=as_text(raw.get("text")))

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "text": self.text}


@dataclass(slots=True)
class Dataset:
    """Everything the store holds: phrase presets plus order records."""
    presets: List[AutocompletePreset] = field(default_factory=list)
    orders: List[OrderItem] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SuggestionBank:
    """
    Candidates derived from the current dataset.

    Attributes
    ----------
    phrases : frozenset of str
        Trimmed field values longer than the phrase threshold, original case.
    words : frozenset of str
        Lowercased whitespace tokens longer than the word threshold.
    """
    phrases: FrozenSet[str] = frozenset()
    words: FrozenSet[str] = frozenset()


class SuggestionKind(str, Enum):
    WORD = "word"
    PHRASE = "phrase"


@dataclass(frozen=True, slots=True)
class Suggestion:
    """
    One ranked completion.

    display_text is the full value that replaces the field content on accept.
    For WORD suggestions it keeps the already typed leading words.
    """
    display_text: str
    kind: SuggestionKind

    def to_dict(self) -> Dict[str, str]:
        return {"display_text": self.display_text, "kind": self.kind.value}
