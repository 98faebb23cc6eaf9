"""
Order text generator.

Turns OrderItem records into the Ukrainian disciplinary-order wording. All
functions are pure string formatting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional

from .models import DisciplinaryAction, OrderItem, Person


@dataclass(frozen=True)
class ActionDetails:
    label: str
    statute: str  # point of article 48 of the Disciplinary Statute


DISCIPLINARY_ACTIONS: Dict[DisciplinaryAction, ActionDetails] = {
    DisciplinaryAction.REMARK: ActionDetails("Зауваження", "а"),
    DisciplinaryAction.REPRIMAND: ActionDetails("Догана", "б"),
    DisciplinaryAction.SEVERE_REPRIMAND: ActionDetails("Сувора догана", "в"),
}


def format_name(full_name: str) -> str:
    """
    LASTNAME Firstname Patronymic.

    >>> format_name("  єлісєєв євген іванович ")
    'ЄЛІСЄЄВ Євген Іванович'
    """
    parts = (full_name or "").split()
    if not parts:
        return ""
    last = parts[0].upper()
    given = " ".join(p[:1].upper() + p[1:].lower() for p in parts[1:])
    return f"{last} {given}".strip()


def todays_date(today: Optional[date] = None) -> str:
    """dd.mm.yyyy"""
    return (today or date.today()).strftime("%d.%m.%Y")


def statute_plural(statutes: str) -> str:
    count = len([s for s in re.split(r"[\s,]+", statutes or "") if s])
    return "статей" if count > 1 else "статті"


def report_plural(report_numbers: str) -> str:
    count = len([s for s in (report_numbers or "").split(",") if s])
    return "рапортів" if count > 1 else "рапорту"


def _intro(item: OrderItem, point: str) -> str:
    return (
        f"Відповідно до вимог пункту «{point}» статті 48 Дисциплінарного статуту "
        f"Збройних Сил України за низьку виконавчу дисципліну, порушення вимог "
        f"{statute_plural(item.violated_statutes)} {item.violated_statutes} "
        f"Статуту внутрішньої служби Збройних Сил України та на підставі "
        f"{report_plural(item.report_number)} {item.report_author_position} "
        f"від {item.report_date} № {item.report_number}"
    )


def generate_item_text(item: OrderItem) -> str:
    details = DISCIPLINARY_ACTIONS.get(item.disciplinary_action)
    point = details.statute if details else ""
    action = details.label.upper() if details else ""
    intro = _intro(item, point)
    penalty = f"притягнути до дисциплінарної відповідальності та накласти дисциплінарне стягнення «{action}»"

    if item.order_type == "single":
        person = item.persons[0] if item.persons else Person(id="")
        return (
            f"{intro} {person.position} {person.rank} {format_name(person.name)}, "
            f"який {item.reason}, {penalty}"
        )

    persons = "\n".join(f"\t{p.position} {p.rank} {format_name(p.name)};" for p in item.persons)
    return f"{intro} {penalty}:\n{persons}\n\tякі {item.reason}"


def generate_text(orders: Iterable[OrderItem]) -> str:
    return "\n\n".join(generate_item_text(o) for o in orders)
