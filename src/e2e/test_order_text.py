# src/e2e/test_order_text.py

from datetime import date

import pytest

from orders_backend.models import DisciplinaryAction, OrderItem, Person
from orders_backend.orders import (
    format_name, generate_item_text, generate_text, report_plural, statute_plural, todays_date,
)

PERSON = Person(id="p1", position="інструктора відділення", rank="капітана", name="єлісєєв євген іванович")


def _item(**kw) -> OrderItem:
    base = dict(
        id="o1",
        report_date="01.08.2025",
        report_number="18872",
        report_author_position="командира роти",
        persons=[PERSON],
        reason="запізнився на службу",
    )
    base.update(kw)
    return OrderItem(**base)


@pytest.mark.parametrize("raw,expected", [
    ("єлісєєв євген іванович", "ЄЛІСЄЄВ Євген Іванович"),
    ("  ПЕТРЕНКО   ОЛЕНА  ", "ПЕТРЕНКО Олена"),
    ("шевченко", "ШЕВЧЕНКО"),
    ("", ""),
    ("   ", ""),
])
def test_format_name(raw, expected):
    assert format_name(raw) == expected


def test_plurals():
    assert statute_plural("11") == "статті"
    assert statute_plural("11, 16") == "статей"
    assert statute_plural("11 16") == "статей"
    assert statute_plural("") == "статті"
    assert report_plural("18872") == "рапорту"
    assert report_plural("18872,18873") == "рапортів"


def test_todays_date_format():
    assert todays_date(date(2025, 8, 4)) == "04.08.2025"


def test_single_person_text():
    text = generate_item_text(_item())
    assert text == (
        "Відповідно до вимог пункту «б» статті 48 Дисциплінарного статуту Збройних Сил України "
        "за низьку виконавчу дисципліну, порушення вимог статті 11 Статуту внутрішньої служби "
        "Збройних Сил України та на підставі рапорту командира роти від 01.08.2025 № 18872 "
        "інструктора відділення капітана ЄЛІСЄЄВ Євген Іванович, який запізнився на службу, "
        "притягнути до дисциплінарної відповідальності та накласти дисциплінарне стягнення «ДОГАНА»"
    )


def test_multiple_persons_text():
    second = Person(id="p2", position="водія", rank="солдата", name="петренко олег")
    item = _item(
        order_type="multiple",
        disciplinary_action=DisciplinaryAction.SEVERE_REPRIMAND,
        violated_statutes="11, 16",
        report_number="1, 2",
        persons=[PERSON, second],
        reason="несвоєчасно прибули на заняття",
    )
    text = generate_item_text(item)
    assert text.startswith("Відповідно до вимог пункту «в» статті 48")
    assert "порушення вимог статей 11, 16 Статуту" in text
    assert "на підставі рапортів командира роти" in text
    assert "накласти дисциплінарне стягнення «СУВОРА ДОГАНА»:\n" in text
    assert text.endswith(
        "\tінструктора відділення капітана ЄЛІСЄЄВ Євген Іванович;\n"
        "\tводія солдата ПЕТРЕНКО Олег;\n"
        "\tякі несвоєчасно прибули на заняття"
    )


def test_remark_and_order_joining():
    a = _item(disciplinary_action=DisciplinaryAction.REMARK)
    b = _item(id="o2")
    text = generate_text([a, b])
    first, second = text.split("\n\n")
    assert "пункту «а»" in first and first.endswith("«ЗАУВАЖЕННЯ»")
    assert second.endswith("«ДОГАНА»")


def test_switching_to_single_keeps_first_person():
    item = _item(order_type="multiple", persons=[PERSON, Person(id="p2")])
    single = item.with_order_type("single")
    assert single.order_type == "single"
    assert single.persons == [PERSON]
