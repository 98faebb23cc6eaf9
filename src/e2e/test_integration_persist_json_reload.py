import json
from dataclasses import replace
from pathlib import Path

import pytest

from orders_backend import Engine
from orders_backend.models import DisciplinaryAction, OrderItem, Person


@pytest.mark.e2e
def test_persist_json_and_reload(tmp_path: Path):
    path = tmp_path / "data" / "orders.json"
    dsn = f"json:///{path}"

    e1 = Engine()
    e1.open(dsn)
    e1.add_preset("навчального взводу")
    item = replace(
        OrderItem.new(),
        order_type="multiple",
        disciplinary_action=DisciplinaryAction.SEVERE_REPRIMAND,
        persons=[Person(id="p1", position="інструктора відділення", rank="капітана", name="Єлісєєв Євген")],
        reason="несвоєчасно прибули на заняття",
    )
    e1.add_order(item)
    e1.shutdown()

    assert path.exists()
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["autocomplete-presets"][0]["text"] == "навчального взводу"
    assert raw["orders"][0]["disciplinary_action"] == "сувора догана"

    e2 = Engine()
    try:
        e2.open(dsn)
        assert [p.text for p in e2.presets()] == ["навчального взводу"]
        assert e2.orders() == [item]
        rows = e2.complete("несвоєч")
        assert rows and rows[-1].display_text == "несвоєчасно прибули на заняття"
    finally:
        e2.shutdown()


@pytest.mark.e2e
def test_corrupt_store_opens_empty(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    eng = Engine()
    try:
        eng.open(f"json:///{path}")
        assert eng.presets() == [] and eng.orders() == []
        eng.add_preset("командира роти")
        assert json.loads(path.read_text(encoding="utf-8"))["autocomplete-presets"][0]["text"] == "командира роти"
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_malformed_records_are_coerced(tmp_path: Path):
    path = tmp_path / "odd.json"
    path.write_text(json.dumps({
        "autocomplete-presets": [{"id": "x", "text": None}, "garbage"],
        "orders": [{"reason": 42, "persons": "nobody", "disciplinary_action": "???"}],
    }), encoding="utf-8")
    eng = Engine()
    try:
        eng.open(f"json:///{path}")
        presets = eng.presets()
        assert [p.text for p in presets] == ["", ""]
        (order,) = eng.orders()
        assert order.reason == "42"
        assert order.disciplinary_action is DisciplinaryAction.REPRIMAND
        assert len(order.persons) == 1
        assert eng.complete("42") == []
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_failed_write_leaves_dataset_and_file_untouched(tmp_path: Path):
    path = tmp_path / "data.json"
    eng = Engine()
    try:
        eng.open(f"json:///{path}")
        eng.add_preset("командира роти")
        assert eng.complete("навч") == []

        blocker = tmp_path / "data.json.tmp"
        blocker.mkdir()
        with pytest.raises(OSError):
            eng.add_preset("навчального взводу")

        assert [p.text for p in eng.presets()] == ["командира роти"]
        assert eng.complete("навч") == []
        assert [r.display_text for r in eng.complete("команд")] == ["командира", "командира роти"]

        blocker.rmdir()
        eng.add_order(OrderItem.new())
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert [p["text"] for p in raw["autocomplete-presets"]] == ["командира роти"]
        assert len(raw["orders"]) == 1
        assert eng.complete("навч") == []
    finally:
        eng.shutdown()
