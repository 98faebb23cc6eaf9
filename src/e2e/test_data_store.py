import json
from pathlib import Path

import pytest

from orders_backend.DB import make_store


def _dsns(tmp_path: Path):
    return ["memory://", f"json:///{tmp_path / 'kv.json'}"]


@pytest.mark.e2e
def test_keys_and_delete_on_every_backend(tmp_path: Path):
    for dsn in _dsns(tmp_path):
        store = make_store(dsn)
        store.set("orders", [{"id": "a"}])
        store.set("autocomplete-presets", [])
        assert sorted(store.keys()) == ["autocomplete-presets", "orders"]

        store.delete("orders")
        store.delete("missing")
        assert list(store.keys()) == ["autocomplete-presets"]
        assert store.get("orders", "gone") == "gone"
        store.close()


@pytest.mark.e2e
def test_json_delete_of_null_value_reaches_disk(tmp_path: Path):
    path = tmp_path / "kv.json"
    store = make_store(f"json:///{path}")
    store.set("draft", None)
    store.set("orders", [])
    assert json.loads(path.read_text(encoding="utf-8")) == {"draft": None, "orders": []}

    store.delete("draft")
    assert json.loads(path.read_text(encoding="utf-8")) == {"orders": []}
    store.close()

    reopened = make_store(f"json:///{path}")
    assert list(reopened.keys()) == ["orders"]


@pytest.mark.e2e
def test_unknown_dsn_is_rejected():
    with pytest.raises(ValueError):
        make_store("sqlite:///x.db")
    with pytest.raises(ValueError):
        make_store("json:///")
