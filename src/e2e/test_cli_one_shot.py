import json

import pytest

import orders_frontend
from orders_frontend.__main__ import main


@pytest.mark.e2e
def test_cli_json_query(capsys):
    rc = main(["--db", "memory://", "--preset", "навчального взводу", "--q", "навч", "--json"])
    assert rc == 0
    rows = json.loads(capsys.readouterr().out)
    assert {"display_text": "навчального взводу", "kind": "phrase"} in rows


@pytest.mark.e2e
def test_cli_table_without_matches(capsys):
    rc = main(["--db", "memory://", "--q", "щось"])
    assert rc == 0
    assert "(no suggestions)" in capsys.readouterr().out


@pytest.mark.e2e
def test_module_api_requires_initialize(tmp_path):
    orders_frontend._engine = None
    with pytest.raises(RuntimeError):
        orders_frontend.complete("навч")
    eng = orders_frontend.initialize(f"json:///{tmp_path / 'd.json'}", presets=["командира роти", "командира роти"])
    try:
        assert [p.text for p in eng.presets()] == ["командира роти"]
        assert orders_frontend.complete("команд")
    finally:
        eng.shutdown()
