import pytest
from orders_backend.engine import Engine
from orders_frontend.web import app as flask_app


@pytest.mark.e2e
def test_frontend_home_page_renders():
    eng = Engine(); eng.open("memory://")

    import orders_frontend.web as webmod
    webmod._engine = eng

    client = flask_app.test_client()
    r = client.get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore")
    assert "/api/suggest" in html
    assert 'id="q"' in html

    eng.shutdown()


@pytest.mark.e2e
def test_frontend_health():
    eng = Engine(); eng.open("memory://")

    import orders_frontend.web as webmod
    webmod._engine = eng

    client = flask_app.test_client()
    r = client.get("/health")
    assert r.status_code == 200
    data = r.get_json() or {}
    assert data.get("ok") is True

    eng.shutdown()


@pytest.mark.e2e
def test_frontend_page_script_renders_text_and_drops_stale_responses():
    eng = Engine(); eng.open("memory://")

    import orders_frontend.web as webmod
    webmod._engine = eng

    html = flask_app.test_client().get("/").data.decode("utf-8")
    assert "span.textContent = s.display_text" in html
    assert "${s.display_text}" not in html
    assert "if(seq !== reqSeq || query !== q.value) return;" in html

    eng.shutdown()
