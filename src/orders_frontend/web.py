from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from orders_backend.engine import Engine
from orders_backend.config import DEFAULT_DSN, MAX_SUGGESTIONS
from orders_backend.models import OrderItem

from . import initialize

app = Flask(__name__)
app.json.ensure_ascii = False
_engine: Engine | None = None


def _eng() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Run main() or assign web._engine first.")
    return _engine


def _body() -> dict | None:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _not_found(kind: str, item_id: str):
    return jsonify({"error": f"{kind} not found", "id": item_id}), 404


# ---------- API ----------
@app.get("/health")
def health():
    return jsonify({"ok": True, "version": _eng().version})


@app.get("/api/suggest")
def api_suggest():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", MAX_SUGGESTIONS, type=int)
    rows = _eng().complete(q, top_k=k)
    return jsonify([r.to_dict() for r in rows])


@app.get("/api/presets")
def api_presets():
    return jsonify([p.to_dict() for p in _eng().presets()])


@app.post("/api/presets")
def api_add_preset():
    body = _body()
    if body is None or not isinstance(body.get("text", ""), str):
        return jsonify({"error": "expected {\"text\": str}"}), 400
    preset = _eng().add_preset(body.get("text", ""))
    return jsonify(preset.to_dict()), 201


@app.put("/api/presets/<preset_id>")
def api_update_preset(preset_id: str):
    body = _body()
    if body is None or not isinstance(body.get("text"), str):
        return jsonify({"error": "expected {\"text\": str}"}), 400
    try:
        preset = _eng().update_preset(preset_id, body["text"])
    except KeyError:
        return _not_found("preset", preset_id)
    return jsonify(preset.to_dict())


@app.delete("/api/presets/<preset_id>")
def api_remove_preset(preset_id: str):
    try:
        _eng().remove_preset(preset_id)
    except KeyError:
        return _not_found("preset", preset_id)
    return "", 204


@app.get("/api/orders")
def api_orders():
    return jsonify([o.to_dict() for o in _eng().orders()])


@app.post("/api/orders")
def api_add_order():
    body = _body()
    item = OrderItem.from_dict(body) if body else OrderItem.new()
    return jsonify(_eng().add_order(item).to_dict()), 201


@app.put("/api/orders/<order_id>")
def api_update_order(order_id: str):
    body = _body()
    if body is None:
        return jsonify({"error": "expected a JSON object"}), 400
    item = OrderItem.from_dict({**body, "id": order_id})
    try:
        _eng().update_order(item)
    except KeyError:
        return _not_found("order", order_id)
    return jsonify(item.to_dict())


@app.delete("/api/orders/<order_id>")
def api_remove_order(order_id: str):
    try:
        _eng().remove_order(order_id)
    except KeyError:
        return _not_found("order", order_id)
    return "", 204


@app.get("/api/orders/<order_id>/text")
def api_order_text(order_id: str):
    try:
        text = _eng().order_text(order_id)
    except KeyError:
        return _not_found("order", order_id)
    return jsonify({"id": order_id, "text": text})


@app.get("/api/generate")
def api_generate():
    return jsonify({"text": _eng().generate_text()})


# ---------- UI ----------
@app.get("/")
def home():
    # Single page: one field with live suggestions. No external deps.
    html = r"""
<!doctype html>
<html lang="uk">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Генератор наказів • автозаповнення</title>
<style>
:root{
  --bg:#0a0a0a; --panel:#141414; --ink:#e5e5e5; --muted:#8a8a8a;
  --brand:#ef4444; --border:#262626; --active:rgba(239,68,68,.18);
}
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,Arial; }
.container{ max-width:820px; margin:24px auto; padding:0 16px }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px }
h1{ font-size:20px; margin:0 0 12px 0 }
label{ display:block; color:var(--muted); font-size:14px; margin-bottom:6px }
.field{ position:relative }
.field input{ width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b0b0b; color:var(--ink); outline:none; font-size:16px }
.field input:focus{ border-color:var(--brand) }
ul{ list-style:none; margin:4px 0 0 0; padding:0; border:1px solid var(--border); border-radius:12px;
  position:absolute; left:0; right:0; background:var(--panel); max-height:320px; overflow:auto; display:none }
li{ padding:8px 14px; cursor:pointer; display:flex; justify-content:space-between; gap:12px }
li.on{ background:var(--active) }
li small{ color:var(--muted) }
.meta{ color:var(--muted); font-size:13px; margin-top:8px }
kbd{ background:#1c1c1c; border:1px solid var(--border); padding:1px 6px; border-radius:6px }
pre{ white-space:pre-wrap; background:#0b0b0b; border:1px solid var(--border); border-radius:12px; padding:12px }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Генератор наказів про стягнення</h1>
      <label for="q">Причина стягнення</label>
      <div class="field">
        <input id="q" type="text" autocomplete="off" autofocus placeholder="напр. несвоєчасно прибув…" />
        <ul id="list"></ul>
      </div>
      <div class="meta"><kbd>↑</kbd> <kbd>↓</kbd> вибір • <kbd>Tab</kbd> вставити і продовжити • <kbd>Enter</kbd> вставити • <kbd>Esc</kbd> закрити</div>
      <h1 style="margin-top:20px">Згенерований результат</h1>
      <pre id="out">Тут з'явиться згенерований текст...</pre>
    </div>
  </div>
<script>
const q = document.querySelector("#q"), list = document.querySelector("#list"), out = document.querySelector("#out");
let items = [], active = 0, visible = false, blurTimer = null, reqSeq = 0;

function render(){
  list.style.display = visible && items.length ? "block" : "none";
  list.replaceChildren(...items.map((s,i)=>{
    const li = document.createElement("li"), span = document.createElement("span"), small = document.createElement("small");
    li.className = i===active ? "on" : "";
    li.dataset.i = String(i);
    span.textContent = s.display_text;
    small.textContent = s.kind;
    li.append(span, small);
    return li;
  }));
}
async function refresh(){
  // only the newest request for the current text may update the list
  const seq = ++reqSeq, query = q.value;
  const resp = await fetch(`/api/suggest?q=${encodeURIComponent(query)}`);
  const rows = resp.ok ? await resp.json() : [];
  if(seq !== reqSeq || query !== q.value) return;
  items = rows;
  if(active >= items.length) active = 0;
  visible = items.length > 0;
  render();
}
function accept(keepTyping){
  const s = items[active]; if(!s) return;
  reqSeq++;
  q.value = s.display_text + (keepTyping ? " " : "");
  items = []; visible = false; active = 0; render();
}
q.addEventListener("input", refresh);
q.addEventListener("focus", ()=>{ clearTimeout(blurTimer); refresh(); });
q.addEventListener("blur", ()=>{ blurTimer = setTimeout(()=>{ reqSeq++; visible = false; render(); }, 150); });
q.addEventListener("keydown", (ev)=>{
  if(!visible || !items.length || ev.ctrlKey || ev.altKey || ev.metaKey) return;
  if(ev.key === "ArrowDown"){ active = (active + 1) % items.length; }
  else if(ev.key === "ArrowUp"){ active = (active - 1 + items.length) % items.length; }
  else if(ev.key === "Tab" && !ev.shiftKey){ accept(true); }
  else if(ev.key === "Enter"){ accept(false); }
  else if(ev.key === "Escape"){ reqSeq++; visible = false; }
  else return;
  ev.preventDefault(); render();
});
list.addEventListener("mousedown", (ev)=>{
  const li = ev.target.closest("li"); if(!li) return;
  active = Number(li.dataset.i); accept(false);
});
fetch("/api/generate").then(r=>r.json()).then(d=>{ if(d.text) out.textContent = d.text; });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--db", dest="db", default=DEFAULT_DSN)  # DSN: "json:///path" or "memory://"
    ap.add_argument("--preset", action="append", default=[])
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = initialize(args.db, presets=args.preset, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
