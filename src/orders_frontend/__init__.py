"""Public API for the order assistant (module-level engine)."""
from __future__ import annotations
import time
from typing import Iterable, List

from orders_backend import Engine
from orders_backend.config import MAX_SUGGESTIONS
from orders_backend.models import Suggestion

_engine: Engine | None = None


def initialize(db: str | None = None,
               presets: Iterable[str] = (),
               verbose: bool = False) -> Engine:
    """
    Open the shared engine on a store DSN ("memory://" or "json:///path").
    Any presets given are added when not already stored.
    """
    global _engine
    t0 = time.perf_counter()
    if _engine is not None:
        _engine.shutdown()

    eng = Engine()
    eng.open(db, verbose=verbose)
    known = {p.text for p in eng.presets()}
    for text in presets:
        text = text.strip()
        if text and text not in known:
            eng.add_preset(text)
            known.add(text)
    _engine = eng
    if verbose:
        print(f"[ready] init complete in {time.perf_counter() - t0:.2f}s")
    return eng


def complete(query: str, top_k: int = MAX_SUGGESTIONS) -> List[Suggestion]:
    """Return ranked suggestions (list[Suggestion])."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine.complete(query, top_k=top_k)
