"""
Order Assistant Backend

Builds disciplinary-order text from structured fields and offers typing
assistance for the free-text fields. Suggestions come from a bank of
previously entered values: whole phrases and the single words inside them.

The package is split by concern:
- Data models and (de)serialization
- Suggestion bank building and suggestion ranking
- Per-field selection sessions (keyboard navigation, acceptance)
- Order text generation
- Key-value storage (memory or JSON file)

Example Usage:
    from orders_backend import Engine

    eng = Engine()
    eng.open("memory://")
    eng.add_preset("навчального взводу")

    for s in eng.complete("навч"):
        print(s.kind.value, s.display_text)
"""

# src/orders_backend/__init__.py
from .engine import Engine  # re-export
from .bank import build as build_bank
from .search import compute_suggestions
from .session import AutocompleteSession, KeyEvent

__version__ = "1.0.0"
__all__ = ["Engine", "build_bank", "compute_suggestions", "AutocompleteSession", "KeyEvent"]
