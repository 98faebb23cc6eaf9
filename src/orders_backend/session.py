# src/orders_backend/session.py
"""
Per-field autocomplete session.

A session owns the transient UI state of one editable field: the current
suggestion list, which entry is highlighted and whether the list is shown.
Hosts (the Tk GUI, tests) feed it text changes, key presses and focus
events; it answers with plain data plus a flag saying whether a key was
consumed.

States
------
idle    nothing shown (visible=False, suggestions may be empty)
active  list shown, one entry highlighted by active_index
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .config import BLUR_GRACE_MS, MAX_SUGGESTIONS
from .models import Suggestion, SuggestionBank
from .normalize import as_text
from .search import compute_suggestions

log = logging.getLogger(__name__)

# Scheduler hooks, Tk-style: schedule(ms, fn) -> handle, cancel(handle)
Schedule = Callable[[int, Callable[[], None]], Any]
Cancel = Callable[[Any], None]


@dataclass(frozen=True)
class KeyEvent:
    """Key identity (DOM names: ArrowUp, ArrowDown, Tab, Enter, Escape) and modifiers."""
    key: str
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False


class AutocompleteSession:
    def __init__(
        self,
        field_id: str,
        bank_provider: Callable[[], SuggestionBank],
        *,
        on_accept: Optional[Callable[[str], None]] = None,
        schedule: Optional[Schedule] = None,
        cancel: Optional[Cancel] = None,
        limit: int = MAX_SUGGESTIONS,
        blur_delay_ms: int = BLUR_GRACE_MS,
    ) -> None:
        self.field_id = field_id
        self._bank_provider = bank_provider
        self._on_accept = on_accept
        self._schedule = schedule
        self._cancel = cancel
        self._limit = limit
        self._blur_delay_ms = blur_delay_ms
        self._pending_hide: Any = None
        self._dismissed = False

        self.text: str = ""
        self.suggestions: List[Suggestion] = []
        self.active_index: int = 0
        self.visible: bool = False

    # ------------- state -------------

    @property
    def active(self) -> bool:
        return self.visible and bool(self.suggestions)

    @property
    def active_suggestion(self) -> Optional[Suggestion]:
        if not self.suggestions:
            return None
        self._clamp()
        return self.suggestions[self.active_index]

    def _clamp(self) -> None:
        if not 0 <= self.active_index < len(self.suggestions):
            self.active_index = 0

    def _recompute(self) -> None:
        self.suggestions = compute_suggestions(self.text, self._bank_provider(), limit=self._limit)
        if self.suggestions:
            self._clamp()
            self.visible = True
        else:
            self.clear()

    def clear(self) -> None:
        """Go idle and drop the list."""
        self.suggestions = []
        self.active_index = 0
        self.visible = False

    # ------------- host notifications -------------

    def update(self, text: Any) -> None:
        """Field value changed."""
        self.text = as_text(text)
        self._dismissed = False
        self._recompute()

    def refresh(self) -> None:
        """
        Dataset changed; recompute for the current text unless the user closed
        the list (Escape, blur, acceptance) since the last edit.
        """
        if self.text and not self._dismissed:
            self._recompute()

    def focus(self, text: Any = None) -> None:
        self.cancel_pending_hide()
        if text is not None:
            self.text = as_text(text)
        self._dismissed = False
        self._recompute()

    def blur(self) -> None:
        """Hide after the grace delay; a pick() before it fires still lands."""
        self.cancel_pending_hide()
        if self._schedule is None:
            self._hide_after_blur()
            return
        self._pending_hide = self._schedule(self._blur_delay_ms, self._hide_after_blur)

    def _hide_after_blur(self) -> None:
        self._pending_hide = None
        self._dismissed = True
        self.clear()

    def cancel_pending_hide(self) -> None:
        """Drop a blur hide that has not fired yet (host widget going away)."""
        if self._pending_hide is not None and self._cancel is not None:
            self._cancel(self._pending_hide)
        self._pending_hide = None

    # ------------- navigation -------------

    def next(self) -> None:
        if not self.active:
            return
        self._clamp()
        self.active_index = (self.active_index + 1) % len(self.suggestions)

    def previous(self) -> None:
        if not self.active:
            return
        self._clamp()
        self.active_index = (self.active_index - 1) % len(self.suggestions)

    def dismiss(self) -> None:
        """Escape: hide the list, keep the text."""
        self.visible = False
        self._dismissed = True

    # ------------- acceptance -------------

    def accept(self, *, keep_typing: bool = False) -> Optional[str]:
        """
        Replace the field text with the active suggestion.

        keep_typing=True appends a trailing space (Tab), otherwise the value is
        final (Enter, click). Returns the new text, or None when idle.
        """
        chosen = self.active_suggestion if self.active else None
        if chosen is None:
            return None
        value = chosen.display_text + (" " if keep_typing else "")
        self.text = value
        self._dismissed = True
        self.clear()
        log.debug("field=%s accepted %r (%s)", self.field_id, value, chosen.kind.value)
        if self._on_accept is not None:
            self._on_accept(value)
        return value

    def pick(self, index: int) -> Optional[str]:
        """Pointer selection of a specific entry (final acceptance)."""
        self.cancel_pending_hide()
        if not self.suggestions or not 0 <= index < len(self.suggestions):
            return None
        self.visible = True
        self.active_index = index
        return self.accept()

    def handle_key(self, event: KeyEvent) -> bool:
        """
        Apply a key press. Returns True when the key was consumed and the host
        should suppress its default editing behaviour.
        """
        if not self.active:
            return False
        if event.ctrl or event.alt or event.meta:
            return False
        key = event.key
        if key == "ArrowDown":
            self.next()
        elif key == "ArrowUp":
            self.previous()
        elif key == "Tab":
            if event.shift:
                return False
            self.accept(keep_typing=True)
        elif key == "Enter":
            self.accept()
        elif key == "Escape":
            self.dismiss()
        else:
            return False
        return True
