# app.py
# CustomTkinter GUI for the order assistant (dark theme).
# - Order items: navigate, add, remove; edits persist through the Engine.
# - Free-text fields complete from stored phrases and words (Tab/Enter/arrows/Esc).
# - Phrase presets panel; generated order text with copy button; event log.

from __future__ import annotations
import argparse
from dataclasses import replace
from typing import Callable, List, Optional

import customtkinter as ctk

from orders_backend import Engine, KeyEvent
from orders_backend.config import DEFAULT_DSN
from orders_backend.models import DisciplinaryAction, OrderItem, Person
from orders_backend.orders import DISCIPLINARY_ACTIONS, todays_date


# -------------------- small helpers --------------------

_TK_KEYS = {"Up": "ArrowUp", "Down": "ArrowDown", "Tab": "Tab", "ISO_Left_Tab": "Tab",
            "Return": "Enter", "KP_Enter": "Enter", "Escape": "Escape"}


def key_event_from_tk(event) -> Optional[KeyEvent]:
    """Translate a Tk key event into a KeyEvent; None for keys the list ignores."""
    key = _TK_KEYS.get(event.keysym)
    if key is None:
        return None
    state = int(getattr(event, "state", 0))
    return KeyEvent(
        key=key,
        shift=bool(state & 0x0001) or event.keysym == "ISO_Left_Tab",
        ctrl=bool(state & 0x0004),
        alt=bool(state & 0x0008),
    )


# -------------------- autocomplete field --------------------

class SuggestField(ctk.CTkFrame):
    """Labelled entry with a suggestion list driven by an AutocompleteSession."""

    def __init__(self, master, engine: Engine, field_id: str, label: str,
                 value: str, on_change: Callable[[str], None], placeholder: str = "") -> None:
        super().__init__(master, fg_color="transparent")
        self._engine = engine
        self._field_id = field_id
        self._on_change = on_change

        ctk.CTkLabel(self, text=label, anchor="w").pack(side="top", fill="x")
        self.entry = ctk.CTkEntry(self, placeholder_text=placeholder)
        self.entry.pack(side="top", fill="x")
        if value:
            self.entry.insert(0, value)

        self.listbox = ctk.CTkFrame(self, corner_radius=8)

        self.session = engine.session(
            field_id,
            on_accept=self._accepted,
            schedule=lambda ms, fn: self.after(ms, lambda: (fn(), self._render())),
            cancel=self.after_cancel,
        )

        self.entry.bind("<KeyPress>", self._on_key_press)
        self.entry.bind("<KeyRelease>", self._on_key_release)
        self.entry.bind("<FocusIn>", self._on_focus_in)
        self.entry.bind("<FocusOut>", self._on_focus_out)

    # --------- events ---------

    def _on_key_press(self, event):
        ev = key_event_from_tk(event)
        if ev is not None and self.session.handle_key(ev):
            self._render()
            return "break"
        return None

    def _on_key_release(self, event) -> None:
        if event.keysym in _TK_KEYS:
            return
        text = self.entry.get()
        if text != self.session.text:
            self._on_change(text)
        self.session.update(text)
        self._render()

    def _on_focus_in(self, _ev=None) -> None:
        self.session.focus(self.entry.get())
        self._render()

    def _on_focus_out(self, _ev=None) -> None:
        self.session.blur()
        self._render()

    def _accepted(self, value: str) -> None:
        self.entry.delete(0, "end")
        self.entry.insert(0, value)
        self.entry.icursor("end")
        self._on_change(value)

    # --------- view ---------

    def _render(self) -> None:
        for w in self.listbox.winfo_children():
            w.destroy()
        s = self.session
        if not (s.visible and s.suggestions):
            self.listbox.pack_forget()
            return
        self.listbox.pack(side="top", fill="x", pady=(2, 0))
        for i, sug in enumerate(s.suggestions):
            on = i == s.active_index
            btn = ctk.CTkButton(
                self.listbox, text=sug.display_text, anchor="w", height=24,
                fg_color=("gray75", "gray25") if on else "transparent",
                command=lambda i=i: (self.session.pick(i), self._render()),
            )
            btn.pack(fill="x", padx=4, pady=1)

    def destroy(self) -> None:
        self.session.cancel_pending_hide()
        self._engine.drop_session(self._field_id)
        super().destroy()


# -------------------- main app --------------------

class OrderAssistantApp(ctk.CTk):
    """Dark-themed order form; free-text fields complete from stored data."""

    def __init__(self, engine: Engine) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Генератор наказів про стягнення")
        self.geometry("1100x760")
        self.minsize(960, 640)

        self.engine = engine
        if not engine.orders():
            engine.add_order()
        self._current = 0

        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=2)
        self.grid_rowconfigure(1, weight=1)

        self._build_header()
        self._build_output()
        self._build_presets()
        self._build_form()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, columnspan=2, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(header, text="Генератор наказів", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10)

        nav = ctk.CTkFrame(header, fg_color="transparent")
        nav.grid(row=0, column=2, sticky="e", padx=12)
        ctk.CTkButton(nav, text="◀", width=36, command=lambda: self._goto(self._current - 1)).pack(side="left")
        self.lbl_pos = ctk.CTkLabel(nav, text="", width=110)
        self.lbl_pos.pack(side="left", padx=6)
        ctk.CTkButton(nav, text="▶", width=36, command=lambda: self._goto(self._current + 1)).pack(side="left")
        ctk.CTkButton(nav, text="Новий", width=80, command=self._add_order).pack(side="left", padx=(12, 4))
        ctk.CTkButton(nav, text="Видалити", width=80, fg_color="#b91c1c",
                      command=self._remove_order).pack(side="left")

    def _build_form(self) -> None:
        self.form = ctk.CTkScrollableFrame(self, corner_radius=10)
        self.form.grid(row=1, column=0, rowspan=2, sticky="nsew", padx=(12, 6), pady=(6, 12))
        self._render_form()

    def _build_output(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=1, column=1, sticky="nsew", padx=(6, 12), pady=6)
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Згенерований результат").grid(row=0, column=0, sticky="w", padx=12, pady=(10, 2))
        ctk.CTkButton(frame, text="Скопіювати все", width=120, command=self._copy_all).grid(
            row=0, column=1, sticky="e", padx=12, pady=(10, 2))
        self.txt_output = ctk.CTkTextbox(frame, wrap="word", font=self.font_mono)
        self.txt_output.grid(row=1, column=0, columnspan=2, sticky="nsew", padx=12, pady=(0, 12))
        self.txt_output.configure(state="disabled")

    def _build_presets(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=2, column=1, sticky="nsew", padx=(6, 12), pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(frame, text="Шаблони автозаповнення").grid(row=0, column=0, columnspan=2,
                                                                sticky="w", padx=12, pady=(10, 2))
        self.entry_preset = ctk.CTkEntry(frame, placeholder_text="напр. навчального взводу...")
        self.entry_preset.grid(row=1, column=0, sticky="ew", padx=(12, 6), pady=6)
        self.entry_preset.bind("<Return>", lambda e: (self._add_preset(), "break")[1])
        ctk.CTkButton(frame, text="Додати", width=80, command=self._add_preset).grid(row=1, column=1, padx=(0, 12))

        self.preset_list = ctk.CTkScrollableFrame(frame, height=120)
        self.preset_list.grid(row=2, column=0, columnspan=2, sticky="nsew", padx=12, pady=(0, 6))

        self.txt_log = ctk.CTkTextbox(frame, height=70, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=3, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))
        self._render_presets()
        self._log("GUI ready.")

    # --------- form rendering ---------

    @property
    def order(self) -> OrderItem:
        return self.engine.orders()[self._current]

    def _render_form(self) -> None:
        for w in self.form.winfo_children():
            w.destroy()
        orders = self.engine.orders()
        self._current = max(0, min(self._current, len(orders) - 1))
        self.lbl_pos.configure(text=f"Пункт {self._current + 1} / {len(orders)}")
        item = self.order

        kind = ctk.CTkSegmentedButton(
            self.form, values=["Одна особа", "Декілька осіб"],
            command=lambda v: self._set_type("single" if v == "Одна особа" else "multiple"),
        )
        kind.set("Одна особа" if item.order_type == "single" else "Декілька осіб")
        kind.pack(anchor="w", pady=(4, 8))

        SuggestField(self.form, self.engine, f"{item.id}:report_author_position",
                     "Посада автора рапорту (в родовому відмінку)", item.report_author_position,
                     lambda v: self._patch(report_author_position=v),
                     placeholder="начальника штабу – заступника начальника...").pack(fill="x", pady=4)

        row = ctk.CTkFrame(self.form, fg_color="transparent")
        row.pack(fill="x", pady=4)
        self._plain_entry(row, "Дата рапорту", item.report_date, "report_date", "01.08.2025").pack(side="left", expand=True, fill="x")
        ctk.CTkButton(row, text="Сьогодні", width=80,
                      command=lambda: (self._patch(report_date=todays_date()), self._render_form())).pack(side="left", padx=6, anchor="s")
        self._plain_entry(row, "Номер рапорту(ів)", item.report_number, "report_number", "18872").pack(side="left", expand=True, fill="x")

        row = ctk.CTkFrame(self.form, fg_color="transparent")
        row.pack(fill="x", pady=4)
        labels = {DISCIPLINARY_ACTIONS[a].label: a for a in DisciplinaryAction}
        menu = ctk.CTkOptionMenu(row, values=list(labels),
                                 command=lambda v: self._patch(disciplinary_action=labels[v]))
        menu.set(DISCIPLINARY_ACTIONS[item.disciplinary_action].label)
        menu.pack(side="left", padx=(0, 6), anchor="s")
        self._plain_entry(row, "Порушені статті статуту", item.violated_statutes, "violated_statutes", "11, 16").pack(side="left", expand=True, fill="x")

        SuggestField(self.form, self.engine, f"{item.id}:reason", "Причина стягнення", item.reason,
                     lambda v: self._patch(reason=v),
                     placeholder="напр. неналежно виконував свої службові обов’язки...").pack(fill="x", pady=4)

        for person in item.persons:
            self._render_person(item, person)
        if item.order_type == "multiple":
            ctk.CTkButton(self.form, text="Додати особу", command=self._add_person).pack(anchor="w", pady=8)

        self._refresh_output()

    def _render_person(self, item: OrderItem, person: Person) -> None:
        box = ctk.CTkFrame(self.form, corner_radius=8)
        box.pack(fill="x", pady=6)
        for name, label, ph in (("position", "Посада (в родовому)", "інструктора відділення..."),
                                ("rank", "Звання", "капітана"),
                                ("name", "Прізвище І. П.", "ЄЛІСЄЄВ Євген Іванович")):
            SuggestField(box, self.engine, f"{item.id}:{person.id}:{name}", label, getattr(person, name),
                         lambda v, pid=person.id, f=name: self._patch_person(pid, **{f: v}),
                         placeholder=ph).pack(fill="x", padx=8, pady=2)
        if item.order_type == "multiple" and len(item.persons) > 1:
            ctk.CTkButton(box, text="Видалити особу", fg_color="#b91c1c", width=120,
                          command=lambda pid=person.id: self._remove_person(pid)).pack(anchor="e", padx=8, pady=4)

    def _plain_entry(self, master, label: str, value: str, attr: str, placeholder: str):
        frame = ctk.CTkFrame(master, fg_color="transparent")
        ctk.CTkLabel(frame, text=label, anchor="w").pack(fill="x")
        entry = ctk.CTkEntry(frame, placeholder_text=placeholder)
        entry.pack(fill="x")
        if value:
            entry.insert(0, value)
        entry.bind("<KeyRelease>", lambda e: self._patch(**{attr: entry.get()}))
        return frame

    def _render_presets(self) -> None:
        for w in self.preset_list.winfo_children():
            w.destroy()
        for preset in self.engine.presets():
            row = ctk.CTkFrame(self.preset_list, fg_color="transparent")
            row.pack(fill="x", pady=1)
            ctk.CTkLabel(row, text=preset.text, anchor="w").pack(side="left", fill="x", expand=True)
            ctk.CTkButton(row, text="✕", width=28, fg_color="#b91c1c",
                          command=lambda pid=preset.id: self._remove_preset(pid)).pack(side="right")

    # --------- actions ---------

    def _patch(self, **changes) -> None:
        self.engine.update_order(replace(self.order, **changes))
        self._refresh_output()

    def _patch_person(self, person_id: str, **changes) -> None:
        persons: List[Person] = [replace(p, **changes) if p.id == person_id else p for p in self.order.persons]
        self._patch(persons=persons)

    def _set_type(self, order_type: str) -> None:
        self.engine.update_order(self.order.with_order_type(order_type))
        self._render_form()

    def _add_person(self) -> None:
        self._patch(persons=[*self.order.persons, Person.new()])
        self._render_form()

    def _remove_person(self, person_id: str) -> None:
        self._patch(persons=[p for p in self.order.persons if p.id != person_id])
        self._render_form()

    def _goto(self, index: int) -> None:
        if 0 <= index < len(self.engine.orders()):
            self._current = index
            self._render_form()

    def _add_order(self) -> None:
        self.engine.add_order()
        self._current = len(self.engine.orders()) - 1
        self._log("Order item added.")
        self._render_form()

    def _remove_order(self) -> None:
        if len(self.engine.orders()) <= 1:
            return
        self.engine.remove_order(self.order.id)
        self._log("Order item removed.")
        self._render_form()

    def _add_preset(self) -> None:
        text = self.entry_preset.get().strip()
        if not text or text in {p.text for p in self.engine.presets()}:
            return
        self.engine.add_preset(text)
        self.entry_preset.delete(0, "end")
        self._log(f"Preset added: {text}")
        self._render_presets()

    def _remove_preset(self, preset_id: str) -> None:
        self.engine.remove_preset(preset_id)
        self._render_presets()

    def _copy_all(self) -> None:
        self.clipboard_clear()
        self.clipboard_append(self.engine.generate_text())
        self._log("Copied!")

    # --------- misc UI helpers ---------

    def _refresh_output(self) -> None:
        self.txt_output.configure(state="normal")
        self.txt_output.delete("0.0", "end")
        self.txt_output.insert("end", self.engine.generate_text())
        self.txt_output.configure(state="disabled")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        self.engine.shutdown()
        self.destroy()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Order assistant desktop GUI")
    ap.add_argument("--db", default=DEFAULT_DSN, help='Store DSN: "memory://" or "json:///path/to/data.json"')
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    engine = Engine()
    engine.open(args.db, verbose=args.verbose)
    OrderAssistantApp(engine).mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
