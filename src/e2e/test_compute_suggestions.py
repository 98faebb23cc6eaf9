# src/e2e/test_compute_suggestions.py

import pytest

from orders_backend.bank import build, build_from_texts
from orders_backend.models import (
    AutocompletePreset, Dataset, OrderItem, Suggestion, SuggestionBank, SuggestionKind,
)
from orders_backend.search import compute_suggestions

PHRASE = SuggestionKind.PHRASE
WORD = SuggestionKind.WORD


@pytest.fixture
def bank() -> SuggestionBank:
    return build_from_texts([
        "навчального взводу",
        "запізнився на службу",
        "звіт про заняття",
        "несвоєчасно прибув на заняття",
        "Служби",
    ])


@pytest.mark.parametrize("text", ["", "   ", "навч ", "навч,", "навч;", "навч:", "навч\t", "навч\n", None])
def test_blank_or_separator_terminated_text_gives_nothing(bank, text):
    assert compute_suggestions(text, bank) == []


def test_word_completion_keeps_typed_leading_words():
    bank = SuggestionBank(words=frozenset({"заняття"}))
    out = compute_suggestions("звіт про зан", bank)
    assert out == [Suggestion("звіт про заняття", WORD)]


def test_leading_words_keep_their_case():
    bank = SuggestionBank(words=frozenset({"заняття"}))
    out = compute_suggestions("Звіт Про зан", bank)
    assert [s.display_text for s in out] == ["Звіт Про заняття"]


def test_phrase_is_passed_through_verbatim(bank):
    out = compute_suggestions("навч", bank)
    assert Suggestion("навчального взводу", PHRASE) in out


def test_matching_is_case_insensitive(bank):
    out = compute_suggestions("НАВЧ", bank)
    assert Suggestion("навчального взводу", PHRASE) in out


def test_exact_match_is_not_suggested():
    bank = SuggestionBank(phrases=frozenset({"службу"}), words=frozenset({"службу"}))
    assert compute_suggestions("Службу", bank) == []


def test_phrase_and_word_collision_keeps_one_entry():
    bank = SuggestionBank(phrases=frozenset({"Служби"}), words=frozenset({"служби"}))
    out = compute_suggestions("слу", bank)
    assert out == [Suggestion("Служби", PHRASE)]


def test_every_suggestion_strictly_extends_the_typed_text(bank):
    text = "запізнився на с"
    out = compute_suggestions(text, bank)
    assert out
    for s in out:
        if s.kind is PHRASE:
            assert s.display_text.lower().startswith(text.lower())
            assert s.display_text.lower() != text.lower()
        else:
            last = s.display_text.split()[-1]
            assert last.startswith("с") and last != "с"


def test_words_come_first_then_shorter_first_within_kind(bank):
    out = compute_suggestions("з", bank)
    kinds = [s.kind for s in out]
    assert WORD in kinds and PHRASE in kinds
    first_phrase = kinds.index(PHRASE)
    assert all(k is PHRASE for k in kinds[first_phrase:])
    for kind in (WORD, PHRASE):
        lengths = [len(s.display_text) for s in out if s.kind is kind]
        assert lengths == sorted(lengths)


def test_result_is_capped_at_twenty():
    bank = SuggestionBank(words=frozenset(f"слово{i:02d}" for i in range(30)))
    out = compute_suggestions("сло", bank)
    assert len(out) == 20
    assert compute_suggestions("сло", bank, limit=3) == out[:3]


def test_typing_into_a_field_with_stored_preset_and_reason():
    ds = Dataset(
        presets=[AutocompletePreset(id="1", text="навчального взводу")],
        orders=[OrderItem(id="o", reason="запізнився на службу")],
    )
    out = compute_suggestions("навчал", build(ds))
    assert out == [
        Suggestion("навчального", WORD),
        Suggestion("навчального взводу", PHRASE),
    ]
