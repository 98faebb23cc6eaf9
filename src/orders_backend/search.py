from __future__ import annotations
from typing import Any, Iterable, List, Set

from .config import MAX_SUGGESTIONS
from .models import Suggestion, SuggestionBank, SuggestionKind
from .normalize import as_text, ends_with_separator, fold, is_blank, tokens

# word-kind entries rank ahead of phrase-kind ones
_KIND_RANK = {SuggestionKind.WORD: 0, SuggestionKind.PHRASE: 1}


def _phrase_candidates(lower_text: str, bank: SuggestionBank) -> Iterable[Suggestion]:
    for phrase in sorted(bank.phrases):
        lp = fold(phrase)
        if lp.startswith(lower_text) and lp != lower_text:
            yield Suggestion(display_text=phrase, kind=SuggestionKind.PHRASE)


def _word_candidates(text: str, lower_text: str, bank: SuggestionBank) -> Iterable[Suggestion]:
    # /* ~~~ complete only the last word; keep what was typed before it ~~~ */
    segments = tokens(lower_text)
    if not segments:
        return
    current = segments[-1]
    head = " ".join(tokens(text)[:-1])
    for word in sorted(bank.words):
        lw = fold(word)
        if lw.startswith(current) and lw != current:
            yield Suggestion(display_text=f"{head} {word}".strip(), kind=SuggestionKind.WORD)


def _dedup(candidates: Iterable[Suggestion]) -> List[Suggestion]:
    # first occurrence wins
    seen: Set[str] = set()
    out: List[Suggestion] = []
    for s in candidates:
        key = fold(s.display_text)
        if key in seen:
            continue
        seen.add(key)
        out.append(s)
    return out


def _rank_key(s: Suggestion):
    return (_KIND_RANK[s.kind], len(s.display_text), fold(s.display_text))


def compute_suggestions(current_text: Any, bank: SuggestionBank, *, limit: int = MAX_SUGGESTIONS) -> List[Suggestion]:
    """
    Rank completions for the text currently in a field.

    Returns [] when the text is blank or ends with a separator. Otherwise
    phrase candidates (whole stored values extending the text) are merged
    ahead of word candidates (the last word completed, earlier words kept),
    deduplicated case-insensitively, then ordered words-first and shortest
    first, and cut to `limit`.
    """
    text = as_text(current_text)
    if is_blank(text) or ends_with_separator(text):
        return []

    lower_text = fold(text)
    merged = list(_phrase_candidates(lower_text, bank))
    merged.extend(_word_candidates(text, lower_text, bank))

    ranked = sorted(_dedup(merged), key=_rank_key)
    return ranked[:max(0, limit)]
