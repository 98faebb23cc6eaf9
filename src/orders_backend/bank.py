"""
Suggestion bank builder.

The bank is the candidate pool for autocomplete: whole field values seen so
far (phrases) and the individual words inside them. It is derived from the
dataset, never stored, and rebuilt whenever the dataset changes.
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterable, Iterator, Optional, Set

from .config import MIN_PHRASE_LEN, MIN_WORD_LEN
from .models import Dataset, SuggestionBank
from .normalize import as_text, fold, tokens

log = logging.getLogger(__name__)


def collect_texts(dataset: Dataset) -> Iterator[str]:
    """
    Yield every free-text value the bank is built from.

    Sources are the phrase presets and, for each order, the report author
    position, the reason and each person's position, rank and name. Dates,
    numbers and statutes are not free text and are skipped.
    """
    for preset in dataset.presets:
        yield as_text(preset.text)
    for order in dataset.orders:
        yield as_text(order.report_author_position)
        yield as_text(order.reason)
        for person in order.persons:
            yield as_text(person.position)
            yield as_text(person.rank)
            yield as_text(person.name)


def build_from_texts(texts: Iterable[str]) -> SuggestionBank:
    """
    Build a bank from raw strings.

    Args:
        texts: Any iterable of field values. Non-strings are treated as empty.

    Returns:
        SuggestionBank: phrases are trimmed values longer than MIN_PHRASE_LEN;
        words are lowercased tokens of those values longer than MIN_WORD_LEN.

    Examples:
        >>> bank = build_from_texts(["  навчального взводу ", "так"])
        >>> sorted(bank.phrases)
        ['навчального взводу']
        >>> sorted(bank.words)
        ['взводу', 'навчального']
    """
    phrases: Set[str] = set()
    words: Set[str] = set()
    for raw in texts:
        text = as_text(raw).strip()
        if len(text) <= MIN_PHRASE_LEN:
            continue
        phrases.add(text)
        for tok in tokens(text):
            tok = fold(tok)
            if len(tok) > MIN_WORD_LEN:
                words.add(tok)
    return SuggestionBank(phrases=frozenset(phrases), words=frozenset(words))


def build(dataset: Dataset) -> SuggestionBank:
    """Build the bank for a whole dataset (see collect_texts for the sources)."""
    return build_from_texts(collect_texts(dataset))


class BankCache:
    """
    Memoizes the bank by a caller-supplied version key.
    The dataset is rescanned only when the key changes.
    """

    def __init__(self) -> None:
        self._key: Optional[Hashable] = None
        self._bank: Optional[SuggestionBank] = None

    def get(self, key: Hashable, dataset: Dataset) -> SuggestionBank:
        if self._bank is None or key != self._key:
            self._bank = build(dataset)
            self._key = key
            log.info("Rebuilt suggestion bank: phrases=%d words=%d",
                     len(self._bank.phrases), len(self._bank.words))
        return self._bank

    def invalidate(self) -> None:
        self._key = None
        self._bank = None
