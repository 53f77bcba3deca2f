"""Turning tokens of document fields into word postings."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from unidecode import unidecode

WORD_LENGTH_LIMIT = 80
DEFAULT_WORD_LIMIT = 1000

_U16_MAX = 0xFFFF

_CJK_RANGES = (
    (0x1100, 0x11FF),    # Hangul Jamo
    (0x2E80, 0x2FDF),    # CJK radicals
    (0x3000, 0x303F),    # CJK symbols and punctuation
    (0x3040, 0x309F),    # Hiragana
    (0x30A0, 0x30FF),    # Katakana
    (0x3100, 0x312F),    # Bopomofo
    (0x3130, 0x318F),    # Hangul compatibility Jamo
    (0x31A0, 0x31FF),    # Bopomofo extended, Katakana phonetic extensions
    (0x3200, 0x33FF),    # enclosed CJK letters, compatibility
    (0x3400, 0x4DBF),    # CJK extension A
    (0x4E00, 0x9FFF),    # CJK unified ideographs
    (0xA960, 0xA97F),    # Hangul Jamo extended A
    (0xAC00, 0xD7AF),    # Hangul syllables
    (0xD7B0, 0xD7FF),    # Hangul Jamo extended B
    (0xF900, 0xFAFF),    # CJK compatibility ideographs
    (0xFE30, 0xFE4F),    # CJK compatibility forms
    (0xFF00, 0xFFEF),    # halfwidth and fullwidth forms
    (0x20000, 0x2FA1F),  # CJK extensions B and beyond
)


def is_cjk(char: str) -> bool:
    """Whether ``char`` belongs to a Chinese, Japanese or Korean script."""
    code = ord(char)
    return any(low <= code <= high for low, high in _CJK_RANGES)


@dataclass(frozen=True)
class Token:
    """A word found in a text, with its position."""

    word: str
    word_index: int
    char_index: int


@dataclass(frozen=True, order=True)
class DocIndex:
    """Where a word appears: document, attribute, word and character position."""

    document_id: int
    attribute: int
    word_index: int
    char_index: int
    char_length: int


@dataclass
class Indexed:
    """The result of indexing: postings per word and words per document."""

    words_doc_indexes: dict[str, list[DocIndex]] = field(default_factory=dict)
    docs_words: dict[int, list[str]] = field(default_factory=dict)


def _fits(word: str) -> bool:
    return len(word.encode("utf-8")) <= WORD_LENGTH_LIMIT


class RawIndexer:
    """Accumulates the postings of the tokens of many documents."""

    def __init__(
        self,
        stop_words: Iterable[str] = (),
        word_limit: int = DEFAULT_WORD_LIMIT,
    ) -> None:
        self.stop_words: frozenset[str] = frozenset(stop_words)
        self.word_limit = word_limit
        self._words_doc_indexes: dict[str, list[DocIndex]] = defaultdict(list)
        self._docs_words: dict[int, list[str]] = defaultdict(list)

    def index_tokens(
        self, document_id: int, indexed_pos: int, tokens: Iterable[Token]
    ) -> int:
        """Index the tokens of one field of a document.

        Returns the number of tokens looked at, including the one that
        stopped indexing, if any.
        """
        number_of_words = 0
        for token in tokens:
            must_continue = self._index_token(token, document_id, indexed_pos)
            number_of_words += 1
            if not must_continue:
                break
        return number_of_words

    def _add(self, word: str, document_id: int, doc_index: DocIndex) -> None:
        self._words_doc_indexes[word].append(doc_index)
        self._docs_words[document_id].append(word)

    def _index_token(self, token: Token, document_id: int, indexed_pos: int) -> bool:
        if token.word_index >= self.word_limit:
            return False

        lower = token.word.lower()
        if lower in self.stop_words:
            return True

        char_length = len(lower)
        if any(value > _U16_MAX for value in (token.word_index, token.char_index, char_length)):
            return False

        doc_index = DocIndex(
            document_id=document_id,
            attribute=indexed_pos,
            word_index=token.word_index,
            char_index=token.char_index,
            char_length=char_length,
        )

        if _fits(lower):
            self._add(lower, document_id, doc_index)
            if not any(is_cjk(char) for char in lower):
                unidecoded = unidecode(lower)
                if unidecoded and unidecoded != lower and _fits(unidecoded):
                    self._add(unidecoded, document_id, doc_index)

        return True

    def build(self) -> Indexed:
        """Return the sorted, deduplicated postings and document words."""
        words_doc_indexes = {
            word: sorted(set(indexes))
            for word, indexes in sorted(self._words_doc_indexes.items())
        }
        docs_words = {
            document_id: sorted(set(words))
            for document_id, words in self._docs_words.items()
        }
        return Indexed(words_doc_indexes=words_doc_indexes, docs_words=docs_words)