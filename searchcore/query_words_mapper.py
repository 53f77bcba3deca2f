"""Map query word positions to the positions of their replacements."""

from __future__ import annotations

from collections import defaultdict
from itertools import takewhile
from typing import Hashable, Iterable, Sequence

QueryId = int

_Span = range


def longest_common_prefix(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    """Return the length of the longest suffix of ``a`` that is a prefix of ``b``.

    Suffixes are tried from the shortest to the longest; the search stops as
    soon as a longer suffix no longer improves the match.
    """
    best: int | None = None
    for start in reversed(_Span(len(a))):
        count = sum(1 for _ in takewhile(lambda pair: pair[0] == pair[1], zip(a[start:], b)))
        if best is None or count > best:
            best = count
        else:
            break
    return best or 0


class QueryWordsMapper:
    """Collects word replacements (synonyms, concatenations, splits) of a query
    and computes where each query id lands once all replacements are laid out."""

    def __init__(self, originals: Iterable[object]) -> None:
        self.originals: list[str] = [str(word) for word in originals]
        self._mappings: dict[QueryId, tuple[range, list[str]]] = {}

    def declare(self, range: range, id: QueryId, replacement: Iterable[object]) -> None:
        """Declare that the original words in ``range`` may be replaced by
        ``replacement``, whose words receive the ids ``id``, ``id + 1``, ..."""
        span = range
        if span.step != 1 or len(span) == 0:
            raise ValueError("range must be a non-empty contiguous range")
        if span.start < 0 or span.stop > len(self.originals):
            raise ValueError("range lies outside of the original words")
        if id < len(self.originals):
            raise ValueError("id must not collide with the ids of the original words")

        words = [str(word) for word in replacement]
        if not words:
            raise ValueError("replacement must not be empty")

        # Words at the front and at the back of the replacement that are
        # shared with the surrounding original words are mapped one to one:
        #
        #     x a b c d e f g
        #       ^^^/   \^^^
        #     a b x c d k j e f
        #     ^^^           ^^^
        left = self.originals[: span.start]
        right = self.originals[span.stop :]

        common_left = longest_common_prefix(left, words)
        common_right = longest_common_prefix(words, right)
        if common_left + common_right > len(words):
            raise ValueError("replacement overlaps the surrounding words on both sides")

        for offset in _Span(common_left):
            position = span.start - common_left + offset
            self._mappings[id + offset] = (_Span(position, position + 1), [words[offset]])

        middle = words[common_left : len(words) - common_right]
        self._mappings[id + common_left] = (span, middle)

        for offset in _Span(common_right):
            index = len(words) - common_right + offset
            position = span.stop + offset
            self._mappings[id + index] = (_Span(position, position + 1), [words[index]])

    def mapping(self) -> dict[QueryId, range]:
        """Return, for every original and declared id, the range of word
        positions it covers in the expanded query."""
        ending_at: dict[int, list[tuple[range, QueryId, list[str]]]] = defaultdict(list)
        for query_id, (span, words) in self._mappings.items():
            ending_at[span.stop - 1].append((span, query_id, words))
        for elements in ending_at.values():
            elements.sort(key=lambda element: (element[0].start, element[1]))

        output: dict[QueryId, range] = {}
        offset = 0

        # Each original word is widened to the largest number of words
        # that any replacement ending on it brings in.
        for position in _Span(len(self.originals)):
            lengths = [
                len(words) - (position - span.start)
                for span, _, words in ending_at.get(position, ())
            ]
            widest = max((length for length in lengths if length > 0), default=1)
            output[position] = _Span(position + offset, position + offset + widest)
            offset += widest - 1

        # Each replacement takes the expanded area of the words it replaces,
        # one position per word, the last word absorbing what is left.
        for position in _Span(len(self.originals)):
            for span, query_id, words in ending_at.get(position, ()):
                first = output[span.start].start if span.start in output else span.start
                last = output[span.stop - 1].stop if (span.stop - 1) in output else span.stop
                target = _Span(first, last)
                extra = len(target) - len(words)
                for index, start in enumerate(target[: len(words)]):
                    width = 1 + (extra if index == len(words) - 1 else 0)
                    output[query_id + index] = _Span(start, start + width)

        return output