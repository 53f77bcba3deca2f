"""Construction of the query tree: every way the words of a query can be read."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import chain, count
from typing import Iterable, Iterator, Mapping, Sequence

from searchcore.query_words_mapper import QueryWordsMapper

QueryId = int

MAX_NGRAM = 3


class QueryKind(Enum):
    """How the words of a query are matched against the index."""

    TOLERANT = "Tolerant"
    NON_TOLERANT = "NonTolerant"
    PHRASE = "Phrase"


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True, eq=False)
class Query:
    """A leaf of the query tree.

    Two queries are equal when they have the same prefix flag, kind and
    words; the id and exactness do not take part in comparison.
    """

    id: QueryId
    prefix: bool
    exact: bool
    kind: QueryKind
    words: tuple[str, ...]

    @property
    def word(self) -> str:
        """The single word of a tolerant or non-tolerant query."""
        if self.kind is QueryKind.PHRASE:
            raise AttributeError("a phrase query has several words")
        return self.words[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return (self.prefix, self.kind, self.words) == (other.prefix, other.kind, other.words)

    def __hash__(self) -> int:
        return hash((self.prefix, self.kind, self.words))

    def describe(self) -> str:
        """A one-line description such as ``PrefixTolerant { id: 0, word: "a" }``."""
        name = ("Prefix" if self.prefix else "") + self.kind.value
        if self.kind is QueryKind.PHRASE:
            words = ", ".join(_quote(word) for word in self.words)
            return f"{name} {{ id: {self.id}, words: [{words}] }}"
        return f"{name} {{ id: {self.id}, word: {_quote(self.words[0])} }}"


class OperationKind(Enum):
    """The kind of node in the query tree."""

    AND = "AND"
    OR = "OR"
    QUERY = "QUERY"


@dataclass(frozen=True)
class Operation:
    """A node of the query tree: a conjunction, a disjunction or a query."""

    kind: OperationKind
    children: tuple[Operation, ...] = ()
    query: Query | None = None

    @classmethod
    def of_query(cls, query: Query) -> Operation:
        return cls(OperationKind.QUERY, (), query)

    def queries(self) -> Iterator[Query]:
        """Yield every query of the tree, depth first."""
        if self.query is not None:
            yield self.query
        for child in self.children:
            yield from child.queries()

    def pretty(self) -> str:
        """Render the tree, one node per line, indented by depth."""
        lines: list[str] = []

        def render(operation: Operation, depth: int) -> None:
            indent = " " * (depth * 2)
            if operation.kind is OperationKind.QUERY:
                assert operation.query is not None
                lines.append(indent + operation.query.describe())
                return
            lines.append(indent + operation.kind.value)
            for child in operation.children:
                render(child, depth + 1)

        render(self, 0)
        return "".join(line + "\n" for line in lines)


def _normalize(text: str) -> str:
    return " ".join(text.lower().split())


class Context:
    """What the tree builder needs to know about the index."""

    def __init__(
        self,
        document_frequencies: Mapping[str, int] | None = None,
        synonyms: Mapping[str, Iterable[str]] | None = None,
        stop_words: Iterable[str] = (),
    ) -> None:
        self._frequencies: dict[str, int] = dict(document_frequencies or {})
        self._synonyms: dict[str, set[str]] = {}
        for key, alternatives in (synonyms or {}).items():
            self._synonyms.setdefault(_normalize(key), set()).update(alternatives)
        self.stop_words: frozenset[str] = frozenset(stop_words)

    def document_frequency(self, word: str) -> int:
        """Number of documents containing ``word``."""
        return self._frequencies.get(word, 0)

    def synonyms_of(self, words: Sequence[str]) -> list[list[str]]:
        """The sorted alternatives of the words, each split into its words."""
        alternatives = self._synonyms.get(_normalize(" ".join(words)), ())
        split = (alternative.split() for alternative in sorted(alternatives))
        return [words for words in split if words]


def create_operation(operations: Iterable[Operation], kind: OperationKind) -> Operation:
    """Return the only operation given, or all of them combined under ``kind``."""
    collected = tuple(operations)
    if len(collected) == 1:
        return collected[0]
    return Operation(kind, collected)


def split_best_frequency(ctx: Context, word: str) -> tuple[str, str] | None:
    """Split ``word`` in two where the rarer half is found in most documents."""
    best: tuple[int, str, str] | None = None
    for index in range(1, len(word)):
        left, right = word[:index], word[index:]
        frequency = min(ctx.document_frequency(left), ctx.document_frequency(right))
        if frequency != 0 and (best is None or frequency > best[0]):
            best = (frequency, left, right)
    return None if best is None else (best[1], best[2])


def _synonym_operation(
    mapper: QueryWordsMapper,
    span: range,
    ids: Iterator[int],
    alternative: list[str],
) -> Operation:
    exact = len(alternative) == 1
    first = next(ids)
    mapper.declare(span, first, alternative)
    word_ids = chain([first], ids)
    leaves = (
        Operation.of_query(Query(next(word_ids), False, exact, QueryKind.NON_TOLERANT, (word,)))
        for word in alternative
    )
    return create_operation(leaves, OperationKind.AND)


def _create_inner(
    ctx: Context,
    mapper: QueryWordsMapper,
    words: Sequence[tuple[int, str]],
) -> list[Operation]:
    alternatives: list[Operation] = []

    for ngram in range(1, MAX_NGRAM + 1):
        if ngram > len(words):
            break
        group, tail = words[:ngram], words[ngram:]
        is_last = not tail
        group_alts: list[Operation] = []

        if ngram == 1:
            query_id, word = group[0]
            ids = count((query_id + 1) * 100)
            span = range(query_id, query_id + 1)

            phrase = None
            split = split_best_frequency(ctx, word)
            if split is not None:
                phrase_id = next(ids)
                next(ids)
                mapper.declare(span, phrase_id, split)
                phrase = Operation.of_query(
                    Query(phrase_id, is_last, True, QueryKind.PHRASE, split)
                )

            group_alts.append(
                Operation.of_query(Query(query_id, is_last, True, QueryKind.TOLERANT, (word,)))
            )
            for alternative in ctx.synonyms_of([word]):
                group_alts.append(_synonym_operation(mapper, span, ids, alternative))
            if phrase is not None:
                group_alts.append(phrase)
        else:
            first_id = group[0][0]
            ids = count((first_id + 1) * 100**ngram)
            span = range(first_id, first_id + ngram)
            texts = [text for _, text in group]

            for alternative in ctx.synonyms_of(texts):
                group_alts.append(_synonym_operation(mapper, span, ids, alternative))

            concat_id = next(ids)
            concat = "".join(texts)
            mapper.declare(span, concat_id, [concat])
            group_alts.append(
                Operation.of_query(
                    Query(concat_id, is_last, True, QueryKind.NON_TOLERANT, (concat,))
                )
            )

        group_ops = [create_operation(group_alts, OperationKind.OR)]
        if tail:
            tail_ops = _create_inner(ctx, mapper, tail)
            group_ops.append(create_operation(tail_ops, OperationKind.OR))
        alternatives.append(create_operation(group_ops, OperationKind.AND))

    return alternatives


def create_query_tree(
    ctx: Context, words: Iterable[str]
) -> tuple[Operation, dict[QueryId, range]]:
    """Build the query tree of ``words`` and the word positions of every query id.

    Words are lower-cased and stop words removed before the tree is built.
    """
    lowered = (word.lower() for word in words)
    kept = list(enumerate(word for word in lowered if word not in ctx.stop_words))
    mapper = QueryWordsMapper(word for _, word in kept)
    alternatives = _create_inner(ctx, mapper, kept)
    return Operation(OperationKind.OR, tuple(alternatives)), mapper.mapping()