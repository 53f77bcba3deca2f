# searchcore

Building blocks for a typo-tolerant full-text search engine.

## Modules

- `searchcore.query_tree`: turns a list of query words into a tree of AND/OR
  operations (`create_query_tree`, `Context`, `Operation`, `OperationKind`,
  `Query`, `QueryKind`). Words are lower-cased and stop words dropped. Each
  word becomes a tolerant query. Synonyms from the `Context`, concatenations
  of two or three neighbouring words, and the two-word split of a word whose
  rarer half appears in the most documents are added as alternatives.
  `Operation.pretty()` renders the tree one node per line.
- `searchcore.query_words_mapper`: `QueryWordsMapper` records which query
  words each replacement stands for. `mapping()` gives, for every query id,
  the range of word positions it covers once all replacements are laid out.
- `searchcore.raw_indexer`: `RawIndexer` turns `Token`s of a document field
  into per-word lists of `DocIndex` entries. It lower-cases words, skips stop
  words, stops at a word limit (1000 by default) and ignores words longer than
  80 bytes. For words outside Chinese, Japanese and Korean scripts it also
  indexes their ASCII transliteration. `build()` returns an `Indexed` with
  sorted, deduplicated postings and the words of each document.
- `searchcore.reordered_attrs`: `ReorderedAttrs` maps attribute numbers to
  their position among the searchable attributes, and back.
- `searchcore.ranked_map`: `RankedMap` stores numbers keyed by
  (document, field). `write_to_bin` and `read_from_bin` save it to and load it
  from a binary stream.

## What it does not do

There is no tokenizer: `RawIndexer.index_tokens` expects tokens that are
already split, and `create_query_tree` expects a list of words. There is no
storage and no search execution: the query tree is built, but nothing here
runs it against postings or ranks documents. Document frequencies and
synonyms are given to `Context` as plain mappings. There is no command line
program and no server.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from searchcore.query_tree import Context, create_query_tree

tree, mapping = create_query_tree(Context(), ["Hello"])
assert tree.pretty() == 'OR\n  PrefixTolerant { id: 0, word: "hello" }\n'
assert mapping == {0: range(0, 1)}
```

```python
from searchcore.query_words_mapper import QueryWordsMapper

mapper = QueryWordsMapper(["NYC", "subway"])
mapper.declare(range(0, 1), 2, ["new", "york", "city"])
mapping = mapper.mapping()
assert mapping[0] == range(0, 3)   # NYC spans new york city
assert mapping[1] == range(3, 4)   # subway comes after them
```

```python
from searchcore.raw_indexer import RawIndexer, Token

indexer = RawIndexer(stop_words=["de"])
indexer.index_tokens(0, 0, [Token("Oublié", 0, 0), Token("de", 1, 7)])
indexed = indexer.build()
assert sorted(indexed.words_doc_indexes) == ["oublie", "oublié"]
```

```python
from searchcore.reordered_attrs import ReorderedAttrs

attrs = ReorderedAttrs()
attrs.insert_attribute(4)
attrs.insert_attribute(1)
assert attrs.get(1) == 1
assert attrs.reverse(0) == 4
```