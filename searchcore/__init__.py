"""Query trees, synonym word mapping, token indexing, attribute ordering and ranking maps for full-text search."""

__version__ = "0.1.0"