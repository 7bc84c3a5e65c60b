"""Corpus loading from the static JSON search index.

The index is generated once at site-build time and delivered unchanged.
Loading is fail-soft: any problem with the source yields an empty corpus
and a logged diagnostic, so a broken index never blocks page rendering.

Example usage:
    corpus = load()          # cached, process-wide
    corpus = load_corpus(Path("build/search-index.json"))  # uncached
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from blog_search.config import get_settings
from blog_search.corpus.models import Corpus, Document
from blog_search.dependencies import LoadError, logger


def parse_corpus(data: Any) -> Corpus:
    """Validate decoded JSON data into a Corpus.

    Args:
        data: Decoded JSON, expected to be a list of document objects

    Returns:
        Corpus with documents in source order

    Raises:
        LoadError: If data is not a list, an entry is invalid, or an id repeats
    """
    if not isinstance(data, list):
        raise LoadError(f"Expected a JSON array of documents, got {type(data).__name__}")

    documents: list[Document] = []
    seen: set[str] = set()

    for position, entry in enumerate(data):
        try:
            document = Document.model_validate(entry)
        except ValidationError as e:
            raise LoadError(f"Invalid document at position {position}: {e}") from e

        if document.id in seen:
            raise LoadError(f"Duplicate document id: {document.id}")
        seen.add(document.id)
        documents.append(document)

    return Corpus(documents=tuple(documents))


def parse_corpus_json(text: str) -> Corpus:
    """Parse an embedded JSON string into a Corpus.

    Raises:
        LoadError: If the text is not valid JSON or fails validation
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(f"Malformed JSON: {e}") from e
    return parse_corpus(data)


def load_corpus(path: Path) -> Corpus:
    """Load a corpus from a JSON file, degrading to empty on failure.

    Args:
        path: Path to the search index JSON file

    Returns:
        Loaded Corpus, or an empty Corpus if the source is missing or malformed
    """
    try:
        try:
            text = path.read_bytes().decode("utf-8")
        except OSError as e:
            raise LoadError(f"Cannot read corpus source {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise LoadError(f"Corpus source {path} is not valid UTF-8: {e}") from e
        corpus = parse_corpus_json(text)
    except LoadError as e:
        logger.warning("corpus_load_failed", extra={"path": str(path), "error": str(e)})
        return Corpus.empty()

    logger.info("corpus_loaded", extra={"path": str(path), "documents": len(corpus)})
    return corpus


@lru_cache
def load() -> Corpus:
    """Get the process-wide corpus, loading it on first use."""
    return load_corpus(get_settings().corpus_path)
