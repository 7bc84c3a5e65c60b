"""Shared pytest fixtures."""

import json
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load environment variables before importing app modules
load_dotenv()

# Set test defaults if not provided
if not os.environ.get("CORPUS_PATH"):
    os.environ["CORPUS_PATH"] = "/tmp/blog-search-test/search-index.json"

from fastapi.testclient import TestClient  # noqa: E402

from blog_search.corpus.loader import load  # noqa: E402
from blog_search.corpus.models import Corpus, Document  # noqa: E402
from blog_search.main import app  # noqa: E402

SAMPLE_ENTRIES = [
    {
        "id": "improve-symfony-tests-performance",
        "title": "Improve Symfony Tests Performance",
        "url": "/blog/improve-symfony-tests-performance",
        "tags": ["php", "symfony"],
        "excerpt": "Ways to speed up a slow PHPUnit suite in a Symfony application.",
    },
    {
        "id": "eslint-plugin-for-writing-proper-tests",
        "title": "ESLint plugin for writing proper tests",
        "url": "/blog/eslint-plugin-for-writing-proper-tests",
        "tags": ["js", "eslint"],
        "excerpt": "A set of lint rules that catch common mistakes in Jest tests.",
    },
    {
        "id": "mutation-testing",
        "title": "Mutation Testing with Infection",
        "url": "/blog/mutation-testing",
        "tags": ["php", "testing"],
        "excerpt": "Measure how good your tests really are by mutating source code.",
    },
    {
        "id": "php",
        "title": "PHP",
        "url": "/blog/php",
        "tags": ["language"],
        "excerpt": "Notes on the PHP ecosystem.",
    },
]


@pytest.fixture
def sample_entries() -> list[dict]:
    """Raw search index entries as produced by the site build."""
    return [dict(entry) for entry in SAMPLE_ENTRIES]


@pytest.fixture
def sample_corpus(sample_entries: list[dict]) -> Corpus:
    """Create a Corpus from the sample entries."""
    return Corpus(documents=tuple(Document.model_validate(e) for e in sample_entries))


@pytest.fixture
def corpus_file(tmp_path: Path, sample_entries: list[dict]) -> Path:
    """Write the sample entries to a temporary search index file."""
    path = tmp_path / "search-index.json"
    path.write_text(json.dumps(sample_entries), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_corpus_cache():
    """Clear the process-wide corpus before and after each test."""
    load.cache_clear()
    yield
    load.cache_clear()


@pytest.fixture
def client(sample_corpus: Corpus) -> TestClient:
    """Create a FastAPI test client serving the sample corpus."""
    app.dependency_overrides[load] = lambda: sample_corpus
    yield TestClient(app)
    app.dependency_overrides.clear()
