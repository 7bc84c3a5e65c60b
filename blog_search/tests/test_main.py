"""Tests for the page host application."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from blog_search.config import get_settings
from blog_search.corpus.loader import load
from blog_search.corpus.models import Corpus
from blog_search.main import MOUNT_POINT_ID, app


class TestEndpoints:
    """Tests for the HTTP surface."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0", "documents": 4}

    def test_search_index_unchanged(
        self, client: TestClient, corpus_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the index file is served byte for byte."""
        monkeypatch.setattr(get_settings(), "corpus_path", corpus_file)
        response = client.get("/search-index.json")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.content == corpus_file.read_bytes()

    def test_search_index_keeps_build_field_names(
        self, client: TestClient, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that alias fields and string tags are not rewritten."""
        raw = [
            {
                "title": "A",
                "link": "/blog/a",
                "categories": "php, js",
                "description": "d",
            }
        ]
        path = tmp_path / "search-index.json"
        path.write_text(json.dumps(raw), encoding="utf-8")
        monkeypatch.setattr(get_settings(), "corpus_path", path)

        assert client.get("/search-index.json").json() == raw

    def test_search_index_missing(
        self, client: TestClient, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(get_settings(), "corpus_path", tmp_path / "missing.json")
        assert client.get("/search-index.json").status_code == 404

    def test_page_has_mount_point_and_idle_results(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert f'id="{MOUNT_POINT_ID}"' in response.text
        assert "Mutation Testing with Infection" in response.text
        assert 'id="search-index"' in response.text

    def test_page_with_empty_corpus(self) -> None:
        """Test that a failed load still renders the page."""
        app.dependency_overrides[load] = Corpus.empty
        try:
            response = TestClient(app).get("/")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert "search-no-results" in response.text

    def test_no_server_side_search(self, client: TestClient) -> None:
        assert client.get("/search", params={"q": "php"}).status_code == 404
