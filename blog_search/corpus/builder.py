"""Search index builder for Markdown posts.

Walks a directory of Markdown posts with YAML front matter and produces
the JSON array that `blog_search.corpus.loader` consumes. This mirrors
what the static-site build does when it emits `search-index.json`.

Front matter fields used:
    title: Post title (falls back to the first H1, then the filename)
    tags / categories: List of tags
    description / excerpt: Summary (falls back to the first paragraph)
    draft: Posts with `draft: true` are skipped
"""

import json
import re
from pathlib import Path
from typing import Any

import frontmatter

from blog_search.config import get_settings
from blog_search.corpus.models import Document
from blog_search.dependencies import IndexBuildError, logger

# Inline Markdown markup stripped from generated excerpts
MARKDOWN_LINK_PATTERN = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
MARKDOWN_MARKUP_PATTERN = re.compile(r"[*_`>#]+")
WHITESPACE_PATTERN = re.compile(r"\s+")

DEFAULT_EXCERPT_LENGTH = 200


def extract_title(body: str, path: Path) -> str:
    """Extract a post title from its first H1 heading or its filename.

    Examples:
        >>> extract_title("# My Post\\nContent", Path("my-post.md"))
        'My Post'
        >>> extract_title("No heading", Path("my-post.md"))
        'My Post'
    """
    for line in body.split("\n"):
        line = line.strip()
        if line.startswith("# "):
            return line[2:].strip()

    return path.stem.replace("-", " ").replace("_", " ").title()


def plain_text(markdown: str) -> str:
    """Reduce inline Markdown to plain text on a single line."""
    text = MARKDOWN_LINK_PATTERN.sub(r"\1", markdown)
    text = MARKDOWN_MARKUP_PATTERN.sub("", text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def extract_excerpt(body: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Build an excerpt from the first non-heading paragraph of a post.

    Args:
        body: Markdown body without front matter
        max_length: Maximum excerpt length before truncation

    Returns:
        Plain-text excerpt, cut on a word boundary with an ellipsis if truncated
    """
    for paragraph in re.split(r"\n\s*\n", body):
        paragraph = paragraph.strip()
        if not paragraph or paragraph.startswith(("#", "```", "<")):
            continue
        text = plain_text(paragraph)
        if len(text) <= max_length:
            return text
        return text[:max_length].rsplit(" ", 1)[0] + "..."
    return ""


def build_document(path: Path, content_root: Path, base_url: str) -> Document | None:
    """Build a Document from one Markdown post.

    Args:
        path: Post file path
        content_root: Directory the post paths are relative to
        base_url: URL prefix for posts (e.g., '/blog')

    Returns:
        Document for the post, or None for drafts
    """
    post = frontmatter.load(str(path))
    metadata: dict[str, Any] = dict(post.metadata)

    if metadata.get("draft") is True:
        return None

    relative = path.relative_to(content_root).with_suffix("")
    slug = relative.as_posix()
    url = f"{base_url.rstrip('/')}/{slug}"

    return Document(
        id=slug,
        title=str(metadata.get("title") or extract_title(post.content, path)),
        url=url,
        tags=metadata.get("tags") or metadata.get("categories") or (),
        excerpt=str(
            metadata.get("description")
            or metadata.get("excerpt")
            or extract_excerpt(post.content)
        ),
    )


def build_index(content_path: Path, base_url: str = "/blog") -> list[Document]:
    """Build search documents from every Markdown post under a directory.

    Posts are ordered by filename so the index order is stable between builds.
    A post that cannot be parsed is skipped and logged.

    Args:
        content_path: Directory containing Markdown posts
        base_url: URL prefix for posts

    Returns:
        Documents in index order

    Raises:
        IndexBuildError: If content_path is not a directory
    """
    if not content_path.is_dir():
        raise IndexBuildError(f"Content directory not found: {content_path}")

    documents: list[Document] = []
    for path in sorted(content_path.rglob("*.md")):
        try:
            document = build_document(path, content_path, base_url)
        except Exception as e:
            logger.warning(
                "index_post_skipped",
                extra={"path": str(path), "error": str(e)},
            )
            continue

        if document is not None:
            documents.append(document)

    logger.info(
        "index_built",
        extra={"content_path": str(content_path), "documents": len(documents)},
    )
    return documents


def write_index(documents: list[Document], out_path: Path) -> None:
    """Write documents as the JSON search index.

    Args:
        documents: Documents to serialize, in index order
        out_path: Destination file; parent directories are created
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [document.model_dump(mode="json") for document in documents]
    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def main() -> None:
    """Build the search index from configured posts and write it to the corpus path.

    Reads CONTENT_PATH, CORPUS_PATH and BASE_URL from settings. Exits with
    status 1 when the content directory is missing.
    """
    settings = get_settings()
    try:
        documents = build_index(settings.content_path, base_url=settings.base_url)
    except IndexBuildError as e:
        logger.error("index_build_failed", extra={"error": str(e)})
        raise SystemExit(1) from e

    write_index(documents, settings.corpus_path)
    logger.info(
        "index_written",
        extra={"path": str(settings.corpus_path), "documents": len(documents)},
    )


if __name__ == "__main__":
    main()
