"""Pydantic models for the searchable document corpus.

The corpus is produced at site-build time as a JSON array, one entry per
post or page. Documents are frozen once validated; the corpus itself is an
immutable ordered tuple shared by every search widget on the page.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class Document(BaseModel):
    """A single indexable blog post or page.

    Attributes:
        id: Stable identifier (usually the post slug), unique within a corpus
        title: Display title
        url: Navigable target
        tags: Tags from front matter, order irrelevant for matching
        excerpt: Short plain-text summary used for matching and display

    Example source entry:
        {
            "id": "improve-symfony-tests-performance",
            "title": "Improve Symfony Tests Performance",
            "url": "/blog/improve-symfony-tests-performance",
            "tags": ["php", "symfony"],
            "excerpt": "Speed up a slow test suite..."
        }
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable unique identifier")
    title: str = Field(..., min_length=1, description="Display title")
    url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("url", "link"),
        description="Navigable target",
    )
    tags: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("tags", "categories"),
        description="Tags from front matter",
    )
    excerpt: str = Field(
        default="",
        validation_alias=AliasChoices("excerpt", "snippet", "description"),
        description="Plain-text summary",
    )

    @model_validator(mode="before")
    @classmethod
    def derive_id_from_url(cls, data: Any) -> Any:
        """Fill a missing id with the last path segment of the url."""
        if not isinstance(data, dict) or data.get("id"):
            return data
        url = data.get("url") or data.get("link")
        if not isinstance(url, str):
            return data
        slug = url.strip().rstrip("/").rsplit("/", 1)[-1]
        return {**data, "id": slug}

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        """Accept tags as a comma-separated string and drop empty entries."""
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, list | tuple | set):
            return tuple(str(tag).strip() for tag in value if str(tag).strip())
        return value

    @field_validator("excerpt", mode="before")
    @classmethod
    def none_excerpt(cls, value: Any) -> Any:
        """Treat a null excerpt as empty."""
        return "" if value is None else value


class Corpus(BaseModel):
    """The ordered, read-only collection of all searchable documents.

    Attributes:
        documents: Documents in source order
    """

    model_config = ConfigDict(frozen=True)

    documents: tuple[Document, ...] = Field(default=(), description="Documents in source order")

    @classmethod
    def empty(cls) -> "Corpus":
        """Return a corpus with no documents."""
        return cls(documents=())

    def __len__(self) -> int:
        return len(self.documents)

    def get(self, document_id: str) -> Document | None:
        """Look up a document by id."""
        for document in self.documents:
            if document.id == document_id:
                return document
        return None
