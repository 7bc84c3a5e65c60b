"""FastAPI application hosting the search page and its static index."""

import json

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse

from blog_search.config import get_settings
from blog_search.corpus.loader import load
from blog_search.corpus.models import Corpus
from blog_search.dependencies import logger
from blog_search.widget.render import RESULTS_CONTAINER_ID, render_results

MOUNT_POINT_ID = "search"

settings = get_settings()

app = FastAPI(title="Blog Search", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health(corpus: Corpus = Depends(load)) -> dict[str, str | int]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "0.1.0",
        "documents": len(corpus),
    }


@app.get("/search-index.json", response_class=FileResponse)
async def search_index() -> FileResponse:
    """Serve the static JSON data source exactly as the site build wrote it."""
    path = get_settings().corpus_path
    if not path.is_file():
        logger.warning("search_index_missing", extra={"path": str(path)})
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Search index not found: {path.name}",
        )
    return FileResponse(path, media_type="application/json")


@app.get("/", response_class=HTMLResponse)
async def page(corpus: Corpus = Depends(load)) -> str:
    """Render a page with the search mount point in its idle state."""
    documents = list(corpus.documents)
    index = json.dumps([document.model_dump(mode="json") for document in documents])
    # "</" inside the embedded JSON would close the script element early
    index = index.replace("</", "<\\/")

    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8"><title>Search</title></head><body>'
        f'<div id="{MOUNT_POINT_ID}">'
        '<input type="search" name="q" placeholder="Search..." autocomplete="off">'
        f'<div id="{RESULTS_CONTAINER_ID}">'
        f"{render_results(documents, '', settings.snippet_length)}"
        "</div></div>"
        f'<script type="application/json" id="search-index">{index}</script>'
        "</body></html>"
    )


logger.info("app_startup", extra={"host": settings.host, "port": settings.port})
