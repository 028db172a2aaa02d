# backend.py - Sift Search Engine Backend
# Serves the in-memory corpus index over HTTP: boolean AND/OR queries ranked by SIMPLE or TFIDF

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, PlainTextResponse

from indexer import CORPUS_FILE, load_index
from search import extract_algorithm, extract_query, search_query

# ─── CONFIG ───────────────────────────────────────────────────────────────────
CONFIG_FILE = "config.txt"
INDEX_HTML  = "web/index.html"
NO_RESULTS  = "404"
HOST        = os.environ.get("SIFT_HOST", "0.0.0.0")
PORT        = int(os.environ.get("SIFT_PORT", "8080"))

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("sift-backend")


def corpus_path() -> str:
    """SIFT_CORPUS, else the first line of config.txt, else the default corpus."""
    env = os.environ.get("SIFT_CORPUS", "").strip()
    if env:
        return env
    if os.path.exists(CONFIG_FILE):
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            configured = f.readline().strip()
        if configured:
            return configured
    return CORPUS_FILE


# Published once by load_corpus(), read-only afterwards
state = {"index": None}


def load_corpus(path=None):
    index = load_index(path or corpus_path())
    state["index"] = index
    return index


def get_index():
    index = state["index"]
    if index is None:
        raise HTTPException(503, "Index not loaded")
    return index


# ─── APP ──────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    if state["index"] is None:
        load_corpus()
    yield


app = FastAPI(title="Sift", version="1.0", lifespan=lifespan)


def format_results(documents):
    return [{"url": doc.url, "title": doc.title} for doc in documents]


# ─── ENDPOINTS ────────────────────────────────────────────────────────────────
@app.api_route("/", methods=["GET", "HEAD"])
async def root():
    if os.path.exists(INDEX_HTML):
        return FileResponse(INDEX_HTML)
    return {"message": "Sift API v1.0"}


@app.get("/search")
def search_ep(request: Request):
    index = get_index()
    # Raw query string: %20 and the AND/OR separators must reach the parser undecoded
    raw_query = request.url.query
    query = extract_query(raw_query)
    if query is None or not query.strip():
        raise HTTPException(400, "Empty query")
    try:
        results = search_query(query, extract_algorithm(raw_query), index)
    except ValueError as e:
        log.warning(f"Rejected query {raw_query!r}: {e}")
        raise HTTPException(400, str(e)) from e

    if not results:
        return PlainTextResponse(NO_RESULTS, status_code=404)
    return format_results(results)


@app.get("/stats")
async def stats_ep():
    index = get_index()
    return {
        "documents": index.total_documents,
        "terms":     index.terms,
    }


if __name__ == "__main__":
    import uvicorn
    print("\n🔍 Sift Search Engine")
    print(f"   UI: http://localhost:{PORT}\n")
    uvicorn.run("backend:app", host=HOST, port=PORT, reload=False)
