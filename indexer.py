# indexer.py - Sift Corpus Loader & Inverted Index
# Splits a *PAGE: corpus file into documents and builds a term -> documents map

import argparse
import itertools
import logging
import time
from collections import defaultdict

from document import Document

CORPUS_FILE     = "data/corpus.txt"
BOUNDARY_PREFIX = "*PAGE"

log = logging.getLogger("sift-indexer")


class CorpusLoadError(OSError):
    """The corpus file could not be read."""


# ─── CORPUS LOADER ───────────────────────────────────────────────────────────
def read_corpus(path) -> list:
    """Lines of ``path`` split on \\n, \\r and \\r\\n only."""
    try:
        with open(path, "r", encoding="utf-8", newline=None) as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadError(f"Cannot read corpus {path}: {e}") from e
    lines = text.split("\n")
    # A final terminator does not open another line
    if lines[-1] == "":
        lines.pop()
    return lines


def split_documents(lines) -> list:
    """Cut ``lines`` into documents at every *PAGE boundary.

    Ids are drawn from a counter local to this call, in file order, so
    repeated or concurrent loads never share an allocator. Lines before
    the first boundary belong to no document.
    """
    ids = itertools.count(1)
    boundaries = [i for i, line in enumerate(lines) if line and line.startswith(BOUNDARY_PREFIX)]
    ends = boundaries[1:] + [len(lines)]
    return [Document(next(ids), lines[start:end]) for start, end in zip(boundaries, ends)]


# ─── INVERTED INDEX ──────────────────────────────────────────────────────────
class InvertedIndex:
    """Read-only term -> documents map, built once.

    Keys are raw lines, unfiltered and case-sensitive, so url and title
    lines are searchable like any body term.
    """

    def __init__(self, postings: dict, total_documents: int):
        self._postings = postings
        self._total = total_documents

    @classmethod
    def build(cls, documents):
        documents = list(documents)
        postings = defaultdict(set)
        for doc in documents:
            for line in doc.lines:
                postings[line].add(doc)
        frozen = {term: frozenset(docs) for term, docs in postings.items()}
        return cls(frozen, len(documents))

    def documents_for(self, term) -> frozenset:
        return self._postings.get(term, frozenset())

    def document_count_for(self, term) -> int:
        return len(self._postings.get(term, ()))

    @property
    def total_documents(self) -> int:
        return self._total

    @property
    def terms(self) -> int:
        return len(self._postings)


def load_index(path) -> InvertedIndex:
    t0 = time.time()
    documents = split_documents(read_corpus(path))
    index = InvertedIndex.build(documents)
    log.info(f"Indexed {path}: {index.total_documents} docs, {index.terms} terms "
             f"in {time.time() - t0:.3f}s")
    return index


# ─── CLI ─────────────────────────────────────────────────────────────────────
def main(argv=None):
    parser = argparse.ArgumentParser(description="Sift Corpus Indexer")
    parser.add_argument("--corpus", default=CORPUS_FILE, help="Corpus file to index")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )
    try:
        index = load_index(args.corpus)
    except CorpusLoadError as e:
        log.error(e)
        return 1

    print(f"\n[Sift Indexer] Done!")
    print(f"  Documents     : {index.total_documents}")
    print(f"  Unique terms  : {index.terms}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
