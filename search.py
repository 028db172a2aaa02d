# search.py - Sift Query Parsing & Boolean Retrieval
# Percent-encoded queries -> term groups joined by AND/OR -> ranked pages

import argparse
import logging
import re
from dataclasses import dataclass
from enum import Enum

from indexer import CORPUS_FILE, CorpusLoadError, load_index
from scoring import SCORING_METHODS, rank_documents, select_scoring_method

_AND_SPLIT  = re.compile(r"(?:%20)*AND(?:%20)*")
_OR_SPLIT   = re.compile(r"(?:%20)*OR(?:%20)*")
_TERM_SPLIT = re.compile(r"(?:%20)+")

log = logging.getLogger("sift-search")


class InvalidQueryError(ValueError):
    """The query has no term groups to evaluate."""


class GroupMode(Enum):
    AND = "AND"
    OR  = "OR"


@dataclass(frozen=True)
class ParsedQuery:
    groups: tuple
    mode: GroupMode = GroupMode.OR


# ─── PARAMETER PARSING ───────────────────────────────────────────────────────
def parse_query_params(raw_query) -> dict:
    """``q=a&algorithm=TFIDF`` -> dict; malformed segments are dropped."""
    params = {}
    if not raw_query:
        return params
    for segment in raw_query.split("&"):
        key_value = segment.split("=")
        if is_valid_key_value(key_value):
            params[key_value[0]] = key_value[1]
    return params


def is_valid_key_value(key_value) -> bool:
    return len(key_value) == 2 and bool(key_value[0]) and bool(key_value[1])


def extract_query(raw_query):
    return parse_query_params(raw_query).get("q")


def extract_algorithm(raw_query):
    return parse_query_params(raw_query).get("algorithm")


# ─── QUERY PARSING ───────────────────────────────────────────────────────────
def _split_groups(query, pattern) -> list:
    parts = pattern.split(query)
    if len(parts) == 1:
        return parts
    # Trailing empty segments carry no group, leading/interior ones do
    while parts and not parts[-1]:
        parts.pop()
    return parts


def parse_query(query) -> ParsedQuery:
    if query is None:
        raise InvalidQueryError("Query cannot be null")
    if "AND" in query:
        segments, mode = _split_groups(query, _AND_SPLIT), GroupMode.AND
    else:
        segments, mode = _split_groups(query, _OR_SPLIT), GroupMode.OR

    groups = []
    for segment in segments:
        terms = (piece.strip() for piece in _TERM_SPLIT.split(segment))
        groups.append(tuple(term for term in terms if term))
    return ParsedQuery(tuple(groups), mode)


# ─── BOOLEAN EVALUATION ──────────────────────────────────────────────────────
def match_group(group, index) -> set:
    """Pages containing every term of ``group``; an empty group matches nothing."""
    if not group:
        return set()
    matched = set(index.documents_for(group[0]))
    for term in group[1:]:
        matched &= index.documents_for(term)
        if not matched:
            break
    return matched


def search(parsed_query, index) -> set:
    if parsed_query is None or not parsed_query.groups:
        raise InvalidQueryError("Query cannot be null or empty")

    if parsed_query.mode is GroupMode.AND:
        matched = match_group(parsed_query.groups[0], index)
        for group in parsed_query.groups[1:]:
            matched &= match_group(group, index)
        return matched

    matched = set()
    for group in parsed_query.groups:
        matched |= match_group(group, index)
    return matched


# ─── SEARCH FUNCTION ─────────────────────────────────────────────────────────
def search_query(query, algorithm, index) -> list:
    """Parse, retrieve and rank; equal scores keep corpus order."""
    scoring_method = select_scoring_method(algorithm)
    parsed = parse_query(query)
    candidates = sorted(search(parsed, index), key=lambda doc: doc.id)
    return rank_documents(candidates, parsed, index, scoring_method)


# ─── MAIN ────────────────────────────────────────────────────────────────────
def main(argv=None):
    parser = argparse.ArgumentParser(description="Sift interactive search")
    parser.add_argument("--corpus", default=CORPUS_FILE, help="Corpus file to search")
    parser.add_argument("--algorithm", default="TFIDF", choices=sorted(SCORING_METHODS))
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

    print("Enter queries one per line. Type 'EXIT' to quit.")
    while True:
        try:
            query = input("Search: ").strip()
        except EOFError:
            break
        if query.lower() == "exit":
            break
        try:
            results = search_query(query.replace(" ", "%20"), args.algorithm, index)
        except ValueError as e:
            log.warning(f"Rejected query {query!r}: {e}")
            continue
        if results:
            print("Results:")
            for doc in results:
                print(f"  {doc.title} ({doc.url})")
        else:
            print("No results found.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
