# scoring.py - Sift Relevance Scoring & Ranking
# Simple frequency and TF-IDF term scores; pages ranked by their best query group

import math


class UnknownAlgorithmError(ValueError):
    """Raised for an algorithm key outside SCORING_METHODS."""


# ─── SCORING METHODS ─────────────────────────────────────────────────────────
def simple_frequency_score(term, doc, index) -> float:
    return doc.word_frequency(term)


def tfidf_score(term, doc, index) -> float:
    df = index.document_count_for(term)
    if df == 0:
        return 0.0
    total_words = doc.total_words()
    # A page without body words has no term frequency to speak of
    if total_words == 0:
        return 0.0
    tf  = doc.word_frequency(term) / total_words
    idf = math.log(index.total_documents / df)
    return tf * idf


SCORING_METHODS = {
    "SIMPLE": simple_frequency_score,
    "TFIDF":  tfidf_score,
}


def select_scoring_method(algorithm):
    try:
        return SCORING_METHODS[algorithm]
    except (KeyError, TypeError):
        raise UnknownAlgorithmError(f"Unknown algorithm: {algorithm}") from None


# ─── RANKING ─────────────────────────────────────────────────────────────────
def page_score(doc, parsed_query, index, scoring_method) -> float:
    """Score of the best-matching group; groups are summed term by term."""
    best = 0.0
    for group in parsed_query.groups:
        best = max(best, sum(scoring_method(term, doc, index) for term in group))
    return best


def rank_documents(documents, parsed_query, index, scoring_method) -> list:
    scored = [(page_score(doc, parsed_query, index, scoring_method), doc) for doc in documents]
    # sorted() is stable, reverse=True included
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [doc for _, doc in scored]
