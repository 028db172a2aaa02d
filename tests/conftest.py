"""Shared fixtures: a four-page corpus where word1 appears on two pages."""

import pytest

from indexer import load_index, read_corpus, split_documents

CORPUS = """\
*PAGE:http://page1.com
title1
word1
word2
*PAGE:http://page2.com
title2
word1
word3
word3
*PAGE:http://page3.com
title3
word2
word4
*PAGE:http://page4.com
title4
word5

"""


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "test-file.txt"
    path.write_text(CORPUS, encoding="utf-8")
    return path


@pytest.fixture
def index(corpus_file):
    return load_index(corpus_file)


@pytest.fixture
def pages(corpus_file):
    """Fixture documents keyed by url; ids match the ones in ``index``."""
    return {doc.url: doc for doc in split_documents(read_corpus(corpus_file))}
