# document.py - Sift Document Model
# One indexed page: url line, title line, then one body term per line

from dataclasses import dataclass, field

PAGE_MARKER  = "*PAGE:"
TITLE_MARKER = "title"


def is_body_line(line) -> bool:
    """Lines that count as content for frequency statistics."""
    return bool(line) and not line.startswith(PAGE_MARKER) and not line.startswith(TITLE_MARKER)


@dataclass(frozen=True)
class Document:
    """A page of the corpus.

    Two documents are equal iff their ids are equal; ``lines`` is kept
    verbatim (``None`` and empty entries included) and takes no part in
    comparison or hashing.
    """

    id: int
    lines: tuple = field(compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def url(self) -> str:
        # Raises IndexError when the page has no lines
        return self.lines[0][len(PAGE_MARKER):].strip()

    @property
    def title(self) -> str:
        return self.lines[1]

    def word_frequency(self, term) -> int:
        """Case-insensitive count of body lines equal to ``term``."""
        if not term:
            return 0
        wanted = term.casefold()
        return sum(1 for line in self.lines if is_body_line(line) and line.casefold() == wanted)

    def total_words(self) -> int:
        return sum(1 for line in self.lines if is_body_line(line))

    def contains_search_term(self, term) -> bool:
        # Exact match against every raw line, metadata included
        if not term:
            return False
        return len(self.lines) > 2 and term in self.lines
