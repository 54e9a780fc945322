"""Jaccard similarity over whitespace-token sets."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple

DEFAULT_THRESHOLD = 0.2
CENTS = Decimal("0.01")


class CorpusEntry(NamedTuple):
    id: int
    filename: str
    content: str


class Match(NamedTuple):
    id: int
    filename: str
    similarity: float


def tokenize(text: str) -> set[str]:
    return set((text or "").split())


def jaccard(a: set[str], b: set[str]) -> Decimal:
    union = a | b
    if not union:
        return Decimal(0)
    return Decimal(len(a & b)) / Decimal(len(union))


def similarity(text_a: str, text_b: str) -> float:
    """Size of the token intersection over the size of the token union.

    Two texts without any tokens have similarity 0.
    """
    return float(jaccard(tokenize(text_a), tokenize(text_b)))


def scan(new_text: str, corpus: Iterable[CorpusEntry], threshold: float = DEFAULT_THRESHOLD) -> list[Match]:
    """Every corpus entry at or above ``threshold``, in corpus order.

    Scores are rounded half-up to two decimals after the threshold check.
    Entries below the threshold are dropped, nothing is ranked or truncated.
    """
    tokens = tokenize(new_text)
    cutoff = Decimal(str(threshold))
    matches = []
    for entry in corpus:
        score = jaccard(tokens, tokenize(entry.content))
        if score >= cutoff:
            rounded = score.quantize(CENTS, rounding=ROUND_HALF_UP)
            matches.append(Match(entry.id, entry.filename, float(rounded)))
    return matches
