"""Lexical similarity used for grouping and debate agreement."""

from itertools import combinations

# Responses are "similar" when their Jaccard ratio is strictly above this.
SIMILARITY_THRESHOLD = 0.6


def tokenize(text: str) -> set[str]:
    """Lower-case text and split on whitespace into a token set."""
    return set(text.lower().split())


def jaccard_similarity(a: str, b: str) -> float:
    """
    Jaccard ratio of the token sets of a and b.

    Two texts with no tokens at all (empty or whitespace only) have an empty
    union and score 0, so they are never considered similar to each other.
    """
    tokens_a = tokenize(a)
    tokens_b = tokenize(b)

    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


def are_similar(a: str, b: str, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    """Check whether two texts clear the similarity threshold."""
    return jaccard_similarity(a, b) > threshold


def average_pairwise_similarity(contents: list[str]) -> float:
    """
    Mean Jaccard similarity over every unordered pair.

    Defined as 1.0 for zero or one text: a lone participant agrees with
    itself.
    """
    if len(contents) <= 1:
        return 1.0

    scores = [jaccard_similarity(a, b) for a, b in combinations(contents, 2)]
    return sum(scores) / len(scores)
