"""
String similarity for heuristic text comparison.

Uses the Sørensen–Dice coefficient over character bigrams, ignoring
whitespace. Cheap enough to run pairwise over every sentence of a
response.
"""
import re
from collections import Counter
from typing import List

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def dice_coefficient(first: str, second: str) -> float:
    """
    Calculate bigram Dice similarity between two strings.

    Args:
        first: First string
        second: Second string

    Returns:
        Similarity score between 0 and 1
    """
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = Counter(first[i:i + 2] for i in range(len(first) - 1))
    second_bigrams = Counter(second[i:i + 2] for i in range(len(second) - 1))

    intersection = sum((first_bigrams & second_bigrams).values())
    return (2.0 * intersection) / (len(first) + len(second) - 2)


def split_sentences(text: str, min_length: int) -> List[str]:
    """Split on sentence punctuation, keeping pieces longer than min_length."""
    return [s for s in _SENTENCE_BOUNDARY.split(text) if len(s.strip()) > min_length]
