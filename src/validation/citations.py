"""
Citation extraction for Indonesian legal texts.

Recognizes statutes (UU, Perppu, Perpres), code articles (KUHP,
KUHPerdata, KUHAP), constitution articles (UUD 1945) and court decisions
(Putusan MK, Putusan MA). Matching is case-insensitive and the matched
text is returned verbatim, since citations are shown to the user as-is.

Usage:
    from src.validation.citations import extract_citations

    sources = extract_citations("Berdasarkan KUHP Pasal 362, ...")
    # [LegalSource(type=CitationType.KUHP, full_citation="KUHP Pasal 362", article="362")]
"""
import re
import logging
from typing import List, Optional, Tuple

from .models import CitationType, LegalSource

logger = logging.getLogger(__name__)


# Order matters only for output order; overlapping matches are all kept.
CITATION_PATTERNS: List[Tuple[CitationType, re.Pattern]] = [
    (CitationType.UU, re.compile(
        r"\bUU\s+No\.?\s*(?P<number>\d+)\s+Tahun\s+(?P<year>\d{4})", re.IGNORECASE)),
    (CitationType.UU, re.compile(
        r"\bUndang-Undang\s+Nomor\s+(?P<number>\d+)\s+Tahun\s+(?P<year>\d{4})", re.IGNORECASE)),
    (CitationType.PERPPU, re.compile(
        r"\bPerppu\s+No\.?\s*(?P<number>\d+)/(?P<year>\d{4})", re.IGNORECASE)),
    (CitationType.PERPRES, re.compile(
        r"\bPerpres\s+No\.?\s*(?P<number>\d+)\s+Tahun\s+(?P<year>\d{4})", re.IGNORECASE)),
    (CitationType.KUHP, re.compile(
        r"\bKUHP\s+Pasal\s+(?P<article>\d+)", re.IGNORECASE)),
    (CitationType.KUHPERDATA, re.compile(
        r"\bKUHPerdata\s+Pasal\s+(?P<article>\d+)", re.IGNORECASE)),
    (CitationType.KUHAP, re.compile(
        r"\bKUHAP\s+Pasal\s+(?P<article>\d+)", re.IGNORECASE)),
    (CitationType.UUD, re.compile(
        r"\bUUD\s+1945\s+Pasal\s+(?P<article>\d+[A-Z]?)", re.IGNORECASE)),
    (CitationType.PUTUSAN, re.compile(
        r"\bPutusan\s+MK\s+No\.?\s*(?P<number>\d+/[A-Z]+-[A-Z]+/\d{4})", re.IGNORECASE)),
    (CitationType.PUTUSAN, re.compile(
        r"\bPutusan\s+MA\s+No\.?\s*(?P<number>\d+\s*K/[A-Z]+/\d{4})", re.IGNORECASE)),
]


def extract_citations(text: str) -> List[LegalSource]:
    """
    Find every legal citation in text.

    A substring matched by several grammars is returned once per grammar;
    deduplication is left to the caller.

    Args:
        text: Free text to scan.

    Returns:
        LegalSource per match, grouped by grammar, in text order within a grammar.
    """
    found = []
    for citation_type, pattern in CITATION_PATTERNS:
        for match in pattern.finditer(text):
            groups = match.groupdict()
            found.append(LegalSource(
                type=citation_type,
                full_citation=match.group(0),
                number=groups.get("number"),
                year=groups.get("year"),
                article=groups.get("article"),
            ))
    return found


def classify_citation(citation: str) -> Optional[CitationType]:
    """
    Re-match a citation string against the grammar set.

    Returns:
        The family of the first grammar matching the whole string, or
        None if the string is not a well-formed citation.
    """
    candidate = citation.strip()
    for citation_type, pattern in CITATION_PATTERNS:
        if pattern.fullmatch(candidate):
            return citation_type
    return None


def is_valid_citation_format(citation: str) -> bool:
    return classify_citation(citation) is not None
