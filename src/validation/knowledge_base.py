"""
Indonesian Law Knowledge Base.

Static, read-only reference data used to cross-check responses:
- Canonical text of well-known provisions, grouped by legal domain
- Common misconceptions and their corrections
- Multi-step legal procedures
- Topic keyword sets and the formal-register vocabulary

The tables live in a versioned JSON file so they can be edited without
touching check logic. The file is read once at startup; the resulting
KnowledgeBase is immutable and can be shared across threads.

Usage:
    from src.validation.knowledge_base import load_knowledge_base

    kb = load_knowledge_base()
    for citation, text in kb.iter_provisions():
        ...
"""
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_KB_PATH = Path(__file__).parent / "data" / "knowledge_base.json"

REQUIRED_SECTIONS = ("provisions", "misconceptions", "procedures", "keywords", "formal_vocabulary")


class KnowledgeBaseError(Exception):
    """Raised when the knowledge base file is missing or malformed."""


@dataclass(frozen=True)
class KnowledgeBase:
    """
    Read-only legal reference data.

    Attributes:
        version: Revision identifier of the data tables.
        provisions: Domain -> (citation -> canonical text).
        misconceptions: Misconception phrase -> corrective truth.
        procedures: Procedure name -> ordered steps.
        positive_keywords: Keywords indicating Indonesian legal topics.
        negative_keywords: Keywords indicating off-domain topics.
        formal_vocabulary: Words typical of formal legal Indonesian.
    """
    version: str
    provisions: Mapping[str, Mapping[str, str]]
    misconceptions: Mapping[str, str]
    procedures: Mapping[str, Tuple[str, ...]]
    positive_keywords: Tuple[str, ...]
    negative_keywords: Tuple[str, ...]
    formal_vocabulary: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict) -> "KnowledgeBase":
        """Build an immutable knowledge base from raw table data."""
        missing = [s for s in REQUIRED_SECTIONS if s not in data]
        if missing:
            raise KnowledgeBaseError(f"Knowledge base is missing sections: {', '.join(missing)}")

        keywords = data["keywords"]
        try:
            return cls(
                version=str(data.get("version", "unversioned")),
                provisions=MappingProxyType({
                    domain: MappingProxyType(dict(entries))
                    for domain, entries in data["provisions"].items()
                }),
                misconceptions=MappingProxyType({
                    _normalize_phrase(phrase): truth
                    for phrase, truth in data["misconceptions"].items()
                }),
                procedures=MappingProxyType({
                    name: tuple(steps) for name, steps in data["procedures"].items()
                }),
                positive_keywords=tuple(k.lower() for k in keywords["positive"]),
                negative_keywords=tuple(k.lower() for k in keywords["negative"]),
                formal_vocabulary=tuple(w.lower() for w in data["formal_vocabulary"]),
            )
        except (AttributeError, KeyError, TypeError) as e:
            raise KnowledgeBaseError(f"Malformed knowledge base: {e}") from e

    def iter_provisions(self) -> Iterator[Tuple[str, str]]:
        """Yield (citation, canonical text) across all domains, in file order."""
        for entries in self.provisions.values():
            yield from entries.items()

    def find_procedure(self, text: str) -> Optional[Tuple[str, Tuple[str, ...]]]:
        """
        Find a known procedure named in free text.

        Procedure names are stored with underscores ("gugatan_cerai") and
        matched as words ("gugatan cerai").

        Returns:
            (name, steps) of the first matching procedure, or None.
        """
        lowered = _normalize_phrase(text)
        for name, steps in self.procedures.items():
            if name.replace("_", " ") in lowered:
                return name, steps
        return None

    def stats(self) -> Dict[str, int]:
        """Table sizes, for logging and health reporting."""
        return {
            "provisions": sum(len(entries) for entries in self.provisions.values()),
            "misconceptions": len(self.misconceptions),
            "procedures": len(self.procedures),
            "positive_keywords": len(self.positive_keywords),
            "negative_keywords": len(self.negative_keywords),
            "formal_vocabulary": len(self.formal_vocabulary),
        }


def _normalize_phrase(text: str) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join(text.lower().split())


def load_knowledge_base(path: Optional[Union[str, Path]] = None) -> KnowledgeBase:
    """
    Load the knowledge base from a JSON file.

    Args:
        path: Path to the JSON tables. Uses the bundled file if None.

    Returns:
        Immutable KnowledgeBase.

    Raises:
        KnowledgeBaseError: If the file cannot be read or is malformed.
    """
    kb_path = Path(path) if path else DEFAULT_KB_PATH

    if not kb_path.exists():
        raise KnowledgeBaseError(f"Knowledge base not found at {kb_path}")

    try:
        with open(kb_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise KnowledgeBaseError(f"Failed to read knowledge base {kb_path}: {e}") from e

    if not isinstance(data, dict):
        raise KnowledgeBaseError(f"Knowledge base {kb_path} must contain a JSON object")

    kb = KnowledgeBase.from_dict(data)
    logger.info(f"Loaded knowledge base v{kb.version} from {kb_path}: {kb.stats()}")
    return kb


def procedure_outline(steps: Sequence[str]) -> str:
    """Render procedure steps as a numbered outline."""
    return " ".join(f"{i}. {step}." for i, step in enumerate(steps, start=1))
