"""
Data models for the ADIL response validator.

Every structure produced by a validation run is frozen: a ValidationResult
is built once by the orchestrator and never mutated afterwards.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field


# ============================================
# Enumerations
# ============================================

class IssueType(str, Enum):
    """Category of a validation issue."""
    TOPIC_IRRELEVANT = "TOPIC_IRRELEVANT"
    MISSING_SOURCE = "MISSING_SOURCE"
    HALLUCINATION = "HALLUCINATION"
    INCONSISTENCY = "INCONSISTENCY"
    INCOMPLETE = "INCOMPLETE"
    UNSAFE_CONTENT = "UNSAFE_CONTENT"
    LOW_QUALITY = "LOW_QUALITY"


class Severity(str, Enum):
    """
    Ordinal severity of an issue: LOW < MEDIUM < HIGH < CRITICAL.

    CRITICAL vetoes validity irrespective of the confidence score.
    """
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self.value]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {"LOW": 0, "MEDIUM": 1, "HIGH": 2, "CRITICAL": 3}


class CitationType(str, Enum):
    """Coarse family of an Indonesian legal citation."""
    UU = "UU"
    PERPPU = "PERPPU"
    PERPRES = "PERPRES"
    PERATURAN = "PERATURAN"
    PUTUSAN = "PUTUSAN"
    KUHP = "KUHP"
    KUHPERDATA = "KUHPERDATA"
    KUHAP = "KUHAP"
    UUD = "UUD"


# ============================================
# Issues and Sources
# ============================================

@dataclass(frozen=True)
class ValidationIssue:
    """
    A single problem found in a response.

    Attributes:
        type: Issue category.
        severity: Ordinal severity.
        message: Human-readable description of the problem.
        suggestion: Optional concrete next step for fixing it.
    """
    type: IssueType
    severity: Severity
    message: str
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class LegalSource:
    """Citation found in free text, returned verbatim."""
    type: CitationType
    full_citation: str
    number: Optional[str] = None
    year: Optional[str] = None
    article: Optional[str] = None


@dataclass(frozen=True)
class CheckOutcome:
    """Partial result of one check. Internal to the orchestrator."""
    score: float
    max_score: float = 10.0
    issues: Tuple[ValidationIssue, ...] = ()
    sources: Tuple[str, ...] = ()


# ============================================
# Validation Result
# ============================================

@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one (query, response) pair.

    Attributes:
        is_valid: True when confidence reaches the threshold and no
                  CRITICAL issue was raised.
        validated_text: The response exactly as it was assessed.
        confidence: Aggregate score in [0, 100].
        issues: Issues in check-execution order.
        sources: Citations found, deduplicated, first-seen order.
        suggestions: Improvement hints. None when the result is valid.
    """
    is_valid: bool
    validated_text: str
    confidence: float
    issues: Tuple[ValidationIssue, ...] = ()
    sources: Tuple[str, ...] = ()
    suggestions: Optional[Tuple[str, ...]] = None

    @property
    def critical_issues(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.CRITICAL]

    def has_issue(self, issue_type: IssueType, severity: Optional[Severity] = None) -> bool:
        """Check whether an issue of the given type (and severity) is present."""
        return any(
            i.type == issue_type and (severity is None or i.severity == severity)
            for i in self.issues
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the chat API payload."""
        data = {
            "isValid": self.is_valid,
            "validatedText": self.validated_text,
            "confidence": self.confidence,
            "issues": [i.to_dict() for i in self.issues],
            "sources": list(self.sources),
        }
        if self.suggestions is not None:
            data["suggestions"] = list(self.suggestions)
        return data
