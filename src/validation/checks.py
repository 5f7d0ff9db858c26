"""
Validation checks for Indonesian legal responses.

Each check is a stateless object implementing the Check protocol:
    run(query, response, knowledge_base) -> CheckOutcome

Checks:
  - TopicRelevanceCheck: Keyword-weighted domain relevance
  - SourceCitationCheck: Presence and density of legal citations
  - HallucinationCheck: Misconceptions, divergent provisions, absolute claims
  - LogicalConsistencyCheck: Nearby contradictions and narrative flow
  - CompletenessCheck: Steps for procedures, definitions for definitions
  - UnsafeContentCheck: Coaching to break the law, outcome guarantees
  - QualityCheck: Length, repetition, formal register

Every check scores out of 10. Deduction-based checks start at 10 and are
floored at 0.
"""
import re
import logging
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from .citations import classify_citation, extract_citations
from .config import ValidatorConfig
from .knowledge_base import KnowledgeBase, procedure_outline
from .models import CheckOutcome, IssueType, Severity, ValidationIssue
from .similarity import dice_coefficient, split_sentences

logger = logging.getLogger(__name__)

MAX_SCORE = 10.0


@runtime_checkable
class Check(Protocol):
    """A single validation check."""

    name: str

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        ...


class BaseCheck:
    """Shared configuration holder for the built-in checks."""

    name = "base"

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or ValidatorConfig()


def _clamp(score: float) -> float:
    return max(0.0, min(MAX_SCORE, score))


# ============================================
# Topic Relevance
# ============================================

class TopicRelevanceCheck(BaseCheck):
    """
    Estimate whether the exchange is about Indonesian law.

    Off-domain keywords weigh double against legal keywords. A low score
    means the query is out of scope; a passing score with some off-domain
    keywords means the answer drifted.
    """

    name = "topic_relevance"

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        text = f"{query} {response}".lower()

        positive = sum(1 for keyword in knowledge_base.positive_keywords if keyword in text)
        negative = sum(1 for keyword in knowledge_base.negative_keywords if keyword in text)

        score = _clamp(positive - self.config.negative_keyword_weight * negative)

        issues = []
        if score < self.config.min_relevance_score:
            issues.append(ValidationIssue(
                type=IssueType.TOPIC_IRRELEVANT,
                severity=Severity.CRITICAL,
                message="Query appears to be outside Indonesian law topics",
                suggestion="Please ask about Indonesian laws, regulations, or legal procedures",
            ))
        elif negative > 0:
            issues.append(ValidationIssue(
                type=IssueType.TOPIC_IRRELEVANT,
                severity=Severity.MEDIUM,
                message="Response contains some non-legal content",
                suggestion="Focus the response strictly on Indonesian legal matters",
            ))

        logger.debug(f"[TopicRelevance] positive={positive}, negative={negative}, score={score}/10")
        return CheckOutcome(score=score, issues=tuple(issues))


# ============================================
# Source Citations
# ============================================

class SourceCitationCheck(BaseCheck):
    """Require legal citations in proportion to response length."""

    name = "source_citation"

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        citations = extract_citations(response)
        count = len(citations)
        expected = max(1, len(response) // self.config.chars_per_citation)

        score = min(MAX_SCORE, MAX_SCORE * count / expected)

        issues = []
        if count == 0:
            score = 0.0
            issues.append(ValidationIssue(
                type=IssueType.MISSING_SOURCE,
                severity=Severity.CRITICAL,
                message="No legal source citations found in response",
                suggestion="Include specific references to Indonesian laws (UU, KUHP, etc.) with article numbers",
            ))
        elif count < expected:
            issues.append(ValidationIssue(
                type=IssueType.MISSING_SOURCE,
                severity=Severity.MEDIUM,
                message="Insufficient source citations for response length",
                suggestion="Add more specific legal references to support claims",
            ))

        for citation in citations:
            if classify_citation(citation.full_citation) is None:
                issues.append(ValidationIssue(
                    type=IssueType.MISSING_SOURCE,
                    severity=Severity.LOW,
                    message=f"Citation format may be incorrect: {citation.full_citation}",
                    suggestion="Use standard Indonesian legal citation format",
                ))

        logger.debug(f"[SourceCitation] found={count}, expected={expected}, score={score:.1f}/10")
        return CheckOutcome(
            score=score,
            issues=tuple(issues),
            sources=tuple(c.full_citation for c in citations),
        )


# ============================================
# Hallucination / Fact Consistency
# ============================================

ABSOLUTE_STATEMENT_PATTERNS = {
    "selalu": re.compile(r"\bselalu\s+\w+", re.IGNORECASE),
    "tidak_pernah": re.compile(r"\btidak\s+pernah\s+\w+", re.IGNORECASE),
    "semua": re.compile(r"\bsemua\s+\w+", re.IGNORECASE),
    "tidak_ada": re.compile(r"\btidak\s+ada\s+\w+", re.IGNORECASE),
}


class HallucinationCheck(BaseCheck):
    """
    Cross-check claims against the knowledge base.

    Deducts for known misconceptions, for known provisions whose
    surrounding text diverges from their canonical wording, and for
    unqualified absolute statements (once per pattern family).
    """

    name = "hallucination"

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        score = MAX_SCORE
        issues = []

        normalized = " ".join(response.lower().split())
        for phrase, truth in knowledge_base.misconceptions.items():
            if phrase in normalized:
                issues.append(ValidationIssue(
                    type=IssueType.HALLUCINATION,
                    severity=Severity.HIGH,
                    message=f"Potential misconception detected: {truth}",
                    suggestion="Verify this claim against current Indonesian law",
                ))
                score -= self.config.misconception_penalty

        lowered = response.lower()
        for citation, canonical in knowledge_base.iter_provisions():
            if not _cites_verbatim(response, citation):
                continue
            similarity = dice_coefficient(lowered, canonical.lower())
            if similarity < self.config.provision_similarity_threshold:
                issues.append(ValidationIssue(
                    type=IssueType.HALLUCINATION,
                    severity=Severity.MEDIUM,
                    message=f"Content about {citation} may not align with established law",
                    suggestion="Double-check this legal provision",
                ))
                score -= self.config.provision_mismatch_penalty

        for pattern in ABSOLUTE_STATEMENT_PATTERNS.values():
            if pattern.search(response):
                issues.append(ValidationIssue(
                    type=IssueType.HALLUCINATION,
                    severity=Severity.LOW,
                    message="Absolute statements should be avoided without clear legal basis",
                    suggestion="Use more qualified language or provide specific citations",
                ))
                score -= self.config.absolute_statement_penalty

        score = max(0.0, score)
        logger.debug(f"[Hallucination] issues={len(issues)}, score={score}/10")
        return CheckOutcome(score=score, issues=tuple(issues))


def _cites_verbatim(text: str, citation: str) -> bool:
    """True if citation occurs in text and is not the prefix of a longer number."""
    return re.search(re.escape(citation) + r"(?![0-9A-Za-z])", text) is not None


# ============================================
# Logical Consistency
# ============================================

# (affirmative label, pattern, negated label, pattern). The affirmative
# pattern must not match inside the negated form.
CONTRADICTION_PAIRS: List[Tuple[str, re.Pattern, str, re.Pattern]] = [
    ("dilarang", re.compile(r"\bdilarang\b"),
     "diperbolehkan", re.compile(r"\bdiperbolehkan\b")),
    ("wajib", re.compile(r"(?<!tidak\s)\bwajib\b"),
     "tidak wajib", re.compile(r"\btidak\s+wajib\b")),
    ("harus", re.compile(r"(?<!tidak\s)\bharus\b"),
     "tidak harus", re.compile(r"\btidak\s+harus\b")),
    ("boleh", re.compile(r"(?<!tidak\s)\bboleh\b"),
     "tidak boleh", re.compile(r"\btidak\s+boleh\b")),
    ("legal", re.compile(r"\blegal\b"),
     "ilegal", re.compile(r"\bilegal\b")),
]


class LogicalConsistencyCheck(BaseCheck):
    """Detect nearby contradictory statements and weak narrative flow."""

    name = "logical_consistency"

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        score = MAX_SCORE
        issues = []
        lowered = " ".join(response.lower().split())

        for label_a, pattern_a, label_b, pattern_b in CONTRADICTION_PAIRS:
            match_a = pattern_a.search(lowered)
            match_b = pattern_b.search(lowered)
            if not (match_a and match_b):
                continue
            if abs(match_a.start() - match_b.start()) < self.config.contradiction_distance:
                issues.append(ValidationIssue(
                    type=IssueType.INCONSISTENCY,
                    severity=Severity.HIGH,
                    message=f'Potential contradiction found between "{label_a}" and "{label_b}"',
                    suggestion="Clarify the specific circumstances for each statement",
                ))
                score -= self.config.contradiction_penalty

        sentences = [s.lower() for s in split_sentences(response, min_length=10)]
        if len(sentences) >= 3:
            connected = sum(
                1 for current, following in zip(sentences, sentences[1:])
                if dice_coefficient(current, following) > self.config.flow_similarity_threshold
            )
            if connected < (len(sentences) - 1) * self.config.min_flow_ratio:
                issues.append(ValidationIssue(
                    type=IssueType.INCONSISTENCY,
                    severity=Severity.LOW,
                    message="Response may lack logical flow between statements",
                    suggestion="Ensure ideas are connected and build upon each other",
                ))
                score -= self.config.weak_flow_penalty

        score = max(0.0, score)
        logger.debug(f"[LogicalConsistency] sentences={len(sentences)}, score={score}/10")
        return CheckOutcome(score=score, issues=tuple(issues))


# ============================================
# Completeness
# ============================================

PROCEDURAL_QUERY = re.compile(r"\b(cara|prosedur|langkah)", re.IGNORECASE)
STEP_MARKERS = re.compile(r"\d+[.)]\s|\bpertama\b|\bkedua\b|\bketiga\b|\blangkah\b", re.IGNORECASE)
DEFINITION_QUERY = re.compile(r"\bapa\s+itu\b|\bdefinisi\b|\bpengertian\b", re.IGNORECASE)
DEFINITION_MARKERS = re.compile(r"\b(adalah|yaitu|merupakan)\b", re.IGNORECASE)


class CompletenessCheck(BaseCheck):
    """Match the shape of the answer to the kind of question asked."""

    name = "completeness"

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        score = MAX_SCORE
        issues = []

        if PROCEDURAL_QUERY.search(query) and not STEP_MARKERS.search(response):
            suggestion = "Provide numbered steps or clear sequence of actions"
            procedure = knowledge_base.find_procedure(query)
            if procedure:
                suggestion = f"Provide numbered steps, for example: {procedure_outline(procedure[1])}"
            issues.append(ValidationIssue(
                type=IssueType.INCOMPLETE,
                severity=Severity.MEDIUM,
                message="Procedural query should include step-by-step guidance",
                suggestion=suggestion,
            ))
            score -= self.config.missing_steps_penalty

        if len(query) > self.config.long_query_length and len(response) < self.config.short_response_length:
            issues.append(ValidationIssue(
                type=IssueType.INCOMPLETE,
                severity=Severity.MEDIUM,
                message="Response appears too brief for the complexity of the query",
                suggestion="Provide more detailed explanation with relevant context",
            ))
            score -= self.config.brevity_penalty

        if DEFINITION_QUERY.search(query) and not DEFINITION_MARKERS.search(response):
            issues.append(ValidationIssue(
                type=IssueType.INCOMPLETE,
                severity=Severity.LOW,
                message="Definition query should include clear definition",
                suggestion='Provide explicit definition using "adalah" or "yaitu"',
            ))
            score -= self.config.missing_definition_penalty

        score = max(0.0, score)
        logger.debug(f"[Completeness] issues={len(issues)}, score={score}/10")
        return CheckOutcome(score=score, issues=tuple(issues))


# ============================================
# Unsafe Content
# ============================================

# Coaching to break the law. Any match zeroes the check.
UNSAFE_PATTERNS = [
    re.compile(
        r"\b(korupsi|suap|menyuap|gratifikasi|pencucian\s+uang|penggelapan)\b"
        r"[^.?!\n]*\btanpa\s+(ketahuan|terdeteksi|jejak)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\bcara\s+(untuk\s+)?(melakukan\s+)?korupsi\b", re.IGNORECASE),
    re.compile(r"\bcara\s+(untuk\s+)?(menyuap|menyogok|memberi\s+suap)\b", re.IGNORECASE),
    re.compile(
        r"\bcara\b[^.?!\n]*\bmenghindar\w*\s+(dari\s+)?(jerat\s+hukum|hukum|penyidikan)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(tips|trik)\b[^.?!\n]*\bmenghindar\w*\s+(dari\s+)?(jerat\s+hukum|hukum|sanksi|pajak|penyidikan)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\bcara\s+(untuk\s+)?melanggar\b", re.IGNORECASE),
    re.compile(r"\bcara\s+(untuk\s+)?memalsukan\b", re.IGNORECASE),
]

# Inappropriate assurances about legal outcomes.
GUARANTEE_PATTERNS = [
    re.compile(r"\bpasti\b[^.?!\n]*\bmenang\b", re.IGNORECASE),
    re.compile(r"\bdijamin\b[^.?!\n]*\bbebas\b", re.IGNORECASE),
    re.compile(r"\btidak\s+akan\b[^.?!\n]*\bketahuan\b", re.IGNORECASE),
]


class UnsafeContentCheck(BaseCheck):
    """
    Block guidance for circumventing the law.

    Unsafe patterns are matched against both the query and the response,
    so a request for illegal guidance is rejected even when the answer
    plays along only implicitly. Guarantee patterns apply to the response.
    """

    name = "unsafe_content"

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        score = MAX_SCORE
        issues = []
        exchange = f"{query}\n{response}"

        for pattern in UNSAFE_PATTERNS:
            if pattern.search(exchange):
                issues.append(ValidationIssue(
                    type=IssueType.UNSAFE_CONTENT,
                    severity=Severity.CRITICAL,
                    message="Response contains potentially harmful legal advice",
                    suggestion="Focus on legal compliance and proper procedures instead",
                ))
                score = 0.0

        for pattern in GUARANTEE_PATTERNS:
            if pattern.search(response):
                issues.append(ValidationIssue(
                    type=IssueType.UNSAFE_CONTENT,
                    severity=Severity.HIGH,
                    message="Response provides inappropriate legal assurances",
                    suggestion="Avoid giving absolute guarantees about legal outcomes",
                ))
                score -= self.config.guarantee_penalty

        score = max(0.0, score)
        if issues:
            logger.debug(f"[UnsafeContent] {len(issues)} unsafe patterns matched, score={score}/10")
        return CheckOutcome(score=score, issues=tuple(issues))


# ============================================
# Quality
# ============================================

class QualityCheck(BaseCheck):
    """Assess length, repetition and use of formal legal Indonesian."""

    name = "quality"

    def run(self, query: str, response: str, knowledge_base: KnowledgeBase) -> CheckOutcome:
        score = MAX_SCORE
        issues = []

        if len(response) < self.config.min_response_length:
            issues.append(ValidationIssue(
                type=IssueType.LOW_QUALITY,
                severity=Severity.MEDIUM,
                message="Response is too short to be informative",
                suggestion="Provide more detailed explanation",
            ))
            score -= self.config.short_response_penalty

        sentences = [s.lower() for s in split_sentences(response, min_length=5)]
        repetitions = 0
        for i in range(len(sentences)):
            for j in range(i + 1, len(sentences)):
                if dice_coefficient(sentences[i], sentences[j]) > self.config.repetition_similarity_threshold:
                    repetitions += 1

        if repetitions > 1:
            issues.append(ValidationIssue(
                type=IssueType.LOW_QUALITY,
                severity=Severity.LOW,
                message="Response contains repetitive content",
                suggestion="Vary the language and avoid redundancy",
            ))
            score -= self.config.repetition_penalty

        formality = formality_score(response, knowledge_base.formal_vocabulary)
        if formality < self.config.min_formality_score:
            issues.append(ValidationIssue(
                type=IssueType.LOW_QUALITY,
                severity=Severity.LOW,
                message="Response should use more formal legal language",
                suggestion="Use appropriate legal terminology and formal Indonesian",
            ))
            score -= self.config.informal_penalty

        score = max(0.0, score)
        logger.debug(
            f"[Quality] repetitions={repetitions}, formality={formality:.1f}, score={score}/10"
        )
        return CheckOutcome(score=score, issues=tuple(issues))


def formality_score(text: str, vocabulary: Tuple[str, ...]) -> float:
    """Share of words containing a formal-register term, scaled to 0-10."""
    words = text.lower().split()
    if not words:
        return 0.0
    formal = sum(1 for word in words if any(term in word for term in vocabulary))
    return min(MAX_SCORE, formal / len(words) * 100)


def default_checks(config: Optional[ValidatorConfig] = None) -> List[BaseCheck]:
    """The seven built-in checks, in aggregation order."""
    return [
        TopicRelevanceCheck(config),
        SourceCitationCheck(config),
        HallucinationCheck(config),
        LogicalConsistencyCheck(config),
        CompletenessCheck(config),
        UnsafeContentCheck(config),
        QualityCheck(config),
    ]
