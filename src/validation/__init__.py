"""
Legal response validation for ADIL.

This package provides:
- Citation extraction (UU, Perppu, Perpres, KUHP, KUHPerdata, KUHAP, UUD 1945, Putusan MK/MA)
- Knowledge-base cross-checking (misconceptions, canonical provisions)
- Content checks (relevance, completeness, consistency, safety, quality)
- Localized rejection messages
"""
from .citations import extract_citations, classify_citation, is_valid_citation_format
from .config import ValidatorConfig
from .knowledge_base import KnowledgeBase, KnowledgeBaseError, load_knowledge_base
from .messages import generate_error_message, generate_suggestions
from .models import (
    CheckOutcome,
    CitationType,
    IssueType,
    LegalSource,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from .schemas import ValidationReport
from .validator import ResponseValidator, create_validator, fallback_result

__all__ = [
    # Validator
    "ResponseValidator",
    "ValidatorConfig",
    "create_validator",
    "fallback_result",
    "generate_error_message",
    "generate_suggestions",
    # Models
    "ValidationResult",
    "ValidationIssue",
    "IssueType",
    "Severity",
    "CheckOutcome",
    "LegalSource",
    "CitationType",
    "ValidationReport",
    # Knowledge base
    "KnowledgeBase",
    "KnowledgeBaseError",
    "load_knowledge_base",
    # Citations
    "extract_citations",
    "classify_citation",
    "is_valid_citation_format",
]
