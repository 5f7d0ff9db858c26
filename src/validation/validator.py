"""
ADIL Response Validator.

Decides whether a generated answer about Indonesian law is safe and
trustworthy enough to return to the user.

Flow:
1. Run the seven checks against the same (query, response) pair
2. Concatenate issues and sources in check-definition order
3. Deduplicate sources, first occurrence wins
4. Confidence = 100 * total score / total max score
5. Valid when confidence >= threshold and no CRITICAL issue
6. Derive suggestions for invalid results

Checks are isolated: a check that raises contributes a zero score and a
CRITICAL diagnostic issue, so a broken check can never let a response
through. Any failure outside the checks returns a fixed fail-closed result.

Usage:
    from src.validation import create_validator, generate_error_message

    validator = create_validator()
    result = validator.validate_response(query, answer)
    if not result.is_valid:
        answer = generate_error_message(result)
"""
import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

from .checks import MAX_SCORE, Check, default_checks
from .config import ValidatorConfig
from .knowledge_base import KnowledgeBase, load_knowledge_base
from .messages import generate_suggestions
from .models import CheckOutcome, IssueType, Severity, ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

# Known-good exchange used by health_check()
HEALTH_CHECK_QUERY = "Apa sanksi pidana untuk pencurian?"
HEALTH_CHECK_RESPONSE = (
    "Berdasarkan KUHP Pasal 362, pencurian diancam dengan pidana penjara paling lama "
    "lima tahun atau pidana denda paling banyak sembilan ratus rupiah."
)


def fallback_result(response: Any) -> ValidationResult:
    """Fail-closed result returned when validation itself breaks."""
    issues = (ValidationIssue(
        type=IssueType.LOW_QUALITY,
        severity=Severity.CRITICAL,
        message="Validation system error occurred",
        suggestion="Please try again with a different query",
    ),)
    return ValidationResult(
        is_valid=False,
        validated_text=response if isinstance(response, str) else "",
        confidence=0.0,
        issues=issues,
        sources=(),
        suggestions=tuple(generate_suggestions(issues)),
    )


class ResponseValidator:
    """
    Orchestrates the validation checks and aggregates their outcomes.

    The validator holds only immutable state (configuration, knowledge
    base, check objects) and can be shared across threads.

    Attributes:
        config: Scoring thresholds and execution settings.
        knowledge_base: Read-only legal reference data.
        checks: Checks in aggregation order.
    """

    def __init__(
        self,
        config: Optional[ValidatorConfig] = None,
        knowledge_base: Optional[KnowledgeBase] = None,
        checks: Optional[Iterable[Check]] = None,
    ):
        """
        Initialize the validator.

        Args:
            config: Validator configuration. Uses defaults if None.
            knowledge_base: Reference data. Loaded from config.knowledge_base_path
                            (or the bundled tables) if None.
            checks: Custom check sequence. Uses the seven built-in checks if None.
        """
        self.config = config or ValidatorConfig()
        self.knowledge_base = knowledge_base or load_knowledge_base(self.config.knowledge_base_path)
        self.checks = tuple(checks) if checks is not None else tuple(default_checks(self.config))

        if self.config.debug:
            logger.info(
                f"Response validator initialized in debug mode "
                f"({len(self.checks)} checks, knowledge base v{self.knowledge_base.version})"
            )

    def validate_response(self, query: str, response: str) -> ValidationResult:
        """
        Validate a generated response against the user's query.

        Args:
            query: The user's question.
            response: The candidate answer.

        Returns:
            ValidationResult. Never raises.
        """
        start = time.time()

        try:
            if not response.strip():
                result = self._empty_response_result(response)
            else:
                outcomes = self._run_checks(query, response)
                result = self._aggregate(response, outcomes)
        except Exception:
            logger.exception("[Validator] Validation failed, returning fail-closed result")
            return fallback_result(response)

        duration_ms = (time.time() - start) * 1000
        summary = (
            f"[Validator] Completed in {duration_ms:.1f}ms - valid={result.is_valid}, "
            f"confidence={result.confidence:.1f}%, issues={len(result.issues)}, "
            f"sources={len(result.sources)}"
        )
        if self.config.debug:
            logger.info(summary)
        else:
            logger.debug(summary)

        return result

    def health_check(self) -> Dict[str, Any]:
        """
        Validate a known-good exchange and report validator health.

        Returns:
            Dict with status ("healthy"/"unhealthy"), latency, knowledge base
            version and the names of the configured checks.
        """
        start = time.time()
        result = self.validate_response(HEALTH_CHECK_QUERY, HEALTH_CHECK_RESPONSE)
        latency = (time.time() - start) * 1000

        return {
            "status": "healthy" if result.is_valid else "unhealthy",
            "latency_ms": round(latency, 1),
            "knowledge_base_version": self.knowledge_base.version,
            "checks": [check.name for check in self.checks],
        }

    # ============================================
    # Internals
    # ============================================

    def _run_checks(self, query: str, response: str) -> List[CheckOutcome]:
        """Run all checks. Outcomes are returned in check-definition order."""
        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = [
                    executor.submit(self._run_isolated, check, query, response)
                    for check in self.checks
                ]
                return [future.result() for future in futures]

        return [self._run_isolated(check, query, response) for check in self.checks]

    def _run_isolated(self, check: Check, query: str, response: str) -> CheckOutcome:
        """Run one check, converting a failure into a zero-score outcome."""
        try:
            return check.run(query, response, self.knowledge_base)
        except Exception:
            logger.exception(f"[Validator] Check '{check.name}' failed")
            return CheckOutcome(
                score=0.0,
                max_score=MAX_SCORE,
                issues=(ValidationIssue(
                    type=IssueType.LOW_QUALITY,
                    severity=Severity.CRITICAL,
                    message=f"Validation check '{check.name}' could not be completed",
                    suggestion="Please try again with a different query",
                ),),
            )

    def _aggregate(self, response: str, outcomes: List[CheckOutcome]) -> ValidationResult:
        issues: List[ValidationIssue] = []
        sources: List[str] = []
        total_score = 0.0
        max_score = 0.0

        for check, outcome in zip(self.checks, outcomes):
            issues.extend(outcome.issues)
            sources.extend(outcome.sources)
            total_score += outcome.score
            max_score += outcome.max_score
            logger.debug(f"[Validator] {check.name}: {outcome.score:.1f}/{outcome.max_score:.0f}")

        confidence = (total_score / max_score) * 100 if max_score > 0 else 0.0
        confidence = max(0.0, min(100.0, confidence))

        is_valid = (
            confidence >= self.config.validity_threshold
            and not any(issue.severity == Severity.CRITICAL for issue in issues)
        )

        return ValidationResult(
            is_valid=is_valid,
            validated_text=response,
            confidence=confidence,
            issues=tuple(issues),
            sources=tuple(dict.fromkeys(sources)),
            suggestions=None if is_valid else tuple(generate_suggestions(issues)),
        )

    def _empty_response_result(self, response: str) -> ValidationResult:
        """Blank responses run no checks and score zero."""
        issues = (
            ValidationIssue(
                type=IssueType.MISSING_SOURCE,
                severity=Severity.CRITICAL,
                message="No legal source citations found in response",
                suggestion="Include specific references to Indonesian laws (UU, KUHP, etc.) with article numbers",
            ),
            ValidationIssue(
                type=IssueType.LOW_QUALITY,
                severity=Severity.CRITICAL,
                message="Response is empty",
                suggestion="Provide a substantive answer that cites Indonesian law",
            ),
        )
        return ValidationResult(
            is_valid=False,
            validated_text=response,
            confidence=0.0,
            issues=issues,
            sources=(),
            suggestions=tuple(generate_suggestions(issues)),
        )


def create_validator(
    config: Optional[ValidatorConfig] = None,
    knowledge_base: Optional[KnowledgeBase] = None,
) -> ResponseValidator:
    """
    Build a validator for process-wide use.

    Call once at startup and pass the instance to request handlers.

    Args:
        config: Configuration. Read from the environment if None.
        knowledge_base: Preloaded reference data, optional.
    """
    return ResponseValidator(config=config or ValidatorConfig.from_env(), knowledge_base=knowledge_base)
