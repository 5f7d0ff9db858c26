"""Tests for suggestions and user-facing rejection messages."""

import pytest

from src.validation.messages import (
    FALLBACK_ERROR_MESSAGE,
    INCOMPLETE_INFORMATION_MESSAGE,
    generate_error_message,
    generate_suggestions,
)
from src.validation.models import IssueType, Severity, ValidationIssue, ValidationResult


def make_result(*issues):
    return ValidationResult(is_valid=False, validated_text="jawaban", confidence=20.0, issues=tuple(issues))


def issue(issue_type, severity, suggestion=None):
    return ValidationIssue(type=issue_type, severity=severity, message="m", suggestion=suggestion)


class TestGenerateSuggestions:
    """Test suggestion derivation."""

    def test_issue_suggestions_then_generic(self):
        """Issue suggestions come before generic ones."""
        suggestions = generate_suggestions([
            issue(IssueType.MISSING_SOURCE, Severity.CRITICAL, "Cite the statute"),
            issue(IssueType.HALLUCINATION, Severity.LOW, "Qualify the claim"),
        ])
        assert suggestions == [
            "Cite the statute",
            "Qualify the claim",
            "Include specific references to Indonesian laws with article numbers",
        ]

    def test_duplicates_are_dropped(self):
        """Each suggestion appears once."""
        suggestions = generate_suggestions([
            issue(IssueType.INCOMPLETE, Severity.MEDIUM, "Add steps"),
            issue(IssueType.INCOMPLETE, Severity.LOW, "Add steps"),
        ])
        assert suggestions == ["Add steps", "Provide more comprehensive coverage of the legal topic"]

    def test_generic_without_specific(self):
        """Issues without a suggestion still add the generic hint."""
        suggestions = generate_suggestions([issue(IssueType.TOPIC_IRRELEVANT, Severity.CRITICAL)])
        assert suggestions == ["Focus strictly on Indonesian legal topics and regulations"]

    def test_no_issues(self):
        """No issues, no suggestions."""
        assert generate_suggestions([]) == []


class TestGenerateErrorMessage:
    """Test the Indonesian rejection messages."""

    def test_off_topic(self):
        """Off-topic template."""
        message = generate_error_message(make_result(issue(IssueType.TOPIC_IRRELEVANT, Severity.CRITICAL)))
        assert "hukum Indonesia" in message
        assert "undang-undang" in message

    def test_missing_source(self):
        """Missing-source template."""
        message = generate_error_message(make_result(issue(IssueType.MISSING_SOURCE, Severity.CRITICAL)))
        assert "sumber hukum" in message
        assert "UU/Peraturan" in message

    def test_unsafe(self):
        """Unsafe-content template."""
        message = generate_error_message(make_result(issue(IssueType.UNSAFE_CONTENT, Severity.CRITICAL)))
        assert "melanggar hukum" in message
        assert "mematuhi" in message

    def test_first_critical_issue_wins(self):
        """The first CRITICAL issue selects the template."""
        message = generate_error_message(make_result(
            issue(IssueType.HALLUCINATION, Severity.HIGH),
            issue(IssueType.MISSING_SOURCE, Severity.CRITICAL),
            issue(IssueType.UNSAFE_CONTENT, Severity.CRITICAL),
        ))
        assert "sumber hukum" in message

    def test_other_critical_type_uses_fallback(self):
        """Other CRITICAL types use the generic template."""
        message = generate_error_message(make_result(issue(IssueType.LOW_QUALITY, Severity.CRITICAL)))
        assert message == FALLBACK_ERROR_MESSAGE

    @pytest.mark.parametrize("issues", [
        (),
        (issue(IssueType.INCOMPLETE, Severity.MEDIUM),),
    ])
    def test_without_critical_issue(self, issues):
        """Without CRITICAL issues the softer message is used."""
        message = generate_error_message(make_result(*issues))
        assert message == INCOMPLETE_INFORMATION_MESSAGE
        assert "ahli hukum" in message

    def test_from_validation(self, validator, cooking_exchange):
        """Message for a real off-topic validation."""
        result = validator.validate_response(*cooking_exchange)
        assert "hukum Indonesia" in generate_error_message(result)
