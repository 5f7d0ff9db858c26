"""
Suggestions and user-facing rejection messages.

Issue messages are internal rationale (English). The rejection message
returned to the end user is Indonesian.
"""
from typing import Iterable, List

from .models import IssueType, Severity, ValidationIssue, ValidationResult


# Added once when any issue of the type is present.
GENERIC_SUGGESTIONS = {
    IssueType.MISSING_SOURCE: "Include specific references to Indonesian laws with article numbers",
    IssueType.TOPIC_IRRELEVANT: "Focus strictly on Indonesian legal topics and regulations",
    IssueType.INCOMPLETE: "Provide more comprehensive coverage of the legal topic",
}

ERROR_MESSAGES = {
    IssueType.TOPIC_IRRELEVANT: (
        "Maaf, saya hanya dapat membantu dengan pertanyaan tentang hukum Indonesia. "
        "Silakan tanyakan tentang undang-undang, peraturan, atau aspek hukum lainnya "
        "yang berlaku di Indonesia."
    ),
    IssueType.MISSING_SOURCE: (
        "Respons memerlukan sumber hukum yang valid (UU/Peraturan). Silakan ajukan "
        "pertanyaan yang lebih spesifik agar saya dapat memberikan jawaban dengan "
        "rujukan yang tepat."
    ),
    IssueType.UNSAFE_CONTENT: (
        "Maaf, saya tidak dapat memberikan informasi yang dapat digunakan untuk "
        "melanggar hukum. Silakan tanyakan tentang cara mematuhi peraturan yang berlaku."
    ),
}

FALLBACK_ERROR_MESSAGE = (
    "Respons tidak dapat divalidasi sebagai informasi hukum yang akurat. Silakan coba "
    "dengan pertanyaan yang lebih spesifik tentang hukum Indonesia."
)

INCOMPLETE_INFORMATION_MESSAGE = (
    "Informasi yang diberikan mungkin tidak lengkap atau akurat. Untuk kepastian hukum, "
    "konsultasikan dengan ahli hukum yang berwenang."
)


def generate_suggestions(issues: Iterable[ValidationIssue]) -> List[str]:
    """
    Collect improvement suggestions for a failed validation.

    Issue-specific suggestions come first in issue order, followed by one
    generic suggestion per issue type present. Duplicates are dropped.
    """
    issues = list(issues)
    suggestions = []

    for issue in issues:
        if issue.suggestion and issue.suggestion not in suggestions:
            suggestions.append(issue.suggestion)

    present = {issue.type for issue in issues}
    for issue_type, suggestion in GENERIC_SUGGESTIONS.items():
        if issue_type in present and suggestion not in suggestions:
            suggestions.append(suggestion)

    return suggestions


def generate_error_message(result: ValidationResult) -> str:
    """
    Pick the rejection message shown to the user for an invalid result.

    The first CRITICAL issue decides the template. Without a CRITICAL issue
    the result failed on confidence alone and a softer message is returned.
    Never raises, never returns an empty string.
    """
    for issue in result.issues:
        if issue.severity == Severity.CRITICAL:
            return ERROR_MESSAGES.get(issue.type, FALLBACK_ERROR_MESSAGE)
    return INCOMPLETE_INFORMATION_MESSAGE
