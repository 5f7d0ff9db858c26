"""
Pydantic models for the validation payload.

The chat endpoint returns these to the frontend. Field aliases keep the
camelCase keys the frontend expects; use model_dump(by_alias=True).
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .messages import generate_error_message
from .models import IssueType, Severity, ValidationResult


class IssueReport(BaseModel):
    """A single validation issue."""
    type: IssueType
    severity: Severity
    message: str
    suggestion: Optional[str] = None


class ValidationReport(BaseModel):
    """
    Validation outcome as returned to the client.

    When the response is invalid, `response` carries the localized
    rejection message instead of the generated text.
    """
    response: str = Field(..., description="Validated answer, or the rejection message when invalid")
    is_valid: bool = Field(..., alias="isValid")
    confidence: float = Field(..., ge=0, le=100, description="Aggregate confidence score")
    sources: List[str] = Field(default_factory=list, description="Legal citations found in the answer")
    issues: List[IssueReport] = Field(default_factory=list)
    suggestions: Optional[List[str]] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "response": "Berdasarkan KUHP Pasal 362, pencurian diancam dengan pidana penjara paling lama lima tahun...",
                "isValid": True,
                "confidence": 95.7,
                "sources": ["KUHP Pasal 362"],
                "issues": [],
                "suggestions": None,
            }
        }
    )

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationReport":
        """Build the client payload from a validation result."""
        return cls(
            response=result.validated_text if result.is_valid else generate_error_message(result),
            is_valid=result.is_valid,
            confidence=round(result.confidence, 1),
            sources=list(result.sources),
            issues=[
                IssueReport(
                    type=issue.type,
                    severity=issue.severity,
                    message=issue.message,
                    suggestion=issue.suggestion,
                )
                for issue in result.issues
            ],
            suggestions=list(result.suggestions) if result.suggestions is not None else None,
        )
