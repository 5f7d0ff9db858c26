"""
Validator configuration.

All scoring constants are empirically tuned values. Changing any default
here changes validation outcomes and must ship as a behavior-changing
release.
"""
import os
from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidatorConfig:
    """Immutable configuration for ResponseValidator."""
    # Aggregation
    validity_threshold: float = 70.0
    max_workers: int = 1
    debug: bool = False
    knowledge_base_path: Optional[str] = None

    # Topic relevance
    min_relevance_score: float = 3.0
    negative_keyword_weight: int = 2

    # Source citations
    chars_per_citation: int = 200

    # Hallucination
    misconception_penalty: float = 3.0
    provision_similarity_threshold: float = 0.3
    provision_mismatch_penalty: float = 2.0
    absolute_statement_penalty: float = 1.0

    # Logical consistency
    contradiction_distance: int = 50
    contradiction_penalty: float = 3.0
    flow_similarity_threshold: float = 0.2
    min_flow_ratio: float = 0.3
    weak_flow_penalty: float = 1.0

    # Completeness
    missing_steps_penalty: float = 3.0
    long_query_length: int = 50
    short_response_length: int = 100
    brevity_penalty: float = 2.0
    missing_definition_penalty: float = 1.0

    # Unsafe content
    guarantee_penalty: float = 4.0

    # Quality
    min_response_length: int = 50
    short_response_penalty: float = 3.0
    repetition_similarity_threshold: float = 0.8
    repetition_penalty: float = 2.0
    min_formality_score: float = 5.0
    informal_penalty: float = 1.0

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Build a configuration from environment variables, defaults otherwise."""
        return cls(
            validity_threshold=float(os.getenv("VALIDATION_THRESHOLD", 70.0)),
            max_workers=int(os.getenv("VALIDATOR_MAX_WORKERS", 1)),
            debug=os.getenv("DEBUG_MODE", "false").lower() == "true",
            knowledge_base_path=os.getenv("KNOWLEDGE_BASE_PATH") or None,
        )
