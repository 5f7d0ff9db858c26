#!/usr/bin/env python3
"""
Validate a single query/response pair and print the JSON report.

Usage:
    python scripts/validate_response.py -q "Apa sanksi pidana untuk pencurian?" \
        -r "Berdasarkan KUHP Pasal 362, pencurian diancam ..."

    # Read the response from a file
    python scripts/validate_response.py -q "..." --response-file answer.txt

    # Validator self-test
    python scripts/validate_response.py --health
"""
import os
import sys
import json
import logging
import argparse
from dataclasses import replace
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.validation import (
    KnowledgeBaseError,
    ValidationReport,
    ValidatorConfig,
    create_validator,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def main():
    parser = argparse.ArgumentParser(description="Validate an answer about Indonesian law")
    parser.add_argument("--query", "-q", help="User question")
    parser.add_argument("--response", "-r", help="Candidate answer")
    parser.add_argument("--response-file", type=Path, help="Read the candidate answer from a file")
    parser.add_argument("--knowledge-base", type=Path, help="Path to knowledge base JSON")
    parser.add_argument("--health", action="store_true", help="Run the validator self-test")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    setup_logging(args.verbose)

    config = ValidatorConfig.from_env()
    if args.knowledge_base:
        config = replace(config, knowledge_base_path=str(args.knowledge_base))

    try:
        validator = create_validator(config)
    except KnowledgeBaseError as e:
        logger.error(f"Cannot start validator: {e}")
        sys.exit(2)

    if args.health:
        health = validator.health_check()
        print(json.dumps(health, indent=2))
        sys.exit(0 if health["status"] == "healthy" else 1)

    if args.response_file:
        response = args.response_file.read_text(encoding="utf-8")
    else:
        response = args.response

    if not args.query or response is None:
        parser.error("--query and one of --response/--response-file are required")

    result = validator.validate_response(args.query, response)
    report = ValidationReport.from_result(result)
    print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))

    sys.exit(0 if result.is_valid else 1)


if __name__ == "__main__":
    main()
