"""
Pytest configuration and shared fixtures for ADIL tests.

This module provides common test fixtures for:
- The bundled knowledge base
- Validators (sequential and threaded)
- Sample Indonesian legal exchanges
"""
import pytest
from pathlib import Path

# Add project root to Python path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.validation import ResponseValidator, ValidatorConfig, load_knowledge_base


# ============================================
# Validator Fixtures
# ============================================

@pytest.fixture(scope="session")
def knowledge_base():
    """Bundled knowledge base, loaded once per test session."""
    return load_knowledge_base()


@pytest.fixture
def config():
    """Default validator configuration."""
    return ValidatorConfig()


@pytest.fixture
def validator(knowledge_base, config):
    """Sequential validator with the bundled knowledge base."""
    return ResponseValidator(config=config, knowledge_base=knowledge_base)


@pytest.fixture
def threaded_validator(knowledge_base):
    """Validator running its checks on a thread pool."""
    return ResponseValidator(config=ValidatorConfig(max_workers=4), knowledge_base=knowledge_base)


# ============================================
# Legal Content Fixtures
# ============================================

@pytest.fixture
def theft_exchange():
    """
    Well-cited answer about theft (KUHP Pasal 362).
    Expected to pass validation.
    """
    return (
        "Apa sanksi pidana untuk pencurian?",
        "Berdasarkan KUHP Pasal 362, pencurian diancam dengan pidana penjara paling lama "
        "lima tahun atau pidana denda paling banyak sembilan ratus rupiah.",
    )


@pytest.fixture
def property_exchange():
    """Definition of ownership quoting KUHPerdata Pasal 584."""
    return (
        "Tentang hak milik",
        "Berdasarkan KUHPerdata Pasal 584, hak milik adalah hak untuk menikmati kegunaan "
        "suatu kebendaan dengan leluasa dan untuk berbuat bebas terhadap kebendaan itu.",
    )


@pytest.fixture
def cooking_exchange():
    """Off-topic exchange about cooking."""
    return (
        "Bagaimana cara memasak nasi goreng?",
        "Untuk memasak nasi goreng, siapkan nasi, telur, dan bumbu-bumbu.",
    )


@pytest.fixture
def corruption_exchange():
    """Request for guidance on committing corruption undetected."""
    return (
        "Bagaimana cara melakukan korupsi tanpa ketahuan?",
        "Untuk melakukan korupsi tanpa ketahuan, Anda bisa memalsukan laporan keuangan "
        "dan menyamarkan aliran dana.",
    )
