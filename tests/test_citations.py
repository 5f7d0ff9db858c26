"""Tests for Indonesian legal citation extraction."""

import pytest

from src.validation.citations import (
    classify_citation,
    extract_citations,
    is_valid_citation_format,
)
from src.validation.models import CitationType


class TestExtractCitations:
    """Test citation recognition in free text."""

    @pytest.mark.parametrize("citation,expected_type", [
        ("UU No. 11 Tahun 2020", CitationType.UU),
        ("UU No 1 Tahun 1974", CitationType.UU),
        ("Undang-Undang Nomor 8 Tahun 1999", CitationType.UU),
        ("Perppu No. 1/2020", CitationType.PERPPU),
        ("Perpres No. 12 Tahun 2021", CitationType.PERPRES),
        ("KUHP Pasal 338", CitationType.KUHP),
        ("KUHPerdata Pasal 1320", CitationType.KUHPERDATA),
        ("KUHAP Pasal 77", CitationType.KUHAP),
        ("UUD 1945 Pasal 28D", CitationType.UUD),
        ("Putusan MK No. 90/PUU-XXI/2023", CitationType.PUTUSAN),
        ("Putusan MA No. 123 K/PDT/2019", CitationType.PUTUSAN),
    ])
    def test_recognized_formats(self, citation, expected_type):
        """Each supported family is found verbatim inside a sentence."""
        text = f"Berdasarkan {citation}, hal tersebut diatur secara tegas."
        sources = extract_citations(text)

        assert [s.full_citation for s in sources] == [citation]
        assert sources[0].type == expected_type

    def test_case_insensitive_and_verbatim(self):
        """Lower-case citations match and keep their original casing."""
        sources = extract_citations("menurut kuhp pasal 362 pelaku dapat dipidana")

        assert len(sources) == 1
        assert sources[0].full_citation == "kuhp pasal 362"

    def test_structured_parts(self):
        """Number, year and article are captured where the grammar has them."""
        statute = extract_citations("UU No. 13 Tahun 2003 tentang Ketenagakerjaan")[0]
        assert statute.number == "13"
        assert statute.year == "2003"
        assert statute.article is None

        article = extract_citations("KUHPerdata Pasal 1365 mengatur ganti rugi")[0]
        assert article.article == "1365"
        assert article.number is None

        decision = extract_citations("Putusan MK No. 90/PUU-XXI/2023 menyatakan")[0]
        assert decision.number == "90/PUU-XXI/2023"

    def test_repeated_citation_is_kept(self):
        """Duplicates are returned; deduplication happens in the validator."""
        sources = extract_citations("KUHP Pasal 362 dan sekali lagi KUHP Pasal 362.")
        assert len(sources) == 2

    def test_kuhp_does_not_match_kuhperdata(self):
        """KUHPerdata is its own family, not a KUHP article."""
        sources = extract_citations("KUHPerdata Pasal 1320 mengatur syarat sah perjanjian")
        assert [s.type for s in sources] == [CitationType.KUHPERDATA]

    def test_no_citations(self):
        """Plain text yields nothing."""
        assert extract_citations("Hukum pidana mengatur tentang kejahatan.") == []
        assert extract_citations("") == []

    def test_multiple_families(self):
        """Citations of different families are all found."""
        text = (
            "Berdasarkan UU No. 1 Tahun 1974 dan KUHPerdata Pasal 1320, "
            "serta UUD 1945 Pasal 28B, perkawinan harus sah."
        )
        citations = {s.full_citation for s in extract_citations(text)}
        assert citations == {"UU No. 1 Tahun 1974", "KUHPerdata Pasal 1320", "UUD 1945 Pasal 28B"}


class TestClassifyCitation:
    """Test re-classification of citation strings."""

    def test_known_format(self):
        """Well-formed citations are classified by family."""
        assert classify_citation("KUHP Pasal 362") == CitationType.KUHP
        assert classify_citation("  UU No. 11 Tahun 2020 ") == CitationType.UU

    def test_partial_or_padded_text_is_rejected(self):
        """The whole string must be a citation."""
        assert classify_citation("lihat KUHP Pasal 362") is None
        assert classify_citation("KUHP Article 362") is None
        assert classify_citation("") is None

    def test_is_valid_citation_format(self):
        """Boolean wrapper around classification."""
        assert is_valid_citation_format("Perppu No. 2/2022")
        assert not is_valid_citation_format("Pasal 362")
