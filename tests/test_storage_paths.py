import re

import pytest

from portfolio_docs.domain.storage_paths import (
    build_storage_path,
    new_disambiguator,
    sanitize_file_name,
    split_extension,
    strip_diacritics,
)


def test_sanitize_strips_accents_and_replaces_specials() -> None:
    assert sanitize_file_name("Résumé Financier (v2)") == "resume_financier_v2_"


def test_sanitize_collapses_fillers_and_keeps_safe_punctuation() -> None:
    assert sanitize_file_name("Board   Deck!!  2024") == "board_deck_2024"
    assert sanitize_file_name("q1-report.final") == "q1-report.final"


def test_strip_diacritics_keeps_base_letters() -> None:
    assert strip_diacritics("Ça déçoit à l'été") == "Ca decoit a l'ete"


def test_build_storage_path_matches_contract() -> None:
    path = build_storage_path("company-1", "Résumé Financier (v2).pdf", "1700000000000-abc")
    assert path == "company-1/1700000000000-abc_resume_financier_v2_.pdf"


def test_build_storage_path_without_extension() -> None:
    assert build_storage_path("c1", "README", "7") == "c1/7_readme"


def test_build_storage_path_lowercases_extension() -> None:
    assert build_storage_path("c1", "Deck.PDF", "7") == "c1/7_deck.pdf"


def test_build_storage_path_uses_fallback_for_empty_base() -> None:
    assert build_storage_path("c1", ".env", "7") == "c1/7_file.env"


def test_build_storage_path_rejects_ambiguous_disambiguator() -> None:
    with pytest.raises(ValueError):
        build_storage_path("c1", "a.pdf", "bad_token")


def test_split_extension_edge_cases() -> None:
    assert split_extension("report.final.pdf") == ("report.final", "pdf")
    assert split_extension("archive.") == ("archive", "")
    assert split_extension("noext") == ("noext", "")


def test_new_disambiguator_is_unique_and_path_safe() -> None:
    tokens = {new_disambiguator() for _ in range(200)}
    assert len(tokens) == 200
    assert all(re.fullmatch(r"[0-9]+-[0-9a-f]{12}", token) for token in tokens)
