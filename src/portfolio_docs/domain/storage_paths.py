from __future__ import annotations

import re
import time
import unicodedata
from uuid import uuid4

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_REPEATED_FILLER = re.compile(r"_+")
FALLBACK_BASE_NAME = "file"


def strip_diacritics(value: str) -> str:
    """
    Decompose to NFD and drop combining marks.

    Example:
        >>> strip_diacritics("Résumé")
        'Resume'
    """
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sanitize_file_name(name: str) -> str:
    """
    Make a name safe for blob paths and URLs.

    Examples:
        >>> sanitize_file_name("Résumé Financier (v2)")
        'resume_financier_v2_'
        >>> sanitize_file_name("Q1 -- Board.Deck")
        'q1_--_board.deck'
    """
    stripped = strip_diacritics(name)
    replaced = _UNSAFE_CHARS.sub("_", stripped)
    collapsed = _REPEATED_FILLER.sub("_", replaced)
    return collapsed.lower()


def split_extension(file_name: str) -> tuple[str, str]:
    """
    Split a file name into (base, extension) without the dot.

    Examples:
        >>> split_extension("report.final.pdf")
        ('report.final', 'pdf')
        >>> split_extension("README")
        ('README', '')
    """
    base, dot, ext = file_name.rpartition(".")
    if dot == "" or ext == "" or "/" in ext:
        return file_name.rstrip("."), ""
    return base, ext


def new_disambiguator() -> str:
    """Millisecond timestamp plus a random suffix; never contains '_'."""
    return f"{time.time_ns() // 1_000_000}-{uuid4().hex[:12]}"


def build_storage_path(company_id: str, file_name: str, disambiguator: str) -> str:
    """
    Build the blob path shared by the metadata row and the blob store.

    Example:
        >>> build_storage_path("c1", "Résumé Financier (v2).pdf", "42")
        'c1/42_resume_financier_v2_.pdf'
    """
    if "_" in disambiguator or "/" in disambiguator:
        raise ValueError(f"Invalid disambiguator: {disambiguator!r}")
    base, ext = split_extension(file_name)
    safe_base = sanitize_file_name(base) or FALLBACK_BASE_NAME
    safe_ext = sanitize_file_name(ext)
    suffix = f".{safe_ext}" if safe_ext else ""
    return f"{company_id}/{disambiguator}_{safe_base}{suffix}"
