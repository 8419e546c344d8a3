"""
Utilities Module - Common helper functions.
==========================================

Provides utility functions for:
- Hashing (SHA256 for deterministic identifiers)
- Text normalization and truncation
"""

import hashlib
import re
import unicodedata


# ─────────────────────────────────────────────────────────────────────────────
# Hashing Functions
# ─────────────────────────────────────────────────────────────────────────────


def compute_hash(text: str, algorithm: str = "sha256") -> str:
    """
    Compute hash of text content.

    Example:
        >>> compute_hash("hello world")
        'b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9'
    """
    hasher = hashlib.new(algorithm)
    hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()


def generate_result_id(title: str, author: str, length: int = 12) -> str:
    """
    Generate a stable identifier for a search result.

    Used when the model omits the id; the same title and author always give
    the same id.

    Example:
        >>> generate_result_id("La semiosis social", "Eliseo Verón")
        'txt_...'
    """
    key = f"{normalize_text(title)}|{normalize_text(author)}"
    return f"txt_{compute_hash(key)[:length]}"


# ─────────────────────────────────────────────────────────────────────────────
# Text Functions
# ─────────────────────────────────────────────────────────────────────────────


def strip_accents(text: str) -> str:
    """Remove diacritics: 'Artículo' -> 'Articulo'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: str) -> str:
    """Lowercase, accent-free, single-spaced version of text for comparisons."""
    return clean_whitespace(strip_accents(text).casefold())


def clean_whitespace(text: str) -> str:
    """Collapse runs of whitespace into a single space and trim."""
    return re.sub(r"\s+", " ", text).strip()


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Example:
        >>> truncate_text("Hello world", 8)
        'Hello...'
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix
