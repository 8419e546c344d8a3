"""
Shared Module - Common utilities, configuration, schemas, and logging.
======================================================================

This module provides foundational components used across all other modules:

- config: Configuration loading and management
- logging: Structured logging setup
- schemas: Pydantic data models
- utils: Utility functions (hashing, text normalization)
"""

from textos_perio.shared.config import get_settings, Settings
from textos_perio.shared.logging import get_logger, setup_logging
from textos_perio.shared.schemas import (
    Block,
    BlockKind,
    Carrera,
    SearchFilters,
    SearchResult,
    SpanKind,
    TextSpan,
    TextType,
)
from textos_perio.shared.utils import (
    compute_hash,
    generate_result_id,
    normalize_text,
    truncate_text,
)

__all__ = [
    # Config
    "get_settings",
    "Settings",
    # Logging
    "get_logger",
    "setup_logging",
    # Schemas
    "Block",
    "BlockKind",
    "Carrera",
    "SearchFilters",
    "SearchResult",
    "SpanKind",
    "TextSpan",
    "TextType",
    # Utils
    "compute_hash",
    "generate_result_id",
    "normalize_text",
    "truncate_text",
]
