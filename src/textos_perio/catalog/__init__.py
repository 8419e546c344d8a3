"""
Catalog Module - Prompt building, response parsing and the Gemini client.
=========================================================================

Every catalog operation is one prompt sent to the generative model:

- prompts: Search, expand-abstract and full-document prompt templates
- parser: Code-fence stripping, JSON extraction and result normalization
- client: Gemini wrapper exposing search / expand_abstract / generate_document

Flow:
    Query + Filters → PromptBuilder → Gemini → Parser → SearchResult list
"""

from textos_perio.catalog.prompts import (
    PromptBuilder,
    build_search_prompt,
    build_expand_prompt,
    build_document_prompt,
)
from textos_perio.catalog.parser import (
    ResponseParseError,
    extract_json,
    parse_search_results,
    strip_code_fences,
)
from textos_perio.catalog.client import (
    CatalogClient,
    GenerationError,
    get_client,
    search_texts,
    expand_abstract,
    generate_document,
)

__all__ = [
    # Prompts
    "PromptBuilder",
    "build_search_prompt",
    "build_expand_prompt",
    "build_document_prompt",
    # Parser
    "ResponseParseError",
    "extract_json",
    "parse_search_results",
    "strip_code_fences",
    # Client
    "CatalogClient",
    "GenerationError",
    "get_client",
    "search_texts",
    "expand_abstract",
    "generate_document",
]
