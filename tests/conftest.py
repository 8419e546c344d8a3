"""
Pytest Configuration and Fixtures.
===================================

Shared fixtures for all test modules:
- Sample search results and raw model responses
- Sample generated documents
- Mock catalog clients and Gemini responses
"""

import json
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Generator
from unittest.mock import MagicMock

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Path Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ─────────────────────────────────────────────────────────────────────────────
# Sample Data Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_result_data() -> list[dict]:
    """Raw records as the model returns them."""
    return [
        {
            "id": "r1",
            "title": "La semiosis social",
            "author": "Eliseo Verón",
            "year": 1987,
            "type": "Libro",
            "abstract": "Texto base para el análisis de los discursos sociales.",
            "keywords": ["semiosis", "discurso", "producción de sentido", "Peirce", "ideología"],
            "location": "Semiótica y Teorías del Lenguaje",
        },
        {
            "id": "r2",
            "title": "Periodismo y deporte",
            "author": "Ana Pérez",
            "year": "2004",
            "type": "Artículo Académico",
            "abstract": "Artículo sobre la cobertura deportiva.",
            "keywords": "deporte, crónica, medios",
            "location": "Taller de Periodismo Deportivo",
        },
    ]


@pytest.fixture
def sample_results(sample_result_data: list[dict]):
    """Validated SearchResult instances."""
    from textos_perio.catalog.parser import parse_search_results

    return parse_search_results(json.dumps(sample_result_data))


@pytest.fixture
def fenced_search_response(sample_result_data: list[dict]) -> str:
    """A search response wrapped in a markdown code fence."""
    return "```json\n" + json.dumps(sample_result_data, ensure_ascii=False) + "\n```"


@pytest.fixture
def sample_document_text() -> str:
    """A generated document using the markdown-lite conventions."""
    return (
        "## Capítulo 1: La red semiótica\n"
        "\n"
        "Toda producción de sentido es necesariamente social (Verón, 1987).\n"
        "### El concepto de **semiosis**\n"
        "La **semiosis** es infinita y el discurso circula.\n"
    )


# ─────────────────────────────────────────────────────────────────────────────
# Mock Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def gemini_response():
    """Factory for fake Gemini responses exposing a `text` attribute."""

    def make(text):
        return SimpleNamespace(text=text)

    return make


@pytest.fixture
def gemini_client():
    """CatalogClient whose Gemini model is a MagicMock."""
    from textos_perio.catalog.client import CatalogClient

    client = CatalogClient(api_key="test-key", max_attempts=1)
    client._model = MagicMock()
    return client


@pytest.fixture
def mock_catalog_client(sample_results):
    """MagicMock standing in for CatalogClient."""
    client = MagicMock()
    client.search.return_value = sample_results
    client.expand_abstract.return_value = "Fragmento destacado: ...\nConceptos clave: ..."
    client.generate_document.return_value = "## Capítulo 1\n\nTexto del documento."
    return client


# ─────────────────────────────────────────────────────────────────────────────
# Pytest Configuration
# ─────────────────────────────────────────────────────────────────────────────


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "requires_api: marks tests that require API keys"
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset global singletons between tests."""
    import textos_perio.catalog.client as client_module
    from textos_perio.shared.config import get_settings

    client_module._client = None
    get_settings.cache_clear()

    yield

    client_module._client = None
    get_settings.cache_clear()
