"""
State Module - View state and controller for the catalog UI.
============================================================

Holds everything the search and reader screens need (query, filters,
loading / error flags, results, open document, preview cache) and the
operations that move between those states. Kept free of Streamlit so the
same logic drives the web app and the tests.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import ValidationError

from textos_perio.catalog.client import (
    DOCUMENT_EMPTY_MESSAGE,
    DOCUMENT_ERROR_MESSAGE,
    CatalogClient,
    get_client,
)
from textos_perio.shared.config import get_settings
from textos_perio.shared.logging import get_logger
from textos_perio.shared.schemas import Carrera, SearchFilters, SearchResult, TextType

logger = get_logger(__name__)

SEARCH_ERROR_MESSAGE = "Hubo un error al realizar la búsqueda. Por favor intente nuevamente."
INVALID_FILTERS_MESSAGE = "El año inicial no puede ser mayor que el año final."

DOCUMENT_FALLBACK_MESSAGES = (DOCUMENT_EMPTY_MESSAGE, DOCUMENT_ERROR_MESSAGE)


@dataclass
class PreviewState:
    """Quick-preview state of one result card."""

    expanded: bool = False
    loading: bool = False
    detail: Optional[str] = None


@dataclass
class CatalogViewState:
    """Everything the UI shows, for one user session."""

    query: str = ""
    selected_type: Optional[TextType] = None
    selected_carrera: Optional[Carrera] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None

    results: list[SearchResult] = field(default_factory=list)
    loading: bool = False
    has_searched: bool = False
    error: Optional[str] = None

    reading_doc: Optional[SearchResult] = None
    document_loading: bool = False
    previews: dict[str, PreviewState] = field(default_factory=dict)
    document_cache: dict[str, str] = field(default_factory=dict)

    @property
    def is_reading(self) -> bool:
        return self.reading_doc is not None

    @property
    def result_count(self) -> int:
        return len(self.results)

    @property
    def show_empty_state(self) -> bool:
        """True when a finished search returned nothing and no error occurred."""
        return self.has_searched and not self.loading and not self.results and self.error is None

    @property
    def current_document(self) -> Optional[str]:
        """Cached body of the open document, if already loaded."""
        if self.reading_doc is None:
            return None
        return self.document_cache.get(self.reading_doc.id)

    def build_filters(self) -> SearchFilters:
        """Filters for the current selection. Raises ValidationError on a bad year range."""
        return SearchFilters(
            type=self.selected_type,
            carrera=self.selected_carrera,
            year_from=self.year_from,
            year_to=self.year_to,
        )

    def preview(self, result_id: str) -> PreviewState:
        """Preview state of one result, created on first access."""
        if result_id not in self.previews:
            self.previews[result_id] = PreviewState()
        return self.previews[result_id]


class CatalogController:
    """
    Mediates between user input and the catalog client.

    Example:
        >>> controller = CatalogController()
        >>> state = CatalogViewState(query="semiótica")
        >>> controller.submit_search(state)
        True
    """

    def __init__(self, client: Optional[CatalogClient] = None, share_base_url: Optional[str] = None):
        self._client = client
        self.share_base_url = (share_base_url or get_settings().catalog.share_base_url).rstrip("/")

    @property
    def client(self) -> CatalogClient:
        """Lazy-create the catalog client."""
        if self._client is None:
            self._client = get_client()
        return self._client

    def submit_search(self, state: CatalogViewState) -> bool:
        """
        Run a search for the current query and filters.

        Returns:
            False when the query is blank (nothing happens), True otherwise
        """
        query = state.query.strip()
        if not query:
            return False

        state.loading = True
        state.has_searched = True
        state.error = None
        state.results = []
        state.reading_doc = None

        try:
            filters = state.build_filters()
            state.results = self.client.search(query, filters)
        except ValidationError:
            state.error = INVALID_FILTERS_MESSAGE
        except Exception as e:
            logger.error(f"Search failed: {e}")
            state.error = SEARCH_ERROR_MESSAGE
        finally:
            state.loading = False

        # Result ids are only unique within one result list
        state.previews = {}
        state.document_cache = {}
        return True

    def open_document(self, state: CatalogViewState, result: SearchResult) -> None:
        """Switch to the reader view for one result."""
        state.reading_doc = result

    def back_to_search(self, state: CatalogViewState) -> None:
        """Leave the reader view; results and query are kept."""
        state.reading_doc = None
        state.document_loading = False

    def load_document(self, state: CatalogViewState) -> Optional[str]:
        """
        Fetch the body of the open document, once per document.

        Fallback messages are shown but not cached, so reopening the
        document tries again.

        Returns:
            Document text, or None when no document is open
        """
        doc = state.reading_doc
        if doc is None:
            return None

        if doc.id in state.document_cache:
            return state.document_cache[doc.id]

        state.document_loading = True
        try:
            content = self.client.generate_document(doc.title, doc.author, doc.type)
        finally:
            state.document_loading = False

        if content in DOCUMENT_FALLBACK_MESSAGES:
            logger.warning(f"Document not cached after failed load: {doc.id}")
        else:
            state.document_cache[doc.id] = content
        return content

    def toggle_preview(self, state: CatalogViewState, result: SearchResult) -> PreviewState:
        """
        Toggle the quick preview of a result card.

        The expanded abstract is fetched on the first expansion only; later
        toggles just show or hide it.
        """
        preview = state.preview(result.id)

        if not preview.expanded and preview.detail is None:
            preview.expanded = True
            preview.loading = True
            try:
                preview.detail = self.client.expand_abstract(result.title, result.author)
            finally:
                preview.loading = False
        else:
            preview.expanded = not preview.expanded

        return preview

    def share_url(self, result: SearchResult) -> str:
        """Public link for a result."""
        return f"{self.share_base_url}/{result.id}"
