"""
Tests for App State Module.
===========================

Tests for:
- CatalogViewState: Derived flags and filter building
- CatalogController: Search, preview, reader and share transitions
"""

import pytest


@pytest.fixture
def controller(mock_catalog_client):
    """Controller wired to the mock client."""
    from textos_perio.app.state import CatalogController

    return CatalogController(client=mock_catalog_client, share_base_url="https://example.org/textos/")


@pytest.fixture
def view():
    """Fresh view state with a query."""
    from textos_perio.app.state import CatalogViewState

    return CatalogViewState(query="semiótica")


# ─────────────────────────────────────────────────────────────────────────────
# View State Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestViewState:
    """Tests for CatalogViewState."""

    def test_initial_state(self):
        """Test the state before any search."""
        from textos_perio.app.state import CatalogViewState

        state = CatalogViewState()

        assert not state.has_searched
        assert not state.is_reading
        assert not state.show_empty_state
        assert state.result_count == 0
        assert state.current_document is None

    def test_build_filters(self):
        """Test that selections become SearchFilters."""
        from textos_perio.app.state import CatalogViewState
        from textos_perio.shared.schemas import Carrera, TextType

        state = CatalogViewState(
            selected_type=TextType.LIBRO,
            selected_carrera=Carrera.COMUNICACION_DIGITAL,
            year_from=1990,
        )
        filters = state.build_filters()

        assert filters.type == TextType.LIBRO
        assert filters.carrera == Carrera.COMUNICACION_DIGITAL
        assert filters.year_from == 1990
        assert filters.year_to is None

    def test_preview_created_on_access(self):
        """Test that preview state is created lazily and reused."""
        from textos_perio.app.state import CatalogViewState

        state = CatalogViewState()
        preview = state.preview("r1")

        assert not preview.expanded
        assert state.preview("r1") is preview


# ─────────────────────────────────────────────────────────────────────────────
# Search Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestSearch:
    """Tests for CatalogController.submit_search."""

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_blank_query_is_ignored(self, controller, mock_catalog_client, query):
        """Test that a blank query changes nothing."""
        from textos_perio.app.state import CatalogViewState

        state = CatalogViewState(query=query)

        assert controller.submit_search(state) is False
        assert not state.has_searched
        mock_catalog_client.search.assert_not_called()

    def test_successful_search(self, controller, view, sample_results):
        """Test that results are stored and flags settle."""
        assert controller.submit_search(view) is True

        assert view.results == sample_results
        assert view.result_count == 2
        assert view.has_searched
        assert not view.loading
        assert view.error is None
        assert not view.show_empty_state

    def test_query_is_trimmed_and_filters_passed(self, controller, mock_catalog_client):
        """Test the arguments given to the client."""
        from textos_perio.app.state import CatalogViewState
        from textos_perio.shared.schemas import Carrera, TextType

        state = CatalogViewState(
            query="  crónica  ",
            selected_type=TextType.ARTICULO,
            selected_carrera=Carrera.PERIODISMO_DEPORTIVO,
        )
        controller.submit_search(state)

        query, filters = mock_catalog_client.search.call_args.args
        assert query == "crónica"
        assert filters.type == TextType.ARTICULO
        assert filters.carrera == Carrera.PERIODISMO_DEPORTIVO

    def test_empty_results_show_empty_state(self, controller, view, mock_catalog_client):
        """Test the no-results state."""
        mock_catalog_client.search.return_value = []

        controller.submit_search(view)

        assert view.show_empty_state
        assert view.error is None

    def test_failed_search_sets_error(self, controller, view, mock_catalog_client):
        """Test that a client failure becomes the generic error message."""
        from textos_perio.app.state import SEARCH_ERROR_MESSAGE
        from textos_perio.catalog.client import GenerationError

        mock_catalog_client.search.side_effect = GenerationError("boom")

        assert controller.submit_search(view) is True
        assert view.error == SEARCH_ERROR_MESSAGE
        assert view.results == []
        assert not view.loading
        assert not view.show_empty_state

    def test_invalid_year_range(self, controller, view, mock_catalog_client):
        """Test that an inverted year range is reported without searching."""
        from textos_perio.app.state import INVALID_FILTERS_MESSAGE

        view.year_from = 2010
        view.year_to = 1990

        controller.submit_search(view)

        assert view.error == INVALID_FILTERS_MESSAGE
        mock_catalog_client.search.assert_not_called()

    def test_new_search_clears_previous_state(self, controller, view, sample_results):
        """Test that a new search resets errors, reader and caches."""
        view.error = "old error"
        view.reading_doc = sample_results[0]
        view.previews["r1"] = view.preview("r1")
        view.document_cache["r1"] = "old body"

        controller.submit_search(view)

        assert view.error is None
        assert view.reading_doc is None
        assert view.previews == {}
        assert view.document_cache == {}


# ─────────────────────────────────────────────────────────────────────────────
# Preview / Reader / Share Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestPreview:
    """Tests for CatalogController.toggle_preview."""

    def test_first_expand_fetches(self, controller, view, sample_results, mock_catalog_client):
        """Test that the first expansion loads the detail."""
        preview = controller.toggle_preview(view, sample_results[0])

        assert preview.expanded
        assert not preview.loading
        assert preview.detail.startswith("Fragmento destacado")
        mock_catalog_client.expand_abstract.assert_called_once_with(
            "La semiosis social", "Eliseo Verón"
        )

    def test_toggles_do_not_refetch(self, controller, view, sample_results, mock_catalog_client):
        """Test that collapsing and re-expanding reuses the detail."""
        result = sample_results[0]

        controller.toggle_preview(view, result)
        collapsed = controller.toggle_preview(view, result)
        assert not collapsed.expanded

        expanded = controller.toggle_preview(view, result)
        assert expanded.expanded
        assert mock_catalog_client.expand_abstract.call_count == 1

    def test_previews_are_per_result(self, controller, view, sample_results):
        """Test that expanding one card leaves others untouched."""
        controller.toggle_preview(view, sample_results[0])

        assert not view.preview(sample_results[1].id).expanded


class TestReader:
    """Tests for the reader transitions."""

    def test_open_and_load_document(self, controller, view, sample_results, mock_catalog_client):
        """Test opening a result and loading its body."""
        from textos_perio.shared.schemas import TextType

        doc = sample_results[0]
        controller.open_document(view, doc)

        assert view.is_reading
        assert view.current_document is None

        body = controller.load_document(view)

        assert body == "## Capítulo 1\n\nTexto del documento."
        assert view.current_document == body
        assert not view.document_loading
        mock_catalog_client.generate_document.assert_called_once_with(
            "La semiosis social", "Eliseo Verón", TextType.LIBRO
        )

    def test_document_is_cached(self, controller, view, sample_results, mock_catalog_client):
        """Test that reopening a document does not regenerate it."""
        doc = sample_results[0]

        controller.open_document(view, doc)
        controller.load_document(view)
        controller.back_to_search(view)
        controller.open_document(view, doc)
        controller.load_document(view)

        assert mock_catalog_client.generate_document.call_count == 1

    @pytest.mark.parametrize("fallback", ["DOCUMENT_ERROR_MESSAGE", "DOCUMENT_EMPTY_MESSAGE"])
    def test_failed_load_is_retried(
        self, controller, view, sample_results, mock_catalog_client, fallback
    ):
        """Test that a fallback message is not cached and reopening fetches again."""
        import textos_perio.catalog.client as client_module

        message = getattr(client_module, fallback)
        mock_catalog_client.generate_document.side_effect = [message, "## Cap. 1\n\nTexto."]
        doc = sample_results[0]

        controller.open_document(view, doc)
        first = controller.load_document(view)
        assert first == message
        assert view.current_document is None

        controller.back_to_search(view)
        controller.open_document(view, doc)
        second = controller.load_document(view)

        assert second == "## Cap. 1\n\nTexto."
        assert view.current_document == second
        assert mock_catalog_client.generate_document.call_count == 2

    def test_load_without_open_document(self, controller, view, mock_catalog_client):
        """Test that loading with no open document does nothing."""
        assert controller.load_document(view) is None
        mock_catalog_client.generate_document.assert_not_called()

    def test_back_to_search_keeps_results(self, controller, view, sample_results):
        """Test that leaving the reader keeps query and results."""
        controller.submit_search(view)
        controller.open_document(view, sample_results[1])

        controller.back_to_search(view)

        assert not view.is_reading
        assert view.query == "semiótica"
        assert view.result_count == 2


class TestShare:
    """Tests for share links."""

    def test_share_url(self, controller, sample_results):
        """Test that the trailing slash of the base URL is dropped."""
        assert controller.share_url(sample_results[0]) == "https://example.org/textos/r1"

    def test_default_share_url(self, mock_catalog_client, sample_results):
        """Test the configured share base URL."""
        from textos_perio.app.state import CatalogController

        controller = CatalogController(client=mock_catalog_client)

        assert controller.share_url(sample_results[1]) == "https://periotextos.unlp.edu.ar/textos/r2"
