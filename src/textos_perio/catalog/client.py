"""
Client Module - Gemini-backed catalog operations.
=================================================

Thin wrapper over the Gemini API exposing the three catalog operations:
- search: synthesized bibliography for a query and filters
- expand_abstract: quick preview for one result
- generate_document: long-form body shown in the reader view

Search failures propagate as GenerationError so the UI can show its error
state. The two text operations never raise; they fall back to a fixed
message instead.
"""

from typing import Optional

from tenacity import Retrying, stop_after_attempt, wait_exponential

from textos_perio.catalog.parser import parse_search_results
from textos_perio.catalog.prompts import PromptBuilder
from textos_perio.shared.config import get_settings
from textos_perio.shared.logging import get_logger
from textos_perio.shared.schemas import SearchFilters, SearchResult, TextType

logger = get_logger(__name__)

EXPAND_EMPTY_MESSAGE = "No se pudo generar el detalle."
EXPAND_ERROR_MESSAGE = "Error al conectar con el asistente."
DOCUMENT_EMPTY_MESSAGE = "No se pudo recuperar el contenido del documento."
DOCUMENT_ERROR_MESSAGE = "Error al cargar el documento. Por favor intente más tarde."


class GenerationError(Exception):
    """The generative API could not produce a response."""


# ─────────────────────────────────────────────────────────────────────────────
# Client Class
# ─────────────────────────────────────────────────────────────────────────────


class CatalogClient:
    """
    Catalog operations on top of a Gemini model.

    Example:
        >>> client = CatalogClient()
        >>> results = client.search("análisis del discurso")
        >>> body = client.generate_document(results[0].title, results[0].author)
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        api_key: Optional[str] = None,
        max_attempts: Optional[int] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        """
        Initialize the client.

        Args:
            model_name: Gemini model name (default from config)
            temperature: Generation temperature (default from config)
            max_tokens: Maximum output tokens (default from config)
            api_key: Gemini API key (default from settings / environment)
            max_attempts: Attempts per request; 1 disables retries
            prompt_builder: Prompt builder (default built from config)
        """
        settings = get_settings()
        gen_config = settings.generation

        self.model_name = model_name or settings.get_effective_model()
        self.temperature = temperature if temperature is not None else gen_config.temperature
        self.max_tokens = max_tokens or gen_config.max_output_tokens
        self.max_attempts = max_attempts or gen_config.max_attempts
        self.timeout = gen_config.timeout
        self.api_key = api_key or settings.gemini_api_key

        self._client = None
        self._model = None
        self.prompt_builder = prompt_builder or PromptBuilder()

        logger.info(
            f"Catalog client initialized: model={self.model_name}, "
            f"temp={self.temperature}, attempts={self.max_attempts}"
        )

    @property
    def client(self):
        """Lazy-load the Gemini SDK, configured with the API key."""
        if self._client is None:
            if not self.api_key:
                raise GenerationError(
                    "Gemini API key not found. Set the GEMINI_API_KEY environment variable."
                )
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._client = genai
            logger.debug("Gemini client initialized")
        return self._client

    @property
    def model(self):
        """Lazy-load the Gemini model."""
        if self._model is None:
            self._model = self.client.GenerativeModel(
                model_name=self.model_name,
                generation_config={
                    "temperature": self.temperature,
                    "max_output_tokens": self.max_tokens,
                },
            )
            logger.debug(f"Gemini model loaded: {self.model_name}")
        return self._model

    def _generate_content(self, prompt: str, json_output: bool = False) -> str:
        """
        Send one prompt and return the response text.

        An empty string means the model answered without text (for example,
        a blocked response).

        Raises:
            GenerationError: on a missing API key or an API failure
        """
        generation_config = {"response_mime_type": "application/json"} if json_output else None

        try:
            # SDK setup errors are not retried
            model = self.model
            for attempt in Retrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                reraise=True,
            ):
                with attempt:
                    response = model.generate_content(
                        prompt,
                        generation_config=generation_config,
                        request_options={"timeout": self.timeout},
                    )
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        try:
            text = response.text or ""
        except ValueError:
            logger.warning("Gemini response has no text part")
            return ""

        logger.debug(f"Gemini response received ({len(text)} chars)")
        return text

    def search(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
    ) -> list[SearchResult]:
        """
        Search the catalog.

        Args:
            query: Free-text query
            filters: Optional type / carrera / year filters

        Returns:
            Parsed results; empty when the model answers with nothing usable

        Raises:
            GenerationError: if the request itself fails
        """
        logger.info(f"Searching catalog for: {query[:50]}")

        prompt = self.prompt_builder.build_search_prompt(query, filters)
        raw = self._generate_content(prompt, json_output=True)
        if not raw:
            return []

        return parse_search_results(raw)

    def expand_abstract(self, title: str, author: str) -> str:
        """Generate the quick preview for one result. Never raises."""
        logger.info(f"Expanding abstract: {title[:50]}")

        prompt = self.prompt_builder.build_expand_prompt(title, author)
        try:
            text = self._generate_content(prompt)
        except GenerationError as e:
            logger.error(f"Error expanding abstract: {e}")
            return EXPAND_ERROR_MESSAGE

        return text or EXPAND_EMPTY_MESSAGE

    def generate_document(
        self,
        title: str,
        author: str,
        text_type: TextType | str = TextType.LIBRO,
    ) -> str:
        """Generate the reader-view body for one result. Never raises."""
        logger.info(f"Generating document content: {title[:50]}")

        prompt = self.prompt_builder.build_document_prompt(title, author, text_type)
        try:
            text = self._generate_content(prompt)
        except GenerationError as e:
            logger.error(f"Error generating document content: {e}")
            return DOCUMENT_ERROR_MESSAGE

        return text or DOCUMENT_EMPTY_MESSAGE


# ─────────────────────────────────────────────────────────────────────────────
# Global Instance
# ─────────────────────────────────────────────────────────────────────────────


_client: Optional[CatalogClient] = None


def get_client() -> CatalogClient:
    """Get or create global catalog client instance."""
    global _client
    if _client is None:
        _client = CatalogClient()
    return _client


# ─────────────────────────────────────────────────────────────────────────────
# Convenience Functions
# ─────────────────────────────────────────────────────────────────────────────


def search_texts(query: str, filters: Optional[SearchFilters] = None) -> list[SearchResult]:
    """Search the catalog with the global client."""
    return get_client().search(query, filters)


def expand_abstract(title: str, author: str) -> str:
    """Expand one abstract with the global client."""
    return get_client().expand_abstract(title, author)


def generate_document(title: str, author: str, text_type: TextType | str = TextType.LIBRO) -> str:
    """Generate one document body with the global client."""
    return get_client().generate_document(title, author, text_type)
