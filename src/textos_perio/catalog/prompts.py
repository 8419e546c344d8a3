"""
Prompts Module - Prompt templates for the catalog operations.
=============================================================

Every catalog operation is a single natural-language prompt:
- search: bibliography listing, answered as a JSON array
- expand: simulated long quotation plus key concepts
- document: long-form, verbatim-style transcription of the text

The templates are in Spanish because the catalog and its users are.
"""

from typing import Optional

from textos_perio.shared.logging import get_logger
from textos_perio.shared.schemas import SearchFilters, TextType

logger = get_logger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Templates
# ─────────────────────────────────────────────────────────────────────────────


SEARCH_PROMPT_TEMPLATE = """Actúa como el motor de búsqueda exclusivo del sitio web "{site_name}" de la {faculty} ({site_url}).

TU OBJETIVO: Buscar y listar bibliografía (textos, libros, artículos) que esté alojada, enlazada o sea material obligatorio en ese sitio web específico.

El usuario está buscando: "{query}".
{filter_lines}
Genera una lista de {min_results} a {max_results} resultados bibliográficos REALES que sean material de estudio en dichas cátedras.
NO inventes bibliografía que no pertenezca al plan de estudios.

IMPORTANTE: Genera ÚNICAMENTE resultados de tipo {allowed_types}.

Responde ÚNICAMENTE con un JSON válido que sea una lista de objetos. No uses markdown.
El formato de cada objeto debe ser:
{{
  "id": "string_unico",
  "title": "string (Título exacto)",
  "author": "string (Autor)",
  "year": number,
  "type": {type_union},
  "abstract": "string (Breve descripción de cómo se aborda este texto en la cátedra)",
  "keywords": ["string", "string", ...],
  "location": "string (Nombre de la Cátedra donde se usa, ej: 'Taller de Producción Gráfica I')"
}}"""


TYPE_FILTER_LINE = "Filtro tipo: {text_type}."

CARRERA_FILTER_LINE = (
    "Carrera: {carrera}. Busca textos utilizados en las cátedras correspondientes a esta carrera."
)

YEAR_FROM_TO_LINE = "Año de publicación: entre {year_from} y {year_to}."
YEAR_FROM_LINE = "Año de publicación: desde {year_from}."
YEAR_TO_LINE = "Año de publicación: hasta {year_to}."


EXPAND_PROMPT_TEMPLATE = """Sobre el texto "{title}" de {author}, utilizado en la {faculty}:
Genera un fragmento textual representativo (cita larga simulada) del libro y 3 conceptos clave que se estudian en la cátedra.
NO hagas un resumen tipo "este libro trata de".
Formato:
"Fragmento destacado: ..."
Conceptos clave: ..."""


DOCUMENT_PROMPT_TEMPLATE = """ROL: ERES UN TRANSCRIPTOR DE TEXTOS ACADÉMICOS. NO ERES UN ASISTENTE.
TAREA: PROPORCIONAR UNA TRANSCRIPCIÓN DIRECTA Y LITERAL (VERBATIM) DEL TEXTO ORIGINAL.

OBRA: "{title}"
AUTOR: "{author}"
TIPO: {text_type}
CONTEXTO: {faculty}.

REGLAS DE TRANSCRIPCIÓN (ESTRICTAS):
1. PROHIBIDO RESUMIR. PROHIBIDO EXPLICAR. PROHIBIDO PARAFRASEAR.
2. NO escribas introducciones como "Aquí presento el texto" o "En este capítulo...".
3. Empieza DIRECTAMENTE con el título de un capítulo y el primer párrafo del texto original.
4. El estilo debe ser 100% el del autor: mantén la densidad teórica, las palabras complejas, la sintaxis académica y las oraciones largas.
5. INCLUYE ELEMENTOS ORIGINALES: Citas bibliográficas entre paréntesis (Ej: Verón, 1987), notas al pie simuladas, y subtítulos.
6. EXTENSIÓN: MÍNIMO {min_words} PALABRAS. Genera un bloque de texto extenso, como si hubieras escaneado 5 páginas seguidas del texto.

FORMATO DE SALIDA ESPERADO:
## [Título del Capítulo o Artículo]

[Párrafo 1: Texto académico denso, directo del autor, sin modificaciones...]

[Párrafo 2: Continuación directa...]

[Párrafo 3...]

... (Continuar por {min_words} palabras) ..."""


# ─────────────────────────────────────────────────────────────────────────────
# Filter Formatting
# ─────────────────────────────────────────────────────────────────────────────


def format_filter_lines(filters: Optional[SearchFilters]) -> str:
    """
    Format the optional filter lines of the search prompt.

    Only filters that are set produce a line; no filters gives an empty
    string.
    """
    if filters is None:
        return ""

    lines = []
    if filters.type is not None:
        lines.append(TYPE_FILTER_LINE.format(text_type=filters.type.value))

    if filters.carrera is not None:
        lines.append(CARRERA_FILTER_LINE.format(carrera=filters.carrera.value))

    if filters.year_from is not None and filters.year_to is not None:
        lines.append(YEAR_FROM_TO_LINE.format(year_from=filters.year_from, year_to=filters.year_to))
    elif filters.year_from is not None:
        lines.append(YEAR_FROM_LINE.format(year_from=filters.year_from))
    elif filters.year_to is not None:
        lines.append(YEAR_TO_LINE.format(year_to=filters.year_to))

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


# ─────────────────────────────────────────────────────────────────────────────
# Prompt Builder
# ─────────────────────────────────────────────────────────────────────────────


class PromptBuilder:
    """
    Builds the prompts sent to the generative model.

    Example:
        >>> builder = PromptBuilder()
        >>> prompt = builder.build_search_prompt("semiótica", SearchFilters())
    """

    def __init__(
        self,
        site_name: Optional[str] = None,
        site_url: Optional[str] = None,
        faculty: Optional[str] = None,
        min_results: Optional[int] = None,
        max_results: Optional[int] = None,
        min_document_words: Optional[int] = None,
    ):
        """
        Initialize the prompt builder.

        Unset arguments fall back to the `catalog` section of the settings.
        """
        from textos_perio.shared.config import get_settings

        catalog = get_settings().catalog

        self.site_name = site_name or catalog.site_name
        self.site_url = site_url or catalog.site_url
        self.faculty = faculty or catalog.faculty
        self.min_results = min_results or catalog.min_results
        self.max_results = max_results or catalog.max_results
        self.min_document_words = min_document_words or catalog.min_document_words

    def build_search_prompt(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
    ) -> str:
        """
        Build the bibliography search prompt.

        Args:
            query: Free-text user query
            filters: Optional type / carrera / year filters

        Returns:
            Prompt asking for a JSON array of search results
        """
        allowed = [f'"{t.value}"' for t in TextType]

        prompt = SEARCH_PROMPT_TEMPLATE.format(
            site_name=self.site_name,
            faculty=self.faculty,
            site_url=self.site_url,
            query=query.strip(),
            filter_lines=format_filter_lines(filters),
            min_results=self.min_results,
            max_results=self.max_results,
            allowed_types=" o ".join(allowed),
            type_union=" | ".join(allowed),
        )
        logger.debug(f"Search prompt built ({len(prompt)} chars)")
        return prompt

    def build_expand_prompt(self, title: str, author: str) -> str:
        """Build the quick-preview prompt for one text."""
        return EXPAND_PROMPT_TEMPLATE.format(
            title=title,
            author=author,
            faculty=self.faculty,
        )

    def build_document_prompt(
        self,
        title: str,
        author: str,
        text_type: TextType | str = TextType.LIBRO,
    ) -> str:
        """Build the full-text prompt for the reader view."""
        if isinstance(text_type, TextType):
            text_type = text_type.value

        return DOCUMENT_PROMPT_TEMPLATE.format(
            title=title,
            author=author,
            text_type=text_type,
            faculty=self.faculty,
            min_words=self.min_document_words,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Convenience Functions
# ─────────────────────────────────────────────────────────────────────────────


def build_search_prompt(query: str, filters: Optional[SearchFilters] = None) -> str:
    """Build a search prompt with default settings."""
    return PromptBuilder().build_search_prompt(query, filters)


def build_expand_prompt(title: str, author: str) -> str:
    """Build an expand-abstract prompt with default settings."""
    return PromptBuilder().build_expand_prompt(title, author)


def build_document_prompt(title: str, author: str, text_type: TextType | str = TextType.LIBRO) -> str:
    """Build a full-document prompt with default settings."""
    return PromptBuilder().build_document_prompt(title, author, text_type)
