"""
Streamlit App - Textos Perio GUI.
=================================

Web interface for:
- Searching the bibliography by query, program (carrera) and text type
- Quick previews of each result
- Reading a full generated document with keyword highlighting

Run with: streamlit run src/textos_perio/app/streamlit_app.py
"""

import streamlit as st

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Textos Perio",
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="collapsed",
)

import html
from datetime import date
from typing import Optional

from textos_perio.app.state import CatalogController, CatalogViewState
from textos_perio.reader.render import blocks_to_html, render_document
from textos_perio.shared.config import get_settings
from textos_perio.shared.logging import get_logger, setup_logging_from_settings
from textos_perio.shared.schemas import Carrera, SearchResult, TextType

logger = get_logger(__name__)

TYPE_OPTIONS: dict[Optional[TextType], str] = {
    None: "Todo tipo",
    TextType.LIBRO: "Libros",
    TextType.ARTICULO: "Artículos",
}

TYPE_BADGE_CLASSES = {
    TextType.LIBRO: "badge-libro",
    TextType.ARTICULO: "badge-articulo",
}

CUSTOM_CSS = """
<style>
.badge { font-size: 0.7rem; font-weight: 700; text-transform: uppercase;
         letter-spacing: 0.05em; padding: 0.2rem 0.7rem; border-radius: 999px; }
.badge-libro { background: #eff6ff; color: #2563eb; border: 1px solid #dbeafe; }
.badge-articulo { background: #faf5ff; color: #9333ea; border: 1px solid #f3e8ff; }
.badge-otro { background: #f9fafb; color: #4b5563; border: 1px solid #f3f4f6; }
.tag { display: inline-block; font-size: 0.7rem; font-weight: 600; margin: 0 0.3rem 0.3rem 0;
       padding: 0.15rem 0.6rem; border-radius: 999px; background: #f1f5f9; color: #475569; }
.preview { font-style: italic; color: #475569; border-left: 2px solid #0B8D2C; padding-left: 0.75rem; }
.abstract-quote { background: #fefce8; border: 1px solid #fef9c3; border-radius: 1rem;
                  padding: 1.5rem; font-style: italic; color: #713f12; margin-bottom: 2rem; }
.doc-heading { color: #0f172a; }
.doc-paragraph { font-family: Georgia, serif; font-size: 1.1rem; line-height: 2; text-align: justify; }
.doc-spacer { height: 1.5rem; }
mark.keyword { background: #fef08a80; border-bottom: 2px solid #fde047; font-weight: 600;
               padding: 0 0.2rem; border-radius: 0.3rem; }
.end-marker { text-align: center; color: #94a3b8; text-transform: uppercase;
              letter-spacing: 0.2em; font-size: 0.8rem; margin-top: 3rem; }
</style>
"""


# ─────────────────────────────────────────────────────────────────────────────
# Cached Resources
# ─────────────────────────────────────────────────────────────────────────────


@st.cache_resource
def get_controller() -> CatalogController:
    """Get cached controller (and its Gemini client)."""
    setup_logging_from_settings()
    return CatalogController()


# ─────────────────────────────────────────────────────────────────────────────
# Session State Initialization
# ─────────────────────────────────────────────────────────────────────────────


def init_session_state():
    """Initialize session state variables."""
    if "view" not in st.session_state:
        st.session_state.view = CatalogViewState()


def get_view() -> CatalogViewState:
    return st.session_state.view


# ─────────────────────────────────────────────────────────────────────────────
# Header
# ─────────────────────────────────────────────────────────────────────────────


def render_header(view: CatalogViewState):
    """Render the title bar; clicking 'Inicio' leaves the reader view."""
    col1, col2 = st.columns([4, 1])

    with col1:
        st.markdown("### 📚 Textos Perio")
        st.caption("UNLP")

    with col2:
        if view.is_reading and st.button("Inicio", use_container_width=True, key="nav_home"):
            get_controller().back_to_search(view)
            st.rerun()


# ─────────────────────────────────────────────────────────────────────────────
# Search
# ─────────────────────────────────────────────────────────────────────────────


def render_search_form(view: CatalogViewState):
    """Render the hero text and the search form."""
    if not view.has_searched:
        st.title("Explora el saber sin límites.")
        st.markdown(
            "Accedé a toda la bibliografía, libros y artículos de la "
            "Facultad de Periodismo de la UNLP."
        )

    with st.form("search_form", border=True):
        query = st.text_input(
            "Búsqueda",
            value=view.query,
            placeholder="¿Qué estás buscando hoy?",
            label_visibility="collapsed",
        )

        col1, col2 = st.columns(2)

        carrera_options: list[Optional[Carrera]] = [None, *Carrera]
        with col1:
            carrera = st.selectbox(
                "Carrera",
                options=carrera_options,
                index=carrera_options.index(view.selected_carrera),
                format_func=lambda c: "Todas las carreras" if c is None else c.value,
            )

        type_options = list(TYPE_OPTIONS.keys())
        with col2:
            text_type = st.selectbox(
                "Tipo",
                options=type_options,
                index=type_options.index(view.selected_type),
                format_func=lambda t: TYPE_OPTIONS[t],
            )

        with st.expander("Filtrar por año"):
            ycol1, ycol2 = st.columns(2)
            max_year = date.today().year
            with ycol1:
                year_from = st.number_input(
                    "Desde", min_value=0, max_value=max_year, value=view.year_from, step=1
                )
            with ycol2:
                year_to = st.number_input(
                    "Hasta", min_value=0, max_value=max_year, value=view.year_to, step=1
                )

        submitted = st.form_submit_button("Buscar Textos", type="primary", use_container_width=True)

    if submitted:
        view.query = query
        view.selected_carrera = carrera
        view.selected_type = text_type
        view.year_from = int(year_from) if year_from is not None else None
        view.year_to = int(year_to) if year_to is not None else None

        with st.spinner("Buscando bibliografía..."):
            get_controller().submit_search(view)


def render_results(view: CatalogViewState):
    """Render error, empty state or the result grid."""
    if view.error:
        st.error(view.error)
        return

    if view.show_empty_state:
        st.markdown("#### Ups, sin resultados")
        st.caption("Prueba buscando con palabras clave de tu materia.")
        return

    if not view.results:
        return

    header = f"**Resultados encontrados** ({view.result_count})"
    if view.selected_carrera:
        header += f" · {view.selected_carrera.value}"
    st.markdown(header)

    columns = st.columns(3)
    for i, result in enumerate(view.results):
        with columns[i % 3]:
            render_result_card(view, result)


def render_result_card(view: CatalogViewState, result: SearchResult):
    """Render a single result card with preview, share and read actions."""
    controller = get_controller()
    keyword_limit = get_settings().catalog.card_keyword_limit

    with st.container(border=True):
        badge = TYPE_BADGE_CLASSES.get(result.type, "badge-otro")
        st.markdown(
            f'<span class="badge {badge}">{html.escape(result.type.value)}</span> '
            f"&nbsp;<small>{result.year}</small>",
            unsafe_allow_html=True,
        )
        st.markdown(f"#### {result.title}")
        st.caption(result.author)
        st.write(result.abstract)

        preview = view.preview(result.id)
        if preview.expanded and preview.detail:
            st.markdown(
                f'<p class="preview">{html.escape(preview.detail)}</p>',
                unsafe_allow_html=True,
            )

        tags = "".join(
            f'<span class="tag">#{html.escape(k)}</span>'
            for k in result.card_keywords(keyword_limit)
        )
        if tags:
            st.markdown(tags, unsafe_allow_html=True)

        col1, col2, col3 = st.columns([2, 1, 2])

        with col1:
            label = "Menos info" if preview.expanded else "Vista rápida"
            if st.button(label, key=f"preview_{result.id}", use_container_width=True):
                with st.spinner("Cargando..."):
                    controller.toggle_preview(view, result)
                st.rerun()

        with col2:
            with st.popover("🔗", use_container_width=True):
                st.caption("Copiar enlace")
                st.code(controller.share_url(result), language=None)

        with col3:
            if st.button("Leer →", key=f"read_{result.id}", type="primary", use_container_width=True):
                controller.open_document(view, result)
                st.rerun()


# ─────────────────────────────────────────────────────────────────────────────
# Reader
# ─────────────────────────────────────────────────────────────────────────────


def render_reader(view: CatalogViewState):
    """Render the reader view for the open document."""
    controller = get_controller()
    doc = view.reading_doc

    if st.button("← Volver", key="reader_back"):
        controller.back_to_search(view)
        st.rerun()

    badge = TYPE_BADGE_CLASSES.get(doc.type, "badge-otro")
    st.markdown(
        f'<span class="badge {badge}">{html.escape(doc.type.value)}</span>',
        unsafe_allow_html=True,
    )
    st.title(doc.title)
    st.markdown(f"**{doc.author}**")
    st.caption(f"📅 {doc.year} · 📍 {doc.location}")

    if doc.keywords:
        pills = "".join(f'<span class="tag">#{html.escape(k)}</span>' for k in doc.keywords)
        st.markdown(pills, unsafe_allow_html=True)

    st.divider()

    content = view.current_document
    if content is None:
        with st.spinner("Cargando documento..."):
            content = controller.load_document(view)

    st.markdown(
        f'<div class="abstract-quote">“ {html.escape(doc.abstract)}</div>',
        unsafe_allow_html=True,
    )

    if content:
        blocks = render_document(content, doc.keywords)
        st.markdown(blocks_to_html(blocks), unsafe_allow_html=True)
    else:
        st.caption("Error al cargar contenido.")

    st.markdown('<p class="end-marker">Fin del fragmento</p>', unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────────────────────
# Footer
# ─────────────────────────────────────────────────────────────────────────────


def render_footer():
    st.divider()
    st.caption(
        f"© {date.today().year} Facultad de Periodismo y Comunicación Social - UNLP"
    )


# ─────────────────────────────────────────────────────────────────────────────
# Main App
# ─────────────────────────────────────────────────────────────────────────────


def main():
    """Main application entry point."""
    init_session_state()
    st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

    view = get_view()
    render_header(view)

    if view.is_reading:
        render_reader(view)
        return

    render_search_form(view)
    render_results(view)
    render_footer()


if __name__ == "__main__":
    main()
