"""
App Module - Streamlit GUI for Textos Perio.
============================================

Provides a web-based interface for:
- Searching the bibliography with program and type filters
- Quick previews of each result
- Reading full generated documents with keyword highlighting

Components:
- state: Streamlit-free view state and controller
- streamlit_app: Main Streamlit application

Usage:
    Run with: streamlit run src/textos_perio/app/streamlit_app.py
    Or use: textosperio gui
"""

# Note: Streamlit app is run directly, not imported
from textos_perio.app.state import CatalogController, CatalogViewState, PreviewState

__all__ = ["CatalogController", "CatalogViewState", "PreviewState"]
