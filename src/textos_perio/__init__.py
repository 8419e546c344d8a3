"""
Textos Perio - Bibliography search and reader for FPyCS (UNLP) courses
======================================================================

A catalog-style interface over the bibliography used in the courses
("cátedras") of the Facultad de Periodismo y Comunicación Social, UNLP.
Search results, quick previews and full document bodies are all generated
on demand by Gemini:

    Query + Filters → Prompt → Gemini → JSON / text → Result cards / Reader

There is no index, no storage and no ranking of its own.
"""

__version__ = "0.1.0"
__author__ = "Textos Perio Team"
__license__ = "MIT"

# Public API - submodules are imported on demand
__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Main modules
    "shared",
    "catalog",
    "reader",
    "app",
    "cli",
]
