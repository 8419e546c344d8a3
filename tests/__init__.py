"""
Tests Package - Unit tests for Textos Perio.
============================================

Test modules:
- test_shared: Config, schemas and utility tests
- test_catalog: Prompt, parser and Gemini client tests (mocked)
- test_reader: Keyword highlighting and document rendering tests
- test_state: View state and controller tests
- test_cli: Typer command tests

Run tests with:
    pytest tests/
    pytest tests/ -v --cov=src/textos_perio
"""
