"""
CLI Module - Command-line interface for Textos Perio.
=====================================================

Usage:
    textosperio --help
    textosperio search "semiótica" --carrera COMUNICACION_SOCIAL
    textosperio expand "La semiosis social" "Eliseo Verón"
    textosperio read "La semiosis social" "Eliseo Verón" -k semiosis
    textosperio gui

Components:
- main: Typer CLI application
"""

from textos_perio.cli.main import app, cli

__all__ = ["app", "cli"]
