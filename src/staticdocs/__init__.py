"""Staticdocs - compile a tree of Markdown documents into a static site."""

__version__ = "0.1.0"
