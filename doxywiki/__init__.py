"""Render Doxygen documentation trees into wiki-friendly Markdown and JSON."""

__version__ = "0.1.0"
