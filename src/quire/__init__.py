"""Quire: Notion-style block documents.

Typed content blocks with inline rich text, tree operations over block
forests, and conversion to and from Markdown and a structured JSON wire
format.
"""

__version__ = "0.1.0"
