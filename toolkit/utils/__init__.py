"""
Utility functions - Pure functions with no configuration.
These can be used across all layers.
"""
from .filesystem import ensure_directory, serve_as_attachment
from .mime_sniff import detect_content_type
from .text import random_string, slugify

__all__ = [
    "detect_content_type",
    "ensure_directory",
    "random_string",
    "serve_as_attachment",
    "slugify",
]
