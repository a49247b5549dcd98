"""Rendering engine for typed markup trees.

Key Components:
    RenderEngine: Depth-first serializer applying escaping and closing modes
    RenderDepthError: Raised for trees nested beyond the configured maximum
    escape_text / escape_attribute: Escaping for content and attribute values
"""

from .engine import RenderDepthError, RenderEngine
from .escaping import escape_attribute, escape_text

__all__ = [
    "RenderDepthError",
    "RenderEngine",
    "escape_attribute",
    "escape_text",
]
