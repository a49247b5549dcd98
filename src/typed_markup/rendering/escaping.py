"""Character escaping for text content and attribute values.

Escaping is total: every input string produces output, and ``&`` is always
replaced first so no entity is escaped twice within a single pass. Characters
that XML forbids outright are not escapable; text and attribute nodes reject
them when constructed, and raw content is the caller's responsibility.
"""

from xml.sax.saxutils import escape

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def escape_text(value: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for element content."""
    return escape(value)


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return escape(value, _ATTRIBUTE_ENTITIES)
