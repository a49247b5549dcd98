"""Context markers that pin which nodes are legal in which structural position.

A context is a plain class used only as a marker. Dialects build their own
hierarchies by subclassing :class:`Context`::

    class FeedContext(Context): ...
    class ChannelContext(FeedContext): ...

A node tagged with context ``X`` is legal in any position ``P`` where
``issubclass(P, X)`` holds. The same rule is expressed statically by the
contravariant type variable :data:`C`: ``Node[FeedContext]`` is accepted
wherever ``Node[ChannelContext]`` is expected, and a ``Node[SomeOtherContext]``
is rejected by the type checker.
"""

from typing import Optional, Type, TypeVar


class Context:
    """Root of every context marker hierarchy. Never instantiated."""

    #: Human readable position, used in structural violation messages.
    label: str = "any position"

    def __new__(cls, *args: object, **kwargs: object) -> "Context":
        raise TypeError(f"{cls.__name__} is a marker type and cannot be instantiated")


C = TypeVar("C", bound=Context, contravariant=True)
"""The context a node is legal in. Contravariant: broader tags fit narrower slots."""

ContextType = Type[Context]


def is_legal_in(position: Optional[ContextType], node_context: Optional[ContextType]) -> bool:
    """Check whether a node tagged ``node_context`` may occupy ``position``.

    Untagged nodes (text, raw fragments, groups, empty) and untyped positions
    accept everything.
    """
    if position is None or node_context is None:
        return True
    return issubclass(position, node_context)


def describe(context: Optional[ContextType]) -> str:
    if context is None:
        return "any position"
    if context.label != Context.label:
        return f"{context.__name__} ({context.label})"
    return context.__name__
