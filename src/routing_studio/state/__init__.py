"""Document history and the editor session built on it."""

from routing_studio.state.editor import RoutingEditor, Toast
from routing_studio.state.history import History

__all__ = ["History", "RoutingEditor", "Toast"]
