"""Message protocol and session glue for embedding the editor in a host."""

from routing_studio.bridge.protocol import parse_core_message, parse_host_message
from routing_studio.bridge.session import Debouncer, EditorBridge

__all__ = ["Debouncer", "EditorBridge", "parse_core_message", "parse_host_message"]
