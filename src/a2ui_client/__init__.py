"""
A2UI Client
Client-side engine for server-driven A2UI surfaces.
"""

from .core import A2UIError, DecodeError, ResolutionError, TransportError, Settings, get_settings
from .protocol import ActionDescriptor, Message, MessageDecoder, decode_messages, encode_messages
from .state import Surface, SurfaceStateStore
from .render import ComponentTreeResolver, DataBindingResolver, StructuralNode
from .actions import ActionDispatcher, DispatchOutcome, OutcomeStatus
from .clients import HttpTransport, Transport
from .session import SurfaceSession

__version__ = "0.1.0"

__all__ = [
    "A2UIError",
    "DecodeError",
    "ResolutionError",
    "TransportError",
    "Settings",
    "get_settings",
    "ActionDescriptor",
    "Message",
    "MessageDecoder",
    "decode_messages",
    "encode_messages",
    "Surface",
    "SurfaceStateStore",
    "ComponentTreeResolver",
    "DataBindingResolver",
    "StructuralNode",
    "ActionDispatcher",
    "DispatchOutcome",
    "OutcomeStatus",
    "HttpTransport",
    "Transport",
    "SurfaceSession",
]
