"""
A2UI Protocol
Wire models and the NDJSON codec
"""

from .models import (
    ActionDescriptor,
    Component,
    Column,
    Row,
    Card,
    Text,
    TextField,
    Button,
    Unsupported,
    BeginRendering,
    SurfaceUpdate,
    DataModelUpdate,
    DeleteSurface,
    Message,
    ClientEvent,
    EventEnvelope,
    component_from_wire,
    component_to_wire,
)
from .decoder import MessageDecoder, decode_messages, encode_messages

__all__ = [
    "ActionDescriptor",
    "Component",
    "Column",
    "Row",
    "Card",
    "Text",
    "TextField",
    "Button",
    "Unsupported",
    "BeginRendering",
    "SurfaceUpdate",
    "DataModelUpdate",
    "DeleteSurface",
    "Message",
    "ClientEvent",
    "EventEnvelope",
    "component_from_wire",
    "component_to_wire",
    "MessageDecoder",
    "decode_messages",
    "encode_messages",
]
