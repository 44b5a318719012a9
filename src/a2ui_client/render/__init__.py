"""
Render-agnostic resolution
Binding lookup and component tree walking
"""

from .binding import DataBindingResolver
from .nodes import (
    StructuralNode,
    ColumnNode,
    RowNode,
    CardNode,
    TextNode,
    TextFieldNode,
    ButtonNode,
    PlaceholderNode,
    ErrorNode,
)
from .tree import ComponentTreeResolver

__all__ = [
    "DataBindingResolver",
    "ComponentTreeResolver",
    "StructuralNode",
    "ColumnNode",
    "RowNode",
    "CardNode",
    "TextNode",
    "TextFieldNode",
    "ButtonNode",
    "PlaceholderNode",
    "ErrorNode",
]
