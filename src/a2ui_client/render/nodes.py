"""Render-agnostic structural nodes handed to the rendering layer."""

from dataclasses import dataclass, fields
from typing import Any, ClassVar

from a2ui_client.protocol.models import ActionDescriptor


@dataclass(frozen=True)
class StructuralNode:
    """A resolved component. ``kind`` names the variant."""

    component_id: str
    kind: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible representation."""
        data: dict[str, Any] = {"kind": self.kind, "id": self.component_id}
        for f in fields(self):
            if f.name != "component_id":
                data[f.name] = _plain(getattr(self, f.name))
        return data


@dataclass(frozen=True)
class ColumnNode(StructuralNode):
    children: tuple[StructuralNode, ...] = ()
    kind: ClassVar[str] = "Column"


@dataclass(frozen=True)
class RowNode(StructuralNode):
    children: tuple[StructuralNode, ...] = ()
    kind: ClassVar[str] = "Row"


@dataclass(frozen=True)
class CardNode(StructuralNode):
    child: StructuralNode | None = None
    kind: ClassVar[str] = "Card"


@dataclass(frozen=True)
class TextNode(StructuralNode):
    value: Any = ""
    kind: ClassVar[str] = "Text"


@dataclass(frozen=True)
class TextFieldNode(StructuralNode):
    """Input field. Edits go back through ``SurfaceStateStore.set_overlay(binding_path, ...)``."""

    label: str = ""
    placeholder: str = ""
    value: Any = ""
    binding_path: str | None = None
    kind: ClassVar[str] = "TextField"


@dataclass(frozen=True)
class ButtonNode(StructuralNode):
    text: str = ""
    action: ActionDescriptor | None = None
    kind: ClassVar[str] = "Button"


@dataclass(frozen=True)
class PlaceholderNode(StructuralNode):
    """Empty slot: the referenced component is missing or not renderable."""

    reason: str = "missing"
    kind: ClassVar[str] = "Placeholder"


@dataclass(frozen=True)
class ErrorNode(StructuralNode):
    """A subtree that could not be resolved (cycle or depth overflow)."""

    error: str = ""
    path: tuple[str, ...] = ()
    kind: ClassVar[str] = "Error"


def _plain(value: Any) -> Any:
    if isinstance(value, StructuralNode):
        return value.to_dict()
    if isinstance(value, ActionDescriptor):
        return value.to_wire()
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value
